"""
Admin site registry
-------------------
Registra os modelos da Quezi de forma dinâmica a partir de um
dicionário de opções por ModelAdmin.
"""

import structlog
from django.contrib import admin as django_admin

from . import models

logger = structlog.get_logger(__name__)

# ╭──────────────────────────────────────────────╮
# │ Configuração de cada ModelAdmin             │
# ╰──────────────────────────────────────────────╯
MODEL_ADMIN_REGISTRY: dict[type[models.models.Model], dict] = {
    # 1. Usuários / Acesso
    models.User: dict(
        list_display=("email", "name", "user_type", "is_email_verified", "is_active"),
        search_fields=("email", "name"),
        list_filter=("user_type", "is_active", "is_email_verified"),
        exclude=("password_hash",),
    ),
    models.VerificationToken: dict(
        list_display=("identifier", "purpose", "expires_at"),
        list_filter=("purpose",),
        search_fields=("identifier",),
    ),
    # 2. Organizações
    models.Organization: dict(
        list_display=("name", "slug", "owner", "created_at"),
        search_fields=("name", "slug"),
    ),
    models.OrganizationMember: dict(
        list_display=("organization", "user", "role", "joined_at"),
        list_filter=("role",),
    ),
    models.OrganizationInvite: dict(
        list_display=("organization", "email", "role", "expires_at", "accepted_at"),
        search_fields=("email",),
    ),
    # 3. Perfis profissionais
    models.ProfessionalProfile: dict(
        list_display=("user", "city", "service_mode", "is_active", "is_verified"),
        list_filter=("service_mode", "is_active", "is_verified"),
        search_fields=("city", "user__name"),
    ),
    # 4. Catálogo
    models.ServiceCategory: dict(
        list_display=("name", "slug"),
        search_fields=("name", "slug"),
    ),
    models.Service: dict(
        list_display=("name", "professional", "category", "price", "price_type", "duration_minutes"),
        list_filter=("price_type", "category"),
        search_fields=("name",),
    ),
    # 5. Agendamentos
    models.Appointment: dict(
        list_display=("service_name", "client", "professional", "scheduled_date", "status"),
        list_filter=("status", "location_type"),
        search_fields=("service_name",),
    ),
    # 6. Avaliações
    models.Review: dict(
        list_display=("professional", "reviewer", "rating", "created_at"),
        list_filter=("rating",),
    ),
}

# ╭──────────────────────────────────────────────╮
# │ Registro dinâmico                           │
# ╰──────────────────────────────────────────────╯
for model, opts in MODEL_ADMIN_REGISTRY.items():
    admin_class = type(f"{model.__name__}Admin", (django_admin.ModelAdmin,), opts)
    django_admin.site.register(model, admin_class)
    logger.debug("Registered model in admin", model=model.__name__)
