"""
Domínio → ORM da Quezi.

⚑ IDs UUID em todas as tabelas
⚑ E-mail e slug únicos sem diferenciar caixa
⚑ Uma avaliação por agendamento (OneToOne)
⚑ Nota da avaliação restrita a 1..5 por CHECK
⚑ Agendamento guarda nome e preço do serviço reservado
"""

from __future__ import annotations

import uuid

from django.db import models
from django.db.models import CheckConstraint, Index, Q, UniqueConstraint
from django.db.models.functions import Lower


# ╭──────────────────────────────────────────────╮
# │ 1. Usuários / Acesso                        │
# ╰──────────────────────────────────────────────╯
class User(models.Model):
    class UserType(models.TextChoices):
        CLIENT = "CLIENT", "Cliente"
        PROFESSIONAL = "PROFESSIONAL", "Profissional"
        ADMIN = "ADMIN", "Administrador"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True, max_length=128)
    password_hash = models.CharField(max_length=128)
    name = models.CharField(max_length=100)
    phone = models.CharField(max_length=20, blank=True, null=True)
    user_type = models.CharField(
        max_length=20,
        choices=UserType.choices,
        default=UserType.CLIENT,
        db_index=True,
    )
    is_email_verified = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "users"
        ordering = ["-created_at"]
        indexes = [
            Index(Lower("email"), name="user_email_lower_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"


class VerificationToken(models.Model):
    """Tokens de uso único (reset de senha / verificação de e-mail)."""

    class Purpose(models.TextChoices):
        PASSWORD_RESET = "password_reset", "Reset de senha"
        EMAIL_VERIFICATION = "email_verification", "Verificação de e-mail"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    identifier = models.EmailField(max_length=128, db_index=True)
    token = models.CharField(max_length=128, unique=True)
    purpose = models.CharField(max_length=32, choices=Purpose.choices)
    expires_at = models.DateTimeField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "verification_tokens"
        indexes = [
            Index(fields=["identifier", "purpose"], name="vtoken_identifier_purpose_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.purpose} → {self.identifier}"


# ╭──────────────────────────────────────────────╮
# │ 2. Organizações (salões / multi-tenant)     │
# ╰──────────────────────────────────────────────╯
class Organization(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100)
    slug = models.SlugField(max_length=60, unique=True)
    description = models.TextField(blank=True, null=True)
    owner = models.ForeignKey(User, on_delete=models.PROTECT, related_name="owned_organizations")
    logo_url = models.URLField(max_length=500, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "organizations"
        ordering = ["name"]
        constraints = [
            UniqueConstraint(Lower("slug"), name="uniq_organization_slug_lower"),
        ]

    def __str__(self) -> str:
        return self.name


class OrganizationMember(models.Model):
    class Role(models.TextChoices):
        OWNER = "owner", "Owner"
        ADMIN = "admin", "Admin"
        MEMBER = "member", "Member"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    organization = models.ForeignKey(Organization, on_delete=models.CASCADE, related_name="members")
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="memberships")
    role = models.CharField(max_length=10, choices=Role.choices, default=Role.MEMBER)
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "organization_members"
        ordering = ["joined_at"]
        constraints = [
            UniqueConstraint(fields=["organization", "user"], name="uniq_member_per_organization"),
        ]

    def __str__(self) -> str:
        return f"{self.user_id} @ {self.organization_id} ({self.role})"


class OrganizationInvite(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    organization = models.ForeignKey(Organization, on_delete=models.CASCADE, related_name="invites")
    email = models.EmailField(max_length=128)
    role = models.CharField(max_length=10, choices=OrganizationMember.Role.choices)
    invited_by = models.ForeignKey(User, on_delete=models.CASCADE, related_name="sent_invites")
    expires_at = models.DateTimeField()
    accepted_at = models.DateTimeField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "organization_invites"
        indexes = [
            Index(fields=["organization", "email"], name="invite_org_email_idx"),
        ]

    def __str__(self) -> str:
        return f"Convite {self.email} → {self.organization_id}"


# ╭──────────────────────────────────────────────╮
# │ 3. Perfis profissionais                     │
# ╰──────────────────────────────────────────────╯
class ProfessionalProfile(models.Model):
    """Vitrine pública do profissional; um perfil por usuário PROFESSIONAL."""

    class ServiceMode(models.TextChoices):
        AT_LOCATION = "AT_LOCATION", "No local"
        AT_DOMICILE = "AT_DOMICILE", "A domicílio"
        BOTH = "BOTH", "Ambos"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name="professional_profile")
    bio = models.TextField(max_length=1000, blank=True, null=True)
    city = models.CharField(max_length=100, db_index=True)
    address = models.CharField(max_length=255, blank=True, null=True)
    service_mode = models.CharField(max_length=12, choices=ServiceMode.choices)
    photo_url = models.URLField(max_length=500, blank=True, null=True)
    portfolio_images = models.JSONField(default=list, blank=True)
    # {"MONDAY": {"is_open": true, "slots": [{"start": "09:00", "end": "18:00"}]}, ...}
    working_hours = models.JSONField(blank=True, null=True)
    years_of_experience = models.PositiveSmallIntegerField(blank=True, null=True)
    specialties = models.JSONField(default=list, blank=True)
    certifications = models.JSONField(default=list, blank=True)
    languages = models.JSONField(default=list, blank=True)
    is_active = models.BooleanField(default=True, db_index=True)
    is_verified = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "professional_profiles"
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"Perfil de {self.user_id} ({self.city})"


# ╭──────────────────────────────────────────────╮
# │ 4. Catálogo de serviços                     │
# ╰──────────────────────────────────────────────╯
class ServiceCategory(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=50)
    slug = models.SlugField(max_length=50, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "service_categories"
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Service(models.Model):
    class PriceType(models.TextChoices):
        FIXED = "FIXED", "Preço fixo"
        HOURLY = "HOURLY", "Por hora"
        DAILY = "DAILY", "Por dia"
        NEGOTIABLE = "NEGOTIABLE", "A combinar"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    professional = models.ForeignKey(User, on_delete=models.CASCADE, related_name="services")
    category = models.ForeignKey(ServiceCategory, on_delete=models.PROTECT, related_name="services")
    name = models.CharField(max_length=100)
    description = models.TextField(max_length=500, blank=True, null=True)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    price_type = models.CharField(max_length=12, choices=PriceType.choices, default=PriceType.FIXED)
    duration_minutes = models.PositiveSmallIntegerField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "services"
        ordering = ["-created_at"]
        indexes = [
            Index(fields=["professional", "category"], name="service_professional_cat_idx"),
        ]
        constraints = [
            CheckConstraint(condition=Q(price__gt=0), name="service_price_positive"),
            CheckConstraint(
                condition=Q(duration_minutes__gte=15) & Q(duration_minutes__lte=480),
                name="service_duration_15_480",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.professional_id})"


# ╭──────────────────────────────────────────────╮
# │ 5. Agendamentos                             │
# ╰──────────────────────────────────────────────╯
class Appointment(models.Model):
    class Status(models.TextChoices):
        PENDING = "PENDING", "Pendente"
        ACCEPTED = "ACCEPTED", "Aceito"
        REJECTED = "REJECTED", "Recusado"
        COMPLETED = "COMPLETED", "Concluído"
        CANCELLED = "CANCELLED", "Cancelado"

    class LocationType(models.TextChoices):
        AT_LOCATION = "AT_LOCATION", "No local"
        AT_DOMICILE = "AT_DOMICILE", "A domicílio"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    client = models.ForeignKey(User, on_delete=models.CASCADE, related_name="client_appointments")
    professional = models.ForeignKey(User, on_delete=models.CASCADE, related_name="professional_appointments")
    # nome e preço copiados do serviço no momento da reserva
    service = models.ForeignKey(
        "Service", on_delete=models.SET_NULL, blank=True, null=True, related_name="appointments"
    )
    service_name = models.CharField(max_length=100)
    scheduled_date = models.DateTimeField(db_index=True)
    status = models.CharField(max_length=12, choices=Status.choices, default=Status.PENDING, db_index=True)
    location_type = models.CharField(max_length=12, choices=LocationType.choices, default=LocationType.AT_LOCATION)
    client_address = models.CharField(max_length=255, blank=True, null=True)
    client_notes = models.TextField(blank=True, null=True)
    price = models.DecimalField(max_digits=10, decimal_places=2, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "appointments"
        ordering = ["-scheduled_date"]
        indexes = [
            Index(fields=["professional", "status"], name="appt_professional_status_idx"),
            Index(fields=["client", "status"], name="appt_client_status_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.service_name} em {self.scheduled_date:%d/%m/%Y %H:%M} ({self.status})"


# ╭──────────────────────────────────────────────╮
# │ 6. Avaliações                               │
# ╰──────────────────────────────────────────────╯
class Review(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    appointment = models.OneToOneField(Appointment, on_delete=models.CASCADE, related_name="review")
    reviewer = models.ForeignKey(User, on_delete=models.CASCADE, related_name="reviews_written")
    professional = models.ForeignKey(User, on_delete=models.CASCADE, related_name="reviews_received")
    rating = models.PositiveSmallIntegerField()
    comment = models.TextField(max_length=1000, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "reviews"
        ordering = ["-created_at"]
        indexes = [
            Index(fields=["professional", "-created_at"], name="review_professional_idx"),
        ]
        constraints = [
            CheckConstraint(condition=Q(rating__gte=1) & Q(rating__lte=5), name="review_rating_1_5"),
        ]

    def __str__(self) -> str:
        return f"{self.rating}★ para {self.professional_id}"
