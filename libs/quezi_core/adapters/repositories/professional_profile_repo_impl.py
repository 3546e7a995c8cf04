from __future__ import annotations

import json
from collections import defaultdict

from django.db.models import Avg, Count, F, Q

from plugins.django_interface.models import ProfessionalProfile as ProfileModel
from plugins.django_interface.models import Service as ServiceModel
from quezi_core.adapters.repositories._helpers import as_uuid, model_defaults, paginate
from quezi_core.core.application.cqrs import PagedResult
from quezi_core.core.application.dtos.read_models import ProfessionalProfileDetails
from quezi_core.core.domain.entities.professional_profile_entity import ProfessionalProfileEntity
from quezi_core.core.domain.entities.service_entity import ServiceEntity
from quezi_core.core.domain.repositories.professional_profile_repository import (
    ProfessionalProfileRepository,
)

SORT_FIELDS = {
    "rating": "average_rating",
    "experience": "years_of_experience",
    "reviews": "total_reviews",
    "created_at": "created_at",
}
# serviços exibidos junto de cada perfil na listagem
SERVICES_PREVIEW = 5


def _json_texts(term: str) -> set[str]:
    # SQLite guarda o JSON com \uXXXX; Postgres devolve o texto literal
    return {json.dumps(term), json.dumps(term, ensure_ascii=False)}


def json_list_has(field: str, value: str) -> Q:
    """Lista JSON contém `value` como elemento (sem diferenciar caixa)."""
    q = Q()
    for text in _json_texts(value):
        q |= Q(**{f"{field}__icontains": text})
    return q


def json_list_mentions(field: str, term: str) -> Q:
    """Algum elemento da lista JSON contém `term`."""
    q = Q()
    for text in _json_texts(term):
        q |= Q(**{f"{field}__icontains": text[1:-1]})
    return q


def _ordering(sort_by: str | None, sort_order: str | None) -> list:
    column = F(SORT_FIELDS.get(sort_by or "rating", "average_rating"))
    expr = column.asc(nulls_last=True) if sort_order == "asc" else column.desc(nulls_last=True)
    return [expr, "id"]


class ProfessionalProfileRepoImpl(ProfessionalProfileRepository):
    @staticmethod
    def _annotated():
        return ProfileModel.objects.select_related("user").annotate(
            average_rating=Avg("user__reviews_received__rating"),
            total_reviews=Count("user__reviews_received", distinct=True),
        )

    @staticmethod
    def _build(m, services: list[ServiceEntity]) -> ProfessionalProfileDetails:
        avg = m.average_rating
        return ProfessionalProfileDetails(
            profile=ProfessionalProfileEntity.from_model(m),
            name=m.user.name,
            average_rating=round(float(avg), 2) if avg is not None else None,
            total_reviews=m.total_reviews,
            services=services,
        )

    def _build_page(self, rows) -> list[ProfessionalProfileDetails]:
        by_professional: dict = defaultdict(list)
        qs = ServiceModel.objects.filter(professional_id__in=[m.user_id for m in rows]).order_by("name", "id")
        for s in qs:
            if len(by_professional[s.professional_id]) < SERVICES_PREVIEW:
                by_professional[s.professional_id].append(ServiceEntity.from_model(s))
        return [self._build(m, by_professional[m.user_id]) for m in rows]

    def find_by_user(self, user_id) -> ProfessionalProfileEntity | None:
        uid = as_uuid(user_id)
        if uid is None:
            return None
        m = ProfileModel.objects.filter(user_id=uid).first()
        return ProfessionalProfileEntity.from_model(m) if m else None

    def details(self, user_id) -> ProfessionalProfileDetails | None:
        uid = as_uuid(user_id)
        if uid is None:
            return None
        m = self._annotated().filter(user_id=uid).first()
        if not m:
            return None
        services = [
            ServiceEntity.from_model(s)
            for s in ServiceModel.objects.filter(professional_id=uid).order_by("name", "id")
        ]
        return self._build(m, services)

    def save(self, profile: ProfessionalProfileEntity) -> ProfessionalProfileEntity:
        m, _ = ProfileModel.objects.update_or_create(
            id=profile.id,
            defaults=model_defaults(profile),
        )
        return ProfessionalProfileEntity.from_model(m)

    def delete(self, user_id) -> None:
        ProfileModel.objects.filter(user_id=user_id).delete()

    def list(self, filtros: dict, page: int, page_size: int) -> PagedResult[ProfessionalProfileDetails]:
        qs = self._annotated()
        if filtros.get("is_active") is not None:
            qs = qs.filter(is_active=filtros["is_active"])
        if filtros.get("is_verified") is not None:
            qs = qs.filter(is_verified=filtros["is_verified"])
        if filtros.get("city"):
            qs = qs.filter(city__icontains=filtros["city"])
        if filtros.get("service_mode"):
            qs = qs.filter(service_mode=filtros["service_mode"])
        if filtros.get("specialty"):
            qs = qs.filter(json_list_has("specialties", filtros["specialty"]))
        if filtros.get("query"):
            term = filtros["query"]
            qs = qs.filter(
                Q(user__name__icontains=term)
                | Q(bio__icontains=term)
                | json_list_mentions("specialties", term)
            )
        if filtros.get("min_rating") is not None:
            qs = qs.filter(average_rating__gte=filtros["min_rating"])

        qs = qs.order_by(*_ordering(filtros.get("sort_by"), filtros.get("sort_order")))
        return paginate(qs, ProfessionalProfileEntity, page, page_size, build=self._build_page)

    def top_rated(self, limit: int, min_reviews: int) -> list[ProfessionalProfileDetails]:
        qs = (
            self._annotated()
            .filter(is_active=True, total_reviews__gte=min_reviews)
            .order_by(*_ordering("rating", "desc"))[:limit]
        )
        return self._build_page(list(qs))
