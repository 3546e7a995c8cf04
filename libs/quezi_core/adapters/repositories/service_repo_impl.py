from __future__ import annotations

from django.db.models import Count, Q

from plugins.django_interface.models import Service as ServiceModel
from plugins.django_interface.models import ServiceCategory as CategoryModel
from quezi_core.adapters.repositories._helpers import as_uuid, model_defaults, paginate
from quezi_core.core.application.cqrs import PagedResult
from quezi_core.core.application.dtos.read_models import CategorySummary, PopularService
from quezi_core.core.domain.entities.service_entity import ServiceCategoryEntity, ServiceEntity
from quezi_core.core.domain.repositories.service_repository import (
    ServiceCategoryRepository,
    ServiceRepository,
)

SORT_FIELDS = {"name": "name", "price": "price", "created_at": "created_at"}


class ServiceRepoImpl(ServiceRepository):
    def find_by_id(self, service_id) -> ServiceEntity | None:
        sid = as_uuid(service_id)
        if sid is None:
            return None
        m = ServiceModel.objects.filter(id=sid).first()
        return ServiceEntity.from_model(m) if m else None

    def save(self, service: ServiceEntity) -> ServiceEntity:
        m, _ = ServiceModel.objects.update_or_create(
            id=service.id,
            defaults=model_defaults(service),
        )
        return ServiceEntity.from_model(m)

    def delete(self, service_id) -> None:
        ServiceModel.objects.filter(id=service_id).delete()

    def list(self, filtros: dict, page: int, page_size: int) -> PagedResult[ServiceEntity]:
        qs = ServiceModel.objects.all()
        if filtros.get("category_id"):
            qs = qs.filter(category_id=filtros["category_id"])
        if filtros.get("professional_id"):
            qs = qs.filter(professional_id=filtros["professional_id"])
        if filtros.get("price_type"):
            qs = qs.filter(price_type=filtros["price_type"])
        if filtros.get("min_price") is not None:
            qs = qs.filter(price__gte=filtros["min_price"])
        if filtros.get("max_price") is not None:
            qs = qs.filter(price__lte=filtros["max_price"])
        if filtros.get("search"):
            term = filtros["search"]
            qs = qs.filter(Q(name__icontains=term) | Q(description__icontains=term))

        column = SORT_FIELDS.get(filtros.get("sort_by") or "created_at", "created_at")
        prefix = "" if filtros.get("sort_order") == "asc" else "-"
        return paginate(qs.order_by(f"{prefix}{column}", "id"), ServiceEntity, page, page_size)

    def most_popular(self, limit: int) -> list[PopularService]:
        qs = (
            ServiceModel.objects
            .annotate(appointments_count=Count("appointments"))
            .order_by("-appointments_count", "name", "id")[:limit]
        )
        return [PopularService(service=ServiceEntity.from_model(m), appointments_count=m.appointments_count) for m in qs]


class ServiceCategoryRepoImpl(ServiceCategoryRepository):
    def find_by_id(self, category_id) -> ServiceCategoryEntity | None:
        cid = as_uuid(category_id)
        if cid is None:
            return None
        m = CategoryModel.objects.filter(id=cid).first()
        return ServiceCategoryEntity.from_model(m) if m else None

    def find_by_slug(self, slug: str) -> ServiceCategoryEntity | None:
        m = CategoryModel.objects.filter(slug=slug).first()
        return ServiceCategoryEntity.from_model(m) if m else None

    def save(self, category: ServiceCategoryEntity) -> ServiceCategoryEntity:
        m, _ = CategoryModel.objects.update_or_create(
            id=category.id,
            defaults=model_defaults(category),
        )
        return ServiceCategoryEntity.from_model(m)

    def delete(self, category_id) -> None:
        CategoryModel.objects.filter(id=category_id).delete()

    def count_services(self, category_id) -> int:
        return ServiceModel.objects.filter(category_id=category_id).count()

    def list(self, filtros: dict, page: int, page_size: int) -> PagedResult[CategorySummary]:
        qs = CategoryModel.objects.annotate(services_count=Count("services"))
        if filtros.get("search"):
            term = filtros["search"]
            qs = qs.filter(Q(name__icontains=term) | Q(slug__icontains=term))

        def build(rows):
            return [
                CategorySummary(category=ServiceCategoryEntity.from_model(m), services_count=m.services_count)
                for m in rows
            ]

        return paginate(qs.order_by("name", "id"), ServiceCategoryEntity, page, page_size, build=build)
