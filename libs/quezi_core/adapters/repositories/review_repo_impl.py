from __future__ import annotations

from django.db.models import Avg, Count

from plugins.django_interface.models import Review as ReviewModel
from quezi_core.adapters.repositories._helpers import as_uuid, model_defaults, paginate
from quezi_core.core.application.cqrs import PagedResult
from quezi_core.core.domain.entities.review_entity import ReviewEntity
from quezi_core.core.domain.repositories.review_repository import ReviewRepository


class ReviewRepoImpl(ReviewRepository):
    def find_by_id(self, review_id) -> ReviewEntity | None:
        rid = as_uuid(review_id)
        if rid is None:
            return None
        m = ReviewModel.objects.filter(id=rid).first()
        return ReviewEntity.from_model(m) if m else None

    def find_by_appointment(self, appointment_id) -> ReviewEntity | None:
        aid = as_uuid(appointment_id)
        if aid is None:
            return None
        m = ReviewModel.objects.filter(appointment_id=aid).first()
        return ReviewEntity.from_model(m) if m else None

    def save(self, review: ReviewEntity) -> ReviewEntity:
        m, _ = ReviewModel.objects.update_or_create(
            id=review.id,
            defaults=model_defaults(review),
        )
        return ReviewEntity.from_model(m)

    def delete(self, review_id) -> None:
        ReviewModel.objects.filter(id=review_id).delete()

    def list(self, filtros: dict, page: int, page_size: int) -> PagedResult[ReviewEntity]:
        qs = ReviewModel.objects.all()
        if filtros.get("professional_id"):
            qs = qs.filter(professional_id=filtros["professional_id"])
        if filtros.get("reviewer_id"):
            qs = qs.filter(reviewer_id=filtros["reviewer_id"])
        if filtros.get("min_rating"):
            qs = qs.filter(rating__gte=filtros["min_rating"])
        if filtros.get("max_rating"):
            qs = qs.filter(rating__lte=filtros["max_rating"])
        return paginate(qs.order_by("-created_at", "id"), ReviewEntity, page, page_size)

    def rating_distribution(self, professional_id) -> dict[int, int]:
        rows = (
            ReviewModel.objects.filter(professional_id=professional_id)
            .values("rating")
            .annotate(total=Count("id"))
        )
        dist = {r: 0 for r in range(1, 6)}
        dist.update({row["rating"]: row["total"] for row in rows})
        return dist

    def recent_for_professional(self, professional_id, limit: int) -> list[ReviewEntity]:
        qs = ReviewModel.objects.filter(professional_id=professional_id).order_by("-created_at")[:limit]
        return [ReviewEntity.from_model(m) for m in qs]

    def summary(self) -> tuple[int, float | None]:
        agg = ReviewModel.objects.aggregate(total=Count("id"), avg=Avg("rating"))
        return agg["total"], agg["avg"]
