import uuid
from dataclasses import dataclass

from quezi_core.core.application.cqrs import PaginatedQueryDTO, Requester


@dataclass(frozen=True)
class GetReviewQuery:
    review_id: uuid.UUID
    requester: Requester


@dataclass(frozen=True)
class GetReviewByAppointmentQuery:
    appointment_id: uuid.UUID
    requester: Requester


class ListReviewsQuery(PaginatedQueryDTO[dict]):
    """Filtros: `professional_id`, `reviewer_id`, `min_rating`, `max_rating`."""
    pass


@dataclass(frozen=True)
class GetProfessionalReviewStatsQuery:
    professional_id: uuid.UUID
    recent_limit: int = 5
