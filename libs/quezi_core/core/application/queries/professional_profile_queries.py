import uuid
from dataclasses import dataclass

from quezi_core.core.application.cqrs import PaginatedQueryDTO, Requester


@dataclass(frozen=True)
class GetProfessionalProfileQuery:
    user_id: uuid.UUID
    requester: Requester | None = None


class ListProfessionalProfilesQuery(PaginatedQueryDTO[dict]):
    """Filtros: `city`, `service_mode`, `min_rating`, `specialty`, `is_verified`, `query`, `sort_by`, `sort_order`."""
    pass


@dataclass(frozen=True)
class TopRatedProfessionalsQuery:
    limit: int = 10
