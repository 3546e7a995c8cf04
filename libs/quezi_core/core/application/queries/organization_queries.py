import uuid
from dataclasses import dataclass

from quezi_core.core.application.cqrs import PaginatedQueryDTO, Requester


@dataclass(frozen=True)
class GetOrganizationQuery:
    organization_id: uuid.UUID


@dataclass(frozen=True)
class GetOrganizationBySlugQuery:
    slug: str


class ListOrganizationsQuery(PaginatedQueryDTO[dict]):
    """Filtros: `search`, `member_id`."""
    pass


@dataclass(frozen=True)
class ListOrganizationMembersQuery:
    organization_id: uuid.UUID
    requester: Requester
