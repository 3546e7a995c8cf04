import uuid
from dataclasses import dataclass

from quezi_core.core.application.cqrs import PaginatedQueryDTO, Requester


@dataclass(frozen=True)
class GetUserQuery:
    user_id: uuid.UUID
    requester: Requester


class ListUsersQuery(PaginatedQueryDTO[dict]):
    """Filtros: `user_type`, `is_active`, `search`."""
    pass


@dataclass(frozen=True)
class GetAdminStatsQuery:
    pass
