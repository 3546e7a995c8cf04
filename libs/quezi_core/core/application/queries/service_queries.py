import uuid
from dataclasses import dataclass

from quezi_core.core.application.cqrs import PaginatedQueryDTO


@dataclass(frozen=True)
class GetServiceQuery:
    service_id: uuid.UUID


class ListServicesQuery(PaginatedQueryDTO[dict]):
    """Filtros: `category_id`, `professional_id`, `price_type`, `min_price`, `max_price`, `search`."""
    pass


@dataclass(frozen=True)
class PopularServicesQuery:
    limit: int = 10


@dataclass(frozen=True)
class GetCategoryQuery:
    category_id: uuid.UUID


@dataclass(frozen=True)
class GetCategoryBySlugQuery:
    slug: str


class ListCategoriesQuery(PaginatedQueryDTO[dict]):
    """Filtro: `search`."""
    pass
