from __future__ import annotations

from abc import ABC, abstractmethod

from quezi_core.core.application.cqrs import PagedResult
from quezi_core.core.application.dtos.read_models import CategorySummary, PopularService
from quezi_core.core.domain.entities.service_entity import ServiceCategoryEntity, ServiceEntity


class ServiceRepository(ABC):
    @abstractmethod
    def find_by_id(self, service_id) -> ServiceEntity | None:
        ...

    @abstractmethod
    def save(self, service: ServiceEntity) -> ServiceEntity:
        ...

    @abstractmethod
    def delete(self, service_id) -> None:
        ...

    @abstractmethod
    def list(self, filtros: dict, page: int, page_size: int) -> PagedResult[ServiceEntity]:
        """
        Lista serviços paginados.

        - filtros: `category_id`, `professional_id`, `price_type`,
          `min_price`, `max_price`, `search` (nome ou descrição)
        - ordenação: `sort_by` (name | price | created_at) e `sort_order`
        """
        ...

    @abstractmethod
    def most_popular(self, limit: int) -> list[PopularService]:
        """Serviços com mais agendamentos."""
        ...


class ServiceCategoryRepository(ABC):
    @abstractmethod
    def find_by_id(self, category_id) -> ServiceCategoryEntity | None:
        ...

    @abstractmethod
    def find_by_slug(self, slug: str) -> ServiceCategoryEntity | None:
        ...

    @abstractmethod
    def save(self, category: ServiceCategoryEntity) -> ServiceCategoryEntity:
        ...

    @abstractmethod
    def delete(self, category_id) -> None:
        ...

    @abstractmethod
    def count_services(self, category_id) -> int:
        ...

    @abstractmethod
    def list(self, filtros: dict, page: int, page_size: int) -> PagedResult[CategorySummary]:
        """Categorias por nome, com a contagem de serviços. Filtro: `search`."""
        ...
