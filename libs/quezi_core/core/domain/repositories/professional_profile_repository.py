from __future__ import annotations

from abc import ABC, abstractmethod

from quezi_core.core.application.cqrs import PagedResult
from quezi_core.core.application.dtos.read_models import ProfessionalProfileDetails
from quezi_core.core.domain.entities.professional_profile_entity import ProfessionalProfileEntity


class ProfessionalProfileRepository(ABC):
    @abstractmethod
    def find_by_user(self, user_id) -> ProfessionalProfileEntity | None:
        ...

    @abstractmethod
    def details(self, user_id) -> ProfessionalProfileDetails | None:
        """Perfil com nome do profissional, média de notas e serviços."""
        ...

    @abstractmethod
    def save(self, profile: ProfessionalProfileEntity) -> ProfessionalProfileEntity:
        ...

    @abstractmethod
    def delete(self, user_id) -> None:
        ...

    @abstractmethod
    def list(self, filtros: dict, page: int, page_size: int) -> PagedResult[ProfessionalProfileDetails]:
        """
        Lista perfis paginados.

        - filtros: `city`, `service_mode`, `min_rating`, `specialty`,
          `is_active`, `is_verified`, `query` (nome, bio ou especialidade)
        - ordenação: `sort_by` (rating | experience | reviews | created_at)
          e `sort_order` (asc | desc)
        """
        ...

    @abstractmethod
    def top_rated(self, limit: int, min_reviews: int) -> list[ProfessionalProfileDetails]:
        """Perfis ativos com pelo menos `min_reviews` avaliações, melhor média primeiro."""
        ...
