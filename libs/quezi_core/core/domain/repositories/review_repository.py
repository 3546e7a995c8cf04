from __future__ import annotations

from abc import ABC, abstractmethod

from quezi_core.core.application.cqrs import PagedResult
from quezi_core.core.domain.entities.review_entity import ReviewEntity


class ReviewRepository(ABC):
    @abstractmethod
    def find_by_id(self, review_id) -> ReviewEntity | None:
        ...

    @abstractmethod
    def find_by_appointment(self, appointment_id) -> ReviewEntity | None:
        ...

    @abstractmethod
    def save(self, review: ReviewEntity) -> ReviewEntity:
        ...

    @abstractmethod
    def delete(self, review_id) -> None:
        ...

    @abstractmethod
    def list(self, filtros: dict, page: int, page_size: int) -> PagedResult[ReviewEntity]:
        """
        Lista avaliações paginadas, mais recentes primeiro.

        - filtros: `professional_id`, `reviewer_id`, `min_rating`, `max_rating`
        """
        ...

    @abstractmethod
    def rating_distribution(self, professional_id) -> dict[int, int]:
        """Quantidade de avaliações por nota (1..5) do profissional."""
        ...

    @abstractmethod
    def recent_for_professional(self, professional_id, limit: int) -> list[ReviewEntity]:
        ...

    @abstractmethod
    def summary(self) -> tuple[int, float | None]:
        """Total de avaliações e média geral."""
        ...
