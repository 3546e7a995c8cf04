from __future__ import annotations

from abc import ABC, abstractmethod

from quezi_core.core.application.cqrs import PagedResult
from quezi_core.core.domain.entities.appointment_entity import AppointmentEntity


class AppointmentRepository(ABC):
    @abstractmethod
    def find_by_id(self, appointment_id) -> AppointmentEntity | None:
        ...

    @abstractmethod
    def save(self, appointment: AppointmentEntity) -> AppointmentEntity:
        """Cria ou atualiza um agendamento."""
        ...

    @abstractmethod
    def list(self, filtros: dict, page: int, page_size: int) -> PagedResult[AppointmentEntity]:
        """
        Lista agendamentos paginados, mais recentes primeiro.

        - filtros: `participant_id` (cliente ou profissional) e `status`
        """
        ...

    @abstractmethod
    def count_by_status(self) -> dict[str, int]:
        ...
