from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Literal

from quezi_core.core.domain.entities._base import EntityMixin
from quezi_core.core.domain.exceptions import InvalidStatusTransitionError

AppointmentStatus = Literal["PENDING", "ACCEPTED", "REJECTED", "COMPLETED", "CANCELLED"]
LocationType = Literal["AT_LOCATION", "AT_DOMICILE"]

APPOINTMENT_STATUSES: tuple[str, ...] = ("PENDING", "ACCEPTED", "REJECTED", "COMPLETED", "CANCELLED")
# status a partir dos quais cada transição é permitida
_ALLOWED_FROM: dict[str, tuple[str, ...]] = {
    "ACCEPTED": ("PENDING",),
    "REJECTED": ("PENDING",),
    "COMPLETED": ("ACCEPTED",),
    "CANCELLED": ("PENDING", "ACCEPTED"),
}


@dataclass(slots=True)
class AppointmentEntity(EntityMixin):
    """
    Reserva de um serviço do catálogo. Nome e preço são copiados do serviço
    na criação, para que o histórico não mude quando o catálogo mudar.
    """
    id: uuid.UUID
    client_id: uuid.UUID
    professional_id: uuid.UUID
    service_name: str
    scheduled_date: datetime
    status: AppointmentStatus = "PENDING"
    location_type: LocationType = "AT_LOCATION"
    client_address: str | None = None
    client_notes: str | None = None
    price: Decimal | None = None
    service_id: uuid.UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self):
        if self.status not in APPOINTMENT_STATUSES:
            raise ValueError(f"Status inválido: {self.status}")

    def involves(self, user_id: uuid.UUID) -> bool:
        return user_id in (self.client_id, self.professional_id)

    def _move_to(self, target: AppointmentStatus) -> None:
        if self.status not in _ALLOWED_FROM[target]:
            raise InvalidStatusTransitionError(self.status, target)
        self.status = target

    def accept(self) -> None:
        self._move_to("ACCEPTED")

    def reject(self) -> None:
        self._move_to("REJECTED")

    def complete(self) -> None:
        self._move_to("COMPLETED")

    def cancel(self) -> None:
        self._move_to("CANCELLED")

    @property
    def is_completed(self) -> bool:
        return self.status == "COMPLETED"
