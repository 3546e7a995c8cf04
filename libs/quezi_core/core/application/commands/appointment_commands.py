import uuid
from dataclasses import dataclass
from typing import Literal

from quezi_core.core.application.cqrs import CommandDTO, Requester
from quezi_core.core.application.dtos.appointment_dto import CreateAppointmentDTO

AppointmentAction = Literal["accept", "reject", "complete", "cancel"]


@dataclass(frozen=True)
class CreateAppointmentCommand(CommandDTO):
    payload: CreateAppointmentDTO
    requester: Requester


@dataclass(frozen=True)
class ChangeAppointmentStatusCommand(CommandDTO):
    appointment_id: uuid.UUID
    action: AppointmentAction
    requester: Requester
