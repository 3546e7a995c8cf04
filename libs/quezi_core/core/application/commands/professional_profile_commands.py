import uuid
from dataclasses import dataclass

from quezi_core.core.application.cqrs import CommandDTO, Requester
from quezi_core.core.application.dtos.professional_profile_dto import (
    CreateProfessionalProfileDTO,
    ToggleActiveDTO,
    UpdatePortfolioDTO,
    UpdateProfessionalProfileDTO,
    UpdateWorkingHoursDTO,
)

ProfileChanges = UpdateProfessionalProfileDTO | UpdatePortfolioDTO | UpdateWorkingHoursDTO | ToggleActiveDTO


@dataclass(frozen=True)
class CreateProfessionalProfileCommand(CommandDTO):
    payload: CreateProfessionalProfileDTO
    requester: Requester


@dataclass(frozen=True)
class UpdateProfessionalProfileCommand(CommandDTO):
    """Edição geral, portfólio, horários e ativação passam pelo mesmo comando."""
    user_id: uuid.UUID
    payload: ProfileChanges
    requester: Requester


@dataclass(frozen=True)
class DeleteProfessionalProfileCommand(CommandDTO):
    user_id: uuid.UUID
    requester: Requester
