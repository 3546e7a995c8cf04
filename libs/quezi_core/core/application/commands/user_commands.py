import uuid
from dataclasses import dataclass

from quezi_core.core.application.cqrs import CommandDTO, Requester
from quezi_core.core.application.dtos.user_dto import UpdateUserDTO


@dataclass(frozen=True)
class UpdateUserCommand(CommandDTO):
    user_id: uuid.UUID
    payload: UpdateUserDTO
    requester: Requester


@dataclass(frozen=True)
class DeleteUserCommand(CommandDTO):
    user_id: uuid.UUID
    requester: Requester
