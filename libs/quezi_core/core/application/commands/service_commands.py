import uuid
from dataclasses import dataclass

from quezi_core.core.application.cqrs import CommandDTO, Requester
from quezi_core.core.application.dtos.service_dto import (
    CreateCategoryDTO,
    CreateServiceDTO,
    UpdateCategoryDTO,
    UpdateServiceDTO,
)


@dataclass(frozen=True)
class CreateServiceCommand(CommandDTO):
    payload: CreateServiceDTO
    requester: Requester


@dataclass(frozen=True)
class UpdateServiceCommand(CommandDTO):
    service_id: uuid.UUID
    payload: UpdateServiceDTO
    requester: Requester


@dataclass(frozen=True)
class DeleteServiceCommand(CommandDTO):
    service_id: uuid.UUID
    requester: Requester


@dataclass(frozen=True)
class CreateCategoryCommand(CommandDTO):
    payload: CreateCategoryDTO
    requester: Requester


@dataclass(frozen=True)
class UpdateCategoryCommand(CommandDTO):
    category_id: uuid.UUID
    payload: UpdateCategoryDTO
    requester: Requester


@dataclass(frozen=True)
class DeleteCategoryCommand(CommandDTO):
    category_id: uuid.UUID
    requester: Requester
