import uuid
from dataclasses import dataclass

from quezi_core.core.application.cqrs import CommandDTO, Requester
from quezi_core.core.application.dtos.organization_dto import (
    CreateOrganizationDTO,
    InviteMemberDTO,
    UpdateMemberRoleDTO,
    UpdateOrganizationDTO,
)


@dataclass(frozen=True)
class CreateOrganizationCommand(CommandDTO):
    payload: CreateOrganizationDTO
    requester: Requester


@dataclass(frozen=True)
class UpdateOrganizationCommand(CommandDTO):
    organization_id: uuid.UUID
    payload: UpdateOrganizationDTO
    requester: Requester


@dataclass(frozen=True)
class DeleteOrganizationCommand(CommandDTO):
    organization_id: uuid.UUID
    requester: Requester


@dataclass(frozen=True)
class InviteMemberCommand(CommandDTO):
    organization_id: uuid.UUID
    payload: InviteMemberDTO
    requester: Requester


@dataclass(frozen=True)
class AcceptInviteCommand(CommandDTO):
    invite_id: uuid.UUID
    requester: Requester


@dataclass(frozen=True)
class UpdateMemberRoleCommand(CommandDTO):
    organization_id: uuid.UUID
    member_id: uuid.UUID
    payload: UpdateMemberRoleDTO
    requester: Requester


@dataclass(frozen=True)
class RemoveMemberCommand(CommandDTO):
    organization_id: uuid.UUID
    user_id: uuid.UUID
    requester: Requester
