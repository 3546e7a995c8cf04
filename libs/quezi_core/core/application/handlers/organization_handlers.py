import uuid
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import structlog

from quezi_core.core.application.commands.organization_commands import (
    AcceptInviteCommand,
    CreateOrganizationCommand,
    DeleteOrganizationCommand,
    InviteMemberCommand,
    RemoveMemberCommand,
    UpdateMemberRoleCommand,
    UpdateOrganizationCommand,
)
from quezi_core.core.application.cqrs import CommandHandler, PagedResult, QueryHandler, Requester
from quezi_core.core.application.dtos.read_models import MemberDetails
from quezi_core.core.application.queries.organization_queries import (
    GetOrganizationBySlugQuery,
    GetOrganizationQuery,
    ListOrganizationMembersQuery,
    ListOrganizationsQuery,
)
from quezi_core.core.domain.entities.organization_entity import OrganizationEntity
from quezi_core.core.domain.entities.organization_member_entity import (
    OrganizationInviteEntity,
    OrganizationMemberEntity,
)
from quezi_core.core.domain.events.events import OrganizationMemberInvitedEvent
from quezi_core.core.domain.exceptions import (
    BadRequestError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
)
from quezi_core.core.domain.repositories.organization_repository import (
    OrganizationInviteRepository,
    OrganizationMemberRepository,
    OrganizationRepository,
)
from quezi_core.core.domain.repositories.user_repository import UserRepository

logger = structlog.get_logger(__name__)


def utcnow() -> datetime:
    return datetime.now(UTC)


class _OrganizationAccess:
    """Carrega a organização e o vínculo de quem pede, aplicando as regras de papel."""

    def __init__(self, org_repo: OrganizationRepository, member_repo: OrganizationMemberRepository):
        self.org_repo = org_repo
        self.member_repo = member_repo

    def organization(self, organization_id) -> OrganizationEntity:
        org = self.org_repo.find_by_id(organization_id)
        if not org:
            raise NotFoundError("Organização")
        return org

    def membership(self, organization_id, requester: Requester) -> OrganizationMemberEntity | None:
        return self.member_repo.find(organization_id, requester.id)

    def require_manager(self, organization_id, requester: Requester, message: str) -> OrganizationMemberEntity | None:
        member = self.membership(organization_id, requester)
        if requester.is_admin:
            return member
        if not member or not member.can_manage:
            raise ForbiddenError(message)
        return member

    def require_owner(self, organization_id, requester: Requester, message: str) -> None:
        if requester.is_admin:
            return
        member = self.membership(organization_id, requester)
        if not member or not member.is_owner:
            raise ForbiddenError(message)


# ——— ORGANIZAÇÃO ———————————————————————————————————————————

class CreateOrganizationHandler(CommandHandler[CreateOrganizationCommand]):
    def __init__(self, org_repo: OrganizationRepository, member_repo: OrganizationMemberRepository):
        self.org_repo = org_repo
        self.member_repo = member_repo

    def handle(self, command: CreateOrganizationCommand) -> OrganizationEntity:
        p = command.payload
        if self.org_repo.find_by_slug(p.slug):
            raise ConflictError("Slug já está em uso")

        org = self.org_repo.save(OrganizationEntity(
            id=uuid.uuid4(),
            name=p.name,
            slug=p.slug,
            owner_id=command.requester.id,
            description=p.description,
        ))
        self.member_repo.save(OrganizationMemberEntity(
            id=uuid.uuid4(),
            organization_id=org.id,
            user_id=command.requester.id,
            role="owner",
        ))
        logger.info("organization.created", organization_id=str(org.id), slug=org.slug)
        return org


class UpdateOrganizationHandler(CommandHandler[UpdateOrganizationCommand]):
    def __init__(self, org_repo: OrganizationRepository, member_repo: OrganizationMemberRepository):
        self.access = _OrganizationAccess(org_repo, member_repo)

    def handle(self, command: UpdateOrganizationCommand) -> OrganizationEntity:
        org = self.access.organization(command.organization_id)
        self.access.require_manager(
            org.id, command.requester, "Apenas owner ou admin podem atualizar a organização"
        )
        changes = command.payload.model_dump(exclude_unset=True)
        for field, value in changes.items():
            if field == "name" and value is None:
                continue
            setattr(org, field, str(value) if field == "logo_url" and value is not None else value)
        return self.access.org_repo.save(org)


class DeleteOrganizationHandler(CommandHandler[DeleteOrganizationCommand]):
    def __init__(self, org_repo: OrganizationRepository, member_repo: OrganizationMemberRepository):
        self.access = _OrganizationAccess(org_repo, member_repo)

    def handle(self, command: DeleteOrganizationCommand) -> None:
        org = self.access.organization(command.organization_id)
        self.access.require_owner(org.id, command.requester, "Apenas o owner pode remover a organização")
        self.access.org_repo.delete(org.id)
        logger.info("organization.deleted", organization_id=str(org.id))


class GetOrganizationHandler(QueryHandler[GetOrganizationQuery, OrganizationEntity]):
    def __init__(self, org_repo: OrganizationRepository):
        self.org_repo = org_repo

    def handle(self, query: GetOrganizationQuery) -> OrganizationEntity:
        org = self.org_repo.find_by_id(query.organization_id)
        if not org:
            raise NotFoundError("Organização")
        return org


class GetOrganizationBySlugHandler(QueryHandler[GetOrganizationBySlugQuery, OrganizationEntity]):
    def __init__(self, org_repo: OrganizationRepository):
        self.org_repo = org_repo

    def handle(self, query: GetOrganizationBySlugQuery) -> OrganizationEntity:
        org = self.org_repo.find_by_slug(query.slug)
        if not org:
            raise NotFoundError("Organização")
        return org


class ListOrganizationsHandler(QueryHandler[ListOrganizationsQuery, PagedResult[OrganizationEntity]]):
    def __init__(self, org_repo: OrganizationRepository):
        self.org_repo = org_repo

    def handle(self, query: ListOrganizationsQuery) -> PagedResult[OrganizationEntity]:
        return self.org_repo.list(query.filtros, query.page, query.page_size)


# ——— MEMBROS E CONVITES ————————————————————————————————————

class ListOrganizationMembersHandler(QueryHandler[ListOrganizationMembersQuery, list[MemberDetails]]):
    def __init__(self, org_repo: OrganizationRepository, member_repo: OrganizationMemberRepository,
                 user_repo: UserRepository):
        self.access = _OrganizationAccess(org_repo, member_repo)
        self.user_repo = user_repo

    def handle(self, query: ListOrganizationMembersQuery) -> list[MemberDetails]:
        org = self.access.organization(query.organization_id)
        if not query.requester.is_admin and not self.access.membership(org.id, query.requester):
            raise ForbiddenError("Apenas membros podem ver a equipe")

        details: list[MemberDetails] = []
        for member in self.access.member_repo.list_by_organization(org.id):
            user = self.user_repo.find_by_id(member.user_id)
            if user:
                details.append(MemberDetails(member=member, user=user))
        return details


class InviteMemberHandler(CommandHandler[InviteMemberCommand]):
    def __init__(self, org_repo: OrganizationRepository, member_repo: OrganizationMemberRepository,
                 invite_repo: OrganizationInviteRepository, user_repo: UserRepository,
                 ttl_days: int = 7, clock=utcnow):
        self.access = _OrganizationAccess(org_repo, member_repo)
        self.invite_repo = invite_repo
        self.user_repo = user_repo
        self.ttl = timedelta(days=ttl_days)
        self.clock = clock

    def handle(self, command: InviteMemberCommand):
        org = self.access.organization(command.organization_id)
        self.access.require_manager(org.id, command.requester, "Apenas owner ou admin podem convidar membros")

        email = command.payload.email.lower()
        invited = self.user_repo.find_by_email(email)
        if invited and self.access.member_repo.find(org.id, invited.id):
            raise ConflictError("Usuário já é membro da organização")

        now = self.clock()
        pending = self.invite_repo.find_pending(org.id, email)
        if pending and not pending.is_expired(now):
            raise ConflictError("Já existe um convite pendente para este email")

        invite = self.invite_repo.save(OrganizationInviteEntity.issue(
            organization_id=org.id,
            email=email,
            role=command.payload.role,
            invited_by_id=command.requester.id,
            now=now,
            ttl=self.ttl,
        ))
        event = OrganizationMemberInvitedEvent(
            invite_id=invite.id,
            organization_id=org.id,
            organization_name=org.name,
            email=invite.email,
            role=invite.role,
            expires_at=invite.expires_at,
        )
        return invite, event


class AcceptInviteHandler(CommandHandler[AcceptInviteCommand]):
    def __init__(self, member_repo: OrganizationMemberRepository, invite_repo: OrganizationInviteRepository,
                 user_repo: UserRepository, clock=utcnow):
        self.member_repo = member_repo
        self.invite_repo = invite_repo
        self.user_repo = user_repo
        self.clock = clock

    def handle(self, command: AcceptInviteCommand) -> OrganizationMemberEntity:
        invite = self.invite_repo.find_by_id(command.invite_id)
        if not invite:
            raise NotFoundError("Convite")

        user = self.user_repo.find_by_id(command.requester.id)
        if not user or user.email != invite.email.lower():
            raise ForbiddenError("Este convite pertence a outro email")

        now = self.clock()
        if invite.is_accepted:
            raise BadRequestError("Convite já utilizado")
        if invite.is_expired(now):
            raise BadRequestError("Convite expirado")
        if self.member_repo.find(invite.organization_id, user.id):
            raise ConflictError("Usuário já é membro da organização")

        member = self.member_repo.save(OrganizationMemberEntity(
            id=uuid.uuid4(),
            organization_id=invite.organization_id,
            user_id=user.id,
            role=invite.role,
        ))
        invite.accepted_at = now
        self.invite_repo.save(invite)
        return member


class UpdateMemberRoleHandler(CommandHandler[UpdateMemberRoleCommand]):
    def __init__(self, org_repo: OrganizationRepository, member_repo: OrganizationMemberRepository):
        self.access = _OrganizationAccess(org_repo, member_repo)

    def handle(self, command: UpdateMemberRoleCommand) -> OrganizationMemberEntity:
        org = self.access.organization(command.organization_id)
        self.access.require_owner(org.id, command.requester, "Apenas o owner pode alterar papéis")

        member = self.access.member_repo.find_by_id(command.member_id)
        if not member or member.organization_id != org.id:
            raise NotFoundError("Membro")
        if member.is_owner:
            raise ForbiddenError("Não é possível alterar o papel do owner")

        member.role = command.payload.role
        return self.access.member_repo.save(member)


class RemoveMemberHandler(CommandHandler[RemoveMemberCommand]):
    def __init__(self, org_repo: OrganizationRepository, member_repo: OrganizationMemberRepository):
        self.access = _OrganizationAccess(org_repo, member_repo)

    def handle(self, command: RemoveMemberCommand) -> None:
        org = self.access.organization(command.organization_id)
        self.access.require_owner(org.id, command.requester, "Apenas o owner pode remover membros")

        member = self.access.member_repo.find(org.id, command.user_id)
        if not member:
            raise NotFoundError("Membro")
        if member.is_owner:
            raise ForbiddenError("Não é possível remover o owner")

        self.access.member_repo.delete(member.id)
        logger.info("organization.member_removed", organization_id=str(org.id), user_id=str(command.user_id))
