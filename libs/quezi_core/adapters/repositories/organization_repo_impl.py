from __future__ import annotations

from django.db.models import Q

from plugins.django_interface.models import Organization as OrganizationModel
from plugins.django_interface.models import OrganizationInvite as InviteModel
from plugins.django_interface.models import OrganizationMember as MemberModel
from quezi_core.adapters.repositories._helpers import as_uuid, model_defaults, paginate
from quezi_core.core.application.cqrs import PagedResult
from quezi_core.core.domain.entities.organization_entity import OrganizationEntity
from quezi_core.core.domain.entities.organization_member_entity import (
    OrganizationInviteEntity,
    OrganizationMemberEntity,
)
from quezi_core.core.domain.repositories.organization_repository import (
    OrganizationInviteRepository,
    OrganizationMemberRepository,
    OrganizationRepository,
)


class OrganizationRepoImpl(OrganizationRepository):
    def find_by_id(self, organization_id) -> OrganizationEntity | None:
        oid = as_uuid(organization_id)
        if oid is None:
            return None
        m = OrganizationModel.objects.filter(id=oid).first()
        return OrganizationEntity.from_model(m) if m else None

    def find_by_slug(self, slug: str) -> OrganizationEntity | None:
        m = OrganizationModel.objects.filter(slug__iexact=slug).first()
        return OrganizationEntity.from_model(m) if m else None

    def save(self, organization: OrganizationEntity) -> OrganizationEntity:
        m, _ = OrganizationModel.objects.update_or_create(
            id=organization.id,
            defaults=model_defaults(organization),
        )
        return OrganizationEntity.from_model(m)

    def delete(self, organization_id) -> None:
        oid = as_uuid(organization_id)
        if oid is not None:
            OrganizationModel.objects.filter(id=oid).delete()

    def list(self, filtros: dict, page: int, page_size: int) -> PagedResult[OrganizationEntity]:
        qs = OrganizationModel.objects.all()
        if filtros.get("search"):
            term = filtros["search"]
            qs = qs.filter(Q(name__icontains=term) | Q(slug__icontains=term))
        if filtros.get("member_id"):
            qs = qs.filter(members__user_id=filtros["member_id"])
        return paginate(qs.distinct().order_by("name", "id"), OrganizationEntity, page, page_size)

    def count(self) -> int:
        return OrganizationModel.objects.count()


class OrganizationMemberRepoImpl(OrganizationMemberRepository):
    def find_by_id(self, member_id) -> OrganizationMemberEntity | None:
        mid = as_uuid(member_id)
        if mid is None:
            return None
        m = MemberModel.objects.filter(id=mid).first()
        return OrganizationMemberEntity.from_model(m) if m else None

    def find(self, organization_id, user_id) -> OrganizationMemberEntity | None:
        m = MemberModel.objects.filter(organization_id=organization_id, user_id=user_id).first()
        return OrganizationMemberEntity.from_model(m) if m else None

    def list_by_organization(self, organization_id) -> list[OrganizationMemberEntity]:
        qs = MemberModel.objects.filter(organization_id=organization_id).order_by("joined_at")
        return [OrganizationMemberEntity.from_model(m) for m in qs]

    def save(self, member: OrganizationMemberEntity) -> OrganizationMemberEntity:
        m, _ = MemberModel.objects.update_or_create(
            id=member.id,
            defaults=model_defaults(member),
        )
        return OrganizationMemberEntity.from_model(m)

    def delete(self, member_id) -> None:
        MemberModel.objects.filter(id=member_id).delete()


class OrganizationInviteRepoImpl(OrganizationInviteRepository):
    def find_by_id(self, invite_id) -> OrganizationInviteEntity | None:
        iid = as_uuid(invite_id)
        if iid is None:
            return None
        m = InviteModel.objects.filter(id=iid).first()
        return OrganizationInviteEntity.from_model(m) if m else None

    def find_pending(self, organization_id, email: str) -> OrganizationInviteEntity | None:
        m = (
            InviteModel.objects
            .filter(organization_id=organization_id, email__iexact=email, accepted_at__isnull=True)
            .order_by("-created_at")
            .first()
        )
        return OrganizationInviteEntity.from_model(m) if m else None

    def save(self, invite: OrganizationInviteEntity) -> OrganizationInviteEntity:
        m, _ = InviteModel.objects.update_or_create(
            id=invite.id,
            defaults=model_defaults(invite),
        )
        return OrganizationInviteEntity.from_model(m)
