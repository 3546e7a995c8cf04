from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Literal

from quezi_core.core.domain.entities._base import EntityMixin

MemberRole = Literal["owner", "admin", "member"]
MEMBER_ROLES: tuple[str, ...] = ("owner", "admin", "member")
# papéis que podem convidar / editar a organização
MANAGER_ROLES: tuple[str, ...] = ("owner", "admin")


@dataclass(slots=True)
class OrganizationMemberEntity(EntityMixin):
    id: uuid.UUID
    organization_id: uuid.UUID
    user_id: uuid.UUID
    role: MemberRole = "member"
    joined_at: datetime | None = None

    def __post_init__(self):
        if self.role not in MEMBER_ROLES:
            raise ValueError(f"Papel inválido: {self.role}")

    @property
    def is_owner(self) -> bool:
        return self.role == "owner"

    @property
    def can_manage(self) -> bool:
        return self.role in MANAGER_ROLES


@dataclass(slots=True)
class OrganizationInviteEntity(EntityMixin):
    id: uuid.UUID
    organization_id: uuid.UUID
    email: str
    role: MemberRole
    invited_by_id: uuid.UUID
    expires_at: datetime
    accepted_at: datetime | None = None
    created_at: datetime | None = None

    @classmethod
    def issue(
        cls,
        organization_id: uuid.UUID,
        email: str,
        role: MemberRole,
        invited_by_id: uuid.UUID,
        now: datetime,
        ttl: timedelta,
    ) -> OrganizationInviteEntity:
        return cls(
            id=uuid.uuid4(),
            organization_id=organization_id,
            email=email.strip().lower(),
            role=role,
            invited_by_id=invited_by_id,
            expires_at=now + ttl,
            created_at=now,
        )

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at

    @property
    def is_accepted(self) -> bool:
        return self.accepted_at is not None
