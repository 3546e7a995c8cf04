from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime


def _utcnow() -> datetime:
    return datetime.now(UTC)


# ───────────────────────────────────────────────
# Event Base e Domain Events
# ───────────────────────────────────────────────
@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    event_id: uuid.UUID = field(default_factory=uuid.uuid4)
    occurred_at: datetime = field(default_factory=_utcnow)

# ╭──────────────────────────────────────────────╮
# │ 1. Autenticação                             │
# ╰──────────────────────────────────────────────╯
@dataclass(frozen=True)
class UserRegisteredEvent(DomainEvent):
    user_id: uuid.UUID
    email: str
    name: str
    user_type: str
    verification_token: str

@dataclass(frozen=True)
class PasswordResetRequestedEvent(DomainEvent):
    user_id: uuid.UUID
    email: str
    name: str
    token: str
    expires_at: datetime

@dataclass(frozen=True)
class PasswordChangedEvent(DomainEvent):
    user_id: uuid.UUID
    email: str

# ╭──────────────────────────────────────────────╮
# │ 2. Organizações                             │
# ╰──────────────────────────────────────────────╯
@dataclass(frozen=True)
class OrganizationMemberInvitedEvent(DomainEvent):
    invite_id: uuid.UUID
    organization_id: uuid.UUID
    organization_name: str
    email: str
    role: str
    expires_at: datetime

# ╭──────────────────────────────────────────────╮
# │ 3. Avaliações                               │
# ╰──────────────────────────────────────────────╯
@dataclass(frozen=True)
class ReviewCreatedEvent(DomainEvent):
    review_id: uuid.UUID
    professional_id: uuid.UUID
    rating: int
