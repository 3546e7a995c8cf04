from __future__ import annotations

import secrets
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Literal

from quezi_core.core.domain.entities._base import EntityMixin

TokenPurpose = Literal["password_reset", "email_verification"]


@dataclass(slots=True)
class VerificationTokenEntity(EntityMixin):
    """Token de uso único enviado por e-mail (reset de senha / verificação)."""
    id: uuid.UUID
    identifier: str
    token: str
    purpose: TokenPurpose
    expires_at: datetime
    created_at: datetime | None = None

    @classmethod
    def issue(cls, identifier: str, purpose: TokenPurpose, now: datetime, ttl: timedelta) -> VerificationTokenEntity:
        return cls(
            id=uuid.uuid4(),
            identifier=identifier.strip().lower(),
            token=secrets.token_hex(32),
            purpose=purpose,
            expires_at=now + ttl,
            created_at=now,
        )

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at
