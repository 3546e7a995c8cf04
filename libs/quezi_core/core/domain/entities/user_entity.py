from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from quezi_core.core.domain.entities._base import EntityMixin

UserType = Literal["CLIENT", "PROFESSIONAL", "ADMIN"]
USER_TYPES: tuple[str, ...] = ("CLIENT", "PROFESSIONAL", "ADMIN")


@dataclass(slots=True)
class UserEntity(EntityMixin):
    id: uuid.UUID
    email: str
    name: str
    user_type: UserType = "CLIENT"
    password_hash: str | None = None
    phone: str | None = None
    is_email_verified: bool = False
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self):
        if self.user_type not in USER_TYPES:
            raise ValueError(f"Tipo de usuário inválido: {self.user_type}")
        self.email = self.email.strip().lower()

    @property
    def is_admin(self) -> bool:
        return self.user_type == "ADMIN"

    @property
    def is_professional(self) -> bool:
        return self.user_type == "PROFESSIONAL"

    @property
    def is_client(self) -> bool:
        return self.user_type == "CLIENT"
