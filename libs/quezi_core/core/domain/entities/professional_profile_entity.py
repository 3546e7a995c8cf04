from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal

from quezi_core.core.domain.entities._base import EntityMixin

ServiceMode = Literal["AT_LOCATION", "AT_DOMICILE", "BOTH"]
SERVICE_MODES: tuple[str, ...] = ("AT_LOCATION", "AT_DOMICILE", "BOTH")
DAYS_OF_WEEK: tuple[str, ...] = (
    "MONDAY", "TUESDAY", "WEDNESDAY", "THURSDAY", "FRIDAY", "SATURDAY", "SUNDAY",
)


@dataclass(slots=True)
class ProfessionalProfileEntity(EntityMixin):
    id: uuid.UUID
    user_id: uuid.UUID
    city: str
    service_mode: ServiceMode
    bio: str | None = None
    address: str | None = None
    photo_url: str | None = None
    portfolio_images: list[str] = field(default_factory=list)
    working_hours: dict[str, Any] | None = None
    years_of_experience: int | None = None
    specialties: list[str] = field(default_factory=list)
    certifications: list[str] = field(default_factory=list)
    languages: list[str] = field(default_factory=list)
    is_active: bool = True
    is_verified: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self):
        if self.service_mode not in SERVICE_MODES:
            raise ValueError(f"Modo de atendimento inválido: {self.service_mode}")

    def is_owned_by(self, user_id: uuid.UUID) -> bool:
        return self.user_id == user_id

    def is_visible_to(self, user_id: uuid.UUID | None) -> bool:
        """Perfis inativos só aparecem para o próprio profissional."""
        return self.is_active or self.user_id == user_id
