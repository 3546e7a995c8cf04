from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Literal

from quezi_core.core.domain.entities._base import EntityMixin

PriceType = Literal["FIXED", "HOURLY", "DAILY", "NEGOTIABLE"]
PRICE_TYPES: tuple[str, ...] = ("FIXED", "HOURLY", "DAILY", "NEGOTIABLE")


@dataclass(slots=True)
class ServiceCategoryEntity(EntityMixin):
    id: uuid.UUID
    name: str
    slug: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(slots=True)
class ServiceEntity(EntityMixin):
    """Serviço oferecido por um profissional, sempre dentro de uma categoria."""
    id: uuid.UUID
    professional_id: uuid.UUID
    category_id: uuid.UUID
    name: str
    price: Decimal
    duration_minutes: int
    price_type: PriceType = "FIXED"
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self):
        if self.price_type not in PRICE_TYPES:
            raise ValueError(f"Tipo de preço inválido: {self.price_type}")

    def is_owned_by(self, user_id: uuid.UUID) -> bool:
        return self.professional_id == user_id
