from __future__ import annotations

import re
import uuid
from dataclasses import dataclass
from datetime import datetime

from quezi_core.core.domain.entities._base import EntityMixin

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


@dataclass(slots=True)
class OrganizationEntity(EntityMixin):
    id: uuid.UUID
    name: str
    slug: str
    owner_id: uuid.UUID
    description: str | None = None
    logo_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self):
        if not SLUG_PATTERN.match(self.slug):
            raise ValueError(f"Slug inválido: {self.slug}")
