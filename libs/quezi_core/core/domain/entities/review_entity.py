from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta

from quezi_core.core.domain.entities._base import EntityMixin

EDIT_WINDOW = timedelta(days=30)
DELETE_WINDOW = timedelta(days=7)


@dataclass(slots=True)
class ReviewEntity(EntityMixin):
    id: uuid.UUID
    appointment_id: uuid.UUID
    reviewer_id: uuid.UUID
    professional_id: uuid.UUID
    rating: int
    comment: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self):
        if not 1 <= int(self.rating) <= 5:
            raise ValueError(f"Nota fora do intervalo 1-5: {self.rating}")

    def is_visible_to(self, user_id: uuid.UUID) -> bool:
        return user_id in (self.reviewer_id, self.professional_id)

    def can_be_edited(self, now: datetime) -> bool:
        return self.created_at is None or now - self.created_at <= EDIT_WINDOW

    def can_be_deleted(self, now: datetime) -> bool:
        return self.created_at is None or now - self.created_at <= DELETE_WINDOW
