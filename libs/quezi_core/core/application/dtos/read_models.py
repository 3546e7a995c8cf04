"""Modelos de leitura devolvidos por handlers que combinam entidades."""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field

from quezi_core.core.domain.entities.organization_member_entity import OrganizationMemberEntity
from quezi_core.core.domain.entities.professional_profile_entity import ProfessionalProfileEntity
from quezi_core.core.domain.entities.review_entity import ReviewEntity
from quezi_core.core.domain.entities.service_entity import ServiceCategoryEntity, ServiceEntity
from quezi_core.core.domain.entities.user_entity import UserEntity


@dataclass(frozen=True)
class AuthResult:
    user: UserEntity
    token: str


@dataclass(frozen=True)
class MemberDetails:
    member: OrganizationMemberEntity
    user: UserEntity


@dataclass(frozen=True)
class TokenCheck:
    valid: bool
    message: str | None = None
    error: str | None = None


@dataclass(frozen=True)
class ProfessionalReviewStats:
    professional_id: uuid.UUID
    total_reviews: int
    average_rating: float
    rating_distribution: dict[int, int]
    recent_reviews: list[ReviewEntity] = field(default_factory=list)


@dataclass(frozen=True)
class AdminStats:
    users_by_type: dict[str, int]
    total_users: int
    total_organizations: int
    appointments_by_status: dict[str, int]
    total_reviews: int
    average_rating: float | None


@dataclass(frozen=True)
class ProfessionalProfileDetails:
    """Perfil público: dados do perfil, nome do profissional e agregados de avaliação."""
    profile: ProfessionalProfileEntity
    name: str
    average_rating: float | None
    total_reviews: int
    services: list[ServiceEntity] = field(default_factory=list)


@dataclass(frozen=True)
class CategorySummary:
    category: ServiceCategoryEntity
    services_count: int


@dataclass(frozen=True)
class PopularService:
    service: ServiceEntity
    appointments_count: int
