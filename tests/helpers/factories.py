"""Fábricas de dados para os testes da API."""

from __future__ import annotations

import uuid
from datetime import timedelta
from decimal import Decimal

from django.utils import timezone

from plugins.django_interface.models import (
    Appointment,
    Organization,
    OrganizationMember,
    ProfessionalProfile,
    Review,
    Service,
    ServiceCategory,
    User,
)
from quezi_core.adapters.security.hash_service import HashService
from quezi_core.adapters.security.jwt_service import JWTService

DEFAULT_PASSWORD = "Senha123"


def make_user(
    email: str | None = None,
    *,
    name: str = "Maria Silva",
    user_type: str = "CLIENT",
    password: str = DEFAULT_PASSWORD,
    is_active: bool = True,
) -> User:
    return User.objects.create(
        email=email or f"user-{uuid.uuid4().hex[:8]}@example.com",
        name=name,
        user_type=user_type,
        password_hash=HashService.hash_password(password),
        is_active=is_active,
    )


def auth_headers(user: User) -> dict[str, str]:
    token = JWTService.create_token(subject=str(user.id), role=user.user_type)
    return {"Authorization": f"Bearer {token}"}


def make_organization(owner: User, *, name: str = "Salão Beleza", slug: str | None = None) -> Organization:
    org = Organization.objects.create(
        name=name,
        slug=slug or f"salao-{uuid.uuid4().hex[:6]}",
        owner=owner,
    )
    OrganizationMember.objects.create(organization=org, user=owner, role=OrganizationMember.Role.OWNER)
    return org


def make_appointment(
    client: User,
    professional: User,
    *,
    status: str = Appointment.Status.PENDING,
    days_ahead: int = 3,
    service: Service | None = None,
) -> Appointment:
    return Appointment.objects.create(
        client=client,
        professional=professional,
        service=service,
        service_name=service.name if service else "Corte feminino",
        scheduled_date=timezone.now() + timedelta(days=days_ahead),
        status=status,
        price=service.price if service else Decimal("80.00"),
    )


def make_review(appointment: Appointment, *, rating: int = 5, comment: str | None = "Ótimo", age_days: int = 0) -> Review:
    review = Review.objects.create(
        appointment=appointment,
        reviewer=appointment.client,
        professional=appointment.professional,
        rating=rating,
        comment=comment,
    )
    if age_days:
        # auto_now_add ignora valores no create: ajusta depois
        Review.objects.filter(id=review.id).update(created_at=timezone.now() - timedelta(days=age_days))
        review.refresh_from_db()
    return review


def make_category(*, name: str = "Cabelo", slug: str | None = None) -> ServiceCategory:
    return ServiceCategory.objects.create(name=name, slug=slug or f"cat-{uuid.uuid4().hex[:6]}")


def make_service(
    professional: User,
    *,
    category: ServiceCategory | None = None,
    name: str = "Manicure",
    price: Decimal = Decimal("45.90"),
    duration_minutes: int = 60,
) -> Service:
    return Service.objects.create(
        professional=professional,
        category=category or make_category(),
        name=name,
        price=price,
        duration_minutes=duration_minutes,
    )


def make_profile(
    user: User,
    *,
    city: str = "São Paulo",
    service_mode: str = "AT_LOCATION",
    specialties: list[str] | None = None,
    is_active: bool = True,
    years_of_experience: int | None = None,
) -> ProfessionalProfile:
    return ProfessionalProfile.objects.create(
        user=user,
        city=city,
        service_mode=service_mode,
        specialties=specialties if specialties is not None else ["Corte", "Coloração"],
        is_active=is_active,
        years_of_experience=years_of_experience,
    )
