"""
Assinantes dos eventos de domínio.

Não há envio de e-mail: os links que iriam na mensagem são registrados no
log (`email.outbox`) para que o front ou um operador possam usá-los.
"""
from __future__ import annotations

from urllib.parse import urlencode

import structlog

from quezi_core.adapters.observability.metrics import DOMAIN_EVENTS, REVIEW_RATINGS
from quezi_core.core.domain.events.events import (
    DomainEvent,
    OrganizationMemberInvitedEvent,
    PasswordChangedEvent,
    PasswordResetRequestedEvent,
    ReviewCreatedEvent,
    UserRegisteredEvent,
)
from quezi_core.core.domain.services.event_dispatcher import EventDispatcher

logger = structlog.get_logger(__name__)


def build_link(frontend_url: str, path: str, **params: str) -> str:
    return f"{frontend_url.rstrip('/')}/{path.lstrip('/')}?{urlencode(params)}"


class EmailOutbox:
    """Monta os links enviados por e-mail e os registra no log."""

    def __init__(self, frontend_url: str):
        self.frontend_url = frontend_url

    def on_user_registered(self, event: UserRegisteredEvent) -> None:
        link = build_link(self.frontend_url, "verify-email", token=event.verification_token)
        logger.info("email.outbox", kind="email_verification", to=event.email, link=link)

    def on_password_reset_requested(self, event: PasswordResetRequestedEvent) -> None:
        link = build_link(self.frontend_url, "reset-password", token=event.token)
        logger.info(
            "email.outbox",
            kind="password_reset",
            to=event.email,
            link=link,
            expires_at=event.expires_at.isoformat(),
        )

    def on_password_changed(self, event: PasswordChangedEvent) -> None:
        logger.info("email.outbox", kind="password_changed", to=event.email)

    def on_member_invited(self, event: OrganizationMemberInvitedEvent) -> None:
        link = build_link(self.frontend_url, "invites/accept", invite=str(event.invite_id))
        logger.info(
            "email.outbox",
            kind="organization_invite",
            to=event.email,
            organization=event.organization_name,
            role=event.role,
            link=link,
        )


def count_event(event: DomainEvent) -> None:
    DOMAIN_EVENTS.labels(event=type(event).__name__).inc()


def count_review_rating(event: ReviewCreatedEvent) -> None:
    REVIEW_RATINGS.labels(rating=str(event.rating)).inc()


def register_subscribers(dispatcher: EventDispatcher, frontend_url: str) -> EmailOutbox:
    outbox = EmailOutbox(frontend_url)
    dispatcher.subscribe(UserRegisteredEvent, outbox.on_user_registered)
    dispatcher.subscribe(PasswordResetRequestedEvent, outbox.on_password_reset_requested)
    dispatcher.subscribe(PasswordChangedEvent, outbox.on_password_changed)
    dispatcher.subscribe(OrganizationMemberInvitedEvent, outbox.on_member_invited)
    dispatcher.subscribe(ReviewCreatedEvent, count_review_rating)
    for event_type in (
        UserRegisteredEvent,
        PasswordResetRequestedEvent,
        PasswordChangedEvent,
        OrganizationMemberInvitedEvent,
        ReviewCreatedEvent,
    ):
        dispatcher.subscribe(event_type, count_event)
    return outbox
