import uuid
from collections.abc import Callable
from datetime import UTC, datetime

import structlog

from quezi_core.core.application.commands.review_commands import (
    CreateReviewCommand,
    DeleteReviewCommand,
    UpdateReviewCommand,
)
from quezi_core.core.application.cqrs import CommandHandler, PagedResult, QueryHandler, Requester
from quezi_core.core.application.dtos.read_models import ProfessionalReviewStats
from quezi_core.core.application.queries.review_queries import (
    GetProfessionalReviewStatsQuery,
    GetReviewByAppointmentQuery,
    GetReviewQuery,
    ListReviewsQuery,
)
from quezi_core.core.domain.entities.review_entity import ReviewEntity
from quezi_core.core.domain.events.events import ReviewCreatedEvent
from quezi_core.core.domain.exceptions import BadRequestError, ConflictError, ForbiddenError, NotFoundError
from quezi_core.core.domain.repositories.appointment_repository import AppointmentRepository
from quezi_core.core.domain.repositories.review_repository import ReviewRepository
from quezi_core.core.domain.repositories.user_repository import UserRepository

logger = structlog.get_logger(__name__)

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(UTC)


def _ensure_can_view(review: ReviewEntity, requester: Requester) -> None:
    if not requester.is_admin and not review.is_visible_to(requester.id):
        raise ForbiddenError("Você não tem permissão para ver esta avaliação")


def _load_own_review(repo: ReviewRepository, review_id, requester: Requester, action: str) -> ReviewEntity:
    review = repo.find_by_id(review_id)
    if not review:
        raise NotFoundError("Avaliação")
    if review.reviewer_id != requester.id:
        raise ForbiddenError(f"Apenas o autor pode {action} a avaliação")
    return review


class CreateReviewHandler(CommandHandler[CreateReviewCommand]):
    def __init__(self, repo: ReviewRepository, appointment_repo: AppointmentRepository):
        self.repo = repo
        self.appointment_repo = appointment_repo

    def handle(self, command: CreateReviewCommand):
        p = command.payload
        appointment = self.appointment_repo.find_by_id(p.appointment_id)
        if not appointment:
            raise NotFoundError("Agendamento")
        if appointment.client_id != command.requester.id:
            raise ForbiddenError("Apenas o cliente do agendamento pode avaliá-lo")
        if not appointment.is_completed:
            raise BadRequestError("Só é possível avaliar agendamentos concluídos")
        if self.repo.find_by_appointment(appointment.id):
            raise ConflictError("Este agendamento já foi avaliado")

        review = self.repo.save(ReviewEntity(
            id=uuid.uuid4(),
            appointment_id=appointment.id,
            reviewer_id=command.requester.id,
            professional_id=appointment.professional_id,
            rating=p.rating,
            comment=p.comment,
        ))
        return review, ReviewCreatedEvent(
            review_id=review.id,
            professional_id=review.professional_id,
            rating=review.rating,
        )


class UpdateReviewHandler(CommandHandler[UpdateReviewCommand]):
    def __init__(self, repo: ReviewRepository, clock: Clock = utcnow):
        self.repo = repo
        self.clock = clock

    def handle(self, command: UpdateReviewCommand) -> ReviewEntity:
        review = _load_own_review(self.repo, command.review_id, command.requester, "editar")
        if not review.can_be_edited(self.clock()):
            raise BadRequestError("Avaliações só podem ser editadas em até 30 dias")

        for field, value in command.payload.model_dump(exclude_unset=True).items():
            if field == "rating" and value is None:
                continue
            setattr(review, field, value)
        return self.repo.save(review)


class DeleteReviewHandler(CommandHandler[DeleteReviewCommand]):
    def __init__(self, repo: ReviewRepository, clock: Clock = utcnow):
        self.repo = repo
        self.clock = clock

    def handle(self, command: DeleteReviewCommand) -> None:
        review = _load_own_review(self.repo, command.review_id, command.requester, "remover")
        if not review.can_be_deleted(self.clock()):
            raise BadRequestError("Avaliações só podem ser removidas em até 7 dias")
        self.repo.delete(review.id)
        logger.info("review.deleted", review_id=str(review.id))


class GetReviewHandler(QueryHandler[GetReviewQuery, ReviewEntity]):
    def __init__(self, repo: ReviewRepository):
        self.repo = repo

    def handle(self, query: GetReviewQuery) -> ReviewEntity:
        review = self.repo.find_by_id(query.review_id)
        if not review:
            raise NotFoundError("Avaliação")
        _ensure_can_view(review, query.requester)
        return review


class GetReviewByAppointmentHandler(QueryHandler[GetReviewByAppointmentQuery, ReviewEntity]):
    def __init__(self, repo: ReviewRepository):
        self.repo = repo

    def handle(self, query: GetReviewByAppointmentQuery) -> ReviewEntity:
        review = self.repo.find_by_appointment(query.appointment_id)
        if not review:
            raise NotFoundError("Avaliação")
        _ensure_can_view(review, query.requester)
        return review


class ListReviewsHandler(QueryHandler[ListReviewsQuery, PagedResult[ReviewEntity]]):
    def __init__(self, repo: ReviewRepository):
        self.repo = repo

    def handle(self, query: ListReviewsQuery) -> PagedResult[ReviewEntity]:
        return self.repo.list(query.filtros, query.page, query.page_size)


class GetProfessionalReviewStatsHandler(QueryHandler[GetProfessionalReviewStatsQuery, ProfessionalReviewStats]):
    def __init__(self, repo: ReviewRepository, user_repo: UserRepository):
        self.repo = repo
        self.user_repo = user_repo

    def handle(self, query: GetProfessionalReviewStatsQuery) -> ProfessionalReviewStats:
        professional = self.user_repo.find_by_id(query.professional_id)
        if not professional or not professional.is_professional:
            raise NotFoundError("Profissional")

        distribution = self.repo.rating_distribution(professional.id)
        total = sum(distribution.values())
        weighted = sum(rating * count for rating, count in distribution.items())
        average = round(weighted / total, 2) if total else 0.0
        return ProfessionalReviewStats(
            professional_id=professional.id,
            total_reviews=total,
            average_rating=average,
            rating_distribution=distribution,
            recent_reviews=self.repo.recent_for_professional(professional.id, query.recent_limit),
        )
