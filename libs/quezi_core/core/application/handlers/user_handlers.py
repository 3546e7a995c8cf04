import structlog

from quezi_core.core.application.commands.user_commands import DeleteUserCommand, UpdateUserCommand
from quezi_core.core.application.cqrs import CommandHandler, PagedResult, QueryHandler
from quezi_core.core.application.dtos.read_models import AdminStats
from quezi_core.core.application.queries.user_queries import GetAdminStatsQuery, GetUserQuery, ListUsersQuery
from quezi_core.core.domain.entities.user_entity import UserEntity
from quezi_core.core.domain.exceptions import BadRequestError, ForbiddenError, NotFoundError
from quezi_core.core.domain.repositories.appointment_repository import AppointmentRepository
from quezi_core.core.domain.repositories.organization_repository import OrganizationRepository
from quezi_core.core.domain.repositories.review_repository import ReviewRepository
from quezi_core.core.domain.repositories.user_repository import UserRepository

logger = structlog.get_logger(__name__)


def _ensure_self_or_admin(requester, user_id) -> None:
    if not requester.is_admin and requester.id != user_id:
        raise ForbiddenError("Você não tem permissão para acessar este usuário")


class GetUserHandler(QueryHandler[GetUserQuery, UserEntity]):
    def __init__(self, repo: UserRepository):
        self.repo = repo

    def handle(self, query: GetUserQuery) -> UserEntity:
        _ensure_self_or_admin(query.requester, query.user_id)
        user = self.repo.find_by_id(query.user_id)
        if not user:
            raise NotFoundError("Usuário")
        return user


class ListUsersHandler(QueryHandler[ListUsersQuery, PagedResult[UserEntity]]):
    def __init__(self, repo: UserRepository):
        self.repo = repo

    def handle(self, query: ListUsersQuery) -> PagedResult[UserEntity]:
        filtros = {k: v for k, v in query.filtros.items() if v is not None}
        return self.repo.list(filtros, query.page, query.page_size)


class UpdateUserHandler(CommandHandler[UpdateUserCommand]):
    def __init__(self, repo: UserRepository):
        self.repo = repo

    def handle(self, command: UpdateUserCommand) -> UserEntity:
        _ensure_self_or_admin(command.requester, command.user_id)
        user = self.repo.find_by_id(command.user_id)
        if not user:
            raise NotFoundError("Usuário")

        changes = command.payload.model_dump(exclude_unset=True)
        if "is_active" in changes:
            if not command.requester.is_admin:
                raise ForbiddenError("Apenas administradores podem ativar ou desativar contas")
            if user.id == command.requester.id:
                raise BadRequestError("Você não pode desativar a própria conta")
        for field, value in changes.items():
            if field == "name" and value is None:
                continue
            setattr(user, field, value)
        return self.repo.save(user)


class DeleteUserHandler(CommandHandler[DeleteUserCommand]):
    def __init__(self, repo: UserRepository):
        self.repo = repo

    def handle(self, command: DeleteUserCommand) -> None:
        if not command.requester.is_admin:
            raise ForbiddenError()
        if command.user_id == command.requester.id:
            raise BadRequestError("Você não pode remover a própria conta")
        if not self.repo.find_by_id(command.user_id):
            raise NotFoundError("Usuário")
        self.repo.delete(command.user_id)
        logger.info("user.deleted", user_id=str(command.user_id))


class GetAdminStatsHandler(QueryHandler[GetAdminStatsQuery, AdminStats]):
    def __init__(self, user_repo: UserRepository, organization_repo: OrganizationRepository,
                 appointment_repo: AppointmentRepository, review_repo: ReviewRepository):
        self.user_repo = user_repo
        self.organization_repo = organization_repo
        self.appointment_repo = appointment_repo
        self.review_repo = review_repo

    def handle(self, query: GetAdminStatsQuery) -> AdminStats:
        by_type = self.user_repo.count_by_type()
        total_reviews, avg = self.review_repo.summary()
        return AdminStats(
            users_by_type=by_type,
            total_users=sum(by_type.values()),
            total_organizations=self.organization_repo.count(),
            appointments_by_status=self.appointment_repo.count_by_status(),
            total_reviews=total_reviews,
            average_rating=round(avg, 2) if avg is not None else None,
        )
