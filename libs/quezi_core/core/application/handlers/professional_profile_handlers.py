import uuid

import structlog

from quezi_core.core.application.commands.professional_profile_commands import (
    CreateProfessionalProfileCommand,
    DeleteProfessionalProfileCommand,
    UpdateProfessionalProfileCommand,
)
from quezi_core.core.application.cqrs import CommandHandler, PagedResult, QueryHandler, Requester
from quezi_core.core.application.dtos.read_models import ProfessionalProfileDetails
from quezi_core.core.application.queries.professional_profile_queries import (
    GetProfessionalProfileQuery,
    ListProfessionalProfilesQuery,
    TopRatedProfessionalsQuery,
)
from quezi_core.core.domain.entities.professional_profile_entity import ProfessionalProfileEntity
from quezi_core.core.domain.exceptions import ConflictError, ForbiddenError, NotFoundError
from quezi_core.core.domain.repositories.professional_profile_repository import (
    ProfessionalProfileRepository,
)

logger = structlog.get_logger(__name__)

# mínimo de avaliações para entrar no ranking
TOP_RATED_MIN_REVIEWS = 5
# campos que não aceitam null na edição
_REQUIRED_FIELDS = ("city", "service_mode", "portfolio_images", "specialties", "certifications", "languages")


def _require_owner(profile: ProfessionalProfileEntity, requester: Requester, message: str) -> None:
    if not profile.is_owned_by(requester.id):
        raise ForbiddenError(message)


class CreateProfessionalProfileHandler(CommandHandler[CreateProfessionalProfileCommand]):
    def __init__(self, repo: ProfessionalProfileRepository):
        self.repo = repo

    def handle(self, command: CreateProfessionalProfileCommand) -> ProfessionalProfileEntity:
        if command.requester.role != "PROFESSIONAL":
            raise ForbiddenError("Apenas usuários profissionais podem ter perfil")
        if self.repo.find_by_user(command.requester.id):
            raise ConflictError("Perfil profissional já existe para este usuário")

        data = command.payload.model_dump(mode="json", exclude_none=True)
        profile = self.repo.save(ProfessionalProfileEntity(
            id=uuid.uuid4(),
            user_id=command.requester.id,
            **data,
        ))
        logger.info("professional_profile.created", user_id=str(profile.user_id), city=profile.city)
        return profile


class UpdateProfessionalProfileHandler(CommandHandler[UpdateProfessionalProfileCommand]):
    def __init__(self, repo: ProfessionalProfileRepository):
        self.repo = repo

    def handle(self, command: UpdateProfessionalProfileCommand) -> ProfessionalProfileEntity:
        profile = self.repo.find_by_user(command.user_id)
        if not profile:
            raise NotFoundError("Perfil profissional")
        _require_owner(profile, command.requester, "Você só pode atualizar seu próprio perfil")

        changes = command.payload.model_dump(mode="json", exclude_unset=True)
        for field, value in changes.items():
            if value is None and field in _REQUIRED_FIELDS:
                continue
            setattr(profile, field, value)
        profile = self.repo.save(profile)
        logger.info("professional_profile.updated", user_id=str(profile.user_id), fields=sorted(changes))
        return profile


class DeleteProfessionalProfileHandler(CommandHandler[DeleteProfessionalProfileCommand]):
    def __init__(self, repo: ProfessionalProfileRepository):
        self.repo = repo

    def handle(self, command: DeleteProfessionalProfileCommand) -> None:
        profile = self.repo.find_by_user(command.user_id)
        if not profile:
            raise NotFoundError("Perfil profissional")
        _require_owner(profile, command.requester, "Você só pode deletar seu próprio perfil")
        self.repo.delete(profile.user_id)
        logger.info("professional_profile.deleted", user_id=str(profile.user_id))


class GetProfessionalProfileHandler(QueryHandler[GetProfessionalProfileQuery, ProfessionalProfileDetails]):
    def __init__(self, repo: ProfessionalProfileRepository):
        self.repo = repo

    def handle(self, query: GetProfessionalProfileQuery) -> ProfessionalProfileDetails:
        details = self.repo.details(query.user_id)
        if not details:
            raise NotFoundError("Perfil profissional")

        requester = query.requester
        if requester is not None and requester.is_admin:
            return details
        if not details.profile.is_visible_to(requester.id if requester else None):
            raise NotFoundError("Perfil profissional")
        return details


class ListProfessionalProfilesHandler(
    QueryHandler[ListProfessionalProfilesQuery, PagedResult[ProfessionalProfileDetails]]
):
    """Listagem e busca públicas: só perfis ativos."""

    def __init__(self, repo: ProfessionalProfileRepository):
        self.repo = repo

    def handle(self, query: ListProfessionalProfilesQuery) -> PagedResult[ProfessionalProfileDetails]:
        filtros = {**query.filtros, "is_active": True}
        return self.repo.list(filtros, query.page, query.page_size)


class TopRatedProfessionalsHandler(QueryHandler[TopRatedProfessionalsQuery, list[ProfessionalProfileDetails]]):
    def __init__(self, repo: ProfessionalProfileRepository, min_reviews: int = TOP_RATED_MIN_REVIEWS):
        self.repo = repo
        self.min_reviews = min_reviews

    def handle(self, query: TopRatedProfessionalsQuery) -> list[ProfessionalProfileDetails]:
        return self.repo.top_rated(query.limit, self.min_reviews)
