import uuid

import structlog

from quezi_core.core.application.commands.service_commands import (
    CreateCategoryCommand,
    CreateServiceCommand,
    DeleteCategoryCommand,
    DeleteServiceCommand,
    UpdateCategoryCommand,
    UpdateServiceCommand,
)
from quezi_core.core.application.cqrs import CommandHandler, PagedResult, QueryHandler, Requester
from quezi_core.core.application.dtos.read_models import CategorySummary, PopularService
from quezi_core.core.application.queries.service_queries import (
    GetCategoryBySlugQuery,
    GetCategoryQuery,
    GetServiceQuery,
    ListCategoriesQuery,
    ListServicesQuery,
    PopularServicesQuery,
)
from quezi_core.core.domain.entities.service_entity import ServiceCategoryEntity, ServiceEntity
from quezi_core.core.domain.exceptions import ConflictError, ForbiddenError, NotFoundError
from quezi_core.core.domain.repositories.service_repository import (
    ServiceCategoryRepository,
    ServiceRepository,
)

logger = structlog.get_logger(__name__)


def _require_admin(requester: Requester) -> None:
    if not requester.is_admin:
        raise ForbiddenError("Apenas administradores podem gerenciar categorias")


# ——— SERVIÇOS ——————————————————————————————————————————————

class CreateServiceHandler(CommandHandler[CreateServiceCommand]):
    def __init__(self, repo: ServiceRepository, category_repo: ServiceCategoryRepository):
        self.repo = repo
        self.category_repo = category_repo

    def handle(self, command: CreateServiceCommand) -> ServiceEntity:
        if command.requester.role != "PROFESSIONAL":
            raise ForbiddenError("Apenas profissionais podem cadastrar serviços")

        p = command.payload
        if not self.category_repo.find_by_id(p.category_id):
            raise NotFoundError("Categoria")

        service = self.repo.save(ServiceEntity(
            id=uuid.uuid4(),
            professional_id=command.requester.id,
            category_id=p.category_id,
            name=p.name,
            description=p.description,
            price=p.price,
            price_type=p.price_type,
            duration_minutes=p.duration_minutes,
        ))
        logger.info("service.created", service_id=str(service.id), professional_id=str(service.professional_id))
        return service


class UpdateServiceHandler(CommandHandler[UpdateServiceCommand]):
    def __init__(self, repo: ServiceRepository, category_repo: ServiceCategoryRepository):
        self.repo = repo
        self.category_repo = category_repo

    def handle(self, command: UpdateServiceCommand) -> ServiceEntity:
        service = self.repo.find_by_id(command.service_id)
        if not service:
            raise NotFoundError("Serviço")
        if not service.is_owned_by(command.requester.id):
            raise ForbiddenError("Você não tem permissão para atualizar este serviço")

        changes = command.payload.model_dump(exclude_unset=True)
        if changes.get("category_id") and not self.category_repo.find_by_id(changes["category_id"]):
            raise NotFoundError("Categoria")

        for field, value in changes.items():
            # só a descrição pode ser apagada
            if value is None and field != "description":
                continue
            setattr(service, field, value)
        return self.repo.save(service)


class DeleteServiceHandler(CommandHandler[DeleteServiceCommand]):
    def __init__(self, repo: ServiceRepository):
        self.repo = repo

    def handle(self, command: DeleteServiceCommand) -> None:
        service = self.repo.find_by_id(command.service_id)
        if not service:
            raise NotFoundError("Serviço")
        if not service.is_owned_by(command.requester.id):
            raise ForbiddenError("Você não tem permissão para deletar este serviço")
        self.repo.delete(service.id)
        logger.info("service.deleted", service_id=str(service.id))


class GetServiceHandler(QueryHandler[GetServiceQuery, ServiceEntity]):
    def __init__(self, repo: ServiceRepository):
        self.repo = repo

    def handle(self, query: GetServiceQuery) -> ServiceEntity:
        service = self.repo.find_by_id(query.service_id)
        if not service:
            raise NotFoundError("Serviço")
        return service


class ListServicesHandler(QueryHandler[ListServicesQuery, PagedResult[ServiceEntity]]):
    def __init__(self, repo: ServiceRepository):
        self.repo = repo

    def handle(self, query: ListServicesQuery) -> PagedResult[ServiceEntity]:
        return self.repo.list(query.filtros, query.page, query.page_size)


class PopularServicesHandler(QueryHandler[PopularServicesQuery, list[PopularService]]):
    def __init__(self, repo: ServiceRepository):
        self.repo = repo

    def handle(self, query: PopularServicesQuery) -> list[PopularService]:
        return self.repo.most_popular(query.limit)


# ——— CATEGORIAS ————————————————————————————————————————————

class CreateCategoryHandler(CommandHandler[CreateCategoryCommand]):
    def __init__(self, category_repo: ServiceCategoryRepository):
        self.category_repo = category_repo

    def handle(self, command: CreateCategoryCommand) -> ServiceCategoryEntity:
        _require_admin(command.requester)
        p = command.payload
        if self.category_repo.find_by_slug(p.slug):
            raise ConflictError("Já existe uma categoria com este slug")

        category = self.category_repo.save(ServiceCategoryEntity(id=uuid.uuid4(), name=p.name, slug=p.slug))
        logger.info("category.created", category_id=str(category.id), slug=category.slug)
        return category


class UpdateCategoryHandler(CommandHandler[UpdateCategoryCommand]):
    def __init__(self, category_repo: ServiceCategoryRepository):
        self.category_repo = category_repo

    def handle(self, command: UpdateCategoryCommand) -> ServiceCategoryEntity:
        _require_admin(command.requester)
        category = self.category_repo.find_by_id(command.category_id)
        if not category:
            raise NotFoundError("Categoria")

        p = command.payload
        if p.slug and p.slug != category.slug:
            if self.category_repo.find_by_slug(p.slug):
                raise ConflictError("Já existe uma categoria com este slug")
            category.slug = p.slug
        if p.name:
            category.name = p.name
        return self.category_repo.save(category)


class DeleteCategoryHandler(CommandHandler[DeleteCategoryCommand]):
    def __init__(self, category_repo: ServiceCategoryRepository):
        self.category_repo = category_repo

    def handle(self, command: DeleteCategoryCommand) -> None:
        _require_admin(command.requester)
        category = self.category_repo.find_by_id(command.category_id)
        if not category:
            raise NotFoundError("Categoria")
        if self.category_repo.count_services(category.id) > 0:
            raise ConflictError("Não é possível deletar uma categoria que possui serviços associados")
        self.category_repo.delete(category.id)
        logger.info("category.deleted", category_id=str(category.id))


class GetCategoryHandler(QueryHandler[GetCategoryQuery, ServiceCategoryEntity]):
    def __init__(self, category_repo: ServiceCategoryRepository):
        self.category_repo = category_repo

    def handle(self, query: GetCategoryQuery) -> ServiceCategoryEntity:
        category = self.category_repo.find_by_id(query.category_id)
        if not category:
            raise NotFoundError("Categoria")
        return category


class GetCategoryBySlugHandler(QueryHandler[GetCategoryBySlugQuery, ServiceCategoryEntity]):
    def __init__(self, category_repo: ServiceCategoryRepository):
        self.category_repo = category_repo

    def handle(self, query: GetCategoryBySlugQuery) -> ServiceCategoryEntity:
        category = self.category_repo.find_by_slug(query.slug)
        if not category:
            raise NotFoundError("Categoria")
        return category


class ListCategoriesHandler(QueryHandler[ListCategoriesQuery, PagedResult[CategorySummary]]):
    def __init__(self, category_repo: ServiceCategoryRepository):
        self.category_repo = category_repo

    def handle(self, query: ListCategoriesQuery) -> PagedResult[CategorySummary]:
        return self.category_repo.list(query.filtros, query.page, query.page_size)
