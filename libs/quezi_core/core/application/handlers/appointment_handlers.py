import uuid

import structlog

from quezi_core.core.application.commands.appointment_commands import (
    ChangeAppointmentStatusCommand,
    CreateAppointmentCommand,
)
from quezi_core.core.application.cqrs import CommandHandler, PagedResult, QueryHandler
from quezi_core.core.application.queries.appointment_queries import GetAppointmentQuery, ListAppointmentsQuery
from quezi_core.core.domain.entities.appointment_entity import AppointmentEntity
from quezi_core.core.domain.exceptions import BadRequestError, ForbiddenError, NotFoundError
from quezi_core.core.domain.repositories.appointment_repository import AppointmentRepository
from quezi_core.core.domain.repositories.service_repository import ServiceRepository
from quezi_core.core.domain.repositories.user_repository import UserRepository

logger = structlog.get_logger(__name__)

# quem pode executar cada ação sobre o agendamento
_PROFESSIONAL_ACTIONS = ("accept", "reject", "complete")


class CreateAppointmentHandler(CommandHandler[CreateAppointmentCommand]):
    def __init__(self, repo: AppointmentRepository, user_repo: UserRepository, service_repo: ServiceRepository):
        self.repo = repo
        self.user_repo = user_repo
        self.service_repo = service_repo

    def handle(self, command: CreateAppointmentCommand) -> AppointmentEntity:
        if command.requester.role != "CLIENT":
            raise ForbiddenError("Apenas clientes podem criar agendamentos")

        p = command.payload
        professional = self.user_repo.find_by_id(p.professional_id)
        if not professional or not professional.is_professional or not professional.is_active:
            raise NotFoundError("Profissional")
        if professional.id == command.requester.id:
            raise BadRequestError("Não é possível agendar consigo mesmo")

        service = self.service_repo.find_by_id(p.service_id)
        if not service or not service.is_owned_by(professional.id):
            raise NotFoundError("Serviço")

        address = p.client_address if p.location_type == "AT_DOMICILE" else None
        appointment = self.repo.save(AppointmentEntity(
            id=uuid.uuid4(),
            client_id=command.requester.id,
            professional_id=professional.id,
            service_id=service.id,
            service_name=service.name,
            scheduled_date=p.scheduled_date,
            location_type=p.location_type,
            client_address=address,
            client_notes=p.client_notes,
            price=service.price,
        ))
        logger.info("appointment.created", appointment_id=str(appointment.id))
        return appointment


class ChangeAppointmentStatusHandler(CommandHandler[ChangeAppointmentStatusCommand]):
    def __init__(self, repo: AppointmentRepository):
        self.repo = repo

    def handle(self, command: ChangeAppointmentStatusCommand) -> AppointmentEntity:
        appointment = self.repo.find_by_id(command.appointment_id)
        if not appointment:
            raise NotFoundError("Agendamento")

        requester_id = command.requester.id
        if command.action in _PROFESSIONAL_ACTIONS:
            if appointment.professional_id != requester_id:
                raise ForbiddenError("Apenas o profissional pode executar esta ação")
        elif not appointment.involves(requester_id):
            raise ForbiddenError("Você não participa deste agendamento")

        previous = appointment.status
        getattr(appointment, command.action)()
        appointment = self.repo.save(appointment)
        logger.info(
            "appointment.status_changed",
            appointment_id=str(appointment.id),
            from_status=previous,
            to_status=appointment.status,
        )
        return appointment


class GetAppointmentHandler(QueryHandler[GetAppointmentQuery, AppointmentEntity]):
    def __init__(self, repo: AppointmentRepository):
        self.repo = repo

    def handle(self, query: GetAppointmentQuery) -> AppointmentEntity:
        appointment = self.repo.find_by_id(query.appointment_id)
        if not appointment:
            raise NotFoundError("Agendamento")
        if not query.requester.is_admin and not appointment.involves(query.requester.id):
            raise ForbiddenError("Você não participa deste agendamento")
        return appointment


class ListAppointmentsHandler(QueryHandler[ListAppointmentsQuery, PagedResult[AppointmentEntity]]):
    def __init__(self, repo: AppointmentRepository):
        self.repo = repo

    def handle(self, query: ListAppointmentsQuery) -> PagedResult[AppointmentEntity]:
        return self.repo.list(query.filtros, query.page, query.page_size)
