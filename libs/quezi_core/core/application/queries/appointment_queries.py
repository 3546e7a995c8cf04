import uuid
from dataclasses import dataclass

from quezi_core.core.application.cqrs import PaginatedQueryDTO, Requester


@dataclass(frozen=True)
class GetAppointmentQuery:
    appointment_id: uuid.UUID
    requester: Requester


class ListAppointmentsQuery(PaginatedQueryDTO[dict]):
    """Filtros: `participant_id`, `status`."""
    pass
