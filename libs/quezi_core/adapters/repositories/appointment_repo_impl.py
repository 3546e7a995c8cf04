from __future__ import annotations

from django.db.models import Count, Q

from plugins.django_interface.models import Appointment as AppointmentModel
from quezi_core.adapters.repositories._helpers import as_uuid, model_defaults, paginate
from quezi_core.core.application.cqrs import PagedResult
from quezi_core.core.domain.entities.appointment_entity import AppointmentEntity
from quezi_core.core.domain.repositories.appointment_repository import AppointmentRepository


class AppointmentRepoImpl(AppointmentRepository):
    def find_by_id(self, appointment_id) -> AppointmentEntity | None:
        aid = as_uuid(appointment_id)
        if aid is None:
            return None
        m = AppointmentModel.objects.filter(id=aid).first()
        return AppointmentEntity.from_model(m) if m else None

    def save(self, appointment: AppointmentEntity) -> AppointmentEntity:
        m, _ = AppointmentModel.objects.update_or_create(
            id=appointment.id,
            defaults=model_defaults(appointment),
        )
        return AppointmentEntity.from_model(m)

    def list(self, filtros: dict, page: int, page_size: int) -> PagedResult[AppointmentEntity]:
        qs = AppointmentModel.objects.all()
        if filtros.get("participant_id"):
            pid = filtros["participant_id"]
            qs = qs.filter(Q(client_id=pid) | Q(professional_id=pid))
        if filtros.get("status"):
            qs = qs.filter(status=filtros["status"])
        return paginate(qs.order_by("-scheduled_date", "id"), AppointmentEntity, page, page_size)

    def count_by_status(self) -> dict[str, int]:
        rows = AppointmentModel.objects.values("status").annotate(total=Count("id"))
        counts = {s: 0 for s in AppointmentModel.Status.values}
        counts.update({r["status"]: r["total"] for r in rows})
        return counts
