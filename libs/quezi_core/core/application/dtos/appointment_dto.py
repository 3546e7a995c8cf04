import uuid
from datetime import UTC, datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from quezi_core.core.application.dtos.validators import validate_cep


class CreateAppointmentDTO(BaseModel):
    professional_id: uuid.UUID
    service_id: uuid.UUID
    scheduled_date: datetime
    location_type: Literal["AT_LOCATION", "AT_DOMICILE"] = "AT_LOCATION"
    client_address: str | None = Field(default=None, max_length=255)
    client_zip_code: str | None = None
    client_notes: str | None = Field(default=None, max_length=500)

    @field_validator("scheduled_date")
    @classmethod
    def in_future(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            v = v.replace(tzinfo=UTC)
        if v <= datetime.now(UTC):
            raise ValueError("Data do agendamento deve ser no futuro")
        return v

    @field_validator("client_zip_code")
    @classmethod
    def check_zip(cls, v: str | None) -> str | None:
        return validate_cep(v) if v else None

    @model_validator(mode="after")
    def address_for_domicile(self):
        if self.location_type == "AT_DOMICILE" and not (self.client_address or "").strip():
            raise ValueError("Endereço é obrigatório para atendimento a domicílio")
        return self


class AppointmentFilterDTO(BaseModel):
    status: Literal["PENDING", "ACCEPTED", "REJECTED", "COMPLETED", "CANCELLED"] | None = None
