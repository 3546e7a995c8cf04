from typing import Literal

from pydantic import BaseModel, field_validator

from quezi_core.core.application.dtos.validators import normalize_phone, validate_person_name


class UpdateUserDTO(BaseModel):
    name: str | None = None
    phone: str | None = None
    # somente administradores
    is_active: bool | None = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str | None) -> str | None:
        return validate_person_name(v) if v is not None else None

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v: str | None) -> str | None:
        return normalize_phone(v)


class UserFilterDTO(BaseModel):
    user_type: Literal["CLIENT", "PROFESSIONAL", "ADMIN"] | None = None
    is_active: bool | None = None
    search: str | None = None
