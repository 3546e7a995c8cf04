from typing import Literal

from pydantic import BaseModel, EmailStr, Field, HttpUrl, field_validator, model_validator

from quezi_core.core.application.dtos.validators import validate_slug
from quezi_core.core.utils.formatters import BrazilianFormatter


class CreateOrganizationDTO(BaseModel):
    name: str = Field(min_length=3, max_length=100)
    slug: str
    description: str | None = Field(default=None, max_length=500)

    @model_validator(mode="before")
    @classmethod
    def default_slug(cls, data):
        # sem slug informado, deriva do nome
        if isinstance(data, dict) and not data.get("slug") and isinstance(data.get("name"), str):
            data = {**data, "slug": BrazilianFormatter.slugify(data["name"])}
        return data

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 3:
            raise ValueError("Nome deve ter no mínimo 3 caracteres")
        return v

    @field_validator("slug")
    @classmethod
    def check_slug(cls, v: str) -> str:
        return validate_slug(v)


class UpdateOrganizationDTO(BaseModel):
    name: str | None = Field(default=None, min_length=3, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    logo_url: HttpUrl | None = None


class InviteMemberDTO(BaseModel):
    email: EmailStr
    role: Literal["admin", "member"] = "member"


class UpdateMemberRoleDTO(BaseModel):
    role: Literal["admin", "member"]


class OrganizationFilterDTO(BaseModel):
    search: str | None = None
    mine: bool = False
