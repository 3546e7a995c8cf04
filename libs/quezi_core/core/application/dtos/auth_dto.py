from typing import Literal

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

from quezi_core.core.application.dtos.validators import (
    normalize_phone,
    validate_password,
    validate_person_name,
)


class RegisterDTO(BaseModel):
    name: str
    email: EmailStr
    password: str
    confirm_password: str
    phone: str | None = None
    user_type: Literal["CLIENT", "PROFESSIONAL"] = "CLIENT"

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        return validate_person_name(v)

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        return validate_password(v)

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v: str | None) -> str | None:
        return normalize_phone(v)

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.confirm_password:
            raise ValueError("As senhas não coincidem")
        return self


class LoginDTO(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.lower()


class ForgotPasswordDTO(BaseModel):
    email: EmailStr

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.lower()


class TokenDTO(BaseModel):
    token: str = Field(min_length=1)


class ResetPasswordDTO(BaseModel):
    token: str = Field(min_length=1)
    password: str
    confirm_password: str

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        return validate_password(v)

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.confirm_password:
            raise ValueError("As senhas não coincidem")
        return self
