from dataclasses import dataclass

from quezi_core.core.application.dtos.auth_dto import (
    ForgotPasswordDTO,
    LoginDTO,
    RegisterDTO,
    ResetPasswordDTO,
)


@dataclass(frozen=True)
class RegisterUserCommand:
    payload: RegisterDTO


@dataclass(frozen=True)
class AuthenticateUserCommand:
    payload: LoginDTO


@dataclass(frozen=True)
class RequestPasswordResetCommand:
    payload: ForgotPasswordDTO


@dataclass(frozen=True)
class ResetPasswordCommand:
    payload: ResetPasswordDTO


@dataclass(frozen=True)
class VerifyEmailCommand:
    token: str
