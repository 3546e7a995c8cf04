import uuid
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import structlog

from quezi_core.adapters.security.hash_service import HashService
from quezi_core.adapters.security.jwt_service import JWTService
from quezi_core.core.application.commands.auth_commands import (
    AuthenticateUserCommand,
    RegisterUserCommand,
    RequestPasswordResetCommand,
    ResetPasswordCommand,
    VerifyEmailCommand,
)
from quezi_core.core.application.cqrs import CommandHandler, QueryHandler
from quezi_core.core.application.dtos.read_models import AuthResult, TokenCheck
from quezi_core.core.application.queries.auth_queries import VerifyResetTokenQuery
from quezi_core.core.domain.entities.user_entity import UserEntity
from quezi_core.core.domain.entities.verification_token_entity import VerificationTokenEntity
from quezi_core.core.domain.events.events import (
    PasswordChangedEvent,
    PasswordResetRequestedEvent,
    UserRegisteredEvent,
)
from quezi_core.core.domain.exceptions import (
    BadRequestError,
    ConflictError,
    ForbiddenError,
    UnauthorizedError,
)
from quezi_core.core.domain.repositories.user_repository import UserRepository
from quezi_core.core.domain.repositories.verification_token_repository import VerificationTokenRepository

logger = structlog.get_logger(__name__)

Clock = Callable[[], datetime]

INVALID_CREDENTIALS = "Email ou senha inválidos"
INVALID_RESET_TOKEN = "Token inválido ou expirado"


def utcnow() -> datetime:
    return datetime.now(UTC)


# ——— REGISTRO / LOGIN ——————————————————————————————————————

class RegisterUserHandler(CommandHandler[RegisterUserCommand]):
    def __init__(self, user_repo: UserRepository, token_repo: VerificationTokenRepository,
                 verification_ttl_hours: int = 24, clock: Clock = utcnow):
        self.user_repo = user_repo
        self.token_repo = token_repo
        self.verification_ttl = timedelta(hours=verification_ttl_hours)
        self.clock = clock

    def handle(self, command: RegisterUserCommand):
        p = command.payload
        if self.user_repo.exists_by_email(p.email):
            raise ConflictError("Email já cadastrado")

        user = self.user_repo.save(UserEntity(
            id=uuid.uuid4(),
            email=p.email,
            name=p.name,
            user_type=p.user_type,
            password_hash=HashService.hash_password(p.password),
            phone=p.phone,
        ))
        token = self.token_repo.save(
            VerificationTokenEntity.issue(user.email, "email_verification", self.clock(), self.verification_ttl)
        )
        logger.info("auth.user_registered", user_id=str(user.id), user_type=user.user_type)
        event = UserRegisteredEvent(
            user_id=user.id,
            email=user.email,
            name=user.name,
            user_type=user.user_type,
            verification_token=token.token,
        )
        return user, event


class AuthenticateUserHandler(CommandHandler[AuthenticateUserCommand]):
    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    def handle(self, command: AuthenticateUserCommand) -> AuthResult:
        p = command.payload
        user = self.user_repo.find_by_email(p.email)
        if not user or not HashService.verify(p.password, user.password_hash):
            logger.warning("auth.login_failed", email=p.email)
            raise UnauthorizedError(INVALID_CREDENTIALS)
        if not user.is_active:
            raise ForbiddenError("Conta desativada")

        token = JWTService.create_token(subject=str(user.id), role=user.user_type)
        logger.info("auth.login_succeeded", user_id=str(user.id))
        return AuthResult(user=user, token=token)


# ——— RESET DE SENHA ————————————————————————————————————————

class RequestPasswordResetHandler(CommandHandler[RequestPasswordResetCommand]):
    """
    Sempre conclui sem erro, exista ou não o e-mail, para não revelar
    quais contas estão cadastradas.
    """
    def __init__(self, user_repo: UserRepository, token_repo: VerificationTokenRepository,
                 ttl_hours: int = 24, clock: Clock = utcnow):
        self.user_repo = user_repo
        self.token_repo = token_repo
        self.ttl = timedelta(hours=ttl_hours)
        self.clock = clock

    def handle(self, command: RequestPasswordResetCommand):
        user = self.user_repo.find_by_email(command.payload.email)
        if not user:
            logger.info("auth.password_reset_unknown_email")
            return None

        self.token_repo.delete_for_identifier(user.email, "password_reset")
        token = self.token_repo.save(
            VerificationTokenEntity.issue(user.email, "password_reset", self.clock(), self.ttl)
        )
        return None, PasswordResetRequestedEvent(
            user_id=user.id,
            email=user.email,
            name=user.name,
            token=token.token,
            expires_at=token.expires_at,
        )


class VerifyResetTokenHandler(QueryHandler[VerifyResetTokenQuery, TokenCheck]):
    def __init__(self, token_repo: VerificationTokenRepository, clock: Clock = utcnow):
        self.token_repo = token_repo
        self.clock = clock

    def handle(self, query: VerifyResetTokenQuery) -> TokenCheck:
        token = self.token_repo.find(query.token, "password_reset")
        if not token or token.is_expired(self.clock()):
            return TokenCheck(valid=False, error=INVALID_RESET_TOKEN)
        return TokenCheck(valid=True, message="Token válido")


class ResetPasswordHandler(CommandHandler[ResetPasswordCommand]):
    def __init__(self, user_repo: UserRepository, token_repo: VerificationTokenRepository, clock: Clock = utcnow):
        self.user_repo = user_repo
        self.token_repo = token_repo
        self.clock = clock

    def handle(self, command: ResetPasswordCommand):
        p = command.payload
        token = self.token_repo.find(p.token, "password_reset")
        if not token or token.is_expired(self.clock()):
            raise BadRequestError(INVALID_RESET_TOKEN)

        user = self.user_repo.find_by_email(token.identifier)
        if not user:
            self.token_repo.delete(token.id)
            raise BadRequestError(INVALID_RESET_TOKEN)

        user.password_hash = HashService.hash_password(p.password)
        self.user_repo.save(user)
        self.token_repo.delete(token.id)
        logger.info("auth.password_reset", user_id=str(user.id))
        return None, PasswordChangedEvent(user_id=user.id, email=user.email)


class VerifyEmailHandler(CommandHandler[VerifyEmailCommand]):
    def __init__(self, user_repo: UserRepository, token_repo: VerificationTokenRepository, clock: Clock = utcnow):
        self.user_repo = user_repo
        self.token_repo = token_repo
        self.clock = clock

    def handle(self, command: VerifyEmailCommand) -> UserEntity:
        token = self.token_repo.find(command.token, "email_verification")
        if not token or token.is_expired(self.clock()):
            raise BadRequestError(INVALID_RESET_TOKEN)

        user = self.user_repo.find_by_email(token.identifier)
        if not user:
            raise BadRequestError(INVALID_RESET_TOKEN)

        user.is_email_verified = True
        user = self.user_repo.save(user)
        self.token_repo.delete(token.id)
        return user
