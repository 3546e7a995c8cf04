import jwt
import structlog
from django.conf import settings
from rest_framework import exceptions
from rest_framework.authentication import BaseAuthentication

from quezi_core.adapters.repositories.user_repo_impl import UserRepoImpl
from quezi_core.adapters.security.jwt_service import JWTService

logger = structlog.get_logger(__name__)


class SimpleUser:
    """
    Usuário mínimo compatível com DRF: id, role (user_type) e e-mail.
    """
    def __init__(self, id, role: str | None = None, email: str | None = None):
        self.id = id
        self.role = role
        self.email = email
        self.is_authenticated = True

    @property
    def is_admin(self) -> bool:
        return self.role == "ADMIN"

    def __str__(self):
        return f"<SimpleUser id={self.id} role={self.role}>"


def _user_from_token(token: str) -> SimpleUser:
    try:
        payload = JWTService.decode_token(token)
    except jwt.ExpiredSignatureError:
        raise exceptions.AuthenticationFailed("Token expirado.")  # noqa: B904
    except jwt.PyJWTError as e:
        raise exceptions.AuthenticationFailed(f"Token inválido: {e}")  # noqa: B904

    user_id = payload.get("sub")
    if not user_id:
        raise exceptions.AuthenticationFailed("Token não contém o claim 'sub'.")

    domain_user = UserRepoImpl().find_by_id(user_id)
    if not domain_user:
        raise exceptions.AuthenticationFailed("Usuário não encontrado.")
    if not domain_user.is_active:
        raise exceptions.AuthenticationFailed("Usuário desativado.")

    # o tipo vem do banco: alterações de papel valem sem novo login
    return SimpleUser(id=domain_user.id, role=domain_user.user_type, email=domain_user.email)


class JWTAuthentication(BaseAuthentication):
    """
    Lê o header Authorization: Bearer <token>, valida com o JWTService e
    retorna (user, token).
    """
    keyword = "Bearer"

    def authenticate(self, request):
        header = request.headers.get("Authorization", "")
        parts = header.split()

        if not header or parts[0].lower() != "bearer" or len(parts) != 2:
            return None

        token = parts[1]
        return (_user_from_token(token), token)

    def authenticate_header(self, request):
        # com header WWW-Authenticate o DRF responde 401 em vez de 403
        return self.keyword


class CookieJWTAuthentication(BaseAuthentication):
    """
    Mesmo fluxo do JWTAuthentication, lendo o token do cookie
    `settings.AUTH_COOKIE_NAME`.
    """
    def authenticate(self, request):
        token = request.COOKIES.get(settings.AUTH_COOKIE_NAME)
        if not token:
            return None
        return (_user_from_token(token), token)
