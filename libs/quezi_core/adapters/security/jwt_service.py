from datetime import UTC, datetime, timedelta

import jwt
from django.conf import settings


class JWTService:
    """
    Serviço de criação e validação de tokens JWT.
    """

    @staticmethod
    def create_token(
        subject: str,
        role: str,
        expires_in: int | None = None,
    ) -> str:
        """Gera um token JWT com claim 'sub', role e expiração (em segundos)."""
        if expires_in is None:
            expires_in = settings.JWT_EXPIRES_IN
        now = datetime.now(UTC)
        payload = {
            "sub": str(subject),
            "role": role,
            "iat": now,
            "exp": now + timedelta(seconds=int(expires_in)),
        }
        return jwt.encode(
            payload,
            settings.JWT_SECRET,
            algorithm=settings.JWT_ALGORITHM,
        )

    @staticmethod
    def decode_token(token: str) -> dict:
        """
        Decodifica e valida o token JWT, retornando o payload.
        Lança jwt.PyJWTError se inválido ou expirado.
        """
        return jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
        )
