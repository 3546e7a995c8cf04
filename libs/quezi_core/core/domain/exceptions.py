"""
Erros de aplicação da Quezi.

Cada subclasse carrega o status HTTP e o rótulo `error` usados pelo
exception handler do DRF para montar a resposta
`{"error", "message", "statusCode", "details"}`.
"""
from __future__ import annotations

from typing import Any


class AppError(Exception):
    status_code: int = 500
    error: str = "ApplicationError"

    def __init__(self, message: str = "Erro interno do servidor", details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "error": self.error,
            "message": self.message,
            "statusCode": self.status_code,
        }
        if self.details is not None:
            body["details"] = self.details
        return body


class NotFoundError(AppError):
    status_code = 404
    error = "NotFound"

    def __init__(self, resource: str = "Recurso"):
        super().__init__(f"{resource} não encontrado")


class BadRequestError(AppError):
    status_code = 400
    error = "BadRequest"

    def __init__(self, message: str = "Requisição inválida", details: Any = None):
        super().__init__(message, details)


class UnauthorizedError(AppError):
    status_code = 401
    error = "Unauthorized"

    def __init__(self, message: str = "Não autorizado"):
        super().__init__(message)


class ForbiddenError(AppError):
    status_code = 403
    error = "Forbidden"

    def __init__(self, message: str = "Acesso negado"):
        super().__init__(message)


class ConflictError(AppError):
    status_code = 409
    error = "Conflict"

    def __init__(self, message: str = "Conflito de dados"):
        super().__init__(message)


class InvalidStatusTransitionError(BadRequestError):
    """Transição de status de agendamento não permitida."""

    def __init__(self, current: str, target: str):
        super().__init__(f"Não é possível mudar o status de {current} para {target}")
        self.current = current
        self.target = target
