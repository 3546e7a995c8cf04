"""
Exception handler do DRF: toda falha vira
`{"error", "message", "statusCode", "details"?}`.
"""

import structlog
from django.db import IntegrityError
from django.http import Http404
from pydantic import ValidationError as PydanticValidationError
from quezi_core.core.domain.exceptions import AppError
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = structlog.get_logger(__name__)

# classe DRF → rótulo `error`
DRF_ERROR_LABELS = {
    exceptions.NotAuthenticated: "Unauthorized",
    exceptions.AuthenticationFailed: "Unauthorized",
    exceptions.PermissionDenied: "Forbidden",
    exceptions.NotFound: "NotFound",
    exceptions.ValidationError: "ValidationError",
    exceptions.ParseError: "BadRequest",
    exceptions.MethodNotAllowed: "MethodNotAllowed",
    exceptions.Throttled: "TooManyRequests",
}


def _body(error: str, message: str, status_code: int, details=None) -> dict:
    body = {"error": error, "message": message, "statusCode": status_code}
    if details is not None:
        body["details"] = details
    return body


def pydantic_details(exc: PydanticValidationError) -> list[dict]:
    details = []
    for err in exc.errors():
        ctx_error = (err.get("ctx") or {}).get("error")
        details.append(
            {
                "path": ".".join(str(p) for p in err["loc"]),
                "message": str(ctx_error) if ctx_error else err["msg"],
            }
        )
    return details


def _drf_details(data) -> list[dict]:
    if isinstance(data, dict):
        return [
            {"path": field, "message": str(msgs[0] if isinstance(msgs, list) else msgs)}
            for field, msgs in data.items()
        ]
    if isinstance(data, list):
        return [{"path": "", "message": str(m)} for m in data]
    return [{"path": "", "message": str(data)}]


def quezi_exception_handler(exc, context):
    view = context.get("view")
    view_name = type(view).__name__ if view else None

    if isinstance(exc, AppError):
        if exc.status_code >= 500:
            logger.error("api.app_error", view=view_name, error=exc.message)
        return Response(exc.to_dict(), status=exc.status_code)

    if isinstance(exc, PydanticValidationError):
        return Response(
            _body("ValidationError", "Dados inválidos", status.HTTP_400_BAD_REQUEST, pydantic_details(exc)),
            status=status.HTTP_400_BAD_REQUEST,
        )

    if isinstance(exc, IntegrityError):
        logger.warning("api.integrity_error", view=view_name, error=str(exc))
        return Response(
            _body("Conflict", "Conflito de dados", status.HTTP_409_CONFLICT),
            status=status.HTTP_409_CONFLICT,
        )

    response = drf_exception_handler(exc, context)
    if response is None:
        # erro inesperado: deixa o Django/DEBUG tratar e registra o stack
        logger.exception("api.unhandled_error", view=view_name)
        return None

    if isinstance(exc, Http404):
        label, message, details = "NotFound", "Recurso não encontrado", None
    else:
        label = next(
            (lbl for cls, lbl in DRF_ERROR_LABELS.items() if isinstance(exc, cls)),
            "Error",
        )
        if isinstance(exc, exceptions.ValidationError):
            message, details = "Dados inválidos", _drf_details(exc.detail)
        else:
            message, details = str(getattr(exc, "detail", exc)), None

    response.data = _body(label, message, response.status_code, details)
    return response
