import contextvars
import uuid

_current_request = contextvars.ContextVar("current_request", default=None)
_request_id = contextvars.ContextVar("request_id", default=None)


def set_current_request(request, request_id: str | None = None):
    """Guarda o request atual (e o id de correlação) em context vars."""
    _request_id.set(request_id or uuid.uuid4().hex)
    return _current_request.set(request)


def get_current_request():
    """Request guardado pelo RequestContextMiddleware, ou None fora de um request."""
    return _current_request.get()


def get_request_id() -> str | None:
    return _request_id.get()


def reset_request(token):
    _current_request.reset(token)
    _request_id.set(None)
