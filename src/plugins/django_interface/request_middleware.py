import structlog

from quezi_core.adapters.context.request_context import (
    get_request_id,
    reset_request,
    set_current_request,
)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware:
    """
    Guarda o request em context var e vincula `request_id`, método e path
    aos logs do structlog durante o ciclo do request.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        token = set_current_request(request, request.headers.get(REQUEST_ID_HEADER))
        request_id = get_request_id()
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.path,
        )
        try:
            response = self.get_response(request)
            response[REQUEST_ID_HEADER] = request_id
        finally:
            structlog.contextvars.clear_contextvars()
            reset_request(token)
        return response
