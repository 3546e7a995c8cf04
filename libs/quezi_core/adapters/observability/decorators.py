import time
from functools import wraps

from quezi_core.adapters.observability.metrics import HTTP_LATENCY, HTTP_REQUESTS


def track_http(view_name):
    """
    Mede latência e conta respostas por status de um método de view DRF.
    Exceções são contadas como 500 e propagadas.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(self, request, *args, **kwargs):
            start = time.perf_counter()
            status = 500
            try:
                resp = fn(self, request, *args, **kwargs)
                status = resp.status_code
                return resp
            except Exception as exc:
                status = getattr(exc, "status_code", 500)
                raise
            finally:
                HTTP_LATENCY.labels(view=view_name, method=request.method).observe(time.perf_counter() - start)
                HTTP_REQUESTS.labels(view=view_name, method=request.method, status=str(status)).inc()
        return wrapper
    return decorator
