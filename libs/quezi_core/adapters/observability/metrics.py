from prometheus_client import Counter, Histogram

# registrados no REGISTRY padrão: expostos pelo /metrics do django_prometheus

HTTP_REQUESTS = Counter(
    "quezi_http_requests_total",
    "Requisições atendidas pelas views da API",
    ["view", "method", "status"],
)

HTTP_LATENCY = Histogram(
    "quezi_http_request_duration_seconds",
    "Latência das views da API",
    ["view", "method"],
)

DOMAIN_EVENTS = Counter(
    "quezi_domain_events_total",
    "Eventos de domínio publicados",
    ["event"],
)

REVIEW_RATINGS = Counter(
    "quezi_review_ratings_total",
    "Avaliações criadas por nota",
    ["rating"],
)
