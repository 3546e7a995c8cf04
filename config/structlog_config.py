import logging
import os
import sys

import structlog
from structlog.processors import CallsiteParameter, CallsiteParameterAdder

# loggers ruidosos que só interessam em WARNING+
QUIET_LOGGERS = ("django.db.backends", "urllib3", "django.utils.autoreload")


def _add_service(_, __, event_dict):
    event_dict.setdefault("service", "quezi-api")
    return event_dict


def configure_logging(
    level: str = "INFO",
    json_logs: bool | None = None,
) -> None:
    """
    Configura structlog + logging da API Quezi.

    Em produção (`JSON_LOGS=1`) emite JSON em uma linha por evento; em dev usa
    o ConsoleRenderer colorido. Deve ser chamado antes de criar loggers.
    """
    if json_logs is None:
        json_logs = bool(os.getenv("JSON_LOGS", ""))
    level = level.upper()

    pre_chain = [
        structlog.contextvars.merge_contextvars,     # request_id, method, path
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        _add_service,
    ]

    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=[
            *pre_chain,
            CallsiteParameterAdder(
                parameters=[
                    CallsiteParameter.MODULE,
                    CallsiteParameter.FUNC_NAME,
                    CallsiteParameter.LINENO,
                ]
            ),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level)
        ),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=pre_chain,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.captureWarnings(True)
