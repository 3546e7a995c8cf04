import os

import structlog
from django.apps import AppConfig

logger = structlog.get_logger(__name__)


class QueziApiConfig(AppConfig):
    name = "quezi_api"
    verbose_name = "Quezi API"
    path = os.path.dirname(os.path.abspath(__file__))

    def ready(self):
        from django.conf import settings

        # ─── DI container ───────────────────────────────────────────
        from quezi_core.adapters.config.composition_root import (
            setup_di_container_from_settings,
        )

        container = setup_di_container_from_settings(settings)

        # ─── Assinantes de eventos de domínio ───────────────────────
        from quezi_core.adapters.notifications.event_subscribers import register_subscribers

        register_subscribers(container.event_dispatcher(), frontend_url=settings.FRONTEND_URL)
        logger.info("quezi_api.ready")
