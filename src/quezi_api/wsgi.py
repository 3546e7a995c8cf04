import os

from django.core.wsgi import get_wsgi_application

from config.structlog_config import configure_logging

configure_logging(level=os.getenv("LOG_LEVEL", "INFO"))
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

# o container de DI é montado em QueziApiConfig.ready()
application = get_wsgi_application()
