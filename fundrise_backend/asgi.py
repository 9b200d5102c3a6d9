"""
ASGI entry point for the FundRise backend.

Serve with any ASGI server, e.g. ``uvicorn fundrise_backend.asgi:application``.
The default settings module is the development configuration.
"""

import os

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "fundrise_backend.settings.dev")

from django.conf import settings  # noqa: E402
from django.core.asgi import get_asgi_application  # noqa: E402
from django.contrib.staticfiles.handlers import ASGIStaticFilesHandler  # noqa: E402

application = get_asgi_application()

# Serve /static/ when using uvicorn in DEBUG mode
if settings.DEBUG:
    application = ASGIStaticFilesHandler(application)
