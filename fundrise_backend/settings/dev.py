"""
Development settings for the FundRise backend.

Extends the base settings by enabling debugging and allowing all hosts.  Do
not use these settings in production.
"""
from .base import *  # noqa

# Development toggles
DEBUG = True
ALLOWED_HOSTS = ["*", "127.0.0.1", "localhost"]
CSRF_TRUSTED_ORIGINS = ["http://127.0.0.1:8000", "http://localhost:8000", FRONTEND_URL]  # noqa: F405

LOGGING["loggers"].update({  # noqa: F405
    "payments": {"handlers": ["console"], "level": "DEBUG", "propagate": False},
    "campaigns": {"handlers": ["console"], "level": "DEBUG", "propagate": False},
    "projects": {"handlers": ["console"], "level": "DEBUG", "propagate": False},
})
