"""
API-wide exception handling.

Database failures are classified before they reach the generic 500 handler:

* missing tables (schema never migrated) -> 503 ``schema_missing``
* any other operational failure (unreachable or unconfigured
  database) -> 503 ``backend_not_configured``

Everything else is delegated to DRF's default handler.
"""
import logging

from django.db import DatabaseError, OperationalError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)

# PostgreSQL SQLSTATE for "undefined table"
UNDEFINED_TABLE_SQLSTATE = '42P01'

SCHEMA_MISSING_MESSAGE = (
    'Database tables are missing. Run "python manage.py migrate" to set up the schema.'
)
BACKEND_NOT_CONFIGURED_MESSAGE = (
    'Database backend is not configured or unreachable. Check DATABASE_URL.'
)


def is_missing_schema_error(exc):
    """Return True if a database error means a table does not exist."""
    cause = exc.__cause__ or exc
    if getattr(cause, 'pgcode', None) == UNDEFINED_TABLE_SQLSTATE:
        return True
    if getattr(getattr(cause, 'diag', None), 'sqlstate', None) == UNDEFINED_TABLE_SQLSTATE:
        return True

    message = str(exc).lower()
    return 'no such table' in message or ("table" in message and "doesn't exist" in message)


def database_error_response(exc):
    """Build the 503 response for a database failure."""
    if is_missing_schema_error(exc):
        logger.error("Database schema missing: %s", exc)
        return Response(
            {'error': SCHEMA_MISSING_MESSAGE, 'code': 'schema_missing'},
            status=status.HTTP_503_SERVICE_UNAVAILABLE
        )

    logger.error("Database backend unavailable: %s", exc)
    return Response(
        {'error': BACKEND_NOT_CONFIGURED_MESSAGE, 'code': 'backend_not_configured'},
        status=status.HTTP_503_SERVICE_UNAVAILABLE
    )


def api_exception_handler(exc, context):
    """DRF exception handler with database failure classification."""
    if isinstance(exc, OperationalError) or (
        isinstance(exc, DatabaseError) and is_missing_schema_error(exc)
    ):
        return database_error_response(exc)

    return exception_handler(exc, context)
