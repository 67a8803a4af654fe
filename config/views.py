from django.conf import settings
from django.db import connection, DatabaseError
from django.http import JsonResponse

from config.exceptions import (
    BACKEND_NOT_CONFIGURED_MESSAGE,
    SCHEMA_MISSING_MESSAGE,
)


def health_check(request):
    """
    Report database connectivity and schema status.

    GET /api/health/
    """
    try:
        existing_tables = set(connection.introspection.table_names())
    except DatabaseError:
        return JsonResponse({
            'status': 'error',
            'code': 'backend_not_configured',
            'error': BACKEND_NOT_CONFIGURED_MESSAGE,
        }, status=503)

    missing = [t for t in settings.REQUIRED_TABLES if t not in existing_tables]
    if missing:
        return JsonResponse({
            'status': 'error',
            'code': 'schema_missing',
            'error': SCHEMA_MISSING_MESSAGE,
            'missing_tables': missing,
        }, status=503)

    return JsonResponse({'status': 'ok', 'database': connection.vendor})


def error_404(request, exception):
    """Custom 404 handler."""
    return JsonResponse({
        'error': 'Not found',
        'status': 404
    }, status=404)


def error_500(request):
    """Custom 500 handler."""
    return JsonResponse({
        'error': 'Internal server error',
        'status': 500
    }, status=500)
