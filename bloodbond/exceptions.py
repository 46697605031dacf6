# bloodbond/exceptions.py
"""
Renders every API error in the `{success: false, message, ...}` envelope
the client expects.
"""
import logging

from django.conf import settings
from django.db import DatabaseError
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def _flatten_errors(detail, prefix=''):
    """Turn DRF's nested error dict into a flat list of {field, message}."""
    errors = []
    if isinstance(detail, dict):
        for field, value in detail.items():
            name = f"{prefix}.{field}" if prefix else str(field)
            errors.extend(_flatten_errors(value, name))
    elif isinstance(detail, list):
        for item in detail:
            if isinstance(item, (dict, list)):
                errors.extend(_flatten_errors(item, prefix))
            else:
                errors.append({'field': prefix or 'non_field_errors', 'message': str(item)})
    else:
        errors.append({'field': prefix or 'non_field_errors', 'message': str(detail)})
    return errors


def api_exception_handler(exc, context):
    if isinstance(exc, DatabaseError):
        view = context.get('view')
        logger.exception("Database error in %s", view.__class__.__name__ if view else 'unknown view')
        body = {'success': False, 'message': 'Server error'}
        if settings.DEBUG:
            body['error'] = str(exc)
        return Response(body, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, ValidationError):
        response.data = {
            'success': False,
            'message': 'Validation failed',
            'errors': _flatten_errors(exc.detail),
        }
        return response

    detail = exc.detail if hasattr(exc, 'detail') else response.data
    if isinstance(detail, dict):
        message = str(detail.get('detail', detail))
    else:
        message = str(detail)
    response.data = {'success': False, 'message': message}
    return response
