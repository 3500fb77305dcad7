"""
Project-wide API error rendering.

Every API error leaves the server in the same JSON envelope the success
responses use::

    {"success": false, "message": "Validation error", "errors": [...]}
    {"success": false, "message": "Customer not found"}

Status mapping:
    ValidationError         -> 400 with a flat ``errors`` list
    NotFound / Http404      -> 404
    other APIException      -> its own status code
    anything else           -> 500 with a generic message (logged)

Usage (settings.py)::

    REST_FRAMEWORK = {
        'EXCEPTION_HANDLER': 'config.exceptions.envelope_exception_handler',
    }
"""

import logging

from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def flatten_errors(detail, field=None):
    """
    Turn a DRF error structure into a flat list of ``{field, message}`` dicts.

    Nested serializer errors get dotted field names, list items get an
    index suffix (``packages[0].unit_price``).
    """
    errors = []
    if isinstance(detail, dict):
        for key, value in detail.items():
            if key == 'non_field_errors':
                name = field
            elif field:
                name = f'{field}.{key}'
            else:
                name = key
            errors.extend(flatten_errors(value, name))
    elif isinstance(detail, list):
        for index, item in enumerate(detail):
            if isinstance(item, (dict, list)):
                name = f'{field}[{index}]' if field else f'[{index}]'
                errors.extend(flatten_errors(item, name))
            else:
                errors.append({'field': field, 'message': str(item)})
    else:
        errors.append({'field': field, 'message': str(detail)})
    return errors


def envelope_exception_handler(exc, context):
    """DRF exception handler that renders errors in the API envelope."""
    response = exception_handler(exc, context)

    if response is None:
        view = context.get('view')
        logger.error(
            'Unhandled error in %s',
            view.__class__.__name__ if view else 'unknown view',
            exc_info=exc,
        )
        return Response(
            {'success': False, 'message': 'Server error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, exceptions.ValidationError):
        response.data = {
            'success': False,
            'message': 'Validation error',
            'errors': flatten_errors(exc.detail),
        }
        return response

    detail = response.data.get('detail') if isinstance(response.data, dict) else response.data
    response.data = {
        'success': False,
        'message': str(detail) if detail else 'Request failed',
    }
    return response
