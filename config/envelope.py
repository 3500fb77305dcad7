"""
Success envelope for API responses.

Function views build responses with :func:`success_response`; ViewSets mix in
:class:`EnvelopeMixin` so their stock ``list``/``retrieve``/``create``
responses come out as ``{"success": true, "data": ...}``.
"""

from rest_framework import status
from rest_framework.response import Response


def success_response(data=None, message=None, status_code=status.HTTP_200_OK):
    """Return ``{"success": true, "data": ...}`` with an optional message."""
    body = {'success': True}
    if data is not None:
        body['data'] = data
    if message:
        body['message'] = message
    return Response(body, status=status_code)


def is_enveloped(data):
    return isinstance(data, dict) and 'success' in data


class EnvelopeMixin:
    """Wrap successful ViewSet responses that are not already enveloped."""

    def finalize_response(self, request, response, *args, **kwargs):
        if (
            isinstance(response, Response)
            and response.status_code < 400
            and response.status_code != status.HTTP_204_NO_CONTENT
            and not is_enveloped(response.data)
        ):
            response.data = {'success': True, 'data': response.data}
        return super().finalize_response(request, response, *args, **kwargs)


# Router lookup pattern for UUID primary keys; malformed ids 404 at routing.
UUID_LOOKUP_REGEX = r'[0-9a-fA-F-]{36}'
