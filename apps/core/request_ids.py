"""Helpers for idempotency keys carried on mutating requests."""

import uuid

REQUEST_ID_HEADER = 'HTTP_X_REQUEST_ID'
MAX_REQUEST_ID_LENGTH = 64


def generate_request_id():
    return str(uuid.uuid4())


def normalize_request_id(request_id):
    """Trim a caller-supplied request id; missing ids stay None."""
    if request_id:
        return str(request_id)[:MAX_REQUEST_ID_LENGTH]
    return None


def ensure_request_id(request_id):
    """Return the given request id, or a fresh one when it is missing."""
    return normalize_request_id(request_id) or generate_request_id()


def get_request_id(request):
    """
    Read the idempotency key for an HTTP request.

    The ``X-Request-Id`` header wins; a ``request_id`` field in the body is
    accepted as a fallback. Returns None when neither is present.
    """
    header = request.META.get(REQUEST_ID_HEADER)
    if header:
        return header[:MAX_REQUEST_ID_LENGTH]
    data = getattr(request, 'data', None)
    if hasattr(data, 'get'):
        body_value = data.get('request_id')
        if body_value:
            return str(body_value)[:MAX_REQUEST_ID_LENGTH]
    return None
