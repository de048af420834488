"""
Error classification for the fallback/retry loop.

A failure is permanent when it carries an HTTP status in 400-499: the
request itself is malformed, unauthorized or unprocessable, so neither a
retry nor another model is attempted. Everything else (network errors,
timeouts, 5xx, invalid JSON, schema violations) is transient.
"""

from typing import Optional

import httpx

from completion_layer.models.enums import ErrorKind


def get_status_code(error: BaseException) -> Optional[int]:
    """
    Return the HTTP-like status code attached to ``error``, if any.
    
    Looks at ``status_code`` then ``status`` attributes, and at the
    response of an ``httpx.HTTPStatusError``. Booleans are ignored.
    """
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code
    
    for attribute in ("status_code", "status"):
        value = getattr(error, attribute, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    return None


def classify_error(error: BaseException) -> ErrorKind:
    """Classify ``error`` as permanent (4xx) or transient (anything else)."""
    status_code = get_status_code(error)
    if status_code is not None and 400 <= status_code <= 499:
        return ErrorKind.PERMANENT
    return ErrorKind.TRANSIENT


def is_permanent_error(error: BaseException) -> bool:
    return classify_error(error) is ErrorKind.PERMANENT
