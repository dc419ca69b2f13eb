"""HTTP status classification.

200 is the only status that proceeds to decoding. Everything else maps to
exactly one FetchError; codes without a dedicated kind (1xx, other 2xx,
3xx, ...) become UNEXPECTED carrying the code.
"""

from __future__ import annotations

from typing import Optional

from domain.types import ErrorKind, FetchError


STATUS_OK = 200

_STATUS_ERRORS: dict[int, ErrorKind] = {
    400: ErrorKind.BAD_REQUEST,
    403: ErrorKind.FORBIDDEN,
    404: ErrorKind.NOT_FOUND,
    500: ErrorKind.INTERNAL_SERVER_ERROR,
    503: ErrorKind.SERVICE_UNAVAILABLE,
}


def classify_status(status_code: int) -> Optional[FetchError]:
    """Return None to proceed, else the error for this status."""
    if status_code == STATUS_OK:
        return None
    kind = _STATUS_ERRORS.get(status_code, ErrorKind.UNEXPECTED)
    return FetchError(kind=kind, status_code=status_code)
