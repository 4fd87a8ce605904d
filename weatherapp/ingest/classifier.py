"""Classify non-2xx HTTP status codes into error kinds."""

from weatherapp.models.errors import ErrorKind


def kind_for_status(status_code: int) -> ErrorKind:
    """Classify a non-2xx HTTP status code."""
    if status_code >= 500:
        return ErrorKind.SERVER
    if status_code == 401:
        return ErrorKind.UNAUTHORIZED
    if status_code >= 400:
        return ErrorKind.CLIENT
    return ErrorKind.UNKNOWN
