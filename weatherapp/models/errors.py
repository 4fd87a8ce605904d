"""Closed error taxonomy carried by failed results.

``classify`` renders the user-facing message for each kind. It is pure and
total over ``ErrorKind``, so the same inputs always give the same text.
"""

from dataclasses import dataclass
from enum import StrEnum


class ErrorKind(StrEnum):
    NETWORK = "network"
    SERVER = "server"
    CLIENT = "client"
    PARSING = "parsing"
    UNAUTHORIZED = "unauthorized"
    UNKNOWN = "unknown"
    # Raised only by the repository's date lookup, never by transport
    NOT_FOUND = "not_found"


NETWORK_MESSAGE = "No network connection. Check your connection."
SERVER_MESSAGE = "A server error occurred. Try again later."
NOT_FOUND_STATUS_MESSAGE = "Data was not found."
FORBIDDEN_MESSAGE = "You do not have access to this resource."
PARSING_MESSAGE = "Could not read data from the server."
UNAUTHORIZED_MESSAGE = "You must sign in again."
UNKNOWN_MESSAGE = "An unexpected error occurred."
NO_FORECAST_FOR_DATE_MESSAGE = "No forecast is available for the requested date."


def classify(
    kind: ErrorKind, status_code: int | None = None, raw_message: str = ""
) -> str:
    """Render the user-facing message for an error kind."""
    match kind:
        case ErrorKind.NETWORK:
            return NETWORK_MESSAGE
        case ErrorKind.SERVER:
            return SERVER_MESSAGE
        case ErrorKind.CLIENT:
            if status_code == 404:
                return NOT_FOUND_STATUS_MESSAGE
            if status_code == 403:
                return FORBIDDEN_MESSAGE
            return raw_message or UNKNOWN_MESSAGE
        case ErrorKind.PARSING:
            return PARSING_MESSAGE
        case ErrorKind.UNAUTHORIZED:
            return UNAUTHORIZED_MESSAGE
        case ErrorKind.UNKNOWN:
            return UNKNOWN_MESSAGE
        case ErrorKind.NOT_FOUND:
            return NO_FORECAST_FOR_DATE_MESSAGE
        case _:
            raise ValueError(f"Unclassified error kind: {kind!r}")


@dataclass(frozen=True)
class ErrorInfo:
    kind: ErrorKind
    raw_message: str
    status_code: int | None = None

    @property
    def user_message(self) -> str:
        return classify(self.kind, self.status_code, self.raw_message)

    def __str__(self) -> str:
        status = f" (status {self.status_code})" if self.status_code is not None else ""
        return f"{self.kind}: {self.raw_message}{status}"
