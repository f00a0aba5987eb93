"""
Error types raised by the service layer.

Services never build HTTP responses themselves.  They raise one of the
exceptions below and the handlers registered in ``main.create_app``
translate them into JSON bodies and status codes:

* ``NotFoundError``         -> 404 ``{"error": ..., "timestamp": ...}``
* ``ConflictError``         -> 409 ``{"error": ..., "timestamp": ...}``
* ``BadRequestError``       -> 400 ``{"error": ..., "timestamp": ...}``
* ``ValidationFailedError`` -> 400 ``{"errors": [...], "timestamp": ...}``
"""

from typing import Iterable, List


class ServiceError(Exception):
    """Base class for failures reported back to API clients."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(ServiceError):
    """A referenced entity does not exist."""

    status_code = 404


class ConflictError(ServiceError):
    """A uniqueness constraint would be violated."""

    status_code = 409


class BadRequestError(ServiceError):
    """The request is structurally invalid (e.g. an order without items)."""

    status_code = 400


class ValidationFailedError(ServiceError):
    """One or more field‑level violations.

    Unlike the other errors this one carries every violation found, in
    the order the validator reported them.
    """

    status_code = 400

    def __init__(self, errors: Iterable[str]) -> None:
        self.errors: List[str] = list(errors)
        super().__init__("; ".join(self.errors))
