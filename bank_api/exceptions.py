"""
Domain errors.

Services raise these; the API layer maps each kind to an HTTP
status code. They subclass ValueError so existing
``except ValueError`` handling keeps working.
"""


class BankingError(ValueError):
    """Base class for all domain errors."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRequest(BankingError):
    """Missing or out-of-range input, or a business rule violation."""

    status_code = 400


class NotFound(BankingError):
    """A referenced account or transaction does not exist."""

    status_code = 404


class Forbidden(BankingError):
    """Transfer limit or access-control violation."""

    status_code = 403


class AuthenticationError(BankingError):
    """Bad credentials or an invalid token."""

    status_code = 401
