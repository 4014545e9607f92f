"""
Vault exception classes.

Every error carries the HTTP status the centralized error view responds with.
"""


class VaultError(Exception):
    """Base exception for vault operations"""

    status_code = 500

    def __init__(self, message: str = "Internal Server Error"):
        super().__init__(message)
        self.message = message


class NotFound(VaultError):
    """Raised when an entity lookup returns nothing (or is not owned by the caller)"""

    status_code = 404

    def __init__(self, message: str = "Not Found"):
        super().__init__(message)


class ValidationFailure(VaultError):
    """Raised when caller-supplied fields fail validation"""

    status_code = 400


class Conflict(VaultError):
    """Raised when a unique value (e.g. username) is already taken"""

    status_code = 409


class StoreFailure(VaultError):
    """Raised when the persisted store call itself fails"""

    status_code = 500


class LoginRequired(Exception):
    """Raised by the auth dependency when AuthGate denies a request.

    Not a VaultError: it is rendered as a redirect to the login page,
    never as an error view.
    """

    def __init__(self, location: str = "/login"):
        super().__init__(location)
        self.location = location
