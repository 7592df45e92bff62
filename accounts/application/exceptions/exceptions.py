"""Application layer exceptions."""


class ApplicationError(Exception):
    """Base application layer exception."""

    def __init__(self, message: str, error_code: str = "APPLICATION_ERROR"):
        """
        Initialize application exception.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
        """
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)


class InvalidCredentialsError(ApplicationError):
    """Raised when a plaintext password does not match the stored hash."""

    def __init__(self, message: str = "Invalid password"):
        super().__init__(message, error_code="INVALID_CREDENTIALS")
