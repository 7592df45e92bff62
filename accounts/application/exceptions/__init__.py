"""Application layer exceptions."""

from accounts.application.exceptions.exceptions import (
    ApplicationError,
    InvalidCredentialsError,
)

__all__ = ["ApplicationError", "InvalidCredentialsError"]
