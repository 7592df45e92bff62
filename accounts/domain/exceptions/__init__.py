"""Domain exceptions - business rule violations."""

from accounts.domain.exceptions.domain_exceptions import (
    BusinessRuleViolationException,
    DomainException,
    InvalidEntityStateException,
    InvalidPasswordException,
    InvalidVerificationCodeException,
    PasswordErrorKind,
    VerificationErrorKind,
)

__all__ = [
    "DomainException",
    "InvalidEntityStateException",
    "BusinessRuleViolationException",
    "InvalidPasswordException",
    "InvalidVerificationCodeException",
    "PasswordErrorKind",
    "VerificationErrorKind",
]
