"""Domain layer exceptions for business rule violations."""

from enum import Enum


class PasswordErrorKind(str, Enum):
    """Stable reasons a password operation can be rejected."""

    EMPTY = "PASSWORD_EMPTY"
    TOO_SHORT = "PASSWORD_TOO_SHORT"
    TOO_LONG = "PASSWORD_TOO_LONG"
    EXPIRED = "PASSWORD_EXPIRED"
    MUST_CHANGE = "PASSWORD_MUST_CHANGE"
    INVALID_LENGTH = "PASSWORD_INVALID_LENGTH"


class VerificationErrorKind(str, Enum):
    """Stable reasons a verification code can be rejected."""

    INVALID = "VERIFICATION_CODE_INVALID"
    EXPIRED = "VERIFICATION_CODE_EXPIRED"
    NOT_PENDING = "VERIFICATION_CODE_NOT_PENDING"
    MISMATCH = "VERIFICATION_CODE_MISMATCH"


class DomainException(Exception):
    """
    Base exception for domain layer.

    Domain exceptions represent business rule violations and should be
    raised when domain invariants are broken.

    Examples:
        - Invalid entity state
        - Business rule violations
        - Domain constraint failures
    """

    def __init__(self, message: str, error_code: str = "DOMAIN_ERROR"):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
        """
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)


class InvalidEntityStateException(DomainException):
    """Raised when an entity is in an invalid state."""

    def __init__(self, message: str):
        super().__init__(message, error_code="INVALID_ENTITY_STATE")


class BusinessRuleViolationException(DomainException):
    """Raised when a business rule is violated."""

    def __init__(self, message: str, error_code: str = "BUSINESS_RULE_VIOLATION"):
        super().__init__(message, error_code=error_code)


_PASSWORD_MESSAGES = {
    PasswordErrorKind.EMPTY: "Password cannot be null or empty",
    PasswordErrorKind.TOO_SHORT: "Password is too short",
    PasswordErrorKind.TOO_LONG: "Password is too long",
    PasswordErrorKind.EXPIRED: "Password is expired",
    PasswordErrorKind.MUST_CHANGE: "Password must change",
    PasswordErrorKind.INVALID_LENGTH: "Generated password length is too small",
}

_VERIFICATION_MESSAGES = {
    VerificationErrorKind.INVALID: "Verification code is invalid",
    VerificationErrorKind.EXPIRED: "Verification code is expired",
    VerificationErrorKind.NOT_PENDING: "Verification code is no longer pending",
    VerificationErrorKind.MISMATCH: "Verification code does not match",
}


class InvalidPasswordException(BusinessRuleViolationException):
    """
    Raised when a password breaks policy or its lifecycle forbids use.

    The ``kind`` attribute tells callers exactly which rule failed, and its
    value is reused as the ``error_code``.
    """

    def __init__(self, kind: PasswordErrorKind, message: str | None = None):
        self.kind = kind
        super().__init__(message or _PASSWORD_MESSAGES[kind], error_code=kind.value)


class InvalidVerificationCodeException(BusinessRuleViolationException):
    """Raised when a verification code cannot be accepted."""

    def __init__(self, kind: VerificationErrorKind, message: str | None = None):
        self.kind = kind
        super().__init__(
            message or _VERIFICATION_MESSAGES[kind], error_code=kind.value
        )
