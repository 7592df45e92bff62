"""Password policy - plaintext length and blankness rules."""

from accounts.domain.exceptions import InvalidPasswordException, PasswordErrorKind

MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 48


class PasswordPolicy:
    """
    Stateless validator for plaintext passwords.

    Rules are checked in order and the first failure wins:
    1. Blank (None, empty or whitespace only) -> EMPTY
    2. Shorter than ``min_length`` -> TOO_SHORT
    3. Longer than ``max_length`` -> TOO_LONG

    Usage:
        policy = PasswordPolicy()
        policy.check("short")        # PasswordErrorKind.TOO_SHORT
        policy.validate("Password123!")  # passes silently
    """

    def __init__(
        self,
        min_length: int = MIN_PASSWORD_LENGTH,
        max_length: int = MAX_PASSWORD_LENGTH,
    ):
        if min_length < 1 or max_length < min_length:
            raise ValueError(
                f"Invalid password length bounds: min={min_length}, max={max_length}"
            )
        self.min_length = min_length
        self.max_length = max_length

    def check(self, plaintext: str | None) -> PasswordErrorKind | None:
        """
        Evaluate the policy without raising.

        Args:
            plaintext: Candidate password

        Returns:
            The failing rule, or None when the password is acceptable
        """
        if not plaintext or not plaintext.strip():
            return PasswordErrorKind.EMPTY

        if len(plaintext) < self.min_length:
            return PasswordErrorKind.TOO_SHORT

        if len(plaintext) > self.max_length:
            return PasswordErrorKind.TOO_LONG

        return None

    def validate(self, plaintext: str | None) -> None:
        """
        Enforce the policy.

        Raises:
            InvalidPasswordException: With the kind of the first failing rule
        """
        kind = self.check(plaintext)
        if kind is None:
            return

        if kind is PasswordErrorKind.TOO_SHORT:
            raise InvalidPasswordException(
                kind, f"Password should have at least {self.min_length} characters"
            )
        if kind is PasswordErrorKind.TOO_LONG:
            raise InvalidPasswordException(
                kind, f"Password should have at most {self.max_length} characters"
            )
        raise InvalidPasswordException(kind)
