"""Password value object - hashed credential with lifecycle state."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from accounts.domain.exceptions import (
    InvalidEntityStateException,
    InvalidPasswordException,
    PasswordErrorKind,
)
from accounts.domain.services.clock import IClock
from accounts.domain.services.password_hasher import IPasswordHasher
from accounts.domain.services.password_policy import PasswordPolicy


@dataclass
class Password:
    """
    Hashed password plus its expiration and forced-rotation state.

    The hash never changes once the object exists. The lifecycle only moves
    toward more restrictive states: once expired a password stays expired,
    and once flagged for change the flag stays set. Instances are owned by a
    single account aggregate, which serializes mutation.

    Usage:
        password = Password.create("Password123!", hasher)
        password.matches("Password123!", hasher)  # True

        password.mark_as_must_change()
        password.should_verify(clock)  # raises InvalidPasswordException(MUST_CHANGE)
    """

    hash: str
    expires_at_utc: Optional[datetime] = None
    must_change: bool = False

    def __post_init__(self):
        if not self.hash or not self.hash.strip():
            raise InvalidEntityStateException(
                "Password hash is required. A password cannot exist without its hash."
            )

    def __setattr__(self, name, value):
        current = self.__dict__.get(name)

        if name == "hash" and "hash" in self.__dict__:
            raise AttributeError("Password hash cannot be changed once created")

        if name == "must_change" and current and not value:
            raise AttributeError("A must-change password cannot be cleared")

        if name == "expires_at_utc" and value is not None:
            if value.tzinfo is None or value.utcoffset() is None:
                raise InvalidEntityStateException(
                    "Password expiry must be a timezone-aware datetime."
                )
            if current is not None and value > current:
                raise AttributeError("Password expiry cannot be postponed")

        if name == "expires_at_utc" and value is None and current is not None:
            raise AttributeError("An expired password cannot be un-expired")

        super().__setattr__(name, value)

    @classmethod
    def create(
        cls,
        plaintext: str,
        hasher: IPasswordHasher,
        policy: PasswordPolicy | None = None,
    ) -> "Password":
        """
        Validate a plaintext password and hash it.

        Args:
            plaintext: Password chosen by the user
            hasher: Hashing service holding the pepper
            policy: Policy to enforce, defaults to the standard 8..48 rule

        Returns:
            A fresh password, neither expired nor flagged for change

        Raises:
            InvalidPasswordException: EMPTY, TOO_SHORT or TOO_LONG
        """
        (policy or PasswordPolicy()).validate(plaintext)
        return cls(hash=hasher.hash(plaintext))

    @classmethod
    def restore(
        cls,
        hash: str,
        expires_at_utc: Optional[datetime] = None,
        must_change: bool = False,
    ) -> "Password":
        """Rebuild a password from its persisted fields."""
        return cls(hash=hash, expires_at_utc=expires_at_utc, must_change=must_change)

    def is_expired(self, clock: IClock) -> bool:
        return self.expires_at_utc is not None and self.expires_at_utc <= clock.now()

    def mark_as_expired(self, clock: IClock) -> None:
        """
        Expire the password now.

        An already expired password keeps its original expiry instant.
        """
        if self.is_expired(clock):
            return
        self.expires_at_utc = clock.now()

    def mark_as_must_change(self) -> None:
        self.must_change = True

    def should_verify(self, clock: IClock) -> "Password":
        """
        Check that the password may still be used to authenticate.

        This gate does not mutate the password and can be called repeatedly.
        Expiry takes precedence over the must-change flag.

        Returns:
            The same password instance

        Raises:
            InvalidPasswordException: EXPIRED or MUST_CHANGE
        """
        if self.is_expired(clock):
            raise InvalidPasswordException(PasswordErrorKind.EXPIRED)

        if self.must_change:
            raise InvalidPasswordException(PasswordErrorKind.MUST_CHANGE)

        return self

    def matches(self, plaintext: str, hasher: IPasswordHasher) -> bool:
        """Compare a candidate plaintext against the stored hash."""
        return hasher.verify(plaintext, self.hash)

    def to_encoded_string(self) -> str:
        return self.hash
