"""Verification code value object - single-use, time-boxed code."""

import secrets
import string
from dataclasses import dataclass
from datetime import datetime, timedelta
from random import Random
from typing import Optional

from accounts.domain.exceptions import (
    InvalidEntityStateException,
    InvalidVerificationCodeException,
    VerificationErrorKind,
)
from accounts.domain.services.clock import IClock

CODE_LENGTH = 6
CODE_ALPHABET = string.ascii_uppercase + string.digits
DEFAULT_TTL = timedelta(minutes=5)


@dataclass
class VerificationCode:
    """
    One-time code proving possession of an out-of-band channel.

    States (mutually exclusive):
    - pending: not verified and not yet expired
    - expired: not verified and past ``expires_at_utc``
    - active: verified; ``expires_at_utc`` has been cleared

    A successful ``should_verify`` moves the code to active, which is
    terminal. Delivery of the code (email, SMS) happens elsewhere.
    """

    code: str
    expires_at_utc: Optional[datetime]
    verified_at_utc: Optional[datetime] = None

    def __post_init__(self):
        if (
            not self.code
            or len(self.code) != CODE_LENGTH
            or any(char not in CODE_ALPHABET for char in self.code)
        ):
            raise InvalidEntityStateException(
                f"Verification code must be {CODE_LENGTH} uppercase alphanumeric characters."
            )

        if self.verified_at_utc is None and self.expires_at_utc is None:
            raise InvalidEntityStateException(
                "An unverified code must have an expiration date."
            )

    def __setattr__(self, name, value):
        if name in self.__dict__:
            current = self.__dict__[name]
            if name == "code":
                raise AttributeError("Verification code cannot be changed once created")
            if name == "verified_at_utc" and current is not None:
                raise AttributeError("A verified code cannot be verified again")
            if (
                name == "expires_at_utc"
                and value != current
                and not (value is None and self.verified_at_utc is not None)
            ):
                raise AttributeError(
                    "Verification code expiry can only be cleared by verification"
                )

        if name in ("expires_at_utc", "verified_at_utc") and value is not None:
            if value.tzinfo is None or value.utcoffset() is None:
                raise InvalidEntityStateException(
                    "Verification code timestamps must be timezone-aware datetimes."
                )

        super().__setattr__(name, value)

    @classmethod
    def create(
        cls,
        clock: IClock,
        ttl: timedelta = DEFAULT_TTL,
        rng: Random | None = None,
    ) -> "VerificationCode":
        """
        Generate a new pending code.

        Args:
            clock: Time source; expiry is ``clock.now() + ttl``
            ttl: Validity window, five minutes by default
            rng: Random source, ``secrets.SystemRandom`` by default

        Returns:
            A pending verification code
        """
        rng = rng or secrets.SystemRandom()
        code = "".join(rng.choice(CODE_ALPHABET) for _ in range(CODE_LENGTH))
        return cls(code=code, expires_at_utc=clock.now() + ttl)

    @classmethod
    def restore(
        cls,
        code: str,
        expires_at_utc: Optional[datetime],
        verified_at_utc: Optional[datetime] = None,
    ) -> "VerificationCode":
        """Rebuild a code from its persisted fields."""
        return cls(
            code=code, expires_at_utc=expires_at_utc, verified_at_utc=verified_at_utc
        )

    @property
    def is_active(self) -> bool:
        return self.verified_at_utc is not None and self.expires_at_utc is None

    def is_pending(self, clock: IClock) -> bool:
        return (
            self.verified_at_utc is None
            and self.expires_at_utc is not None
            and self.expires_at_utc > clock.now()
        )

    def is_expired(self, clock: IClock) -> bool:
        return (
            self.verified_at_utc is None
            and self.expires_at_utc is not None
            and self.expires_at_utc <= clock.now()
        )

    def should_verify(self, candidate: str | None, clock: IClock) -> None:
        """
        Consume the code if ``candidate`` matches.

        Checks run in order and the first failure wins:
        1. Blank candidate -> INVALID
        2. Wrong length -> INVALID
        3. Past expiry -> EXPIRED
        4. Already verified -> NOT_PENDING
        5. Different code, case-sensitive -> MISMATCH

        On success the code becomes active: ``verified_at_utc`` is set and
        ``expires_at_utc`` is cleared. Failures leave the state unchanged.

        Raises:
            InvalidVerificationCodeException: With the failing kind
        """
        if not candidate or not candidate.strip():
            raise InvalidVerificationCodeException(VerificationErrorKind.INVALID)

        if len(candidate) != CODE_LENGTH:
            raise InvalidVerificationCodeException(
                VerificationErrorKind.INVALID,
                f"Verification code must have {CODE_LENGTH} characters",
            )

        now = clock.now()
        if self.expires_at_utc is not None and self.expires_at_utc <= now:
            raise InvalidVerificationCodeException(VerificationErrorKind.EXPIRED)

        if self.verified_at_utc is not None:
            raise InvalidVerificationCodeException(VerificationErrorKind.NOT_PENDING)

        if not secrets.compare_digest(
            candidate.encode("utf-8"), self.code.encode("utf-8")
        ):
            raise InvalidVerificationCodeException(VerificationErrorKind.MISMATCH)

        self.verified_at_utc = now
        self.expires_at_utc = None

    def to_encoded_string(self) -> str:
        return self.code
