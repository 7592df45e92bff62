"""Credential service - application layer orchestration.

This service orchestrates credential use cases:
1. Password creation (policy + hashing)
2. Authentication (lifecycle gate + hash comparison)
3. Password lifecycle transitions (expire, force rotation)
4. Verification code issue and confirmation

DEPENDENCY INVERSION in action:
- CredentialService depends on IPasswordHasher (abstraction)
- CredentialService depends on IClock (abstraction)
- No dependency on hashlib, the system clock or configuration loading

Key derivation is CPU-bound, so hashing and comparison run in a worker
thread to keep the event loop responsive.
"""

import asyncio
import logging
from datetime import timedelta

from accounts.application.dtos.credential_dto import PasswordDTO, VerificationCodeDTO
from accounts.application.exceptions.exceptions import InvalidCredentialsError
from accounts.domain.exceptions import (
    InvalidPasswordException,
    InvalidVerificationCodeException,
)
from accounts.domain.services.clock import IClock
from accounts.domain.services.password_generator import PasswordGenerator
from accounts.domain.services.password_hasher import IPasswordHasher
from accounts.domain.services.password_policy import PasswordPolicy
from accounts.domain.value_objects import Password, VerificationCode
from accounts.domain.value_objects.verification_code import DEFAULT_TTL

logger = logging.getLogger(__name__)


class CredentialService:
    """
    Credential service encapsulating password and verification code use cases.

    This service:
    1. Depends on abstractions (IPasswordHasher, IClock)
    2. Uses domain value objects internally
    3. Accepts and returns DTO snapshots, so the owning account decides
       how they are persisted
    4. Lets domain exceptions propagate and raises application exceptions
       for failed credential checks

    Testing:
    - Unit tests use FakePasswordHasher and FixedClock
    """

    def __init__(
        self,
        password_hasher: IPasswordHasher,
        clock: IClock,
        policy: PasswordPolicy | None = None,
        generator: PasswordGenerator | None = None,
        verification_code_ttl: timedelta = DEFAULT_TTL,
        generated_password_length: int = 16,
    ):
        """
        Initialize credential service with dependencies.

        Args:
            password_hasher: Password hashing service (abstraction)
            clock: Time source (abstraction)
            policy: Plaintext policy, defaults to 8..48 characters
            generator: Random password generator
            verification_code_ttl: Lifetime of issued verification codes
            generated_password_length: Default length for generated passwords
        """
        self._password_hasher = password_hasher
        self._clock = clock
        self._policy = policy or PasswordPolicy()
        self._generator = generator or PasswordGenerator(
            min_length=self._policy.min_length
        )
        self._verification_code_ttl = verification_code_ttl
        self._generated_password_length = generated_password_length

    async def create_password(self, plaintext: str) -> PasswordDTO:
        """
        Validate and hash a new password.

        Raises:
            InvalidPasswordException: EMPTY, TOO_SHORT or TOO_LONG
        """
        self._policy.validate(plaintext)
        return await self._hash_password(plaintext)

    async def authenticate(self, snapshot: PasswordDTO, plaintext: str) -> None:
        """
        Check a plaintext password against a stored one.

        The lifecycle gate runs before the hash comparison, so an expired or
        must-change password is rejected even with the right plaintext.

        Raises:
            InvalidPasswordException: EXPIRED or MUST_CHANGE
            InvalidCredentialsError: If the plaintext does not match
        """
        password = snapshot.to_entity()
        try:
            password.should_verify(self._clock)
        except InvalidPasswordException as exc:
            logger.warning(f"Password rejected by lifecycle gate: {exc.error_code}")
            raise

        matches = await asyncio.to_thread(
            password.matches, plaintext, self._password_hasher
        )
        if not matches:
            logger.warning("Password check failed: plaintext does not match hash")
            raise InvalidCredentialsError()

    async def change_password(
        self, snapshot: PasswordDTO, current_plaintext: str, new_plaintext: str
    ) -> PasswordDTO:
        """
        Replace a password after checking the current one.

        Expired and must-change passwords can still be replaced; only the
        hash comparison has to succeed.

        Raises:
            InvalidCredentialsError: If the current plaintext does not match
            InvalidPasswordException: If the new plaintext breaks the policy
        """
        self._policy.validate(new_plaintext)

        matches = await asyncio.to_thread(
            snapshot.to_entity().matches, current_plaintext, self._password_hasher
        )
        if not matches:
            logger.warning("Password change refused: current password does not match")
            raise InvalidCredentialsError()

        return await self._hash_password(new_plaintext)

    def expire_password(self, snapshot: PasswordDTO) -> PasswordDTO:
        password = snapshot.to_entity()
        password.mark_as_expired(self._clock)
        logger.info(f"Password expired at {password.expires_at_utc.isoformat()}")
        return PasswordDTO.from_entity(password)

    def require_password_change(self, snapshot: PasswordDTO) -> PasswordDTO:
        password = snapshot.to_entity()
        password.mark_as_must_change()
        logger.info("Password flagged for mandatory change")
        return PasswordDTO.from_entity(password)

    def generate_password(
        self,
        length: int | None = None,
        include_special: bool = True,
        include_upper: bool = True,
    ) -> str:
        """
        Generate a strong random password.

        Raises:
            InvalidPasswordException: INVALID_LENGTH when length is too small
        """
        return self._generator.generate(
            self._generated_password_length if length is None else length,
            include_special=include_special,
            include_upper=include_upper,
        )

    def issue_verification_code(self) -> VerificationCodeDTO:
        """Create a new pending verification code for out-of-band delivery."""
        code = VerificationCode.create(self._clock, ttl=self._verification_code_ttl)
        logger.info(
            f"Issued verification code expiring at {code.expires_at_utc.isoformat()}"
        )
        return VerificationCodeDTO.from_entity(code)

    def confirm_verification_code(
        self, snapshot: VerificationCodeDTO, candidate: str
    ) -> VerificationCodeDTO:
        """
        Consume a verification code.

        Returns:
            The updated snapshot, now active

        Raises:
            InvalidVerificationCodeException: INVALID, EXPIRED, NOT_PENDING
                or MISMATCH
        """
        code = snapshot.to_entity()
        try:
            code.should_verify(candidate, self._clock)
        except InvalidVerificationCodeException as exc:
            logger.warning(f"Verification code rejected: {exc.error_code}")
            raise

        logger.info(f"Verification code confirmed at {code.verified_at_utc.isoformat()}")
        return VerificationCodeDTO.from_entity(code)

    async def _hash_password(self, plaintext: str) -> PasswordDTO:
        # Callers have already applied the policy; only key derivation is left
        hashed = await asyncio.to_thread(self._password_hasher.hash, plaintext)
        password = Password(hash=hashed)
        logger.info("Created new password hash")
        return PasswordDTO.from_entity(password)
