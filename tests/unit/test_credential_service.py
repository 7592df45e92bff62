"""Unit tests for CredentialService.

Tests credential use cases:
1. Password creation and authentication
2. Lifecycle transitions through snapshots
3. Verification code issue and confirmation
"""

import logging
from datetime import timedelta

import pytest

from accounts.application.dtos import PasswordDTO, VerificationCodeDTO
from accounts.application.exceptions import InvalidCredentialsError
from accounts.application.services.credential_service import CredentialService
from accounts.domain.exceptions import (
    InvalidPasswordException,
    InvalidVerificationCodeException,
    PasswordErrorKind,
    VerificationErrorKind,
)
from accounts.domain.services.password_policy import PasswordPolicy

pytestmark = pytest.mark.unit


# === PASSWORD TESTS ===


@pytest.mark.asyncio
async def test_create_password(credential_service, fake_password_hasher):
    """Test that a valid plaintext yields a hashed snapshot."""
    # Act
    result = await credential_service.create_password("Password123!")

    # Assert
    assert isinstance(result, PasswordDTO)
    assert result.hash == "HASHED:Password123!"
    assert result.expires_at_utc is None
    assert result.must_change is False
    assert fake_password_hasher.hash_calls == 1


@pytest.mark.asyncio
async def test_create_password_policy_violation(credential_service, fake_password_hasher):
    with pytest.raises(InvalidPasswordException) as exc_info:
        await credential_service.create_password("short")

    assert exc_info.value.kind is PasswordErrorKind.TOO_SHORT
    assert fake_password_hasher.hash_calls == 0


@pytest.mark.asyncio
async def test_authenticate_success(credential_service):
    snapshot = await credential_service.create_password("Password123!")

    assert await credential_service.authenticate(snapshot, "Password123!") is None


@pytest.mark.asyncio
async def test_authenticate_wrong_password(credential_service, caplog):
    # Arrange
    snapshot = await credential_service.create_password("Password123!")

    # Act
    with caplog.at_level(logging.WARNING):
        with pytest.raises(InvalidCredentialsError) as exc_info:
            await credential_service.authenticate(snapshot, "wrong-password")

    # Assert
    assert exc_info.value.error_code == "INVALID_CREDENTIALS"
    assert "wrong-password" not in caplog.text


@pytest.mark.asyncio
async def test_authenticate_expired_password(credential_service, fake_password_hasher):
    """Test that the lifecycle gate runs before the hash comparison."""
    # Arrange
    snapshot = await credential_service.create_password("Password123!")
    expired = credential_service.expire_password(snapshot)

    # Act & Assert
    with pytest.raises(InvalidPasswordException) as exc_info:
        await credential_service.authenticate(expired, "Password123!")
    assert exc_info.value.kind is PasswordErrorKind.EXPIRED
    assert fake_password_hasher.verify_calls == 0


@pytest.mark.asyncio
async def test_authenticate_must_change(credential_service):
    snapshot = await credential_service.create_password("Password123!")
    flagged = credential_service.require_password_change(snapshot)

    with pytest.raises(InvalidPasswordException) as exc_info:
        await credential_service.authenticate(flagged, "Password123!")

    assert exc_info.value.kind is PasswordErrorKind.MUST_CHANGE
    assert flagged.must_change is True
    assert snapshot.must_change is False


@pytest.mark.asyncio
async def test_expire_password_is_irreversible(credential_service, clock):
    snapshot = await credential_service.create_password("Password123!")

    expired = credential_service.expire_password(snapshot)
    clock.advance(days=1)
    expired_again = credential_service.expire_password(expired)

    assert expired.expires_at_utc is not None
    assert expired_again.expires_at_utc == expired.expires_at_utc


@pytest.mark.asyncio
async def test_change_password(credential_service):
    """Test that an expired password can be replaced with the right plaintext."""
    # Arrange
    snapshot = credential_service.expire_password(
        await credential_service.create_password("Password123!")
    )

    # Act
    result = await credential_service.change_password(
        snapshot, "Password123!", "NewPassword456!"
    )

    # Assert
    assert result.hash == "HASHED:NewPassword456!"
    assert result.expires_at_utc is None
    await credential_service.authenticate(result, "NewPassword456!")


@pytest.mark.asyncio
async def test_change_password_wrong_current(credential_service):
    snapshot = await credential_service.create_password("Password123!")

    with pytest.raises(InvalidCredentialsError):
        await credential_service.change_password(snapshot, "nope-nope", "NewPassword456!")


@pytest.mark.asyncio
async def test_change_password_invalid_new(credential_service):
    snapshot = await credential_service.create_password("Password123!")

    with pytest.raises(InvalidPasswordException) as exc_info:
        await credential_service.change_password(snapshot, "Password123!", " " * 10)

    assert exc_info.value.kind is PasswordErrorKind.EMPTY


def test_generate_password(credential_service):
    assert len(credential_service.generate_password()) == 16
    assert len(credential_service.generate_password(24)) == 24

    with pytest.raises(InvalidPasswordException) as exc_info:
        credential_service.generate_password(7)
    assert exc_info.value.kind is PasswordErrorKind.INVALID_LENGTH


# === VERIFICATION CODE TESTS ===


def test_issue_and_confirm_code(credential_service, clock):
    """Test the full confirmation flow with a fixed clock."""
    # Arrange
    issued = credential_service.issue_verification_code()

    # Act
    confirmed = credential_service.confirm_verification_code(issued, issued.code)

    # Assert
    assert isinstance(confirmed, VerificationCodeDTO)
    assert issued.expires_at_utc == clock.now() + timedelta(minutes=5)
    assert confirmed.is_active is True
    assert confirmed.verified_at_utc == clock.now()
    assert confirmed.expires_at_utc is None

    with pytest.raises(InvalidVerificationCodeException) as exc_info:
        credential_service.confirm_verification_code(confirmed, issued.code)
    assert exc_info.value.kind is VerificationErrorKind.NOT_PENDING


def test_confirm_expired_code(credential_service, clock):
    issued = credential_service.issue_verification_code()
    clock.advance(minutes=6)

    with pytest.raises(InvalidVerificationCodeException) as exc_info:
        credential_service.confirm_verification_code(issued, issued.code)

    assert exc_info.value.kind is VerificationErrorKind.EXPIRED


def test_custom_code_ttl(fake_password_hasher, clock):
    service = CredentialService(
        password_hasher=fake_password_hasher,
        clock=clock,
        verification_code_ttl=timedelta(minutes=30),
    )

    issued = service.issue_verification_code()
    clock.advance(minutes=20)

    assert service.confirm_verification_code(issued, issued.code).is_active


class _CountingPolicy(PasswordPolicy):
    def __init__(self):
        super().__init__()
        self.checks = 0

    def check(self, plaintext):
        self.checks += 1
        return super().check(plaintext)


@pytest.mark.asyncio
async def test_policy_evaluated_once_per_call(fake_password_hasher, clock):
    """Test that creating or changing a password applies the policy once."""
    # Arrange
    policy = _CountingPolicy()
    service = CredentialService(
        password_hasher=fake_password_hasher, clock=clock, policy=policy
    )

    # Act
    snapshot = await service.create_password("Password123!")
    checks_after_create = policy.checks
    await service.change_password(snapshot, "Password123!", "NewPassword456!")

    # Assert
    assert checks_after_create == 1
    assert policy.checks == 2
