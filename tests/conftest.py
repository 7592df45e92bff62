"""Pytest configuration and fixtures.

Shared fixtures use fakes where real behaviour is not under test:
- FixedClock makes expiry deterministic
- FakePasswordHasher keeps service tests fast
"""

from datetime import UTC, datetime

import pytest

from accounts.application.services.credential_service import CredentialService
from accounts.infrastructure.security.pbkdf2_password_hasher import (
    Pbkdf2PasswordHasher,
)
from tests.fakes.clock_fake import FixedClock
from tests.fakes.password_hasher_fake import FakePasswordHasher

TEST_PEPPER = "test-pepper-0123456789"


@pytest.fixture
def clock() -> FixedClock:
    """Provide a clock frozen at 2024-01-01 12:00 UTC."""
    return FixedClock(datetime(2024, 1, 1, 12, 0, tzinfo=UTC))


@pytest.fixture
def fake_password_hasher() -> FakePasswordHasher:
    return FakePasswordHasher()


@pytest.fixture
def pbkdf2_hasher() -> Pbkdf2PasswordHasher:
    """Provide the real PBKDF2 hasher with a test pepper."""
    return Pbkdf2PasswordHasher(pepper=TEST_PEPPER)


@pytest.fixture
def credential_service(fake_password_hasher, clock) -> CredentialService:
    """
    Provide a CredentialService with fake dependencies.

    No real key derivation and no wall-clock time, so tests are fast and
    fully deterministic.
    """
    return CredentialService(password_hasher=fake_password_hasher, clock=clock)
