"""Fake implementations for testing."""

from tests.fakes.clock_fake import FixedClock
from tests.fakes.password_hasher_fake import FakePasswordHasher

__all__ = ["FixedClock", "FakePasswordHasher"]
