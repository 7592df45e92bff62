"""Domain value objects - credentials owned by an account."""

from accounts.domain.value_objects.password import Password
from accounts.domain.value_objects.verification_code import VerificationCode

__all__ = ["Password", "VerificationCode"]
