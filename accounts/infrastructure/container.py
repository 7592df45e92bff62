"""Composition root.

This module wires concrete implementations into the credential use cases.

It is where we decide:
- Use Pbkdf2PasswordHasher with the configured pepper and parameters
- Use the host clock (SystemClock)
- Use Settings from environment (not hardcoded config)

Inner layers never import this module.
"""

import logging
from datetime import timedelta

from accounts.application.services.credential_service import CredentialService
from accounts.domain.services.clock import IClock
from accounts.domain.services.password_generator import PasswordGenerator
from accounts.domain.services.password_hasher import IPasswordHasher
from accounts.domain.services.password_policy import PasswordPolicy
from accounts.infrastructure.config.settings import Settings, get_settings
from accounts.infrastructure.security.pbkdf2_password_hasher import (
    Pbkdf2PasswordHasher,
)
from accounts.infrastructure.time.system_clock import SystemClock


def configure_logging(settings: Settings) -> None:
    """Apply the configured log level to the package loggers."""
    logging.getLogger("accounts").setLevel(settings.log_level.upper())


def get_password_hasher(settings: Settings) -> IPasswordHasher:
    return Pbkdf2PasswordHasher(
        pepper=settings.password_pepper,
        iterations=settings.password_hash_iterations,
        salt_size=settings.password_salt_size,
        key_size=settings.password_key_size,
    )


def get_clock() -> IClock:
    return SystemClock()


def build_credential_service(settings: Settings | None = None) -> CredentialService:
    """
    Build a CredentialService with production implementations.

    Args:
        settings: Configuration to use; loaded from the environment when omitted

    Returns:
        Fully wired CredentialService
    """
    settings = settings or get_settings()
    configure_logging(settings)

    policy = PasswordPolicy(
        min_length=settings.password_min_length,
        max_length=settings.password_max_length,
    )
    return CredentialService(
        password_hasher=get_password_hasher(settings),
        clock=get_clock(),
        policy=policy,
        generator=PasswordGenerator(min_length=settings.password_min_length),
        verification_code_ttl=timedelta(minutes=settings.verification_code_ttl_minutes),
        generated_password_length=settings.generated_password_length,
    )
