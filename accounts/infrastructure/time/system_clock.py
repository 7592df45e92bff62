"""System clock - IClock backed by the host's UTC time."""

from datetime import UTC, datetime

from accounts.domain.services.clock import IClock


class SystemClock(IClock):
    """Production time source returning ``datetime.now(UTC)``."""

    def now(self) -> datetime:
        return datetime.now(UTC)
