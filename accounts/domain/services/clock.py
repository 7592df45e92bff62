"""Time source interface - domain service abstraction.

Expiry rules for passwords and verification codes depend on "now". The domain
asks an IClock for the current instant instead of reading the system clock,
so tests can freeze or advance time deterministically.
"""

from abc import ABC, abstractmethod
from datetime import datetime


class IClock(ABC):
    """Interface for obtaining the current UTC instant."""

    @abstractmethod
    def now(self) -> datetime:
        """
        Return the current instant.

        Returns:
            Timezone-aware datetime in UTC
        """
        pass
