"""Password hashing interface - domain service abstraction.

This interface defines the contract for password hashing operations.
It belongs in the domain layer because password hashing is a BUSINESS REQUIREMENT,
not an infrastructure detail.

The domain cares that passwords must be:
1. Hashed before storage (security requirement)
2. Verifiable during authentication (business use case)

The domain does NOT care:
- How the key derivation is parameterised (iterations, salt and key sizes)
- Where the pepper secret comes from
- How the salt and derived key are encoded
"""

from abc import ABC, abstractmethod


class IPasswordHasher(ABC):
    """
    Interface for password hashing operations.

    Implementations must be cryptographically secure, generate a fresh salt
    for every hash and compare derived keys in constant time.
    """

    @abstractmethod
    def hash(self, plain_password: str) -> str:
        """
        Hash a plain text password.

        Args:
            plain_password: The plain text password to hash

        Returns:
            Encoded hash string, self-contained apart from the pepper

        Example:
            hashed = hasher.hash("my_password")
            # hashed might be: "10000.<salt_base64>.<key_base64>"
        """
        pass

    @abstractmethod
    def verify(self, plain_password: str, hashed_password: str) -> bool:
        """
        Verify a plain text password against a hashed password.

        Malformed hashes must yield False instead of raising.

        Args:
            plain_password: The plain text password to verify
            hashed_password: The previously hashed password to check against

        Returns:
            True if password matches, False otherwise
        """
        pass
