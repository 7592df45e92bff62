"""PBKDF2-HMAC-SHA-256 password hasher.

This is an INFRASTRUCTURE detail. The domain layer (IPasswordHasher interface)
defines WHAT we need (hash and verify operations), while this implementation
defines HOW we do it (PBKDF2 from hashlib with a per-process pepper).

Encoded format:
    "{iterations}.{salt_base64}.{key_base64}"

The pepper is appended to the plaintext before derivation and never stored
in the encoded hash.
"""

import base64
import binascii
import hashlib
import hmac
import logging
import secrets

from accounts.domain.services.password_hasher import IPasswordHasher

logger = logging.getLogger(__name__)

DEFAULT_ITERATIONS = 10000
DEFAULT_SALT_SIZE = 16
DEFAULT_KEY_SIZE = 32
SEPARATOR = "."


class Pbkdf2PasswordHasher(IPasswordHasher):
    """
    Production password hasher using PBKDF2 with HMAC-SHA-256.

    Configuration:
    - Iterations: 10000 by default; hashes carrying another count are rejected
    - Salt: 16 random bytes per hash
    - Key: 32 derived bytes

    Usage:
        hasher = Pbkdf2PasswordHasher(pepper=settings.password_pepper)

        hashed = hasher.hash("user_password_123")
        # Returns: "10000.<salt>.<key>"

        hasher.verify("user_password_123", hashed)  # True
        hasher.verify("wrong_password", hashed)  # False

    Derivation is CPU-bound; async callers should run it in a worker thread.
    """

    def __init__(
        self,
        pepper: str,
        iterations: int = DEFAULT_ITERATIONS,
        salt_size: int = DEFAULT_SALT_SIZE,
        key_size: int = DEFAULT_KEY_SIZE,
    ):
        """
        Initialize the hasher.

        Args:
            pepper: Process-wide secret appended to every plaintext
            iterations: PBKDF2 rounds
            salt_size: Random salt length in bytes
            key_size: Derived key length in bytes

        Raises:
            ValueError: If the pepper is empty or a size is not positive
        """
        if not pepper:
            raise ValueError("Password pepper must not be empty")
        if iterations < 1 or salt_size < 1 or key_size < 1:
            raise ValueError(
                "Iterations, salt size and key size must be positive integers"
            )

        self._pepper = pepper
        self._iterations = iterations
        self._salt_size = salt_size
        self._key_size = key_size

    def hash(self, plain_password: str) -> str:
        """
        Hash a plain text password.

        Each call generates a unique salt, so hashing the same password
        twice produces different strings.

        Args:
            plain_password: The plain text password to hash

        Returns:
            Encoded hash "{iterations}.{salt}.{key}"
        """
        salt = secrets.token_bytes(self._salt_size)
        key = self._derive(plain_password, salt, self._iterations)
        logger.debug(f"Derived password key with {self._iterations} iterations")

        return SEPARATOR.join(
            (
                str(self._iterations),
                base64.b64encode(salt).decode("ascii"),
                base64.b64encode(key).decode("ascii"),
            )
        )

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        """
        Verify a plain text password against an encoded hash.

        This method:
        1. Splits the hash into iterations, salt and key
        2. Rejects hashes made with a different iteration count
        3. Re-derives the key with the stored salt
        4. Compares both keys in constant time

        Returns:
            True if the password matches, False otherwise (including for
            malformed hashes, which never raise)
        """
        decoded = self._decode(hashed_password)
        if decoded is None:
            return False

        iterations, salt, key = decoded
        if iterations != self._iterations:
            logger.warning(
                f"Rejected password hash with {iterations} iterations "
                f"(expected {self._iterations})"
            )
            return False

        candidate = self._derive(plain_password, salt, iterations, len(key))
        return hmac.compare_digest(candidate, key)

    def needs_rehash(self, hashed_password: str) -> bool:
        """
        Tell whether a stored hash was produced with other parameters.

        Returns:
            True when the hash is malformed or its iteration count, salt size
            or key size differ from this hasher's configuration
        """
        decoded = self._decode(hashed_password)
        if decoded is None:
            return True

        iterations, salt, key = decoded
        return (
            iterations != self._iterations
            or len(salt) != self._salt_size
            or len(key) != self._key_size
        )

    def _derive(
        self,
        plain_password: str,
        salt: bytes,
        iterations: int,
        key_size: int | None = None,
    ) -> bytes:
        return hashlib.pbkdf2_hmac(
            "sha256",
            (plain_password + self._pepper).encode("utf-8"),
            salt,
            iterations,
            dklen=key_size or self._key_size,
        )

    @staticmethod
    def _decode(hashed_password: str) -> tuple[int, bytes, bytes] | None:
        if not hashed_password:
            return None

        parts = hashed_password.split(SEPARATOR)
        if len(parts) != 3:
            return None

        iterations_field, salt_field, key_field = parts
        if not iterations_field.isascii() or not iterations_field.isdigit():
            return None
        # "010000" must not pass as 10000
        if str(int(iterations_field)) != iterations_field:
            return None

        try:
            salt = base64.b64decode(salt_field, validate=True)
            key = base64.b64decode(key_field, validate=True)
        except (binascii.Error, ValueError):
            return None

        if not salt or not key:
            return None

        return int(iterations_field), salt, key
