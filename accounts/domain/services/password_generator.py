"""Strong random password generation."""

import random
import secrets
import string

from accounts.domain.exceptions import InvalidPasswordException, PasswordErrorKind
from accounts.domain.services.password_policy import MIN_PASSWORD_LENGTH

DIGITS = string.digits
LOWERCASE = string.ascii_lowercase
UPPERCASE = string.ascii_uppercase
SPECIAL = "!@#$%^&*(){}[];"


class PasswordGenerator:
    """
    Generates random passwords with guaranteed character classes.

    Digits and lowercase letters are always present. Uppercase letters and
    special characters appear if and only if they are enabled. One character
    of every enabled class is drawn first, the remaining positions are filled
    from the union of enabled classes, then everything is shuffled.

    The random source defaults to ``secrets.SystemRandom``; pass a seeded
    ``random.Random`` only in tests.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        min_length: int = MIN_PASSWORD_LENGTH,
    ):
        self._rng = rng or secrets.SystemRandom()
        self._min_length = min_length

    def generate(
        self,
        length: int = 16,
        include_special: bool = True,
        include_upper: bool = True,
    ) -> str:
        """
        Generate a random password.

        Args:
            length: Number of characters, at least the minimum password length
            include_special: Whether special characters are used
            include_upper: Whether uppercase letters are used

        Returns:
            The generated password

        Raises:
            InvalidPasswordException: INVALID_LENGTH when length is too small
        """
        if length < self._min_length:
            raise InvalidPasswordException(
                PasswordErrorKind.INVALID_LENGTH,
                f"Generated password length must be at least {self._min_length}",
            )

        classes = [DIGITS, LOWERCASE]
        if include_upper:
            classes.append(UPPERCASE)
        if include_special:
            classes.append(SPECIAL)

        alphabet = "".join(classes)
        chars = [self._rng.choice(charset) for charset in classes]
        chars.extend(self._rng.choice(alphabet) for _ in range(length - len(chars)))
        self._rng.shuffle(chars)

        return "".join(chars)
