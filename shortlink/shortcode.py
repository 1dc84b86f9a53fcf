"""Short identifier generation."""

import random
import string
from typing import Optional


class ShortCodeGenerator:
    """Generate random fixed-length identifiers for short links."""

    # Base62 characters (alphanumeric, case-sensitive)
    BASE62_CHARS = string.ascii_letters + string.digits  # a-zA-Z0-9

    def __init__(self, length: int = 4, rng: Optional[random.Random] = None):
        """Initialize short code generator.

        Args:
            length: Number of characters in every generated code
            rng: Optional random source (module-level random if not given)
        """
        if length < 1:
            raise ValueError("Short code length must be at least 1")

        self.length = length
        self._rng = rng or random

    def generate(self) -> str:
        """Generate a random short code.

        Returns:
            Random code of exactly ``self.length`` base62 characters
        """
        return ''.join(self._rng.choices(self.BASE62_CHARS, k=self.length))

    def keyspace_size(self) -> int:
        """Number of distinct codes at the configured length."""
        return len(self.BASE62_CHARS) ** self.length

    @staticmethod
    def is_valid_format(code: str) -> bool:
        """Check if code has valid format (non-empty, alphanumeric only).

        Args:
            code: Code to validate

        Returns:
            True if valid format
        """
        return bool(code) and all(c in ShortCodeGenerator.BASE62_CHARS for c in code)
