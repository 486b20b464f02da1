"""Short ID generation utilities."""

import secrets
import string
from typing import Optional

# Upper bound on ID length, generated or looked up
MAX_ID_LENGTH = 64


class ShortIdGenerator:
    """Generate random short IDs for links."""

    # Base62 characters (digits, lowercase, uppercase)
    BASE62_CHARS = string.digits + string.ascii_lowercase + string.ascii_uppercase

    def __init__(self, default_length: int = 8):
        """Initialize short ID generator.

        Args:
            default_length: Default length for generated IDs
        """
        if not 1 <= default_length <= MAX_ID_LENGTH:
            raise ValueError(f"default_length must be between 1 and {MAX_ID_LENGTH}")
        self.default_length = default_length

    def generate(self, length: Optional[int] = None) -> str:
        """Generate a random short ID.

        Args:
            length: Length of the ID (uses default if not specified)

        Returns:
            Random base62 short ID
        """
        length = length or self.default_length
        return ''.join(secrets.choice(self.BASE62_CHARS) for _ in range(length))

    @property
    def keyspace_size(self) -> int:
        """Number of distinct IDs of the default length."""
        return len(self.BASE62_CHARS) ** self.default_length

    @staticmethod
    def is_valid_format(short_id: str) -> bool:
        """Check if a short ID could have been generated here.

        Args:
            short_id: ID to validate

        Returns:
            True if non-empty, at most MAX_ID_LENGTH long and base62 only
        """
        return (
            0 < len(short_id) <= MAX_ID_LENGTH
            and all(c in ShortIdGenerator.BASE62_CHARS for c in short_id)
        )
