# -*- coding: utf-8 -*-
"""
API key utilities.

Keys look like ``ic_<64 hex chars>``: the ``ic_`` tag followed by 32
random bytes, hex-encoded. Only the SHA-256 digest and the first ten
characters are ever stored.
"""
import hashlib
import secrets
from typing import Tuple


class APIKeyUtils:
    """Utilities for API key generation and validation."""

    PREFIX = "ic_"

    # Key format: prefix + 32 random bytes (hex) = prefix + 64 chars
    KEY_RANDOM_BYTES = 32

    # Leading characters kept for display, e.g. "ic_3fa9c01"
    DISPLAY_PREFIX_LENGTH = 10

    @classmethod
    def generate_key(cls) -> str:
        """
        Generate a new API key.

        Returns:
            API key string in format: ic_<64_hex_chars>

        Example:
            >>> key = APIKeyUtils.generate_key()
            >>> key.startswith('ic_')
            True
            >>> len(key)
            67
        """
        return f"{cls.PREFIX}{secrets.token_hex(cls.KEY_RANDOM_BYTES)}"

    @classmethod
    def hash_key(cls, api_key: str) -> str:
        """
        Hash an API key using SHA-256.

        Note:
            SHA-256 rather than a slow KDF: the key already carries 256 bits
            of entropy.
        """
        return hashlib.sha256(api_key.encode('utf-8')).hexdigest()

    @classmethod
    def display_prefix(cls, api_key: str) -> str:
        """Non-secret leading part of the key, safe to store and show."""
        return api_key[:cls.DISPLAY_PREFIX_LENGTH]

    @classmethod
    def verify_key(cls, provided_key: str, stored_hash: str) -> bool:
        """Constant-time check of a key against its stored hash."""
        return secrets.compare_digest(cls.hash_key(provided_key), stored_hash)

    @classmethod
    def is_valid_format(cls, api_key: str) -> bool:
        if not api_key or not api_key.startswith(cls.PREFIX):
            return False
        body = api_key[len(cls.PREFIX):]
        if len(body) != cls.KEY_RANDOM_BYTES * 2:
            return False
        try:
            int(body, 16)
        except ValueError:
            return False
        return True

    @classmethod
    def generate_key_pair(cls) -> Tuple[str, str]:
        """
        Generate a key and return both the key and its hash.

        Example:
            >>> key, key_hash = APIKeyUtils.generate_key_pair()
            >>> APIKeyUtils.verify_key(key, key_hash)
            True
        """
        key = cls.generate_key()
        return key, cls.hash_key(key)
