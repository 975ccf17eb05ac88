"""Random material for keys and nonces, drawn from the OS generator."""

import os

IV_LENGTH = 12
KEY_LENGTH = 16


def random_bytes(length: int) -> bytes:
    return os.urandom(length)


def random_iv() -> bytes:
    """A fresh nonce. Never derived from the message or a counter."""
    return random_bytes(IV_LENGTH)


def random_key() -> str:
    """A new master key as 32 hex characters."""
    return random_bytes(KEY_LENGTH).hex()
