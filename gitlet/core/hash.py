"""Hash utilities for Gitlet."""

import hashlib

CHUNK_SIZE = 64 * 1024
HEX_DIGITS = frozenset('0123456789abcdef')


def hash_object(data: bytes) -> str:
    """
    Compute SHA-1 hash of data.

    Args:
        data: Bytes to hash

    Returns:
        40-character hex string
    """
    return hashlib.sha1(data).hexdigest()


def hash_file(filepath) -> str:
    """
    Compute SHA-1 hash of a file, streaming it in chunks.

    Args:
        filepath: Path to file

    Returns:
        40-character hex string
    """
    hasher = hashlib.sha1()
    with open(filepath, 'rb') as f:
        for chunk in iter(lambda: f.read(CHUNK_SIZE), b''):
            hasher.update(chunk)
    return hasher.hexdigest()


def is_valid_digest(digest: str) -> bool:
    """Return True for a 40-character lowercase hex digest."""
    return len(digest) == 40 and set(digest) <= HEX_DIGITS
