"""Hasher - Content hashes for lesson code files.

Provides functions for calculating and verifying base64-encoded digests
of the raw bytes behind ``.play`` snippets, so clients can tell whether
a cached copy of a file is current.
"""

import base64
import hashlib

DEFAULT_ALGORITHM = "sha1"


def _digest(content: bytes, algorithm: str) -> bytes:
    if algorithm == "sha1":
        return hashlib.sha1(content).digest()
    elif algorithm == "sha256":
        return hashlib.sha256(content).digest()
    elif algorithm == "md5":
        return hashlib.md5(content).digest()
    else:
        raise ValueError(f"Unsupported hash algorithm: {algorithm}")


def calculate_hash(content: bytes, algorithm: str = DEFAULT_ALGORITHM) -> str:
    """Calculate the content hash of a file.

    Args:
        content: Raw file content
        algorithm: Hash algorithm to use (default "sha1")

    Returns:
        Standard base64 encoding of the digest
    """
    return base64.b64encode(_digest(content, algorithm)).decode("ascii")


def verify_hash(content: bytes, expected_hash: str, algorithm: str = DEFAULT_ALGORITHM) -> bool:
    """Verify that content matches an expected hash.

    Args:
        content: Raw file content
        expected_hash: Expected base64 hash value
        algorithm: Hash algorithm used (default "sha1")

    Returns:
        True if hash matches, False otherwise
    """
    return calculate_hash(content, algorithm=algorithm) == expected_hash
