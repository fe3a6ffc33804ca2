"""Content digests for vtrack."""

import hashlib

DIGEST_LENGTH = 64


def compute_digest(content: bytes) -> str:
    """Return the SHA-256 digest of content as 64 lowercase hex characters."""
    return hashlib.sha256(content).hexdigest()


def is_digest(value: str) -> bool:
    """Check whether a string looks like a digest produced by compute_digest."""
    if len(value) != DIGEST_LENGTH:
        return False
    return all(c in "0123456789abcdef" for c in value)
