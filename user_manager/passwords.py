"""Random password generation.

Password layout: ``SPECIAL + hex24 + SPECIAL + hex21 + SPECIAL`` (48 chars).
Each hex segment is a truncated SHA-256 digest of fresh bytes from the
``secrets`` module, so nothing is derived from the clock.
"""

from __future__ import annotations

import hashlib
import re
import secrets

SPECIAL_CHARACTERS = "!@#$%^&*()_-+="
FIRST_SEGMENT_LENGTH = 24
SECOND_SEGMENT_LENGTH = 21
PASSWORD_LENGTH = FIRST_SEGMENT_LENGTH + SECOND_SEGMENT_LENGTH + 3

PASSWORD_PATTERN = re.compile(
    rf"^[{re.escape(SPECIAL_CHARACTERS)}]"
    rf"[0-9a-f]{{{FIRST_SEGMENT_LENGTH}}}"
    rf"[{re.escape(SPECIAL_CHARACTERS)}]"
    rf"[0-9a-f]{{{SECOND_SEGMENT_LENGTH}}}"
    rf"[{re.escape(SPECIAL_CHARACTERS)}]$"
)


def random_segment(length: int) -> str:
    """Return ``length`` hex characters from a hash of 32 random bytes."""
    if not 0 < length <= 64:
        raise ValueError(f"Segment length must be between 1 and 64, got {length}")
    return hashlib.sha256(secrets.token_bytes(32)).hexdigest()[:length]


def random_special() -> str:
    return secrets.choice(SPECIAL_CHARACTERS)


def generate_password() -> str:
    return (
        random_special()
        + random_segment(FIRST_SEGMENT_LENGTH)
        + random_special()
        + random_segment(SECOND_SEGMENT_LENGTH)
        + random_special()
    )


def matches_template(password: str) -> bool:
    return PASSWORD_PATTERN.match(password) is not None
