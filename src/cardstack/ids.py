"""Entity ID generation and checks."""

import re
import uuid

_ID_RE = re.compile(r"[a-f0-9-]+")


def new_id() -> str:
    """Generate a random (version 4) UUID string."""
    return str(uuid.uuid4())


def normalize_id(s: str) -> str:
    """Strip whitespace and lowercase an ID.

    " 3F2A-..." → "3f2a-..."
    """
    return s.strip().lower()


def is_valid_id(s: str) -> bool:
    """Return True if s only holds lowercase hex digits and dashes.

    Board IDs become file names, so anything else (dots, slashes,
    NUL bytes) is refused before it reaches the filesystem.
    """
    return bool(s) and _ID_RE.fullmatch(s) is not None
