"""ID generators for the model package."""

from __future__ import annotations

import secrets
import string

_ALPHABET = string.ascii_lowercase + string.digits


def generate_short_id(length: int = 8) -> str:
    """Generate a random lowercase alphanumeric identifier.

    Example:
        >>> generate_short_id()  # e.g., "k3v9x0qa"
    """
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))


def generate_node_id(kind: str) -> str:
    """Generate a node ID in the editor's format: <kind>-xxxxxxxx."""
    return f"{kind}-{generate_short_id()}"
