"""Timestamp helpers shared by documents and validation results."""

from __future__ import annotations

from datetime import datetime, timezone


def utc_now_iso() -> str:
    """Current UTC time as ISO-8601 with a Z suffix, e.g. "2026-01-01T12:00:00.123456Z"."""
    return datetime.now(timezone.utc).replace(tzinfo=None).isoformat() + "Z"
