"""
Sucoi - Document Serialisation
===============================
Turns raw MongoDB documents into JSON-safe dicts without renaming any
field: ``ObjectId`` values become hex strings and datetimes become
ISO-8601 UTC strings with millisecond precision and a ``Z`` suffix
(``2026-10-19T03:48:24.224Z``), the form browsers parse unambiguously.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from bson import ObjectId


def to_utc_iso(value: datetime) -> str:
    """Render ``value`` as UTC ISO-8601.  Naive datetimes are taken as UTC (BSON dates are)."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def serialize_doc(doc: dict[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key, value in doc.items():
        if isinstance(value, ObjectId):
            out[key] = str(value)
        elif isinstance(value, datetime):
            out[key] = to_utc_iso(value)
        else:
            out[key] = value
    return out
