"""Package identifier and timestamp generation."""

from __future__ import annotations

import secrets
from datetime import UTC, datetime
from uuid import UUID

from doc_epub.models import PackageIdentity


def uuid4() -> str:
    """Random version-4 UUID as lowercase ``8-4-4-4-12`` hex.

    Uses ``secrets`` (the OS CSPRNG). ``UUID(version=4)`` overwrites the
    version nibble with 4 and the variant bits with ``10``.
    """
    return str(UUID(bytes=secrets.token_bytes(16), version=4))


def format_datetime(now: datetime | None = None) -> str:
    """Format a UTC time as ``YYYY-MM-DDTHH:MM:SSZ``."""
    if now is None:
        now = datetime.now(UTC)
    elif now.tzinfo is not None:
        now = now.astimezone(UTC)
    return (
        f"{now.year:04d}-{now.month:02d}-{now.day:02d}"
        f"T{now.hour:02d}:{now.minute:02d}:{now.second:02d}Z"
    )


def generate_identity(now: datetime | None = None) -> PackageIdentity:
    """Identifier (``urn:uuid:...``) and ``dcterms:modified`` value for one build."""
    return PackageIdentity(uuid=f"urn:uuid:{uuid4()}", timestamp=format_datetime(now))
