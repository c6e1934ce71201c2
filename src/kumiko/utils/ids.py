"""Identifier helpers."""

import uuid


def new_id(prefix: str = "id") -> str:
    """Short random identifier, e.g. ``id_3f9a1c2b7``."""
    return f"{prefix}_{uuid.uuid4().hex[:9]}"
