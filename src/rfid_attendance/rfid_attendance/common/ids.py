from __future__ import annotations

import uuid


def new_id() -> str:
    """Short random identifier for stored entities."""
    return uuid.uuid4().hex[:12]
