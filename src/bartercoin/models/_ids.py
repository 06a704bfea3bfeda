"""Primary key helpers shared by models."""

import uuid


def new_id() -> str:
    """Return a random UUID4 string suitable for a primary key."""
    return str(uuid.uuid4())
