"""ID Generation.

ULID-based ids for log correlation. Prefixes keep them readable in logs
(batch_*, session_*); ULIDs keep them sortable by creation time.
"""

from datetime import datetime, timezone
from typing import NewType

from ulid import ULID

BatchID = NewType("BatchID", str)
"""One applied message batch"""

SessionID = NewType("SessionID", str)
"""One host session"""


class Prefix:
    """ID prefix constants."""

    BATCH = "batch"
    SESSION = "session"


def generate_prefixed(prefix: str) -> str:
    """Generate a ULID with a type prefix."""
    return f"{prefix}_{ULID()}"


def new_batch_id() -> BatchID:
    """Generate new batch ID."""
    return BatchID(generate_prefixed(Prefix.BATCH))


def new_session_id() -> SessionID:
    """Generate new session ID."""
    return SessionID(generate_prefixed(Prefix.SESSION))


def extract_timestamp(id_str: str) -> datetime | None:
    """Extract the creation time from a (possibly prefixed) ULID.

    Args:
        id_str: ID string

    Returns:
        UTC datetime, or None if the id is not a ULID
    """
    ulid_part = id_str.rsplit("_", 1)[-1]
    try:
        ulid = ULID.from_str(ulid_part)
    except ValueError:
        return None
    return datetime.fromtimestamp(ulid.timestamp, tz=timezone.utc)
