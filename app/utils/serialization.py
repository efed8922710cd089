import json
from datetime import datetime, timezone
from typing import Any, List, Optional

from loguru import logger

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    """Render a timestamp as ISO-8601 UTC. Naive values are taken as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)


def dump_string_list(values: Optional[List[str]]) -> str:
    return json.dumps(list(values or []))


def load_string_list(raw: Any) -> List[str]:
    """Decode a JSON text blob into a list of strings.

    Missing or unreadable blobs decode to an empty list instead of failing the
    whole read.
    """
    if raw is None:
        return []
    if isinstance(raw, list):
        return [str(item) for item in raw]
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")
    try:
        decoded = json.loads(raw)
    except (TypeError, ValueError):
        logger.warning(f"Discarding unreadable string list blob: {raw!r}")
        return []
    if not isinstance(decoded, list):
        return []
    return [str(item) for item in decoded]
