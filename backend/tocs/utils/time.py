from datetime import datetime, timezone


def utc_now_iso() -> str:
    """Return current UTC time as ISO 8601 string."""
    return datetime.now(timezone.utc).isoformat()


def utc_now_millis() -> int:
    return int(datetime.now(timezone.utc).timestamp() * 1000)
