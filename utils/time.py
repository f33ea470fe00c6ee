from datetime import datetime, timezone


def parse_iso_utc(ts: str | None) -> datetime | None:
    """Parse ISO-8601 UTC timestamp (with trailing 'Z') to an aware datetime.

    Returns None for a missing or empty value.
    """
    if not ts:
        return None
    if ts.endswith("Z"):
        ts = ts[:-1] + "+00:00"
    dt = datetime.fromisoformat(ts)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def format_iso_utc(dt: datetime) -> str:
    """Render a datetime as ISO-8601 UTC with a trailing 'Z'. Naive values are taken as UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
