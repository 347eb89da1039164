"""Timestamp formatting utilities."""

from datetime import datetime, timedelta, timezone

# Smallest step the store uses to keep updated_at strictly increasing
TIMESTAMP_RESOLUTION = timedelta(microseconds=1)


def now_exact() -> str:
    """Current UTC time as an ISO 8601 string with microseconds."""
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


def parse_timestamp(iso_timestamp: str) -> datetime:
    """Parse an ISO 8601 timestamp produced by now_exact()."""
    return datetime.fromisoformat(iso_timestamp)


def next_timestamp(previous: str = None) -> str:
    """
    Current time, bumped past `previous` when the clock has not advanced.

    Guarantees the returned timestamp is strictly greater than `previous`,
    even when two writes land within the same clock tick.

    Args:
        previous: ISO 8601 timestamp of the last write (optional)

    Returns:
        ISO 8601 timestamp string
    """
    current = datetime.now(timezone.utc)
    if previous:
        floor = parse_timestamp(previous) + TIMESTAMP_RESOLUTION
        if current < floor:
            current = floor
    return current.isoformat(timespec="microseconds")


def format_timestamp(iso_timestamp: str, relative: bool = False) -> str:
    """
    Format ISO 8601 timestamp to readable format.

    Args:
        iso_timestamp: ISO 8601 formatted timestamp string
        relative: If True, show relative time (e.g., "2h ago")
                 If False, show the dashboard date (e.g., "Nov 13, 2025")

    Returns:
        Human-readable timestamp

    Examples:
        format_timestamp("2025-11-13T18:45:40.572549+00:00")
        # "Nov 13, 2025"

        format_timestamp("2025-11-13T18:45:40.572549+00:00", relative=True)
        # "2h ago"
    """
    try:
        dt = parse_timestamp(iso_timestamp)

        if relative:
            return _format_relative_time(dt)
        else:
            return f"{dt.strftime('%b')} {dt.day}, {dt.year}"

    except (ValueError, TypeError):
        # Return original if parsing fails
        return iso_timestamp


def _format_relative_time(dt: datetime) -> str:
    """
    Format datetime as relative time in compact format (e.g., "2h ago").

    Args:
        dt: datetime object to format

    Returns:
        Compact relative time string
    """
    now = datetime.now(dt.tzinfo)
    diff = now - dt

    if diff.total_seconds() < 0:
        diff = -diff
        suffix = "from now"
    else:
        suffix = "ago"

    seconds = int(diff.total_seconds())
    minutes = seconds // 60
    hours = minutes // 60
    days = diff.days

    if seconds < 60:
        return f"{seconds}s {suffix}"
    elif minutes < 60:
        return f"{minutes}m {suffix}"
    elif hours < 24:
        return f"{hours}h {suffix}"
    else:
        return f"{days}d {suffix}"
