"""Timestamp parsing utilities."""
from datetime import datetime, timezone


def parse_timestamp(s: str) -> datetime:
    """
    Parse a sale timestamp string into a UTC datetime.

    Supports multiple formats:
    - ISO format with "Z" suffix: "2021-11-27T20:29:54Z"
    - ISO format with offset: "2021-11-27T20:29:54+05:30"
    - ISO format without timezone: "2021-11-27T20:29:54"
    - Space-separated: "2021-11-27 20:29:54"
    - Date only: "2021-11-27"

    Naive values are assumed to be UTC; aware values are converted to UTC.

    Raises:
        ValueError: If timestamp cannot be parsed
    """
    if not s:
        raise ValueError("Empty timestamp string")

    s = s.strip()

    # Convert trailing "Z" to "+00:00" for ISO format compatibility
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"

    if " " in s and "T" not in s:
        s = s.replace(" ", "T", 1)

    try:
        dt = datetime.fromisoformat(s)
    except ValueError:
        raise ValueError(
            f"Unable to parse timestamp: {s}. Expected ISO format "
            "(e.g., '2021-11-27T20:29:54Z' or '2021-11-27T20:29:54+05:30')"
        )

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)
