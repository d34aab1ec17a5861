"""ISO-8601 timestamp helpers shared by validation and the task store."""

from datetime import datetime, timezone

from pydantic import TypeAdapter

_datetime_adapter = TypeAdapter(datetime)


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_iso_datetime(value: str) -> datetime:
    """
    Parse an ISO-8601 timestamp into an aware datetime.

    Accepts ``Z`` or numeric offsets and bare dates. Naive values are taken
    as UTC. Raises ``ValueError`` when the string is not a valid date.
    """
    if not isinstance(value, str):
        raise ValueError(f"Expected an ISO-8601 string, got {type(value).__name__}")
    # pydantic's lax mode also reads numeric strings as unix time
    if value.strip().lstrip("+-").replace(".", "", 1).isdigit():
        raise ValueError(f"Not an ISO-8601 timestamp: {value!r}")

    parsed = _datetime_adapter.validate_python(value.strip())
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def to_iso(moment: datetime) -> str:
    """Format as UTC with millisecond precision, e.g. 2024-01-01T00:00:00.000Z."""
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"
