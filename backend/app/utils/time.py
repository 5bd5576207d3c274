from datetime import datetime, timezone


def utcnow() -> datetime:
    """Naive UTC now, matching how timestamps are stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_epoch_ms(value: datetime) -> int:
    return int(value.replace(tzinfo=timezone.utc).timestamp() * 1000)


def to_iso_z(value: datetime) -> str:
    """ISO-8601 with millisecond precision and a Z suffix."""
    return value.isoformat(timespec="milliseconds") + "Z"
