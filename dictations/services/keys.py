"""Storage key scheme and record construction.

Keys look like ``{user}:dictations:{Y}-{M}-{D}@{h}:{m}:{s}`` with unpadded
local calendar fields. They group a user's records by prefix but do not
sort chronologically; order by ``DictationRecord.timestamp`` instead.
Two writes in the same second for the same user share a key, and the
later one replaces the earlier.
"""

from datetime import datetime, timezone

from dictations.models.schemas import DictationRecord


def user_prefix(user: str) -> str:
    return f"{user}:dictations:"


def make_key(user: str, now: datetime, tz: timezone = timezone.utc) -> str:
    local = now.astimezone(tz)
    return (
        f"{user_prefix(user)}{local.year}-{local.month}-{local.day}"
        f"@{local.hour}:{local.minute}:{local.second}"
    )


def epoch_ms(now: datetime) -> int:
    return int(now.timestamp() * 1000)


def make_record(source: str, category: str, text: str, now: datetime) -> DictationRecord:
    return DictationRecord(
        source=source,
        timestamp=epoch_ms(now),
        category=category,
        text=text,
    )
