import asyncio
import logging

from pydantic import ValidationError

from dictations.config import Settings, get_settings
from dictations.errors import ClientInputError
from dictations.models.schemas import DictationRecord
from dictations.services.keys import user_prefix
from dictations.services.store import KeyValueStore

logger = logging.getLogger(__name__)


def decode_record(raw: str) -> DictationRecord:
    """Decode a stored value, falling back to a degraded text-only record."""
    try:
        return DictationRecord.model_validate_json(raw)
    except ValidationError:
        return DictationRecord.from_raw(raw)


def _recency_key(record: DictationRecord) -> tuple[int, int]:
    # Records without a timestamp sort after all dated ones.
    if record.timestamp is None:
        return (1, 0)
    return (0, -record.timestamp)


def rank_by_recency(records: list[DictationRecord]) -> list[DictationRecord]:
    return sorted(records, key=_recency_key)


class RetrievalService:
    def __init__(self, store: KeyValueStore, settings: Settings | None = None):
        self.store = store
        self.settings = settings or get_settings()

    async def list_recent(self, user: str | None, limit: int | None = None) -> list[DictationRecord]:
        """Newest-first records for ``user``, at most ``limit`` of them.

        Keys come back from the store in lexical order, which is not
        chronological, so the fetched set is re-sorted by ``timestamp``.
        """
        if not user:
            raise ClientInputError("Missing 'user' query parameter.")
        if limit is None:
            limit = self.settings.default_limit

        keys = await self.store.list_keys(user_prefix(user), self.settings.list_cap)
        values = await asyncio.gather(*(self.store.get(k) for k in keys), return_exceptions=True)
        for value in values:
            if isinstance(value, BaseException):
                raise value

        records = []
        for key, raw in zip(keys, values):
            if raw is None:
                logger.info("Key %s vanished before it could be read", key)
                continue
            record = decode_record(raw)
            if record.degraded:
                logger.warning("Could not decode dictation %s, showing raw text", key)
            records.append(record)

        return rank_by_recency(records)[:limit]
