import logging
from collections.abc import Callable
from datetime import datetime, timezone

from dictations.config import Settings, get_settings
from dictations.errors import ClientInputError
from dictations.models.schemas import DictationIn, IngestAck
from dictations.services.auth import AllowAllAuthenticator, Authenticator
from dictations.services.keys import make_key, make_record
from dictations.services.llm import LLMService
from dictations.services.store import KeyValueStore

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class IngestionService:
    """Validate -> authenticate -> classify -> persist, one request at a time.

    Nothing is written unless classification succeeded. Classifier and
    storage errors propagate to the caller unchanged.
    """

    def __init__(
        self,
        classifier: LLMService,
        store: KeyValueStore,
        authenticator: Authenticator | None = None,
        settings: Settings | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.classifier = classifier
        self.store = store
        self.authenticator = authenticator or AllowAllAuthenticator()
        self.settings = settings or get_settings()
        self.clock = clock

    async def ingest(self, payload: DictationIn, source: str = "") -> IngestAck:
        if not payload.user:
            raise ClientInputError("Missing user")
        if not payload.text:
            raise ClientInputError("Missing text")

        await self.authenticator.authenticate(payload.user)

        result = await self.classifier.classify(payload.text)
        logger.info("category: %s, confidence: %s", result.category, result.confidence)

        now = self.clock()
        key = make_key(payload.user, now, self.settings.local_tz)
        record = make_record(
            source or self.settings.default_source, result.category, payload.text, now
        )
        await self.store.put(key, record.to_json())
        logger.info("Saved dictation %s (source=%s)", key, record.source)

        return IngestAck(key=key, category=result.category, confidence=result.confidence)
