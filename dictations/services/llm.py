import json
import logging

import httpx
from pydantic import ValidationError

from dictations.config import Settings, get_settings
from dictations.errors import ClassificationError
from dictations.models.schemas import KNOWN_CATEGORIES, ClassificationResult
from dictations.prompts.classify import build_classify

logger = logging.getLogger(__name__)


class LLMService:
    """Classifier adapter over an OpenAI-compatible chat completions API.

    One call per dictation, no caching and no retries. The HTTP client is
    pooled for the lifetime of the service.
    """

    def __init__(self, settings: Settings | None = None, client: httpx.AsyncClient | None = None):
        self.settings = settings or get_settings()
        self._client = client

    async def start(self):
        if self._client is not None:
            return
        headers = {}
        if self.settings.llm_api_key:
            headers["Authorization"] = f"Bearer {self.settings.llm_api_key}"
        self._client = httpx.AsyncClient(
            base_url=self.settings.llm_base_url,
            headers=headers,
            timeout=httpx.Timeout(self.settings.llm_timeout_seconds, connect=10.0),
        )

    async def stop(self):
        if self._client:
            await self._client.aclose()
            self._client = None

    async def chat(
        self,
        messages: list[dict],
        max_tokens: int = 256,
        temperature: float = 0.1,
        json_mode: bool = False,
    ) -> str:
        body: dict = {
            "model": self.settings.llm_model,
            "messages": messages,
            "max_tokens": max_tokens,
            "temperature": temperature,
        }
        if json_mode:
            body["response_format"] = {"type": "json_object"}

        resp = await self._client.post("/chat/completions", json=body)
        resp.raise_for_status()
        data = resp.json()
        content = data["choices"][0]["message"]["content"]
        if not isinstance(content, str):
            raise ValueError(f"completion has no text content: {content!r}")
        return content.strip()

    async def classify(self, text: str) -> ClassificationResult:
        try:
            raw = await self.chat(build_classify(text), json_mode=True)
        except (httpx.HTTPError, KeyError, IndexError, TypeError, ValueError) as e:
            raise ClassificationError(f"classifier call failed: {e}") from e
        return parse_classification(raw)


def parse_classification(raw: str) -> ClassificationResult:
    """Validate the model's raw output against the two-field schema.

    The category is kept verbatim; only its membership is checked
    (case-insensitively) so nothing outside the taxonomy gets stored.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning("Failed to parse classification JSON: %s", raw[:200])
        raise ClassificationError("classifier returned invalid JSON") from e

    try:
        result = ClassificationResult.model_validate(data)
    except ValidationError as e:
        logger.warning("Classification has unexpected shape: %s", raw[:200])
        raise ClassificationError("classifier returned an unexpected shape") from e

    if result.category.lower() not in KNOWN_CATEGORIES:
        logger.warning("Classification has unknown category: %s", result.category)
        raise ClassificationError(f"unknown category {result.category!r}")
    return result
