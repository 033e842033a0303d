from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr


# --- Enums ---

class Category(str, Enum):
    NOTE = "note"
    REMINDER = "reminder"
    EVENT = "event"
    TASK = "task"
    TODO = "todo"  # legacy alias of TASK


PROMPT_CATEGORIES = [Category.NOTE, Category.REMINDER, Category.EVENT, Category.TASK]
KNOWN_CATEGORIES = {c.value for c in Category}


# --- Classifier ---

class ClassificationResult(BaseModel):
    """Flat response expected from the model: exactly these two keys."""

    model_config = ConfigDict(extra="forbid")

    category: str = Field(min_length=1)
    confidence: int | float  # opaque model score, echoed as given


# --- Persisted record ---

class DictationRecord(BaseModel):
    """Stored unit. Degraded records (undecodable values) only carry ``text``."""

    source: Optional[str] = None
    timestamp: Optional[int] = None  # epoch ms, set by the server
    category: Optional[str] = None
    text: str = ""
    _degraded: bool = PrivateAttr(default=False)

    @classmethod
    def from_raw(cls, raw: str) -> "DictationRecord":
        record = cls(text=raw)
        record._degraded = True
        return record

    @property
    def degraded(self) -> bool:
        return self._degraded

    def to_json(self) -> str:
        return self.model_dump_json(indent=1)


# --- API ---

class DictationIn(BaseModel):
    user: Optional[str] = None
    text: Optional[str] = None


class IngestAck(BaseModel):
    key: str
    category: str
    confidence: int | float

    @property
    def message(self) -> str:
        return f"Saved input as {self.category} with confidence {self.confidence}"
