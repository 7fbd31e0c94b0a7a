"""Resource metadata and payload models."""

import json
import logging

import chardet
from pydantic import BaseModel, ConfigDict, Field

from content_l10n.models.segment import Segment, TranslationUnit

logger = logging.getLogger(__name__)


class ResourceRecord(BaseModel):
    """Metadata for one translatable resource, one per qualifying entry."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str  # "{contentType}-{entryId}"
    source_lang: str = Field(default="en-US", alias="sourceLang")
    project: str = Field(default="", alias="prj")
    modified: str | None = None
    resource_format: str = Field(default="MNFv1", alias="resourceFormat")


class ResourcePayload(BaseModel):
    """The ``{"segments": [...]}`` document handed to translation."""

    segments: list[Segment] = Field(default_factory=list)

    def to_json(self) -> str:
        return json.dumps(self.model_dump(by_alias=True, mode="json"))


class TranslatedPayload(BaseModel):
    """The ``{"segments": [...]}`` document returned by translation."""

    segments: list[TranslationUnit] = Field(default_factory=list)

    @classmethod
    def from_json(cls, data: str | bytes) -> "TranslatedPayload":
        """Parse a translated payload.

        Args:
            data: JSON text, or raw bytes in an unknown encoding.

        Returns:
            The parsed payload; a missing ``segments`` key yields no units.
        """
        text = decode_payload(data) if isinstance(data, bytes) else data
        raw = json.loads(text) or {}
        return cls(segments=raw.get("segments") or [])


def decode_payload(raw_bytes: bytes) -> str:
    """Decode payload bytes, trying UTF-8 before encoding detection.

    Args:
        raw_bytes: The payload as received.

    Returns:
        The decoded text.
    """
    try:
        return raw_bytes.decode("utf-8-sig")
    except UnicodeDecodeError:
        pass

    detected = chardet.detect(raw_bytes)
    encoding = detected.get("encoding") or "utf-8"
    confidence = detected.get("confidence", 0)

    if confidence < 0.7:
        logger.warning(
            "Low confidence encoding detection for payload: %s (%.0f%%)",
            encoding,
            confidence * 100,
        )

    try:
        return raw_bytes.decode(encoding)
    except (UnicodeDecodeError, LookupError):
        logger.error("Failed to decode payload as %s", encoding)
        return raw_bytes.decode("utf-8", errors="replace")
