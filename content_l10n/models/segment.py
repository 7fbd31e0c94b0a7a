"""Segment and translation unit models."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SegmentFormat(str, Enum):
    """Content format of a segment's source string."""

    TEXT = "text"
    HTML = "html"


class Segment(BaseModel):
    """One addressable unit of translatable text.

    Serialized keys follow the resource payload format: ``sid``, ``str``,
    ``nid``, ``mf`` and ``nstr``.
    """

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    sid: str
    text: str = Field(alias="str")
    nid: str
    mf: SegmentFormat
    # Normalized fragments; seeded with the source string
    nstr: list[str | dict[str, Any]] = Field(default_factory=list)

    @model_validator(mode="after")
    def _seed_fragments(self) -> Segment:
        if not self.nstr:
            self.nstr = [self.text]
        return self


class TranslationUnit(BaseModel):
    """A translated segment supplied by the translation step.

    ``nstr`` mixes literal strings with variable markers of the form
    ``{"v": "<markup>"}``.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    sid: str
    text: str | int | float | None = Field(default=None, alias="str")
    nstr: list[str | dict[str, Any]] | None = None

    def to_markup(self) -> str:
        """Concatenate fragments, substituting variable markers verbatim."""
        fragments = self.nstr if self.nstr is not None else [self.translated_text]
        return "".join(
            part if isinstance(part, str) else str(part.get("v", ""))
            for part in fragments
        )

    @property
    def translated_text(self) -> str:
        """The translation as a plain string."""
        if self.text is not None:
            return f"{self.text}"
        if self.nstr is not None:
            return self.to_markup()
        return ""
