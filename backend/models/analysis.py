from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


ProposalType = Literal["shortcut", "snippet", "macro"]


class Evidence(BaseModel):
    aliases: Optional[list[str]] = None
    count: Optional[int] = None
    time_windows: Optional[list[str]] = None   # e.g. "09:00-11:00 UTC"


class ShortcutPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    alias_id: str = Field(alias="aliasId")
    suggested_hotkey: str = Field(alias="suggestedHotkey")


class SnippetPayload(BaseModel):
    text: str
    alias: str


class MacroPayload(BaseModel):
    sequence: list[str]


class ProposalPayload(BaseModel):
    """Wire shape is keyed by proposal type, e.g. ``{"snippet": {...}}``."""
    shortcut: Optional[ShortcutPayload] = None
    snippet: Optional[SnippetPayload] = None
    macro: Optional[MacroPayload] = None


class Proposal(BaseModel):
    type: ProposalType
    title: str
    rationale: str          # ~80 chars, not enforced
    evidence: Evidence = Field(default_factory=Evidence)
    payload: ProposalPayload
    confidence: float

    @field_validator("confidence")
    @classmethod
    def _clamp_confidence(cls, value: float) -> float:
        return max(0.0, min(1.0, value))

    @model_validator(mode="after")
    def _payload_matches_type(self) -> "Proposal":
        if getattr(self.payload, self.type) is None:
            raise ValueError(f"payload has no {self.type!r} entry")
        return self

    def body(self) -> Union[ShortcutPayload, SnippetPayload, MacroPayload]:
        """The payload entry that matches ``type``."""
        if self.type == "shortcut":
            return self.payload.shortcut
        if self.type == "snippet":
            return self.payload.snippet
        if self.type == "macro":
            return self.payload.macro
        raise AssertionError(f"unhandled proposal type {self.type!r}")


class ExtensionHint(BaseModel):
    keyword: str
    frequency: int
    suggested_search: str
    extension_name: str
    description: str


class AnalysisResponse(BaseModel):
    proposals: list[Proposal] = Field(default_factory=list)
    extension_hints: list[ExtensionHint] = Field(default_factory=list)
