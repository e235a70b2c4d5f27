from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from models.event import LaunchTarget


class Alias(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = ""
    title: str
    target: LaunchTarget
    suggest_hotkey: Optional[str] = Field(default=None, alias="suggestHotkey")


class AliasUpdate(BaseModel):
    """Partial update. Only fields that were explicitly set are merged."""
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    title: Optional[str] = None
    target: Optional[LaunchTarget] = None
    suggest_hotkey: Optional[str] = Field(default=None, alias="suggestHotkey")

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)
