from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class LaunchTarget(BaseModel):
    owner: str              # "raycast" for store extensions
    extension: str
    command: str
    args: Optional[dict[str, Any]] = None

    def key(self) -> tuple[str, str, str]:
        """Identity used for duplicate detection. ``args`` is not part of it."""
        return (self.owner, self.extension, self.command)


class InputEvent(BaseModel):
    type: Literal["input"] = "input"
    ts: int             # Unix timestamp in milliseconds
    text: str
    len: int            # len(text) at capture time


class LaunchEvent(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: Literal["launch"] = "launch"
    ts: int             # Unix timestamp in milliseconds
    alias_id: str = Field(alias="aliasId")
    target: LaunchTarget


LogEvent = Annotated[Union[InputEvent, LaunchEvent], Field(discriminator="type")]

log_event_adapter: TypeAdapter[LogEvent] = TypeAdapter(LogEvent)


def dump_event(event: Union[InputEvent, LaunchEvent]) -> str:
    """Compact single-line JSON, the format used both on disk and in prompts."""
    return event.model_dump_json(by_alias=True, exclude_none=True)


def load_event(line: str) -> Union[InputEvent, LaunchEvent]:
    return log_event_adapter.validate_json(line)
