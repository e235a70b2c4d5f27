import logging

from fastapi import APIRouter, BackgroundTasks, Query
from pydantic import BaseModel, ConfigDict, Field

import config
import store
from models.event import LaunchTarget, LogEvent

logger = logging.getLogger(__name__)

router = APIRouter(tags=["events"])


# ---------- Request schemas ----------

class InputEventRequest(BaseModel):
    text: str


class LaunchEventRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    alias_id: str = Field(alias="aliasId")
    target: LaunchTarget


# ---------- Background writers ----------
# Recording must never get in the way of the launcher: failures are logged
# and dropped here, the store itself surfaces them.

async def _record_input(text: str) -> None:
    try:
        await store.event_store.append_input(text)
    except OSError:
        logger.exception("Failed to record input event")


async def _record_launch(alias_id: str, target: LaunchTarget) -> None:
    try:
        await store.event_store.append_launch(alias_id, target)
    except OSError:
        logger.exception("Failed to record launch event for %s", alias_id)


# ---------- Endpoints ----------

@router.post("/events/input", status_code=202)
async def log_input(body: InputEventRequest, background: BackgroundTasks):
    """
    Records what the user typed in the launcher search bar.
    Whitespace-only input is not recorded.
    """
    if body.text.strip():
        background.add_task(_record_input, body.text)
    return {}


@router.post("/events/launch", status_code=202)
async def log_launch(body: LaunchEventRequest, background: BackgroundTasks):
    """Records that an alias was launched."""
    background.add_task(_record_launch, body.alias_id, body.target)
    return {}


@router.get("/events/recent", response_model=list[LogEvent], response_model_exclude_none=True)
async def recent_events(
    days: int = Query(default=config.LOOKBACK_DAYS, ge=1, le=365),
    limit: int = Query(default=config.MAX_EVENTS, ge=1, le=10_000),
):
    """Newest-first events from the last `days` days."""
    return await store.event_store.read_recent(days, limit)
