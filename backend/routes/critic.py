from fastapi import APIRouter
from pydantic import BaseModel

import config
import store
from analysis.config import MODEL
from models.analysis import ExtensionHint, Proposal

router = APIRouter(tags=["critic"])


# ---------- Response schema ----------

class CriticResponse(BaseModel):
    proposals: list[Proposal]
    extension_hints: list[ExtensionHint]
    logs_count: int     # 0 means there was nothing to analyze yet


class CriticStatus(BaseModel):
    api_key_configured: bool
    model: str


# ---------- Endpoint ----------

@router.post("/critic", response_model=CriticResponse, response_model_exclude_none=True)
async def run_critic():
    """
    Reads the recent usage log and asks the analysis service for improvements.

    Analysis failures (missing key, auth, rate limit, timeout, ...) come back
    as typed error responses; unusable model output just yields no proposals.
    """
    events = await store.event_store.read_recent(config.LOOKBACK_DAYS, config.MAX_EVENTS)
    result = await store.pipeline.analyze(events)

    return CriticResponse(
        proposals=result.proposals,
        extension_hints=result.extension_hints,
        logs_count=len(events),
    )


@router.get("/critic/status", response_model=CriticStatus)
async def critic_status():
    """Whether an analysis can run at all, so the front-end can prompt for a key first."""
    return CriticStatus(api_key_configured=store.pipeline.has_api_key(), model=MODEL)
