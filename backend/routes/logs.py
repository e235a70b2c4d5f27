from fastapi import APIRouter, Query
from pydantic import BaseModel

import config
import store
from models.log_file import LogFileInfo

router = APIRouter(tags=["logs"])


class DeletedResponse(BaseModel):
    deleted: int


class AccessResponse(BaseModel):
    writable: bool


@router.get("/logs", response_model=list[LogFileInfo])
async def list_logs():
    """Day-partition files on disk, newest first."""
    return await store.event_store.list_log_files()


@router.delete("/logs", response_model=DeletedResponse)
async def clear_logs():
    """Deletes every log file. Cannot be undone."""
    return DeletedResponse(deleted=await store.event_store.clear_logs())


@router.post("/logs/clean", response_model=DeletedResponse)
async def clean_logs(retention_days: int = Query(default=config.LOG_RETENTION_DAYS, ge=0)):
    """Retention sweep: deletes files older than `retention_days`."""
    return DeletedResponse(deleted=await store.event_store.clean_old_logs(retention_days))


@router.get("/logs/access", response_model=AccessResponse)
async def check_access():
    return AccessResponse(writable=await store.event_store.check_access())
