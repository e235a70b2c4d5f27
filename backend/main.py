from dotenv import load_dotenv
load_dotenv()

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

import config
import store
from errors import ClinicError, RateLimitedError
from routes import aliases, critic, events, logs

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not await store.event_store.check_access():
        logger.warning("Events will not be recorded: %s is not writable", config.SUPPORT_PATH)
    deleted = await store.event_store.clean_old_logs(config.LOG_RETENTION_DAYS)
    if deleted:
        logger.info("Retention sweep removed %d log files", deleted)
    yield


app = FastAPI(title="Command Clinic API", version="0.1.0", lifespan=lifespan)


@app.exception_handler(ClinicError)
async def clinic_error_handler(request: Request, exc: ClinicError):
    headers = None
    if isinstance(exc, RateLimitedError):
        headers = {"Retry-After": str(int(exc.retry_after))}
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error": type(exc).__name__},
        headers=headers,
    )


app.include_router(events.router)
app.include_router(aliases.router)
app.include_router(logs.router)
app.include_router(critic.router)


@app.get("/")
def health():
    return {"status": "ok", "service": "command-clinic"}
