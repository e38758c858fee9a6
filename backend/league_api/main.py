import asyncio
import logging
import os
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from league_api.config import COMPLETION_SWEEP_ENABLED
from league_api.database import engine, init_db
from league_api.routes import leagues, schedule, stadiums
from league_api.services.match_completion import run_completion_sweep_forever

logger = logging.getLogger(__name__)

app = FastAPI(title="League Scheduler API")

_cors_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]
_extra = os.getenv("CORS_ORIGINS", "")
if _extra:
    _cors_origins.extend(o.strip() for o in _extra.split(",") if o.strip())

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(leagues.router, prefix="/api", tags=["leagues"])
app.include_router(schedule.router, prefix="/api", tags=["schedule"])
app.include_router(stadiums.router, prefix="/api", tags=["stadiums"])

_sweep_task: Optional[asyncio.Task] = None


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.on_event("startup")
async def on_startup():
    global _sweep_task
    init_db()

    if COMPLETION_SWEEP_ENABLED:
        _sweep_task = asyncio.create_task(run_completion_sweep_forever(engine))
        logger.info("Daily match completion sweep scheduled")


@app.on_event("shutdown")
async def on_shutdown():
    global _sweep_task
    if _sweep_task is not None:
        _sweep_task.cancel()
        _sweep_task = None


@app.get("/api/health")
def health_check():
    return {"app_name": "League Scheduler API", "status": "healthy"}
