import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import redis.asyncio as redis
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.cors import CORSMiddleware

from puzzle_rsvp.database import dispose_engine
from puzzle_rsvp.events.router import router as events_router
from puzzle_rsvp.invites.exceptions import (
    InviteNotFound,
    RateLimited,
    RsvpForbidden,
    UnknownEvent,
)
from puzzle_rsvp.invites.notifier import wait_for_pending
from puzzle_rsvp.invites.router import router as invites_router
from puzzle_rsvp.puzzles.loader import build_registry
from puzzle_rsvp.settings import app_settings

logger = logging.getLogger(__name__)

logging.getLogger("puzzle_rsvp").setLevel(app_settings.log_level.upper())


class SPAStaticFiles(StaticFiles):
    """Serves the built frontend; unknown paths get index.html so client-side
    routes such as /invite/<token> resolve."""

    async def get_response(self, path: str, scope):
        try:
            return await super().get_response(path, scope)
        except StarletteHTTPException as exc:
            if exc.status_code != 404:
                raise
            return await super().get_response("index.html", scope)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.verifiers = build_registry(app_settings.events_file)
    redis_client = redis.Redis(
        host=app_settings.redis_host,
        port=app_settings.redis_port,
        db=app_settings.redis_db,
        decode_responses=True,
    )
    app.state.redis = redis_client

    try:
        yield
    finally:
        await wait_for_pending()
        await redis_client.close()
        await dispose_engine()


app = FastAPI(lifespan=lifespan)


@app.exception_handler(InviteNotFound)
@app.exception_handler(UnknownEvent)
async def invalid_invite_handler(_request: Request, exc: Exception):
    """Unknown tokens, event mismatches and unconfigured events all look the
    same from outside."""
    if isinstance(exc, UnknownEvent):
        logger.error("Puzzle attempt for unconfigured event %s", exc.event_slug)
    return JSONResponse(status_code=404, content={"error": "invalid_invite"})


@app.exception_handler(RsvpForbidden)
async def rsvp_forbidden_handler(_request: Request, _exc: RsvpForbidden):
    return JSONResponse(status_code=403, content={"error": "puzzle_not_solved"})


@app.exception_handler(RateLimited)
async def rate_limited_handler(_request: Request, exc: RateLimited):
    return JSONResponse(
        status_code=429,
        content={"error": "rate_limited", "retry_after": exc.retry_after},
        headers={"Retry-After": str(exc.retry_after)},
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=app_settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/api/health")
async def health() -> dict:
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


app.include_router(invites_router)
app.include_router(events_router)

if app_settings.static_dir is not None:
    app.mount("/", SPAStaticFiles(directory=app_settings.static_dir, html=True), name="frontend")
