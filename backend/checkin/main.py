from contextlib import asynccontextmanager
from datetime import datetime, timezone

import structlog
from arq.connections import RedisSettings, create_pool
from fastapi import FastAPI

from checkin.api import router as api_router
from checkin.auth import router as auth_router
from checkin.config import settings
from checkin.db.session import engine
from checkin.slack import router as slack_router
from checkin.slack.dedup import DedupCache

structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(0),
    context_class=dict,
    logger_factory=structlog.PrintLoggerFactory(),
    cache_logger_on_first_use=True,
)

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    log.info("starting up")
    app.state.arq_pool = await create_pool(
        RedisSettings.from_dsn(settings.redis_url)
    )
    yield
    await app.state.arq_pool.close()
    await engine.dispose()
    log.info("shut down")


app = FastAPI(title="Daily Check-in Bot", version="0.1.0", lifespan=lifespan)
app.state.dedup = DedupCache(
    ttl=settings.dedup_ttl_seconds, capacity=settings.dedup_capacity
)

app.include_router(slack_router)
app.include_router(auth_router)
app.include_router(api_router)


@app.get("/health")
async def health():
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}
