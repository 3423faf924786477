from __future__ import annotations

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from moneytransfer.api.routers import api_router
from moneytransfer.core.config import settings
from moneytransfer.core.logging import configure_logging
from moneytransfer.db.init_db import ensure_schema
from moneytransfer.db.session import get_engine

logger = structlog.get_logger(__name__)

app = FastAPI(title="Money Transfer API", version="1.0")

origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")


@app.on_event("startup")
def on_startup() -> None:
    configure_logging(settings.log_level)
    ensure_schema(get_engine())
    logger.info("money transfer api started", port=settings.server_port)
