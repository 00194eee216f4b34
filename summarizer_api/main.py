# summarizer_api/main.py
from __future__ import annotations

import logging

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import settings

# --- logging before anything else logs ---
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# --- DB / Models ---
from .db import Base, engine
from . import models  # noqa: F401  (registers tables on Base.metadata)

# --- Routers ---
from .routes.auth import router as auth_router
from .routes.summaries import router as summaries_router
from .routes.reminders import router as reminders_router
from .utils.timefmt import to_iso_z, utcnow

# ========= App =========
app = FastAPI(title="Meeting Summarizer API", version="1.0.0")

# CORS (session cookie needs credentials)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router, prefix="/api")
app.include_router(summaries_router, prefix="/api")
app.include_router(reminders_router, prefix="/api")

# Create tables (dev). In prod, manage the schema with migrations.
Base.metadata.create_all(bind=engine)

# ========= health =========
_health = APIRouter(tags=["health"])

@_health.get("/api/health")
def health():
    return {"ok": True, "time": to_iso_z(utcnow())}

app.include_router(_health)
