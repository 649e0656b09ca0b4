"""
Panelscope — FastAPI application entry point.

Run with:
    uvicorn panelscope.main:app --reload
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from panelscope.api.routes import router
from panelscope.config import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Panelscope",
    description="Comic archive reader API with panel-by-panel navigation",
    version="0.1.0",
)

# Allow the frontend (served separately in dev) to call the API
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)
