from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes import curriculum, export, health, markdown
from .core.config import settings

logger = logging.getLogger("curriculum_assistant.backend")
logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s %(message)s")

app = FastAPI(title=settings.app_name)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(curriculum.router)
app.include_router(markdown.router)
app.include_router(export.router)

if not settings.gemini_api_key:
    logger.warning("CURRICULUM_ASSISTANT_GEMINI_API_KEY is not set; generation endpoints will return 503")


__all__ = ["app"]
