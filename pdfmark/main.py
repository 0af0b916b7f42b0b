# pdfmark/main.py
from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pdfmark.api import routers
from pdfmark.core.config import get_settings
from pdfmark.core.logging import configure_logging

settings = get_settings()
logger = configure_logging()

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allow_origins,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],  # lets browsers read the download name
)

for router in routers:
    app.include_router(router)


@app.get("/")
async def root() -> dict:
    logger.debug("Root endpoint accessed")
    return {"message": f"{settings.app_name} {settings.app_version}"}


@app.get("/health")
async def health_check() -> dict:
    logger.debug("Health check invoked")
    return {"status": "ok", "message": "pdfmark API is running"}
