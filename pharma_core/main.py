"""Pharma Core FastAPI application.

A pharmaceutical information service for the UAE market: drug registry and
insurance coverage lookups, drug -> ICD-10 resolution over local tables and
public coding APIs, static safety tables and proxies to public drug APIs.

Users, payments and other product concerns do not belong in this service.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pharma_core.clinical.icd10.router import router as icd10_router
from pharma_core.core.config import settings
from pharma_core.db.async_session import dispose_engine
from pharma_core.routers import drug_service, external_apis, formulary, health, safety, snomed
from pharma_core.services.data_context import DataContext, build_data_context

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def build_http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(
        headers={"Accept": "application/json", "User-Agent": settings.http_user_agent},
        follow_redirects=True,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    # A context injected by create_app (tests) is used as-is.
    if getattr(app.state, "context", None) is not None:
        yield
        return

    _configure_logging()
    client = build_http_client()
    try:
        app.state.context = await build_data_context(client)
        logger.info("%s %s started environment=%s", settings.app_name, settings.app_version, settings.environment)
        yield
    finally:
        await client.aclose()
        await dispose_engine()
        logger.info("%s stopped", settings.app_name)


def create_app(context: Optional[DataContext] = None) -> FastAPI:
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Pharmaceutical information APIs (UAE drug registry, ICD-10 lookup, safety, coverage).",
        lifespan=lifespan,
    )
    app.state.context = context

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(icd10_router, prefix="/api/icd10", tags=["ICD-10"])
    app.include_router(drug_service.router, prefix="/api")
    app.include_router(formulary.router, prefix="/api")
    app.include_router(safety.router, prefix="/api")
    app.include_router(external_apis.router, prefix="/api")
    app.include_router(snomed.router, prefix="/api")
    app.include_router(health.router, prefix="/api")

    return app


app = create_app()
