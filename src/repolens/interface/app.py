"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from repolens.infrastructure.config import Settings, get_settings
from repolens.interface.dependencies import shutdown, startup
from repolens.interface.error_handlers import register_error_handlers
from repolens.interface.routes import router


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build and wire the FastAPI application."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Manage startup / shutdown of shared resources."""
        await startup(app.state, settings)
        yield
        await shutdown(app.state)

    app = FastAPI(
        title="RepoLens",
        version="1.0.0",
        description=(
            "Samples source files from a public GitHub repository, scores them "
            "with simple line heuristics and adds an LLM-written review."
        ),
        lifespan=_lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    app.include_router(router)

    # ── Health check (simple liveness probe) ────────────────────────────

    @app.get("/health", include_in_schema=False)
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
