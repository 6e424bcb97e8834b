from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from docsum.application import SummaryWorkflow, configure_workflow
from docsum.core.config import AppSettings, load_settings
from docsum.core.logging import configure_logging
from docsum.infrastructure import CallAuditLog, RemoteSession
from docsum.routes import logs, session


def create_app(workflow: SummaryWorkflow | None = None, settings: AppSettings | None = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    if workflow is None:
        remote = RemoteSession(settings.remote, CallAuditLog())
        workflow = SummaryWorkflow.from_session(remote)
    configure_workflow(workflow)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        yield
        await workflow.aclose()

    app = FastAPI(title="Document Summarizer API", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
    )

    app.include_router(session.router, prefix="/api")
    app.include_router(logs.router, prefix="/api")

    @app.get("/", include_in_schema=False)
    async def index() -> JSONResponse:
        return JSONResponse(
            {
                "message": "Document Summarizer API",
                "docs": "/docs",
                "session": "/api/session",
            }
        )

    return app


app = create_app()
