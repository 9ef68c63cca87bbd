"""
FastAPI application entry point for the notes service.

Serve with: uvicorn --factory scrapbook.app:create_app
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from scrapbook.config import Settings, get_settings
from scrapbook.dependencies import build_notes_store
from scrapbook.errors import InvalidNoteError, StorageUnavailableError
from scrapbook.routes import router
from scrapbook.store import NotesStore

logger = logging.getLogger(__name__)


def _configure_logging(level_name: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level_name.upper(), logging.INFO),
        format="%(asctime)s [%(name)s:%(levelname)s] %(message)s",
    )


async def _invalid_note_handler(request: Request, exc: InvalidNoteError):
    return JSONResponse(status_code=400, content={"error": str(exc)})


async def _storage_unavailable_handler(request: Request, exc: StorageUnavailableError):
    logger.error("Error saving note: %s", exc)
    return JSONResponse(status_code=500, content={"error": str(exc)})


def _validation_message(errors: list) -> str:
    for error in errors:
        loc = tuple(error.get("loc", ()))
        if error.get("type") == "json_invalid" or loc == ("body",):
            return "Author and message are required"
        if loc[:1] == ("body",) and loc[1:2] in (("author",), ("message",)):
            return "Author and message are required"
    return "Invalid request"


async def _validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning(
        "Validation error for %s %s: %r", request.method, request.url.path, exc.errors()
    )
    return JSONResponse(
        status_code=400,
        content={
            "error": _validation_message(exc.errors()),
            "details": jsonable_encoder(exc.errors()),
        },
    )


def create_app(
    settings: Settings | None = None, store: NotesStore | None = None
) -> FastAPI:
    settings = settings or get_settings()
    _configure_logging(settings.log_level)

    app = FastAPI(title="Scrapbook Notes API", version="0.1.0")
    app.state.notes_store = store if store is not None else build_notes_store(settings)
    app.add_exception_handler(InvalidNoteError, _invalid_note_handler)
    app.add_exception_handler(StorageUnavailableError, _storage_unavailable_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.include_router(router, prefix=settings.api_prefix)
    return app
