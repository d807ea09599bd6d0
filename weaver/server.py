"""
Insight Weaver API Server

FastAPI application providing endpoints for:
- Feed management (subscribe, edit, refresh)
- Articles (list, read/archive, summarize, embed, similarity search)
- Workspace curation and export
- Reports built from the workspace, with json/html/csv export
- Settings and statistics
"""

import logging
from contextlib import asynccontextmanager
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .ai import configure_ai
from .config import config, configure_logging, state
from .database import Database
from .feeds import FeedParser
from .fetcher import FeedFetcher
from .scheduler import FeedRefreshScheduler
from .routes import (
    articles_router,
    feeds_router,
    misc_router,
    reports_router,
    settings_router,
    workspace_router,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize and cleanup application resources."""
    # Startup - skip if already initialized (e.g., by tests)
    if state.db is None:
        configure_logging()
        config.DB_PATH.parent.mkdir(parents=True, exist_ok=True)
        state.db = Database(config.DB_PATH)
        state.feed_parser = FeedParser()
        state.feed_fetcher = FeedFetcher(state.db, state.feed_parser)

        # LLM provider, summarizer and search index
        configure_ai(state.db)

        if config.ENABLE_SCHEDULER:
            state.scheduler = FeedRefreshScheduler(state.db)
            await state.scheduler.start()

    yield

    # Shutdown
    if state.scheduler:
        try:
            await state.scheduler.stop()
        except Exception as e:
            logger.warning(f"Error stopping scheduler: {e}")


# ─────────────────────────────────────────────────────────────
# Error Handlers
# ─────────────────────────────────────────────────────────────

def _error_body(status_code: int, error: str | None, message) -> dict:
    return {
        "error": error or HTTPStatus(status_code).phrase,
        "message": message if isinstance(message, str) else str(message),
    }


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors as ``{error, message}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.status_code, getattr(exc, "error", None), exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies and query parameters are client errors (400)."""
    first = exc.errors()[0] if exc.errors() else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    if location:
        message = f"{location}: {message}"
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request", "message": message},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "message": str(exc) or "Unknown error"},
    )


def setup_error_handlers(app: FastAPI):
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


app = FastAPI(
    title="Insight Weaver API",
    version="1.0.0",
    lifespan=lifespan
)

setup_error_handlers(app)

# Include routers
app.include_router(misc_router)
app.include_router(feeds_router)
app.include_router(articles_router)
app.include_router(workspace_router)
app.include_router(reports_router)
app.include_router(settings_router)


def main():
    """Run the API with uvicorn."""
    import uvicorn

    uvicorn.run("weaver.server:app", host="0.0.0.0", port=config.PORT)


if __name__ == "__main__":
    main()
