from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from blogs import router as blogs_router
from blogs.schemas import BlogValidationError
from core import db
from core.responses import EscapedJSONResponse
from core.settings import Settings, load_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # The table must exist before the first request is accepted; a failure
    # here aborts startup.
    await db.init_schema(app.state.settings)
    logger.info("starting port=%s", app.state.settings.port)
    yield


def _error_response(exc: Exception) -> EscapedJSONResponse:
    # Every handled failure maps to 500, validation errors included.
    return EscapedJSONResponse(
        status_code=500,
        content={"success": False, "message": str(exc)},
    )


async def _validation_error_handler(request: Request, exc: BlogValidationError) -> EscapedJSONResponse:
    logger.warning("request_invalid path=%s error=%s", request.url.path, exc)
    return _error_response(exc)


async def _database_error_handler(request: Request, exc: db.DatabaseError) -> EscapedJSONResponse:
    logger.error("request_failed path=%s error=%s", request.url.path, exc)
    return _error_response(exc)


async def _unexpected_error_handler(request: Request, exc: Exception) -> EscapedJSONResponse:
    logger.exception("request_crashed path=%s", request.url.path, exc_info=exc)
    return _error_response(exc)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()

    app = FastAPI(lifespan=lifespan, default_response_class=EscapedJSONResponse)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(BlogValidationError, _validation_error_handler)
    app.add_exception_handler(db.DatabaseError, _database_error_handler)
    app.add_exception_handler(Exception, _unexpected_error_handler)

    app.include_router(blogs_router.router, tags=["blogs"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app


app = create_app()


def run() -> None:
    settings = app.state.settings
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
