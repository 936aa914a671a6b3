import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from app.api.middleware.error_handler import (
    handle_generic_error,
    handle_ledger_error,
    handle_validation_error,
)
from app.api.middleware.logging import RequestLoggingMiddleware
from app.api.v1 import router as v1_router
from app.api.v1.health import router as health_router
from app.config import settings
from app.core.exceptions import LedgerError
from app.core.logging_setup import setup_logging
from app.db.session import create_all

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    if settings.db_create_all:
        await create_all()
    settings.upload_folder.mkdir(parents=True, exist_ok=True)
    logger.info("Ledger API started", extra={"path": str(settings.upload_folder)})
    yield
    # Shutdown


def create_app() -> FastAPI:
    setup_logging(settings.log_level, json_output=settings.log_json)

    app = FastAPI(
        title="Finance Ledger API",
        description="Personal finance ledger with CSV import",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(RequestLoggingMiddleware)

    # Register exception handlers (order matters - most specific first)
    app.add_exception_handler(LedgerError, handle_ledger_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_generic_error)

    app.include_router(health_router)
    app.include_router(v1_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=settings.host, port=settings.port)
