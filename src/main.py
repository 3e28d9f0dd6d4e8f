# path: src/main.py
from __future__ import annotations

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import ORJSONResponse
from sqlalchemy.exc import DataError, IntegrityError, InterfaceError, OperationalError

from src.app_logging import get_logger
from src.core.api import router as api_router
from src.core.config import settings
from src.core.exceptions import (
    BackingStoreUnavailableError,
    ConstraintViolationError,
    InvalidValueError,
    WasteBankError,
)
from src.core.schemas.common import ErrorBody, ErrorResponse
from src.core.models.db_helper import db_helper


log = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup
    yield
    # shutdown
    await db_helper.dispose()


def _error_response(exc: WasteBankError) -> ORJSONResponse:
    return ORJSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=ErrorBody(**exc.to_dict())).model_dump(mode="json"),
    )


async def waste_bank_error_handler(request: Request, exc: WasteBankError) -> ORJSONResponse:
    log.info(
        {
            "event": "request_rejected",
            "path": request.url.path,
            "code": exc.code,
            "status": exc.status_code,
        }
    )
    return _error_response(exc)


async def backing_store_error_handler(request: Request, exc: Exception) -> ORJSONResponse:
    log.error(
        {
            "event": "backing_store_unavailable",
            "path": request.url.path,
            "error": type(exc).__name__,
        }
    )
    return _error_response(BackingStoreUnavailableError())


async def integrity_error_handler(request: Request, exc: IntegrityError) -> ORJSONResponse:
    log.warning({"event": "constraint_violation", "path": request.url.path, "error": str(exc.orig)})
    return _error_response(ConstraintViolationError())


async def data_error_handler(request: Request, exc: DataError) -> ORJSONResponse:
    log.warning({"event": "invalid_value", "path": request.url.path, "error": str(exc.orig)})
    return _error_response(InvalidValueError())


def create_app() -> FastAPI:
    app = FastAPI(
        title="Waste Bank API",
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
    )

    app.add_exception_handler(WasteBankError, waste_bank_error_handler)
    # ошибки данных - вина запроса, обрыв соединения - 503
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(DataError, data_error_handler)
    app.add_exception_handler(OperationalError, backing_store_error_handler)
    app.add_exception_handler(InterfaceError, backing_store_error_handler)
    app.add_exception_handler(TimeoutError, backing_store_error_handler)

    app.include_router(api_router)
    return app


# Экспортируемый объект приложения
main_app = create_app()


if __name__ == "__main__":
    # Запуск: python -m src.main  (или uvicorn src.main:main_app --reload)
    uvicorn.run(
        "src.main:main_app",
        host=settings.run.host,
        port=settings.run.port,
        reload=True,
    )
