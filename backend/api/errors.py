from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from records.errors import FaunaError, NotFoundError, StorageError, ValidationError

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: dict[type[FaunaError], int] = {
    ValidationError: 400,
    NotFoundError: 404,
    StorageError: 500,
}


def status_for(exc: FaunaError) -> int:
    for kind, status in STATUS_BY_ERROR.items():
        if isinstance(exc, kind):
            return status
    return 500


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(FaunaError)
    async def _fauna_error(request: Request, exc: FaunaError) -> JSONResponse:
        status = status_for(exc)
        if status >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=status, content={"detail": exc.message})
