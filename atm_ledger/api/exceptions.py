from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..core.errors import (
    AuthenticationError,
    InsufficientFundsError,
    LedgerError,
    NotFoundError,
    PersistenceFailure,
    ValidationError,
)


logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: tuple[tuple[type[LedgerError], int], ...] = (
    (ValidationError, 400),
    (NotFoundError, 404),
    (InsufficientFundsError, 409),
    (PersistenceFailure, 503),
)


def _status_for(exc: LedgerError) -> int:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return 500


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(LedgerError)
    async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
        status_code = _status_for(exc)
        if status_code >= 500:
            logger.warning(
                "request.failed",
                extra={"path": request.url.path, "kind": exc.kind, "detail": exc.message},
            )
        body = exc.to_dict()
        body["detail"] = body.pop("message")
        return JSONResponse(status_code=status_code, content=body)

    @app.exception_handler(AuthenticationError)
    async def authentication_error_handler(
        request: Request, exc: AuthenticationError
    ) -> JSONResponse:
        logger.info("auth.rejected", extra={"path": request.url.path})
        return JSONResponse(
            status_code=401,
            content={"detail": str(exc), "kind": "authentication"},
        )
