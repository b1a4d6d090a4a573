"""Render service errors and request validation failures as problem details."""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from tournaments.errors import StorageFailureError, TournamentsError

logger = logging.getLogger("tournaments.api")


def problem(status: int, title: str, detail: str, **extra) -> JSONResponse:
    body = {"type": "about:blank", "title": title, "status": status, "detail": detail, **extra}
    return JSONResponse(jsonable_encoder(body), status_code=status)


async def tournaments_error_handler(request: Request, exc: TournamentsError) -> JSONResponse:
    if isinstance(exc, StorageFailureError):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
    return problem(exc.status_code, exc.title, exc.detail)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies are client errors (400), not FastAPI's default 422."""
    errors = exc.errors()
    detail = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()) if p != 'body')}: {err.get('msg')}" for err in errors
    )
    summary = [{"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")} for err in errors]
    return problem(400, "One or more validation errors occurred.", detail, errors=summary)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TournamentsError, tournaments_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
