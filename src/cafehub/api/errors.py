"""Exception-to-HTTP mapping for the CafeHub API."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ExpectedVersionError, ObjectNotFoundError
from protean.integrations.fastapi import register_exception_handlers as register_protean_handlers

from cafehub.shared.errors import ForbiddenError


def _detail(exc: Exception):
    return getattr(exc, "messages", None) or str(exc)


async def _not_found(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": _detail(exc)})


async def _forbidden(request: Request, exc: ForbiddenError) -> JSONResponse:
    return JSONResponse(status_code=403, content={"detail": exc.message})


async def _conflict(request: Request, exc: ExpectedVersionError) -> JSONResponse:
    return JSONResponse(status_code=409, content={"detail": _detail(exc)})


def register_exception_handlers(app: FastAPI) -> None:
    """Protean's handlers plus not-found (404), forbidden (403) and version conflict (409)."""
    register_protean_handlers(app)
    app.add_exception_handler(ObjectNotFoundError, _not_found)
    app.add_exception_handler(ForbiddenError, _forbidden)
    app.add_exception_handler(ExpectedVersionError, _conflict)
