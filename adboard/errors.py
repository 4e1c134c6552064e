"""
Status envelopes for everything that is not a success payload.

Every error leaves the service as ``{"status_code": "<code>",
"status_message": "<reason>"}`` with the same HTTP status.  Framework-level
failures (unknown path, wrong method, undecodable or invalid body) are
turned into envelopes by the handlers installed here; routers build their
own envelopes for operation failures through ``envelope``.
"""
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError
from starlette.exceptions import HTTPException as StarletteHTTPException

from adboard.schemas import StatusEnvelope

INVALID_JSON = "Invalid JSON format"
WRONG_PARAMETERS = "Wrong or missed parameters"
METHOD_NOT_ALLOWED = "Method not allowed: use POST"
NOT_FOUND = "Not found"


def envelope(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    body = StatusEnvelope(status_code=str(status_code), status_message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump(), headers=headers)


def storage_error_message(exc: Exception) -> str:
    """Return the driver's own message for *exc* when there is one."""
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig)
    return str(exc)


# Errors meaning a field holds a JSON value of the wrong type, e.g. a string id.
_TYPE_ERRORS = frozenset(
    {"int_type", "float_type", "bool_type", "string_type", "list_type", "enum_type"}
)


def _is_undecodable_body(exc: RequestValidationError) -> bool:
    # A body that is not JSON, is missing, or is not an object fails at the
    # "body" location itself rather than at one of its fields.
    for error in exc.errors():
        if error.get("type") == "json_invalid" or tuple(error.get("loc", ())) == ("body",):
            return True
        if error.get("type") in _TYPE_ERRORS:
            return True
    return False


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = INVALID_JSON if _is_undecodable_body(exc) else WRONG_PARAMETERS
    return envelope(400, message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        message = NOT_FOUND
    elif exc.status_code == 405:
        message = METHOD_NOT_ALLOWED
    else:
        message = str(exc.detail)
    return envelope(exc.status_code, message, headers=getattr(exc, "headers", None))


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
