"""Interface layer errors and exception handlers.

Every failure leaves the API as ``{"message", "details", "refCode"}``.
Domain errors map to a status code by kind; anything unexpected becomes a
500 with a reference code that is also attached to the log record.
"""

from http import HTTPStatus

import logfire
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from roost.domain.error import DomainError, ErrorKind
from roost.domain.message import MessageBundle, MessageKey
from roost.domain.model.view import View
from roost.util.logging import new_ref_code

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: HTTPStatus.BAD_REQUEST,
    ErrorKind.NOT_FOUND: HTTPStatus.NOT_FOUND,
    ErrorKind.UNAUTHORIZED: HTTPStatus.UNAUTHORIZED,
    ErrorKind.FORBIDDEN: HTTPStatus.FORBIDDEN,
    ErrorKind.CONFLICT: HTTPStatus.CONFLICT,
    ErrorKind.INTERNAL: HTTPStatus.INTERNAL_SERVER_ERROR,
}


class ErrorResponse(View):
    """Error body."""

    message: str
    details: str | None = None
    ref_code: str | None = None


async def _bundle(request: Request) -> MessageBundle:
    return await request.app.state.dishka_container.get(MessageBundle)


def _describe(errors) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in errors
    )


def _render(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    """Map a domain error to its status code and catalog message."""
    status_code = STATUS_BY_KIND[exc.kind]
    logfire.info(
        "Request failed",
        path=request.url.path,
        kind=exc.kind.value,
        key=exc.key.value,
        status_code=int(status_code),
    )
    bundle = await _bundle(request)
    return _render(
        status_code, ErrorResponse(message=bundle.text(exc.key), details=exc.details)
    )


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed bodies, queries and form fields are 400s."""
    details = _describe(exc.errors())
    bundle = await _bundle(request)
    return _render(
        HTTPStatus.BAD_REQUEST,
        ErrorResponse(message=bundle.text(MessageKey.INVALID_REQUEST), details=details),
    )


async def handle_model_validation_error(
    request: Request, exc: PydanticValidationError
) -> JSONResponse:
    """Entity constraints rejected inside a use case are 400s too."""
    details = _describe(exc.errors())
    bundle = await _bundle(request)
    return _render(
        HTTPStatus.BAD_REQUEST,
        ErrorResponse(message=bundle.text(MessageKey.INVALID_REQUEST), details=details),
    )


async def handle_http_exception(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render framework HTTP errors (unknown routes, wrong methods) in the same shape."""
    return _render(exc.status_code, ErrorResponse(message=str(exc.detail)))


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Log the failure under a fresh reference code and hide the details."""
    ref_code = new_ref_code()
    logfire.error(
        "Unhandled error",
        ref_code=ref_code,
        path=request.url.path,
        method=request.method,
        error=str(exc),
        _exc_info=exc,
    )
    bundle = await _bundle(request)
    return _render(
        HTTPStatus.INTERNAL_SERVER_ERROR,
        ErrorResponse(
            message=bundle.text(MessageKey.INTERNAL_SERVER_ERROR), ref_code=ref_code
        ),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the handlers on ``app``."""
    app.add_exception_handler(DomainError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(PydanticValidationError, handle_model_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected_error)
