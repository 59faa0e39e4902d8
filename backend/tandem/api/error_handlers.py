"""Error Handlers — render every failure as the TandemError envelope.

Invariants:
    - Domain errors, schema validation failures and unexpected exceptions all
      produce {"error": {code, message, category, severity, timestamp, context}}
    - Validation failures add `details`: one {field, message, type} per problem
    - Unexpected exceptions become INTERNAL_ERROR (500); the original message
      and traceback go to the log only
    - 4xx are logged at WARNING, 5xx at ERROR, tagged with the error context
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from tandem.core.errors import InternalError, InvalidRequestError, TandemError
from tandem.infrastructure.observability import context_extra

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    app.add_exception_handler(TandemError, handle_tandem_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)


def render_error(request: Request, exc: TandemError) -> JSONResponse:
    log = logger.error if exc.http_status >= 500 else logger.warning
    log(
        f"{exc.code}: {exc.message}",
        extra=context_extra(
            exc.context, error_code=exc.code, path=request.url.path,
        ),
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def handle_tandem_error(request: Request, exc: TandemError) -> JSONResponse:
    return render_error(request, exc)


async def handle_validation_error(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    return render_error(request, InvalidRequestError(details))


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled exception on {request.url.path}: {exc}",
        exc_info=exc,
    )
    return render_error(request, InternalError())
