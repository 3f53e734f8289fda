"""Error envelope for the gateway: ``{"error": ..., "details": ...}`` with a 4xx/5xx status."""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from issue_gateway.schemas.issues import ErrorResponse


class GatewayError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, error: str, details: str | None = None) -> None:
        super().__init__(error)
        self.error = error
        self.details = details


class InvalidRequestError(GatewayError):
    """Missing or malformed input detected before any upstream call."""

    status_code = status.HTTP_400_BAD_REQUEST


class UpstreamRequestError(GatewayError):
    """The upstream GitHub call failed. Every upstream failure maps to 500."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(exc: GatewayError) -> JSONResponse:
    body = ErrorResponse(error=exc.error, details=exc.details)
    return JSONResponse(body.model_dump(exclude_none=True), status_code=exc.status_code)


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(GatewayError)
    async def _gateway_error(request: Request, exc: GatewayError) -> JSONResponse:
        return error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return error_response(InvalidRequestError("Invalid request", details=_format_validation_errors(exc)))
