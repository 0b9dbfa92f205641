"""
blogapi.api.errors

Rendering of RPC failures as HTTP responses.

Responsibilities:
- Map `StatusCode` onto HTTP status codes.
- Render `RpcError` and request validation failures as `{code, message, details}`.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status as http

from blogapi.rpc.status import RpcError, StatusCode

HTTP_STATUS: dict[StatusCode, int] = {
    StatusCode.OK: http.HTTP_200_OK,
    StatusCode.CANCELLED: 499,  # client closed request
    StatusCode.UNKNOWN: http.HTTP_500_INTERNAL_SERVER_ERROR,
    StatusCode.INVALID_ARGUMENT: http.HTTP_400_BAD_REQUEST,
    StatusCode.DEADLINE_EXCEEDED: http.HTTP_504_GATEWAY_TIMEOUT,
    StatusCode.NOT_FOUND: http.HTTP_404_NOT_FOUND,
    StatusCode.INTERNAL: http.HTTP_500_INTERNAL_SERVER_ERROR,
    StatusCode.UNAVAILABLE: http.HTTP_503_SERVICE_UNAVAILABLE,
}


def rpc_error_response(err: RpcError) -> JSONResponse:
    return JSONResponse(status_code=HTTP_STATUS[err.code], content=err.to_dict())


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(RpcError)
    async def _rpc_error(_: Request, exc: RpcError) -> JSONResponse:
        return rpc_error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def _validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        # Malformed bodies are a caller error, same as a malformed id.
        first = exc.errors()[0] if exc.errors() else {}
        message = str(first.get("msg", "invalid request"))
        return rpc_error_response(RpcError(StatusCode.INVALID_ARGUMENT, message))
