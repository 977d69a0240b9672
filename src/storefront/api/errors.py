"""Translate domain and request errors into JSON responses.

Every error body has the shape ``{"message": str, "error": ...}`` where
``message`` is a human-readable summary and ``error`` carries the
structured detail when there is any.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from pydantic.alias_generators import to_camel
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.identity.user.authentication import AuthenticationError
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def flatten_messages(messages) -> str:
    """Collapse Protean's ``{field: [messages]}`` mapping into one line.

    Bare field messages such as ``is required`` get the field name in front;
    sentences and messages that already name the field are left as they are.
    """
    if not isinstance(messages, dict):
        return str(messages)

    parts = []
    for field, value in messages.items():
        for message in value if isinstance(value, list | tuple) else [value]:
            message = str(message)
            names_field = message.startswith((field, to_camel(field)))
            if message[:1].islower() and not field.startswith("_") and not names_field:
                message = f"{field}: {message}"
            parts.append(message)
    return "; ".join(parts)


def error_response(status_code: int, message: str, error=None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message, "error": error})


async def _validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    logger.info("request_rejected", path=request.url.path, errors=exc.messages)
    return error_response(400, flatten_messages(exc.messages), exc.messages)


async def _value_error(request: Request, exc: ValueError) -> JSONResponse:
    logger.info("request_rejected", path=request.url.path, error=str(exc))
    return error_response(400, str(exc))


async def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg")}
        for err in exc.errors()
    ]
    message = "; ".join(f"{'.'.join(d['loc'][1:]) or 'body'}: {d['msg']}" for d in details)
    logger.info("request_rejected", path=request.url.path, errors=details)
    return error_response(400, message, details)


async def _not_found(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    # ObjectNotFoundError carries its detail positionally; it has no ``messages``
    return error_response(404, flatten_messages(exc.args[0] if exc.args else "Not found"))


async def _unauthenticated(request: Request, exc: AuthenticationError) -> JSONResponse:
    return error_response(401, exc.message)


async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail))


async def _unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled_request_error", path=request.url.path, method=request.method, exc_info=exc)
    return error_response(500, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(ValueError, _value_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(ObjectNotFoundError, _not_found)
    app.add_exception_handler(AuthenticationError, _unauthenticated)
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(Exception, _unexpected)
