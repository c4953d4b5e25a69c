"""Translate domain errors into HTTP responses."""

from fastapi import Request
from fastapi.responses import JSONResponse

from inkhub.core.errors import DomainError, ErrorKind
from inkhub.core.logging import get_logger

logger = get_logger(__name__)

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.INVALID_ARGUMENT: 400,
}


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """DomainError → {"kind", "message"} + 상태 코드"""
    status_code = STATUS_BY_KIND.get(exc.kind, 400)
    logger.info(
        "%s %s -> %d %s: %s",
        request.method,
        request.url.path,
        status_code,
        exc.kind.value,
        exc.message,
    )
    return JSONResponse(status_code=status_code, content=exc.to_dict())
