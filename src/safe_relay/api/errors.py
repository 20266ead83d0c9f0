"""Error-to-response mapping."""

import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from safe_relay.errors import NotSponsoredError, RelayError, UpstreamError

logger = logging.getLogger(__name__)


@contextmanager
def upstream_errors(operation: str) -> Iterator[None]:
    """Let RelayError through and wrap anything else as UpstreamError."""
    try:
        yield
    except RelayError:
        raise
    except Exception as e:
        logger.error(f"{operation}: {e}", exc_info=True)
        raise UpstreamError(str(e)) from e


async def relay_error_handler(request: Request, exc: RelayError) -> Response:
    if isinstance(exc, NotSponsoredError):
        return PlainTextResponse(exc.message, status_code=exc.status_code)
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> Response:
    errors = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    return JSONResponse(status_code=400, content={"message": f"Invalid request: {errors}"})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RelayError, relay_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
