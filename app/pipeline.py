# app/pipeline.py
import json
import logging
import re
import secrets
import time
from datetime import datetime, timezone
from typing import Optional

import pydantic
from fastapi import FastAPI, Header, Request

from .config import Settings
from .errors import UnauthorizedError, ValidationError
from .models import ProductIn
from .store import ProductStore

logger = logging.getLogger("app.access")

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

# Request pipeline:
#   log_requests (every request)
#   -> require_api_key (POST/PUT/DELETE)
#   -> validate_product (POST/PUT)
#   -> route handler
# Any stage ends the request by raising; errors.py turns that into the response.


def register_request_logger(app: FastAPI) -> None:
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        path = request.url.path
        if request.url.query:
            path = f"{path}?{request.url.query}"
        logger.info("[%s] %s %s", datetime.now(timezone.utc).isoformat(), request.method, path)
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info("%s %s -> %d (%.1f ms)", request.method, path, response.status_code, elapsed_ms)
        return response


# ---------------------------
# Dependencies
# ---------------------------
def get_store(request: Request) -> ProductStore:
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


async def require_api_key(request: Request, x_api_key: Optional[str] = Header(None)) -> None:
    expected = get_app_settings(request).api_key
    if not x_api_key or not secrets.compare_digest(x_api_key.encode(), expected.encode()):
        raise UnauthorizedError("Unauthorized: Invalid API key")


def _reject_constant(name: str):
    # NaN, Infinity and -Infinity are not JSON
    raise ValueError(f"invalid JSON constant {name}")


async def validate_product(request: Request) -> ProductIn:
    try:
        body = json.loads(await request.body(), parse_constant=_reject_constant)
        return ProductIn.model_validate(body)
    except (ValueError, pydantic.ValidationError):
        raise ValidationError("Validation Error: Invalid product data")


def parse_positive_int(raw: Optional[str]) -> Optional[int]:
    """Lenient query int, read from the leading digits ("2abc" -> 2, "1.5" -> 1).

    Anything without a positive leading integer means "use the default".
    """
    if raw is None:
        return None
    match = _LEADING_INT.match(raw)
    if not match:
        return None
    value = int(match.group(1))
    return value if value > 0 else None
