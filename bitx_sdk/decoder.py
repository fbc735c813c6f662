"""Response decoder: classifies a raw result into one of the four outcome variants.

Classification order:

1. transport failure            -> ExceptionResponse
2. error envelope (any status)  -> ErrorResponse
   non-2xx status               -> ErrorResponse
3. body not the expected shape  -> UnparseableResponse
4. otherwise                    -> ValidResponse

The error envelope is checked before the payload because BitX does not always
pair its error bodies with an error status.
"""

import json
from decimal import Decimal
from typing import Any, Optional
import httpx
from pydantic import TypeAdapter, ValidationError

from .dispatcher import RawResult
from .logger import Logger, NoopLogger
from .response import (
    BitXAPIResponse,
    ErrorResponse,
    ExceptionResponse,
    UnparseableResponse,
    ValidResponse,
)
from .types import APIError

_MISSING = object()


def parse_body(raw: httpx.Response) -> Any:
    """Parse a JSON body, keeping every number with a fraction as a Decimal."""
    return json.loads(raw.content, parse_float=Decimal)


def as_error(body: Any) -> Optional[APIError]:
    """Return the error envelope in ``body``, or None if it isn't one."""
    if not isinstance(body, dict) or "error" not in body:
        return None
    try:
        return APIError.model_validate(body)
    except ValidationError:
        return None


def _status_error(raw: httpx.Response) -> APIError:
    message = raw.reason_phrase or raw.text or "HTTP error"
    return APIError(error=message, error_code=f"HTTP {raw.status_code}")


def decode(
    raw: RawResult,
    shape: Any,
    envelope: Optional[str] = None,
    logger: Optional[Logger] = None,
) -> BitXAPIResponse:
    """
    Decode ``raw`` into exactly one outcome variant.

    Args:
        raw: What the dispatcher returned
        shape: Expected payload type
        envelope: Top-level key the payload is nested under, if any
        logger: Logger instance
    """
    logger = logger or NoopLogger()

    if isinstance(raw, Exception):
        return ExceptionResponse(raw)

    try:
        body = parse_body(raw)
        parse_error = None
    except (ValueError, RecursionError) as exc:
        body = _MISSING
        parse_error = exc

    error = as_error(body)
    if error is None and not raw.is_success:
        error = _status_error(raw)
    if error is not None:
        logger.debug(f"BitX error {error.error_code}: {error.error}")
        return ErrorResponse(error)

    if parse_error is not None:
        return _unparseable(raw, f"Body is not valid JSON: {parse_error}", logger)

    if envelope is not None:
        if not isinstance(body, dict) or envelope not in body:
            return _unparseable(raw, f"Missing '{envelope}' in response body", logger)
        body = body[envelope]

    try:
        payload = TypeAdapter(shape).validate_python(body)
    except ValidationError as exc:
        return _unparseable(raw, str(exc), logger)
    return ValidResponse(payload)


def _unparseable(raw: httpx.Response, detail: str, logger: Logger) -> UnparseableResponse:
    logger.warn(f"Unparseable response (HTTP {raw.status_code}): {detail}")
    return UnparseableResponse(detail, raw)
