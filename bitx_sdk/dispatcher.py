"""Request dispatcher: turns an endpoint description into exactly one HTTP call."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional, Union
from urllib.parse import quote
import httpx

from .exceptions import MissingCredentialError
from .logger import Logger, NoopLogger
from .types import BitXAuth, plain, to_millis

RawResult = Union[httpx.Response, httpx.HTTPError]


@dataclass(frozen=True)
class Endpoint:
    """
    Static description of one API call.

    Attributes:
        method: HTTP method
        path: Path relative to the API root, with caller input already escaped
        shape: Expected payload type, e.g. ``Ticker`` or ``list[Ticker]``
        envelope: Top-level JSON key the payload is nested under, if any
        params: Query parameters (``None`` values are dropped)
        body: Form fields for POST/PUT
        requires_auth: Whether a credential must be supplied
    """

    method: str
    path: str
    shape: Any
    envelope: Optional[str] = None
    params: Optional[Mapping[str, Any]] = None
    body: Optional[Mapping[str, str]] = None
    requires_auth: bool = False


def segment(value: str) -> str:
    """Escape caller input for use as a single path segment."""
    return quote(str(value), safe="")


def encode_param(value: Any) -> str:
    """Render a query parameter the way BitX expects it."""
    if isinstance(value, datetime):
        return str(to_millis(value))
    if isinstance(value, bool):
        return "true" if value else "false"
    return plain(value)


def build_url(base_url: str, path: str) -> str:
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def _query(params: Optional[Mapping[str, Any]]) -> Optional[dict[str, str]]:
    if not params:
        return None
    return {key: encode_param(value) for key, value in params.items() if value is not None}


async def _send(
    session: httpx.AsyncClient,
    endpoint: Endpoint,
    url: str,
    auth: Optional[BitXAuth],
) -> httpx.Response:
    basic = httpx.BasicAuth(auth.id, auth.secret.get_secret_value()) if auth else None
    if endpoint.method in ("POST", "PUT"):
        return await session.request(
            endpoint.method,
            url,
            params=_query(endpoint.params),
            data=dict(endpoint.body or {}),
            auth=basic,
        )
    return await session.request(endpoint.method, url, params=_query(endpoint.params), auth=basic)


async def dispatch(
    endpoint: Endpoint,
    *,
    base_url: str,
    auth: Optional[BitXAuth] = None,
    timeout: float = 30.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    http_client: Optional[httpx.AsyncClient] = None,
    logger: Optional[Logger] = None,
) -> RawResult:
    """
    Issue a single request for ``endpoint`` and return the raw outcome.

    Transport failures are returned, not raised, so the decoder can classify
    them. Nothing is retried.

    Args:
        endpoint: What to call
        base_url: API root, e.g. "https://api.mybitx.com/api/1/"
        auth: Credential for private endpoints
        timeout: Transport timeout in seconds
        transport: Transport for a per-call client (ignored with ``http_client``)
        http_client: Caller-owned client to reuse; never closed here
        logger: Logger instance

    Raises:
        MissingCredentialError: ``endpoint`` requires auth and none was given
    """
    if endpoint.requires_auth and auth is None:
        raise MissingCredentialError(endpoint.path)

    logger = logger or NoopLogger()
    url = build_url(base_url, endpoint.path)
    logger.debug(f"{endpoint.method} {url}")

    try:
        if http_client is not None:
            return await _send(http_client, endpoint, url, auth)
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as session:
            return await _send(session, endpoint, url, auth)
    except httpx.HTTPError as exc:
        logger.warn(f"{endpoint.method} {url} failed: {exc!r}")
        return exc
