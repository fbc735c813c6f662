"""Outcome variants returned by every BitX API call."""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union
import httpx

from .types import APIError

T = TypeVar("T")


@dataclass(frozen=True)
class ValidResponse(Generic[T]):
    """The call succeeded and the body decoded into the expected record."""

    payload: T


@dataclass(frozen=True)
class ErrorResponse:
    """BitX reported an error instead of returning the requested data."""

    error: APIError


@dataclass(frozen=True)
class ExceptionResponse:
    """The call failed below the HTTP layer (connection, timeout, protocol)."""

    exception: Exception


@dataclass(frozen=True)
class UnparseableResponse:
    """
    The body was neither the expected record nor an error envelope.

    The raw response is kept so callers can inspect what BitX actually sent.
    """

    detail: str
    raw: httpx.Response


BitXAPIResponse = Union[ValidResponse[T], ErrorResponse, ExceptionResponse, UnparseableResponse]
