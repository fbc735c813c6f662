"""Exceptions raised for caller-side contract violations.

API errors, transport failures and unparseable bodies are never raised; they
are returned as outcome variants (see ``bitx_sdk.response``).
"""


class BitXClientError(Exception):
    """Base class for errors raised by the BitX SDK."""


class MissingCredentialError(BitXClientError, ValueError):
    """A private endpoint was called without a BitXAuth."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Endpoint '{path}' requires authentication but no credential was supplied")
