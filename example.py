"""Example usage of the BitX SDK."""

import asyncio
import os

from bitx_sdk import (
    BitXAuth,
    BitXClient,
    CcyPair,
    ErrorResponse,
    ExceptionResponse,
    LogLevel,
    UnparseableResponse,
    ValidResponse,
)


def show(label, result):
    match result:
        case ValidResponse(payload):
            print(f"{label}: {payload}")
        case ErrorResponse(error):
            print(f"{label}: BitX error {error.error_code}: {error.error}")
        case ExceptionResponse(exception):
            print(f"{label}: request failed: {exception!r}")
        case UnparseableResponse(detail, raw):
            print(f"{label}: could not parse HTTP {raw.status_code} response: {detail}")


async def main():
    client = BitXClient(log_level=LogLevel.DEBUG)

    # ========================================================================
    # Public market data
    # ========================================================================

    ticker, book = await asyncio.gather(
        client.get_ticker(CcyPair.XBTZAR),
        client.get_order_book(CcyPair.XBTZAR),
    )
    show("Ticker", ticker)
    if isinstance(book, ValidResponse):
        print(f"Best bid: {book.payload.bids[0].price if book.payload.bids else 'N/A'}")
        print(f"Best ask: {book.payload.asks[0].price if book.payload.asks else 'N/A'}")

    show("Recent trades", await client.get_trades(CcyPair.XBTZAR))

    # ========================================================================
    # Private account data (needs an API key)
    # ========================================================================

    key_id = os.environ.get("BITX_KEY_ID")
    key_secret = os.environ.get("BITX_KEY_SECRET")
    if not key_id or not key_secret:
        print("\nSet BITX_KEY_ID and BITX_KEY_SECRET to try the private endpoints.")
        return

    auth = BitXAuth(id=key_id, secret=key_secret)
    show("Balances", await client.get_balances(auth))
    show("Withdrawals", await client.get_withdrawal_requests(auth))


if __name__ == "__main__":
    asyncio.run(main())
