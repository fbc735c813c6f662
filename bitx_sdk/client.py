"""Async REST client for the BitX API."""

from datetime import datetime
from typing import Optional
import httpx

from .decoder import decode
from .dispatcher import Endpoint, dispatch, segment
from .logger import Logger, ConsoleLogger, LogLevel
from .response import BitXAPIResponse
from .types import (
    Account,
    Asset,
    Balance,
    BitcoinSendRequest,
    BitXAuth,
    CcyPair,
    FeeInfo,
    FundingAddress,
    MarketOrderRequest,
    NewAccount,
    NewWithdrawal,
    OrderQuote,
    OrderRequest,
    Orderbook,
    PrivateOrder,
    PrivateOrderWithTrades,
    PrivateTrade,
    QuoteRequest,
    RequestStatus,
    Ticker,
    Trade,
    Transaction,
    WithdrawalRequest,
)

DEFAULT_BASE_URL = "https://api.mybitx.com/api/1/"


class BitXClient:
    """
    BitX REST client.

    Every call returns one of ``ValidResponse``, ``ErrorResponse``,
    ``ExceptionResponse`` or ``UnparseableResponse``; nothing is raised except
    ``MissingCredentialError`` when a private endpoint is called without a
    credential. Credentials are passed per call and never stored.

    Example:
        ```python
        client = BitXClient()

        match await client.get_ticker(CcyPair.XBTZAR):
            case ValidResponse(ticker):
                print(ticker.bid, ticker.ask)
            case ErrorResponse(error):
                print(error.error_code)

        auth = BitXAuth(id="46793", secret="387ffBd56eEAA7C59")
        balances = await client.get_balances(auth)
        ```
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        log_level: LogLevel = LogLevel.INFO,
        logger: Optional[Logger] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: API root (e.g., "https://api.mybitx.com/api/1/")
            timeout: Request timeout in seconds
            log_level: Minimum log level for the default logger
            logger: Custom logger instance
            transport: httpx transport used for each per-call connection
            http_client: Caller-owned httpx client to reuse; never closed by the SDK
        """
        if not base_url:
            raise ValueError("base_url is required")

        self.base_url = base_url
        self.timeout = timeout
        self.logger = logger or ConsoleLogger(level=log_level)
        self._transport = transport
        self._http_client = http_client

    # Nothing to release on exit: connections are opened per call, and an
    # injected http_client belongs to the caller.
    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return None

    async def _call(self, endpoint: Endpoint, auth: Optional[BitXAuth] = None) -> BitXAPIResponse:
        raw = await dispatch(
            endpoint,
            base_url=self.base_url,
            auth=auth,
            timeout=self.timeout,
            transport=self._transport,
            http_client=self._http_client,
            logger=self.logger,
        )
        return decode(raw, endpoint.shape, endpoint.envelope, self.logger)

    # ========================================================================
    # Public - market data
    # ========================================================================

    async def get_ticker(self, pair: CcyPair) -> BitXAPIResponse[Ticker]:
        """Get the latest ticker indicators for a market."""
        return await self._call(Endpoint("GET", "ticker", Ticker, params={"pair": pair}))

    async def get_tickers(self) -> BitXAPIResponse[list[Ticker]]:
        """Get the latest ticker indicators for all active markets."""
        return await self._call(Endpoint("GET", "tickers", list[Ticker], envelope="tickers"))

    async def get_order_book(self, pair: CcyPair) -> BitXAPIResponse[Orderbook]:
        """
        Get the bids and asks in the order book.

        Asks are sorted by price ascending, bids by price descending.
        """
        return await self._call(Endpoint("GET", "orderbook", Orderbook, params={"pair": pair}))

    async def get_trades(
        self, pair: CcyPair, since: Optional[datetime] = None
    ) -> BitXAPIResponse[list[Trade]]:
        """
        Get the most recent trades for a market.

        Args:
            pair: Market
            since: Only return trades after this instant
        """
        return await self._call(
            Endpoint("GET", "trades", list[Trade], envelope="trades", params={"pair": pair, "since": since})
        )

    # ========================================================================
    # Private - orders and trades
    # ========================================================================

    async def get_all_orders(
        self,
        auth: Optional[BitXAuth],
        pair: Optional[CcyPair] = None,
        state: Optional[RequestStatus] = None,
    ) -> BitXAPIResponse[list[PrivateOrder]]:
        """
        List the account's orders, optionally filtered by market and state.

        Perm_R_Orders permission required.
        """
        endpoint = Endpoint(
            "GET",
            "listorders",
            list[PrivateOrder],
            envelope="orders",
            params={"pair": pair, "state": state},
            requires_auth=True,
        )
        return await self._call(endpoint, auth)

    async def post_order(
        self, auth: Optional[BitXAuth], request: OrderRequest
    ) -> BitXAPIResponse[str]:
        """
        Place a limit order. Returns the new order ID.

        Perm_W_Orders permission required.
        """
        endpoint = Endpoint(
            "POST", "postorder", str, envelope="order_id", body=request.to_form(), requires_auth=True
        )
        return await self._call(endpoint, auth)

    async def post_market_order(
        self, auth: Optional[BitXAuth], request: MarketOrderRequest
    ) -> BitXAPIResponse[str]:
        """
        Place a market order. Returns the new order ID.

        Perm_W_Orders permission required.
        """
        endpoint = Endpoint(
            "POST", "marketorder", str, envelope="order_id", body=request.to_form(), requires_auth=True
        )
        return await self._call(endpoint, auth)

    async def stop_order(self, auth: Optional[BitXAuth], order_id: str) -> BitXAPIResponse[bool]:
        """
        Request that an order be cancelled.

        Perm_W_Orders permission required.
        """
        endpoint = Endpoint(
            "POST", "stoporder", bool, envelope="success", body={"order_id": order_id}, requires_auth=True
        )
        return await self._call(endpoint, auth)

    async def get_order(
        self, auth: Optional[BitXAuth], order_id: str
    ) -> BitXAPIResponse[PrivateOrderWithTrades]:
        """
        Get an order and the trades that filled it.

        Perm_R_Orders permission required.
        """
        endpoint = Endpoint(
            "GET", f"orders/{segment(order_id)}", PrivateOrderWithTrades, requires_auth=True
        )
        return await self._call(endpoint, auth)

    async def get_all_own_trades(
        self,
        auth: Optional[BitXAuth],
        pair: CcyPair,
        since: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> BitXAPIResponse[list[PrivateTrade]]:
        """
        List the account's trades in a market, oldest first.

        Args:
            auth: Credential
            pair: Market
            since: Only return trades at or after this instant
            limit: Maximum number of trades to return

        Perm_R_Orders permission required.
        """
        endpoint = Endpoint(
            "GET",
            "listtrades",
            list[PrivateTrade],
            envelope="trades",
            params={"pair": pair, "since": since, "limit": limit},
            requires_auth=True,
        )
        return await self._call(endpoint, auth)

    async def get_fee_info(self, auth: Optional[BitXAuth], pair: CcyPair) -> BitXAPIResponse[FeeInfo]:
        """
        Get the fees and 30-day volume for a market.

        Perm_R_Orders permission required.
        """
        endpoint = Endpoint("GET", "fee_info", FeeInfo, params={"pair": pair}, requires_auth=True)
        return await self._call(endpoint, auth)

    # ========================================================================
    # Private - accounts and balances
    # ========================================================================

    async def get_balances(self, auth: Optional[BitXAuth]) -> BitXAPIResponse[list[Balance]]:
        """
        Get the balances of all accounts.

        Perm_R_Balance permission required.
        """
        endpoint = Endpoint("GET", "balance", list[Balance], envelope="balance", requires_auth=True)
        return await self._call(endpoint, auth)

    async def create_account(
        self, auth: Optional[BitXAuth], request: NewAccount
    ) -> BitXAPIResponse[Account]:
        """
        Create an additional account for a currency.

        Perm_W_Addresses permission required.
        """
        endpoint = Endpoint("POST", "accounts", Account, body=request.to_form(), requires_auth=True)
        return await self._call(endpoint, auth)

    async def get_transactions(
        self, auth: Optional[BitXAuth], account_id: str, min_row: int, max_row: int
    ) -> BitXAPIResponse[list[Transaction]]:
        """
        Get a range of an account's transactions.

        Rows are numbered from 1; negative values count back from the latest
        row. At most 1000 rows can be requested at once.

        Perm_R_Transactions permission required.
        """
        endpoint = Endpoint(
            "GET",
            f"accounts/{segment(account_id)}/transactions",
            list[Transaction],
            envelope="transactions",
            params={"min_row": min_row, "max_row": max_row},
            requires_auth=True,
        )
        return await self._call(endpoint, auth)

    async def get_pending_transactions(
        self, auth: Optional[BitXAuth], account_id: str
    ) -> BitXAPIResponse[list[Transaction]]:
        """
        Get an account's pending transactions.

        Perm_R_Transactions permission required.
        """
        endpoint = Endpoint(
            "GET",
            f"accounts/{segment(account_id)}/pending",
            list[Transaction],
            envelope="pending",
            requires_auth=True,
        )
        return await self._call(endpoint, auth)

    # ========================================================================
    # Private - receive addresses
    # ========================================================================

    async def get_funding_address(
        self, auth: Optional[BitXAuth], asset: Asset, address: Optional[str] = None
    ) -> BitXAPIResponse[FundingAddress]:
        """
        Get the default receive address for an asset, or a specific one.

        Perm_R_Addresses permission required.
        """
        endpoint = Endpoint(
            "GET",
            "funding_address",
            FundingAddress,
            params={"asset": asset, "address": address},
            requires_auth=True,
        )
        return await self._call(endpoint, auth)

    async def new_funding_address(
        self, auth: Optional[BitXAuth], asset: Asset
    ) -> BitXAPIResponse[FundingAddress]:
        """
        Allocate a new receive address for an asset.

        Perm_W_Addresses permission required.
        """
        endpoint = Endpoint(
            "POST", "funding_address", FundingAddress, body={"asset": asset.value}, requires_auth=True
        )
        return await self._call(endpoint, auth)

    # ========================================================================
    # Private - withdrawals and sends
    # ========================================================================

    async def get_withdrawal_requests(
        self, auth: Optional[BitXAuth]
    ) -> BitXAPIResponse[list[WithdrawalRequest]]:
        """
        List withdrawal requests.

        Perm_R_Withdrawals permission required.
        """
        endpoint = Endpoint(
            "GET", "withdrawals", list[WithdrawalRequest], envelope="withdrawals", requires_auth=True
        )
        return await self._call(endpoint, auth)

    async def new_withdrawal_request(
        self, auth: Optional[BitXAuth], request: NewWithdrawal
    ) -> BitXAPIResponse[WithdrawalRequest]:
        """
        Request a withdrawal.

        Perm_W_Withdrawals permission required.
        """
        endpoint = Endpoint(
            "POST", "withdrawals", WithdrawalRequest, body=request.to_form(), requires_auth=True
        )
        return await self._call(endpoint, auth)

    async def get_withdrawal_request(
        self, auth: Optional[BitXAuth], withdrawal_id: str
    ) -> BitXAPIResponse[WithdrawalRequest]:
        """
        Get the status of a withdrawal request.

        Perm_R_Withdrawals permission required.
        """
        endpoint = Endpoint(
            "GET", f"withdrawals/{segment(withdrawal_id)}", WithdrawalRequest, requires_auth=True
        )
        return await self._call(endpoint, auth)

    async def send_to_address(
        self, auth: Optional[BitXAuth], request: BitcoinSendRequest
    ) -> BitXAPIResponse[bool]:
        """
        Send bitcoin to a bitcoin address or email address.

        Perm_W_Send permission required.
        """
        endpoint = Endpoint(
            "POST", "send", bool, envelope="success", body=request.to_form(), requires_auth=True
        )
        return await self._call(endpoint, auth)

    # ========================================================================
    # Private - quotes
    # ========================================================================

    async def create_quote(
        self, auth: Optional[BitXAuth], request: QuoteRequest
    ) -> BitXAPIResponse[OrderQuote]:
        """
        Lock in a quote to buy or sell at a fixed price for a short time.

        Perm_R_Orders and Perm_W_Orders permissions required.
        """
        endpoint = Endpoint("POST", "quotes", OrderQuote, body=request.to_form(), requires_auth=True)
        return await self._call(endpoint, auth)

    async def get_quote(self, auth: Optional[BitXAuth], quote_id: str) -> BitXAPIResponse[OrderQuote]:
        """Get a quote by ID. Perm_R_Orders permission required."""
        endpoint = Endpoint("GET", f"quotes/{segment(quote_id)}", OrderQuote, requires_auth=True)
        return await self._call(endpoint, auth)

    async def exercise_quote(
        self, auth: Optional[BitXAuth], quote_id: str
    ) -> BitXAPIResponse[OrderQuote]:
        """
        Exercise a quote, executing the trade at the locked price.

        Perm_W_Orders permission required.
        """
        endpoint = Endpoint("PUT", f"quotes/{segment(quote_id)}", OrderQuote, requires_auth=True)
        return await self._call(endpoint, auth)

    async def discard_quote(
        self, auth: Optional[BitXAuth], quote_id: str
    ) -> BitXAPIResponse[OrderQuote]:
        """Discard a quote. Perm_W_Orders permission required."""
        endpoint = Endpoint("DELETE", f"quotes/{segment(quote_id)}", OrderQuote, requires_auth=True)
        return await self._call(endpoint, auth)
