"""Type definitions for the BitX SDK.

Every record is an immutable pydantic model. Monetary and volume fields are
``Decimal``; timestamps arrive from BitX as epoch milliseconds and are decoded
to timezone-aware UTC datetimes.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, Optional
from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field, SecretStr


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def from_millis(value: Any) -> datetime:
    """Decode an epoch-millisecond value into a UTC datetime."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, bool):
        raise ValueError("expected epoch milliseconds, got a boolean")
    if isinstance(value, str) and value.isdigit():
        value = int(value)
    if isinstance(value, (int, Decimal)):
        try:
            return EPOCH + timedelta(milliseconds=int(value))
        except (OverflowError, OSError) as exc:
            raise ValueError(f"epoch milliseconds out of range: {value!r}") from exc
    raise ValueError(f"expected epoch milliseconds, got {value!r}")


def to_millis(value: datetime) -> int:
    """Encode a datetime as epoch milliseconds (naive datetimes are taken as UTC)."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return (value - EPOCH) // timedelta(milliseconds=1)


def plain(value: Any) -> str:
    """Render a form or query value without exponent notation."""
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, Decimal):
        return format(value, "f")
    return str(value)


def _millis_or_none(value: Any) -> Optional[datetime]:
    # BitX reports unset timestamps as 0
    if value is None or value == 0 or value == "0":
        return None
    return from_millis(value)


def _blank_to_none(value: Any) -> Any:
    if value == "":
        return None
    return value


Timestamp = Annotated[datetime, BeforeValidator(from_millis)]
OptionalTimestamp = Annotated[Optional[datetime], BeforeValidator(_millis_or_none)]
OptionalDecimal = Annotated[Optional[Decimal], BeforeValidator(_blank_to_none)]


# ============================================================================
# Enums
# ============================================================================


class CcyPair(str, Enum):
    """A currency pair traded on BitX."""

    XBTZAR = "XBTZAR"
    XBTNAD = "XBTNAD"
    ZARXBT = "ZARXBT"
    NADXBT = "NADXBT"
    XBTKES = "XBTKES"
    KESXBT = "KESXBT"
    XBTMYR = "XBTMYR"
    MYRXBT = "MYRXBT"


class Asset(str, Enum):
    """A tradeable asset. Essentially, a currency."""

    ZAR = "ZAR"
    NAD = "NAD"
    XBT = "XBT"
    KES = "KES"
    MYR = "MYR"


class OrderType(str, Enum):
    """Order type: ASK is a request to sell, BID a request to buy."""

    ASK = "ASK"
    BID = "BID"


class RequestStatus(str, Enum):
    """
    State of a placed order or withdrawal request.

    An order stays PENDING while it is partially filled and moves to COMPLETE
    once it has been filled entirely.
    """

    PENDING = "PENDING"
    COMPLETE = "COMPLETE"
    CANCELLED = "CANCELLED"


class WithdrawalType(str, Enum):
    """Withdrawal method."""

    ZAR_EFT = "ZAR_EFT"
    NAD_EFT = "NAD_EFT"
    KES_MPESA = "KES_MPESA"
    MYR_IBG = "MYR_IBG"
    IDR_LLG = "IDR_LLG"


class QuoteType(str, Enum):
    """Quote direction."""

    BUY = "BUY"
    SELL = "SELL"


# ============================================================================
# Base
# ============================================================================


class BitXModel(BaseModel):
    """Base for all BitX records."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class RequestModel(BitXModel):
    """Base for records sent to BitX as form fields."""

    def to_form(self) -> dict[str, str]:
        """Serialize to the form fields BitX expects."""
        fields = self.model_dump(by_alias=True, exclude_none=True)
        return {key: plain(value) for key, value in fields.items()}


# ============================================================================
# Auth and errors
# ============================================================================


class BitXAuth(BitXModel):
    """API key pair used for HTTP Basic authentication on private endpoints."""

    id: str
    secret: SecretStr


class APIError(BitXModel):
    """
    Error reported by BitX instead of the requested data.

    The error code space is not documented, so codes are plain strings.
    """

    error: str
    error_code: str = Field(validation_alias=AliasChoices("error_code", "errorCode"))


# ============================================================================
# Market data
# ============================================================================


class Ticker(BitXModel):
    """Latest ticker indicators for a market."""

    timestamp: Timestamp
    bid: OptionalDecimal = None
    ask: OptionalDecimal = None
    last_trade: OptionalDecimal = None
    rolling_24_hour_volume: Decimal
    pair: CcyPair


class Order(BitXModel):
    """A single order in the public order book."""

    volume: Decimal
    price: Decimal


Bid = Order
Ask = Order


class Orderbook(BitXModel):
    """
    Public order book.

    Asks are sorted by price ascending, bids by price descending. Orders at the
    same price are not necessarily conflated.
    """

    timestamp: Timestamp
    bids: list[Bid]
    asks: list[Ask]


class Trade(BitXModel):
    """A public trade."""

    timestamp: Timestamp
    volume: Decimal
    price: Decimal
    is_buy: Optional[bool] = None


# ============================================================================
# Orders and trades
# ============================================================================


class PrivateOrder(BitXModel):
    """An order placed by the account, with fee and fill details."""

    id: str = Field(alias="order_id")
    base: Decimal
    counter: Decimal
    creation_timestamp: Timestamp
    expiration_timestamp: OptionalTimestamp = None
    completed_timestamp: OptionalTimestamp = None
    fee_base: Decimal
    fee_counter: Decimal
    limit_price: Decimal
    limit_volume: Decimal
    pair: CcyPair
    state: RequestStatus
    order_type: OrderType = Field(alias="type")


class PrivateOrderWithTrades(PrivateOrder):
    """A private order together with the trades that (partially) filled it."""

    trades: list[Trade] = []


class PrivateTrade(BitXModel):
    """A trade made by the account."""

    base: Decimal
    counter: Decimal
    fee_base: Decimal
    fee_counter: Decimal
    is_buy: bool
    order_id: str
    pair: CcyPair
    price: Decimal
    timestamp: Timestamp
    order_type: OrderType = Field(alias="type")
    volume: Decimal


class FeeInfo(BitXModel):
    """Fees applicable to the account and its 30-day trading volume."""

    maker_fee: Decimal
    taker_fee: Decimal
    thirty_day_volume: Decimal


class OrderRequest(RequestModel):
    """A request to place a limit order."""

    pair: CcyPair
    order_type: OrderType = Field(alias="type")
    volume: Decimal
    price: Decimal


class MarketOrderRequest(RequestModel):
    """
    A request to place a market order.

    For a BID the volume is the amount of counter currency to spend; for an ASK
    it is the amount of base currency to sell.
    """

    pair: CcyPair
    order_type: OrderType = Field(alias="type")
    volume: Decimal

    def to_form(self) -> dict[str, str]:
        volume_field = "counter_volume" if self.order_type == OrderType.BID else "base_volume"
        return {
            "pair": self.pair.value,
            "type": self.order_type.value,
            volume_field: plain(self.volume),
        }


# ============================================================================
# Accounts
# ============================================================================


class Account(BitXModel):
    """An account held by the user."""

    id: str
    name: str
    currency: Asset


class NewAccount(RequestModel):
    """A request to create an additional account."""

    currency: Asset
    name: str


class Balance(BitXModel):
    """Balance of a single account."""

    id: str = Field(alias="account_id")
    asset: Asset
    balance: Decimal
    reserved: Decimal
    unconfirmed: Decimal


class Transaction(BitXModel):
    """A single entry in an account's transaction history."""

    row_index: int
    timestamp: Timestamp
    balance: Decimal
    available: Decimal
    balance_delta: Decimal
    available_delta: Decimal
    currency: Asset
    description: str


class FundingAddress(BitXModel):
    """A receive address registered for an account."""

    asset: Asset
    address: str
    total_received: Decimal
    total_unconfirmed: Decimal


# ============================================================================
# Withdrawals and sends
# ============================================================================


class WithdrawalRequest(BitXModel):
    """State of a request to withdraw from an account."""

    id: str
    status: RequestStatus


class NewWithdrawal(RequestModel):
    """A request to withdraw from an account."""

    withdrawal_type: WithdrawalType = Field(alias="type")
    amount: Decimal
    beneficiary_id: Optional[str] = None


class BitcoinSendRequest(RequestModel):
    """A request to send bitcoin to a bitcoin or email address."""

    amount: Decimal
    currency: Asset
    address: str
    description: Optional[str] = None
    message: Optional[str] = None


# ============================================================================
# Quotes
# ============================================================================


class QuoteRequest(RequestModel):
    """A request to lock in a quote."""

    quote_type: QuoteType = Field(alias="type")
    pair: CcyPair
    base_amount: Decimal


class OrderQuote(BitXModel):
    """A temporarily locked in quote."""

    id: str
    quote_type: QuoteType = Field(alias="type")
    pair: CcyPair
    base_amount: Decimal
    counter_amount: Decimal
    created_at: Timestamp
    expires_at: Timestamp
    discarded: bool
    exercised: bool
