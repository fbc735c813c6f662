"""BitX SDK for Python."""

# Client
from .client import BitXClient, DEFAULT_BASE_URL

# Pipeline
from .dispatcher import Endpoint, dispatch
from .decoder import decode
from .response import (
    BitXAPIResponse,
    ValidResponse,
    ErrorResponse,
    ExceptionResponse,
    UnparseableResponse,
)
from .logger import Logger, ConsoleLogger, NoopLogger, LogLevel

# Types
from .types import (
    CcyPair,
    Asset,
    OrderType,
    RequestStatus,
    WithdrawalType,
    QuoteType,
    BitXAuth,
    APIError,
    Ticker,
    Order,
    Bid,
    Ask,
    Orderbook,
    Trade,
    PrivateOrder,
    PrivateOrderWithTrades,
    PrivateTrade,
    FeeInfo,
    OrderRequest,
    MarketOrderRequest,
    Account,
    NewAccount,
    Balance,
    Transaction,
    FundingAddress,
    WithdrawalRequest,
    NewWithdrawal,
    BitcoinSendRequest,
    QuoteRequest,
    OrderQuote,
)

# Exceptions
from .exceptions import BitXClientError, MissingCredentialError

__all__ = [
    # Client
    "BitXClient",
    "DEFAULT_BASE_URL",
    # Pipeline
    "Endpoint",
    "dispatch",
    "decode",
    "BitXAPIResponse",
    "ValidResponse",
    "ErrorResponse",
    "ExceptionResponse",
    "UnparseableResponse",
    # Logger
    "Logger",
    "ConsoleLogger",
    "NoopLogger",
    "LogLevel",
    # Enums
    "CcyPair",
    "Asset",
    "OrderType",
    "RequestStatus",
    "WithdrawalType",
    "QuoteType",
    # Records
    "BitXAuth",
    "APIError",
    "Ticker",
    "Order",
    "Bid",
    "Ask",
    "Orderbook",
    "Trade",
    "PrivateOrder",
    "PrivateOrderWithTrades",
    "PrivateTrade",
    "FeeInfo",
    "OrderRequest",
    "MarketOrderRequest",
    "Account",
    "NewAccount",
    "Balance",
    "Transaction",
    "FundingAddress",
    "WithdrawalRequest",
    "NewWithdrawal",
    "BitcoinSendRequest",
    "QuoteRequest",
    "OrderQuote",
    # Exceptions
    "BitXClientError",
    "MissingCredentialError",
]

__version__ = "0.1.0"
