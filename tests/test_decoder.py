"""Tests for the response decoder."""

from decimal import Decimal

import httpx
import pytest

from bitx_sdk import (
    CcyPair,
    ErrorResponse,
    ExceptionResponse,
    Ticker,
    Trade,
    UnparseableResponse,
    ValidResponse,
    decode,
)

TICKER_BODY = (
    b'{"pair":"XBTZAR","bid":"4300.00","ask":"4310.00","last_trade":"4305.00",'
    b'"rolling_24_hour_volume":"120.5","timestamp":1438587108692}'
)

VARIANTS = (ValidResponse, ErrorResponse, ExceptionResponse, UnparseableResponse)


def response(status: int, content: bytes) -> httpx.Response:
    return httpx.Response(status, content=content)


class TestClassification:
    """Test that every raw result lands in exactly one variant."""

    def test_valid(self):
        result = decode(response(200, TICKER_BODY), Ticker)

        assert isinstance(result, ValidResponse)
        assert result.payload.pair == CcyPair.XBTZAR
        assert result.payload.bid == Decimal("4300.00")

    def test_transport_failure(self):
        exc = httpx.ConnectError("connection refused")
        result = decode(exc, Ticker)

        assert isinstance(result, ExceptionResponse)
        assert result.exception is exc

    def test_error_envelope_on_200(self):
        body = b'{"error":"Too many requests","errorCode":"ErrTooManyRequests"}'
        result = decode(response(200, body), Ticker)

        assert isinstance(result, ErrorResponse)
        assert result.error.error == "Too many requests"
        assert result.error.error_code == "ErrTooManyRequests"

    def test_error_envelope_on_4xx(self):
        body = b'{"error":"Invalid pair","error_code":"ErrInvalidPair"}'
        result = decode(response(400, body), Ticker)

        assert isinstance(result, ErrorResponse)
        assert result.error.error_code == "ErrInvalidPair"

    def test_error_status_without_envelope(self):
        result = decode(response(502, b"<html>Bad Gateway</html>"), Ticker)

        assert isinstance(result, ErrorResponse)
        assert result.error.error == "Bad Gateway"
        assert result.error.error_code == "HTTP 502"

    def test_error_status_with_payload_shaped_body(self):
        result = decode(response(500, TICKER_BODY), Ticker)

        assert isinstance(result, ErrorResponse)
        assert result.error.error_code == "HTTP 500"

    def test_not_json(self):
        raw = response(200, b"not json")
        result = decode(raw, Ticker)

        assert isinstance(result, UnparseableResponse)
        assert result.raw is raw

    def test_empty_body(self):
        assert isinstance(decode(response(200, b""), Ticker), UnparseableResponse)

    def test_wrong_shape(self):
        result = decode(response(200, b'{"pair":"XBTZAR"}'), Ticker)

        assert isinstance(result, UnparseableResponse)
        assert "rolling_24_hour_volume" in result.detail

    def test_half_an_error_envelope_is_unparseable(self):
        result = decode(response(200, b'{"error":"something"}'), Ticker)

        assert isinstance(result, UnparseableResponse)

    def test_unknown_pair_is_unparseable(self):
        body = TICKER_BODY.replace(b'"XBTZAR"', b'"XBTFOO"')
        result = decode(response(200, body), Ticker)

        assert isinstance(result, UnparseableResponse)
        assert result.raw.content == body

    @pytest.mark.parametrize(
        "raw",
        [
            response(200, TICKER_BODY),
            response(200, b'{"error":"x","error_code":"y"}'),
            response(404, b"{}"),
            response(200, b"[]"),
            response(200, b"null"),
            response(204, b""),
            response(301, b""),
            response(200, b'{"error": 5, "error_code": "n"}'),
            response(200, TICKER_BODY.replace(b"1438587108692", b"1000000000000000")),
            response(200, TICKER_BODY.replace(b"1438587108692", b"100000000000000000000000")),
            response(200, TICKER_BODY.replace(b"1438587108692", b"-100000000000000000")),
            response(200, b"[" * 100000 + b"]" * 100000),
            httpx.ReadTimeout("timed out"),
        ],
    )
    def test_decoding_is_total(self, raw):
        result = decode(raw, Ticker)

        assert sum(isinstance(result, variant) for variant in VARIANTS) == 1

    @pytest.mark.parametrize("millis", [b"1000000000000000", b"100000000000000000000000", b"-100000000000000000"])
    def test_out_of_range_timestamp_is_unparseable(self, millis):
        body = TICKER_BODY.replace(b"1438587108692", millis)
        result = decode(response(200, body), Ticker)

        assert isinstance(result, UnparseableResponse)
        assert "out of range" in result.detail

    def test_deeply_nested_body_is_unparseable(self):
        result = decode(response(200, b"[" * 100000 + b"]" * 100000), Ticker)

        assert isinstance(result, UnparseableResponse)


class TestEnvelope:
    """Test payloads nested under a top-level key."""

    def test_unwraps_list(self):
        body = b'{"trades":[{"timestamp":1438587108692,"volume":"0.1","price":"4300.00","is_buy":false}]}'
        result = decode(response(200, body), list[Trade], envelope="trades")

        assert isinstance(result, ValidResponse)
        assert len(result.payload) == 1
        assert result.payload[0].volume == Decimal("0.1")

    def test_missing_key(self):
        result = decode(response(200, b'{"orders":[]}'), list[Trade], envelope="trades")

        assert isinstance(result, UnparseableResponse)
        assert "trades" in result.detail

    def test_scalar_payload(self):
        result = decode(response(200, b'{"order_id":"BXRANDOMORDERID23"}'), str, envelope="order_id")

        assert isinstance(result, ValidResponse)
        assert result.payload == "BXRANDOMORDERID23"

    def test_body_not_an_object(self):
        result = decode(response(200, b'["trades"]'), list[Trade], envelope="trades")

        assert isinstance(result, UnparseableResponse)


class TestPrecision:
    """Test that amounts never pass through binary floating point."""

    def test_decimal_string(self):
        body = TICKER_BODY.replace(b'"4305.00"', b'"4323.45"')
        result = decode(response(200, body), Ticker)

        assert result.payload.last_trade == Decimal("4323.45")

    def test_json_number(self):
        body = TICKER_BODY.replace(b'"4305.00"', b"4323.45")
        result = decode(response(200, body), Ticker)

        assert isinstance(result.payload.last_trade, Decimal)
        assert str(result.payload.last_trade) == "4323.45"

    def test_tiny_volume(self):
        body = TICKER_BODY.replace(b'"120.5"', b"0.1")
        result = decode(response(200, body), Ticker)

        assert result.payload.rolling_24_hour_volume == Decimal("0.1")
        assert result.payload.rolling_24_hour_volume + Decimal("0.2") == Decimal("0.3")
