"""Tests for quote provider payload parsing, with HTTP mocked out."""
import io
import json
from datetime import datetime
from unittest import mock
from urllib.error import HTTPError, URLError
from zoneinfo import ZoneInfo

import pytest

from protective_put.data.providers import (
    AlphaVantageProvider,
    FinancialModelingPrepProvider,
    QuoteError,
    TwelveDataProvider,
    YFinanceProvider,
    _quote_from_history,
    fallback_quote,
    http_get_json,
    is_market_open,
)
from protective_put.data.volatility import MAX_ESTIMATED_VOL, MIN_ESTIMATED_VOL

NY = ZoneInfo("America/New_York")


class _Response(io.BytesIO):
    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False


def _respond(payload):
    return mock.patch(
        "protective_put.data.providers.urlopen",
        return_value=_Response(json.dumps(payload).encode()),
    )


# ── Transport ──

def test_rate_limit_maps_to_quote_error():
    err = HTTPError("http://x", 429, "Too Many Requests", {}, None)
    with mock.patch("protective_put.data.providers.urlopen", side_effect=err):
        with pytest.raises(QuoteError, match="rate limit"):
            http_get_json("http://x")


def test_network_error_maps_to_quote_error():
    with mock.patch("protective_put.data.providers.urlopen", side_effect=URLError("down")):
        with pytest.raises(QuoteError, match="Network error"):
            http_get_json("http://x")


def test_malformed_json_maps_to_quote_error():
    with mock.patch("protective_put.data.providers.urlopen", return_value=_Response(b"<html>")):
        with pytest.raises(QuoteError, match="Malformed"):
            http_get_json("http://x")


# ── Financial Modeling Prep ──

def test_fmp_parses_quote():
    payload = [{
        "symbol": "AAPL", "name": "Apple Inc.", "price": 190.5, "previousClose": 188.0,
        "change": 2.5, "changesPercentage": 1.33, "volume": 5_000_000,
        "marketCap": 3.0e12, "yearHigh": 199.0, "yearLow": 124.0,
        "avgVolume": 6_000_000, "pe": 31.2,
    }]
    provider = FinancialModelingPrepProvider("demo", "https://fmp.test/api/v3")
    with _respond(payload) as urlopen:
        quote = provider.fetch("AAPL")

    request = urlopen.call_args[0][0]
    assert request.full_url == "https://fmp.test/api/v3/quote/AAPL?apikey=demo"
    assert quote.price == 190.5
    assert quote.name == "Apple Inc."
    assert quote.provider == "Financial Modeling Prep"
    assert quote.estimated_volatility == pytest.approx((199.0 - 124.0) / 188.0)
    assert quote.avg_volume == 6_000_000
    assert quote.is_live


def test_fmp_missing_range_defaults():
    provider = FinancialModelingPrepProvider("demo", "https://fmp.test/api/v3")
    with _respond([{"symbol": "XYZ", "price": 50.0, "previousClose": 50.0}]):
        quote = provider.fetch("XYZ")
    assert quote.high_52_week == pytest.approx(60.0)
    assert quote.low_52_week == pytest.approx(40.0)
    assert quote.estimated_volatility == pytest.approx(0.4)
    assert quote.name == "XYZ Corporation"


def test_fmp_empty_list():
    provider = FinancialModelingPrepProvider("demo", "https://fmp.test/api/v3")
    with _respond([]):
        with pytest.raises(QuoteError, match="No data found"):
            provider.fetch("NOPE")


# ── Alpha Vantage ──

def test_alpha_vantage_parses_quote():
    payload = {"Global Quote": {
        "01. symbol": "MSFT", "03. high": "420.0", "04. low": "400.0",
        "05. price": "410.0", "06. volume": "1200000",
        "07. latest trading day": "2024-05-01", "09. change": "-2.0",
        "10. change percent": "-0.4854%",
    }}
    provider = AlphaVantageProvider("key", "https://av.test/query")
    with _respond(payload):
        quote = provider.fetch("MSFT")
    assert quote.price == 410.0
    assert quote.change_percent == pytest.approx(-0.4854)
    assert quote.estimated_volatility == MIN_ESTIMATED_VOL
    assert quote.last_updated == "2024-05-01"


def test_alpha_vantage_requires_key():
    with pytest.raises(QuoteError, match="not configured"):
        AlphaVantageProvider("", "https://av.test/query").fetch("MSFT")


@pytest.mark.parametrize("payload, message", [
    ({"Error Message": "Invalid API call"}, "Invalid API call"),
    ({"Note": "Thank you for using Alpha Vantage"}, "rate limit"),
    ({"Global Quote": {}}, "No data found"),
])
def test_alpha_vantage_errors(payload, message):
    with _respond(payload):
        with pytest.raises(QuoteError, match=message):
            AlphaVantageProvider("key", "https://av.test/query").fetch("MSFT")


# ── Twelve Data ──

def test_twelve_data_parses_quote():
    payload = {
        "symbol": "NVDA", "name": "NVIDIA Corp", "close": "900.0", "change": "45.0",
        "percent_change": "5.0", "volume": "30000000", "average_volume": "40000000",
        "fifty_two_week": {"high": "974.0", "low": "373.0"},
    }
    with _respond(payload):
        quote = TwelveDataProvider("key", "https://td.test").fetch("NVDA")
    assert quote.price == 900.0
    assert quote.high_52_week == 974.0
    assert quote.estimated_volatility == MIN_ESTIMATED_VOL
    assert quote.provider == "Twelve Data"


def test_twelve_data_large_move_volatility():
    payload = {"symbol": "GME", "close": "20.0", "percent_change": "-35.0"}
    with _respond(payload):
        quote = TwelveDataProvider("key", "https://td.test").fetch("GME")
    assert quote.estimated_volatility == pytest.approx(0.35)
    assert quote.low_52_week == pytest.approx(16.0)


def test_twelve_data_rate_limit():
    with _respond({"code": 429, "message": "limit", "status": "error"}):
        with pytest.raises(QuoteError, match="rate limit"):
            TwelveDataProvider("key", "https://td.test").fetch("NVDA")


def test_twelve_data_error_message():
    with _respond({"code": 400, "message": "symbol not found", "status": "error"}):
        with pytest.raises(QuoteError, match="symbol not found"):
            TwelveDataProvider("key", "https://td.test").fetch("NOPE")


# ── History-based quotes ──

def test_quote_from_history(synthetic_ohlc):
    quote = _quote_from_history("SPY", synthetic_ohlc, "Yahoo Finance")
    closes = synthetic_ohlc["Close"]
    assert quote.price == pytest.approx(closes.iloc[-1])
    assert quote.change == pytest.approx(closes.iloc[-1] - closes.iloc[-2])
    assert quote.high_52_week == pytest.approx(synthetic_ohlc["High"].max())
    assert MIN_ESTIMATED_VOL <= quote.estimated_volatility <= MAX_ESTIMATED_VOL


def test_quote_from_empty_history(synthetic_ohlc):
    with pytest.raises(QuoteError):
        _quote_from_history("SPY", synthetic_ohlc.iloc[0:0], "Yahoo Finance")


# ── Fallback and market hours ──

def test_fallback_quote():
    quote = fallback_quote("tsla", "all down")
    assert quote.symbol == "TSLA"
    assert quote.price == 100.0
    assert quote.estimated_volatility == 0.25
    assert quote.provider == "Fallback"
    assert not quote.is_live
    assert quote.error == "all down"


def test_market_hours():
    assert is_market_open(datetime(2024, 5, 1, 10, 0, tzinfo=NY))      # Wednesday
    assert not is_market_open(datetime(2024, 5, 1, 9, 29, tzinfo=NY))
    assert not is_market_open(datetime(2024, 5, 1, 16, 0, tzinfo=NY))
    assert not is_market_open(datetime(2024, 5, 4, 12, 0, tzinfo=NY))  # Saturday


def test_market_hours_converts_timezone():
    utc = ZoneInfo("UTC")
    assert is_market_open(datetime(2024, 5, 1, 15, 0, tzinfo=utc))      # 11:00 New York
    assert not is_market_open(datetime(2024, 5, 1, 21, 0, tzinfo=utc))  # 17:00 New York


def test_yfinance_error_maps_to_quote_error():
    from yfinance.exceptions import YFException

    with mock.patch("yfinance.Ticker", side_effect=YFException("rate limited")):
        with pytest.raises(QuoteError, match="Yahoo Finance error"):
            YFinanceProvider().fetch("AAPL")
