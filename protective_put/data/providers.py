"""
Stock quote providers.

Each provider exposes `name` and `fetch(symbol) -> StockQuote`, raising
QuoteError when it cannot produce a quote. HTTP providers use urllib with a
timeout; yfinance and Alpaca are imported lazily.
"""

import json
import logging
from dataclasses import dataclass
from datetime import datetime, time, timedelta, timezone
from typing import Optional
from urllib.error import HTTPError, URLError
from urllib.parse import quote as url_quote, urlencode
from urllib.request import Request, urlopen
from zoneinfo import ZoneInfo

from protective_put.data.volatility import (
    DEFAULT_VOL,
    clamp_volatility,
    range_volatility,
    realized_volatility,
)

logger = logging.getLogger(__name__)

USER_AGENT = "protective-put/0.1"

_NEW_YORK = ZoneInfo("America/New_York")
_SESSION_OPEN = time(9, 30)
_SESSION_CLOSE = time(16, 0)


class QuoteError(RuntimeError):
    """A provider could not return a usable quote."""


# Failures a provider may raise that mean "try the next one". Network errors
# from urllib, requests and the alpaca client all derive from OSError.
PROVIDER_ERRORS = (QuoteError, OSError, ValueError, KeyError, IndexError, TypeError)


@dataclass(frozen=True)
class StockQuote:
    symbol: str
    name: str
    price: float
    estimated_volatility: float
    provider: str
    change: float = 0.0
    change_percent: float = 0.0
    volume: int = 0
    market_cap: Optional[float] = None
    sector: str = "Unknown"
    last_updated: str = ""
    market_session: str = "closed"
    high_52_week: Optional[float] = None
    low_52_week: Optional[float] = None
    avg_volume: int = 0
    pe_ratio: Optional[float] = None
    dividend_yield: float = 0.0
    is_live: bool = True
    error: Optional[str] = None


def is_market_open(now: Optional[datetime] = None) -> bool:
    """US cash session: Mon-Fri 09:30 to 16:00 New York time (no holidays)."""
    now = now or datetime.now(tz=_NEW_YORK)
    if now.tzinfo is None:
        now = now.replace(tzinfo=_NEW_YORK)
    local = now.astimezone(_NEW_YORK)
    if local.weekday() >= 5:
        return False
    return _SESSION_OPEN <= local.time() < _SESSION_CLOSE


def _market_session() -> str:
    return "open" if is_market_open() else "closed"


def _now_iso() -> str:
    return datetime.now(tz=_NEW_YORK).isoformat()


def _to_float(value, default: Optional[float] = None) -> Optional[float]:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _to_int(value, default: int = 0) -> int:
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return default


def http_get_json(url: str, timeout: float = 10.0):
    """GET a JSON document, mapping transport failures to QuoteError."""
    req = Request(url, headers={"User-Agent": USER_AGENT})
    try:
        with urlopen(req, timeout=timeout) as resp:
            return json.loads(resp.read().decode())
    except HTTPError as e:
        if e.code == 429:
            raise QuoteError("API rate limit exceeded. Please try again later.") from e
        raise QuoteError(f"HTTP {e.code}: {e.reason}") from e
    except URLError as e:
        raise QuoteError(f"Network error: {e.reason}") from e
    except json.JSONDecodeError as e:
        raise QuoteError(f"Malformed JSON response: {e.msg}") from e


# ── HTTP providers ───────────────────────────────────────────────────────


class FinancialModelingPrepProvider:
    name = "Financial Modeling Prep"

    def __init__(self, api_key: str, base_url: str, timeout: float = 10.0):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def fetch(self, symbol: str) -> StockQuote:
        url = (
            f"{self.base_url}/quote/{url_quote(symbol)}?"
            + urlencode({"apikey": self.api_key})
        )
        data = http_get_json(url, self.timeout)
        if not data or not isinstance(data, list):
            raise QuoteError(f"No data found for symbol {symbol}")

        q = data[0]
        prev_close = _to_float(q.get("previousClose"))
        price = _to_float(q.get("price")) or prev_close
        if not price:
            raise QuoteError(f"No price in quote for symbol {symbol}")
        reference = prev_close or price

        high52 = _to_float(q.get("yearHigh")) or reference * 1.2
        low52 = _to_float(q.get("yearLow")) or reference * 0.8

        return StockQuote(
            symbol=q.get("symbol", symbol),
            name=q.get("name") or f"{symbol} Corporation",
            price=price,
            change=_to_float(q.get("change"), 0.0),
            change_percent=_to_float(q.get("changesPercentage"), 0.0),
            volume=_to_int(q.get("volume")),
            market_cap=_to_float(q.get("marketCap")),
            estimated_volatility=range_volatility(high52, low52, reference),
            sector=q.get("sector") or "Unknown",
            last_updated=_now_iso(),
            market_session=_market_session(),
            high_52_week=high52,
            low_52_week=low52,
            avg_volume=_to_int(q.get("avgVolume")) or _to_int(q.get("volume")),
            pe_ratio=_to_float(q.get("pe")),
            dividend_yield=_to_float(q.get("dividendYield"), 0.0),
            provider=self.name,
        )


class AlphaVantageProvider:
    name = "Alpha Vantage"

    def __init__(self, api_key: str, base_url: str, timeout: float = 10.0):
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout

    def fetch(self, symbol: str) -> StockQuote:
        if not self.api_key:
            raise QuoteError("Alpha Vantage API key not configured")

        url = self.base_url + "?" + urlencode({
            "function": "GLOBAL_QUOTE", "symbol": symbol, "apikey": self.api_key,
        })
        data = http_get_json(url, self.timeout)

        if "Error Message" in data:
            raise QuoteError(data["Error Message"])
        if "Note" in data:
            raise QuoteError("API rate limit exceeded")

        q = data.get("Global Quote")
        if not q:
            raise QuoteError(f"No data found for symbol {symbol}")

        price = _to_float(q.get("05. price"))
        if not price:
            raise QuoteError(f"No price in quote for symbol {symbol}")
        high = _to_float(q.get("03. high"), price)
        low = _to_float(q.get("04. low"), price)
        change_pct = _to_float(str(q.get("10. change percent", "0")).rstrip("%"), 0.0)

        return StockQuote(
            symbol=q.get("01. symbol", symbol),
            name=f"{symbol} Corporation",
            price=price,
            change=_to_float(q.get("09. change"), 0.0),
            change_percent=change_pct,
            volume=_to_int(q.get("06. volume")),
            estimated_volatility=range_volatility(high, low, price),
            last_updated=q.get("07. latest trading day", _now_iso()),
            market_session=_market_session(),
            high_52_week=high,
            low_52_week=low,
            avg_volume=_to_int(q.get("06. volume")),
            provider=self.name,
        )


class TwelveDataProvider:
    name = "Twelve Data"

    def __init__(self, api_key: str, base_url: str, timeout: float = 10.0):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def fetch(self, symbol: str) -> StockQuote:
        if not self.api_key:
            raise QuoteError("Twelve Data API key not configured")

        url = f"{self.base_url}/quote?" + urlencode({"symbol": symbol, "apikey": self.api_key})
        data = http_get_json(url, self.timeout)

        if data.get("status") == "error" or data.get("code") not in (None, 200):
            if data.get("code") == 429:
                raise QuoteError("API rate limit exceeded")
            raise QuoteError(data.get("message") or f"API error: {data.get('code')}")
        if not data.get("symbol"):
            raise QuoteError(f"No data found for symbol {symbol}")

        price = _to_float(data.get("close"))
        if not price:
            raise QuoteError(f"No price in quote for symbol {symbol}")
        change_pct = _to_float(data.get("percent_change"), 0.0)

        week52 = data.get("fifty_two_week") or {}
        high52 = _to_float(week52.get("high")) or _to_float(data.get("fifty_two_week_high")) or price * 1.2
        low52 = _to_float(week52.get("low")) or _to_float(data.get("fifty_two_week_low")) or price * 0.8

        return StockQuote(
            symbol=data["symbol"],
            name=data.get("name") or f"{symbol} Corporation",
            price=price,
            change=_to_float(data.get("change"), 0.0),
            change_percent=change_pct,
            volume=_to_int(data.get("volume")),
            estimated_volatility=clamp_volatility(abs(change_pct) / 100),
            last_updated=data.get("datetime") or _now_iso(),
            market_session=_market_session(),
            high_52_week=high52,
            low_52_week=low52,
            avg_volume=_to_int(data.get("average_volume")) or _to_int(data.get("volume")),
            provider=self.name,
        )


# ── History-based providers ──────────────────────────────────────────────


def _quote_from_history(symbol: str, df, provider: str, trading_days: int = 252) -> StockQuote:
    """Build a quote from a daily OHLCV frame with Close/High/Low/Volume columns."""
    df = df.dropna(subset=["Close"])
    if df.empty:
        raise QuoteError(f"No price history for symbol {symbol}")

    closes = df["Close"].astype(float)
    price = float(closes.iloc[-1])
    prev = float(closes.iloc[-2]) if len(closes) > 1 else price
    change = price - prev

    return StockQuote(
        symbol=symbol,
        name=symbol,
        price=price,
        change=change,
        change_percent=change / prev * 100 if prev else 0.0,
        volume=_to_int(df["Volume"].iloc[-1]) if "Volume" in df else 0,
        estimated_volatility=realized_volatility(closes.values, trading_days),
        last_updated=str(df.index[-1]),
        market_session=_market_session(),
        high_52_week=float(df["High"].max()) if "High" in df else None,
        low_52_week=float(df["Low"].min()) if "Low" in df else None,
        avg_volume=_to_int(df["Volume"].mean()) if "Volume" in df else 0,
        provider=provider,
    )


class YFinanceProvider:
    name = "Yahoo Finance"

    def fetch(self, symbol: str) -> StockQuote:
        import yfinance as yf
        from yfinance.exceptions import YFException

        try:
            df = yf.Ticker(symbol).history(period="1y", interval="1d")
        except YFException as e:
            raise QuoteError(f"Yahoo Finance error for {symbol}: {e}") from e
        if df is None or df.empty:
            raise QuoteError(f"No data found for symbol {symbol}")
        if hasattr(df.columns, "levels") and len(df.columns.levels) > 1:
            df.columns = df.columns.droplevel(1)
        return _quote_from_history(symbol, df, self.name)


class AlpacaProvider:
    name = "Alpaca"

    def __init__(self, api_key: str, secret_key: str, lookback_days: int = 365):
        self.api_key = api_key
        self.secret_key = secret_key
        self.lookback_days = lookback_days

    def fetch(self, symbol: str) -> StockQuote:
        if not self.api_key or not self.secret_key:
            raise QuoteError("Alpaca credentials not configured")

        import pandas as pd
        from alpaca.common.exceptions import APIError
        from alpaca.data.historical import StockHistoricalDataClient
        from alpaca.data.requests import StockBarsRequest
        from alpaca.data.timeframe import TimeFrame

        end = datetime.now(tz=timezone.utc)
        start = end - timedelta(days=self.lookback_days)
        client = StockHistoricalDataClient(self.api_key, self.secret_key)
        request = StockBarsRequest(
            symbol_or_symbols=symbol, start=start, end=end,
            timeframe=TimeFrame.Day,
        )
        try:
            df = client.get_stock_bars(request).df
        except APIError as e:
            raise QuoteError(f"Alpaca error for {symbol}: {e}") from e
        if df is None or df.empty:
            raise QuoteError(f"No data found for symbol {symbol}")

        if isinstance(df.index, pd.MultiIndex):
            df = df.xs(symbol, level="symbol")
        df = df.rename(columns={
            "open": "Open", "high": "High", "low": "Low",
            "close": "Close", "volume": "Volume",
        })
        return _quote_from_history(symbol, df, self.name)


def fallback_quote(symbol: str, error: str) -> StockQuote:
    """Placeholder quote used when every provider has failed."""
    symbol = symbol.upper()
    return StockQuote(
        symbol=symbol,
        name=f"{symbol} Corporation",
        price=100.0,
        estimated_volatility=DEFAULT_VOL,
        provider="Fallback",
        volume=1_000_000,
        last_updated=_now_iso(),
        market_session=_market_session(),
        high_52_week=120.0,
        low_52_week=80.0,
        avg_volume=1_000_000,
        is_live=False,
        error=error,
    )
