"""
Ranked quote fetching with a short-lived per-symbol cache.

Providers are tried in order; the first quote wins and is cached for
`ttl_seconds`. Failures are logged and the next provider is tried.
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from protective_put.config import CalculatorConfig
from protective_put.credentials import get_alpaca_keys, get_provider_key
from protective_put.data.providers import (
    PROVIDER_ERRORS,
    AlpacaProvider,
    AlphaVantageProvider,
    FinancialModelingPrepProvider,
    QuoteError,
    StockQuote,
    TwelveDataProvider,
    YFinanceProvider,
    fallback_quote,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QuoteBatchItem:
    symbol: str
    success: bool
    quote: Optional[StockQuote]
    error: Optional[str]


class QuoteService:
    """Quote lookup across a ranked list of providers."""

    def __init__(
        self,
        providers: Sequence,
        ttl_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        if not providers:
            raise ValueError("At least one quote provider is required")
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")
        self.providers = list(providers)
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._cache: Dict[str, Tuple[float, StockQuote]] = {}
        self._lock = threading.Lock()

    def _cached(self, symbol: str) -> Optional[StockQuote]:
        with self._lock:
            entry = self._cache.get(symbol)
            if entry is None:
                return None
            stored_at, quote = entry
            if self._clock() - stored_at >= self.ttl_seconds:
                del self._cache[symbol]
                return None
            return quote

    def _store(self, symbol: str, quote: StockQuote) -> None:
        with self._lock:
            self._cache[symbol] = (self._clock(), quote)

    def get_quote(self, symbol: str) -> StockQuote:
        if not symbol or not symbol.strip():
            raise ValueError("Symbol is required")
        symbol = symbol.strip().upper()

        cached = self._cached(symbol)
        if cached is not None:
            logger.debug("Using cached quote for %s (%s)", symbol, cached.provider)
            return cached

        for provider in self.providers:
            try:
                quote = provider.fetch(symbol)
            except PROVIDER_ERRORS as e:
                logger.warning("Quote provider %s failed for %s: %s", provider.name, symbol, e)
                continue
            self._store(symbol, quote)
            logger.info("Fetched %s at %.2f from %s", symbol, quote.price, quote.provider)
            return quote

        raise QuoteError(
            f"All API providers failed for symbol {symbol}. "
            "Please check your API keys or try again later."
        )

    def get_quote_or_fallback(self, symbol: str) -> StockQuote:
        """Like get_quote, but returns an uncached placeholder when all providers fail."""
        try:
            return self.get_quote(symbol)
        except QuoteError as e:
            logger.error("%s", e)
            return fallback_quote(symbol, str(e))

    def get_quotes(self, symbols: Sequence[str]) -> List[QuoteBatchItem]:
        results = []
        for symbol in symbols:
            try:
                quote = self.get_quote(symbol)
                results.append(QuoteBatchItem(symbol, True, quote, None))
            except (QuoteError, ValueError) as e:
                results.append(QuoteBatchItem(symbol, False, None, str(e)))
        return results

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()


def build_provider(name: str, config: CalculatorConfig):
    timeout = config.http_timeout_seconds
    if name == "fmp":
        return FinancialModelingPrepProvider(get_provider_key("fmp"), config.fmp_base_url, timeout)
    if name == "alpha_vantage":
        return AlphaVantageProvider(
            get_provider_key("alpha_vantage"), config.alpha_vantage_base_url, timeout,
        )
    if name == "twelve_data":
        return TwelveDataProvider(get_provider_key("twelve_data"), config.twelve_data_base_url, timeout)
    if name == "yfinance":
        return YFinanceProvider()
    if name == "alpaca":
        api_key, secret_key = get_alpaca_keys()
        return AlpacaProvider(api_key, secret_key)
    raise ValueError(f"Unknown quote provider {name!r}")


def default_quote_service(config: Optional[CalculatorConfig] = None) -> QuoteService:
    config = config or CalculatorConfig()
    providers = [build_provider(name, config) for name in config.providers]
    return QuoteService(providers, ttl_seconds=config.quote_ttl_seconds)
