"""
Reactive calculator session.

Holds the current inputs and display currency, recomputes the protective put
analysis whenever either changes, and pushes the new result to subscribers.
"""

import dataclasses
import logging
from typing import Callable, List, Optional

from protective_put.config import AdvisoryThresholds
from protective_put.currency import CURRENCIES, ExchangeRates
from protective_put.data.providers import StockQuote
from protective_put.options.calculator import StrategyResult, calculate_protective_put
from protective_put.options.inputs import PricingInput

logger = logging.getLogger(__name__)

Subscriber = Callable[[Optional[StrategyResult]], None]


class CalculatorSession:

    def __init__(
        self,
        inputs: PricingInput,
        quote_service=None,
        currency: str = "USD",
        exchange_rates: Optional[ExchangeRates] = None,
        thresholds: Optional[AdvisoryThresholds] = None,
    ):
        if currency not in CURRENCIES:
            raise ValueError(f"Unsupported currency {currency!r}")
        self.inputs = inputs
        self.quote_service = quote_service
        self.currency = currency
        self.exchange_rates = exchange_rates or ExchangeRates()
        self.thresholds = thresholds
        self.last_quote: Optional[StockQuote] = None
        self.last_error: Optional[str] = None
        self._subscribers: List[Subscriber] = []
        self.result = self._compute()

    def _compute(self) -> Optional[StrategyResult]:
        return calculate_protective_put(
            self.inputs,
            fx_rate=self.exchange_rates.rate(self.currency),
            currency=self.currency,
            thresholds=self.thresholds,
        )

    def _recompute(self) -> Optional[StrategyResult]:
        self.result = self._compute()
        for callback in list(self._subscribers):
            callback(self.result)
        return self.result

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a result listener; returns a function that removes it."""
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def update(self, **changes) -> Optional[StrategyResult]:
        self.inputs = dataclasses.replace(self.inputs, **changes)
        return self._recompute()

    def set_currency(self, code: str) -> Optional[StrategyResult]:
        if code not in CURRENCIES:
            raise ValueError(f"Unsupported currency {code!r}")
        self.currency = code
        return self._recompute()

    def set_exchange_rates(self, rates: ExchangeRates) -> Optional[StrategyResult]:
        self.exchange_rates = rates
        return self._recompute()

    def refresh_quote(self, symbol: str) -> Optional[StrategyResult]:
        """Load spot price and estimated volatility for symbol, then recompute."""
        if self.quote_service is None:
            raise RuntimeError("No quote service configured for this session")

        quote = self.quote_service.get_quote_or_fallback(symbol)
        self.last_quote = quote
        self.last_error = quote.error
        if quote.error:
            logger.warning("Using fallback data for %s: %s", quote.symbol, quote.error)

        return self.update(
            spot_price=quote.price,
            implied_volatility=quote.estimated_volatility,
        )
