"""
Display currencies: USD-based exchange rates, conversion and formatting.

Rates default to a static table; fetch_exchange_rates() can refresh them
from a JSON endpoint shaped like {"rates": {"EUR": 0.85, ...}}.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Dict, Optional
from urllib.error import URLError
from urllib.request import Request, urlopen

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Currency:
    code: str
    symbol: str
    name: str


CURRENCIES: Dict[str, Currency] = {
    c.code: c for c in (
        Currency("USD", "$", "US Dollar"),
        Currency("EUR", "€", "Euro"),
        Currency("GBP", "£", "British Pound"),
        Currency("JPY", "¥", "Japanese Yen"),
        Currency("CHF", "CHF", "Swiss Franc"),
        Currency("CAD", "C$", "Canadian Dollar"),
        Currency("AUD", "A$", "Australian Dollar"),
        Currency("ILS", "₪", "Israeli Shekel"),
        Currency("CNY", "¥", "Chinese Yuan"),
        Currency("INR", "₹", "Indian Rupee"),
    )
}

# Units of each currency per 1 USD
DEFAULT_RATES: Dict[str, float] = {
    "USD": 1.0,
    "EUR": 0.85,
    "GBP": 0.73,
    "JPY": 110.0,
    "CHF": 0.92,
    "CAD": 1.25,
    "AUD": 1.35,
    "ILS": 3.25,
    "CNY": 6.45,
    "INR": 74.5,
}

_SUFFIX_SYMBOL = {"EUR", "ILS"}


@dataclass(frozen=True)
class ExchangeRates:
    rates: Dict[str, float] = field(default_factory=lambda: dict(DEFAULT_RATES))

    def rate(self, code: str) -> float:
        """USD -> code multiplier; 1.0 for USD and unknown codes."""
        if code == "USD":
            return 1.0
        return self.rates.get(code, 1.0)

    def convert_from_usd(self, amount: float, code: str) -> float:
        return amount * self.rate(code)

    def convert_to_usd(self, amount: float, code: str) -> float:
        return amount / self.rate(code)

    def refreshed(self, url: str, timeout: float = 10.0) -> "ExchangeRates":
        """New rates with fetched values laid over these; self on failure."""
        fetched = fetch_exchange_rates(url, timeout)
        if not fetched:
            return self
        merged = dict(self.rates)
        merged.update({k: v for k, v in fetched.items() if k in CURRENCIES})
        merged["USD"] = 1.0
        return ExchangeRates(merged)


def fetch_exchange_rates(url: str, timeout: float = 10.0) -> Optional[Dict[str, float]]:
    """USD-based rates from a JSON endpoint, or None on failure."""
    try:
        req = Request(url, headers={"User-Agent": "protective-put/0.1"})
        with urlopen(req, timeout=timeout) as resp:
            data = json.loads(resp.read().decode())
        rates = {code: float(value) for code, value in data["rates"].items()}
    except (URLError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        logger.warning("Exchange rate refresh from %s failed: %s", url, e)
        return None

    rates = {code: value for code, value in rates.items() if value > 0}
    logger.info("Loaded %d exchange rates", len(rates))
    return rates


def currency_symbol(code: str) -> str:
    currency = CURRENCIES.get(code)
    return currency.symbol if currency else "$"


def format_currency(amount: float, code: str = "USD", decimals: int = 2) -> str:
    currency = CURRENCIES.get(code)
    if currency is None:
        return f"{amount:.{decimals}f}"

    if code == "JPY":
        return f"{currency.symbol}{round(amount):,}"
    formatted = f"{amount:.{decimals}f}"
    if code in _SUFFIX_SYMBOL:
        return f"{formatted}{currency.symbol}"
    if code == "CHF":
        return f"{currency.symbol} {formatted}"
    return f"{currency.symbol}{formatted}"
