import numpy as np
import pandas as pd
import pytest

from protective_put.data.providers import QuoteError, StockQuote
from protective_put.options.inputs import PricingInput


def generate_synthetic_ohlc(days=252, base_price=100.0, daily_vol=0.02, seed=42):
    """Generate synthetic daily OHLCV DataFrame for testing."""
    rng = np.random.default_rng(seed)
    returns = rng.normal(0.0005, daily_vol, days)
    closes = base_price * np.cumprod(1 + returns)
    opens = closes * (1 + rng.normal(0, 0.005, days))
    highs = np.maximum(opens, closes) * (1 + np.abs(rng.normal(0, 0.01, days)))
    lows = np.minimum(opens, closes) * (1 - np.abs(rng.normal(0, 0.01, days)))
    volume = rng.integers(100_000, 1_000_000, days)

    dates = pd.bdate_range(start="2024-01-01", periods=days)
    return pd.DataFrame({
        "Open": opens,
        "High": highs,
        "Low": lows,
        "Close": closes,
        "Volume": volume,
    }, index=dates)


def make_quote(symbol="AAPL", price=150.0, vol=0.30, provider="Fake"):
    return StockQuote(
        symbol=symbol,
        name=f"{symbol} Inc.",
        price=price,
        estimated_volatility=vol,
        provider=provider,
    )


class FakeProvider:
    """Provider double: returns a fixed quote or raises, and counts calls."""

    def __init__(self, name="Fake", price=150.0, vol=0.30, fail=False):
        self.name = name
        self.price = price
        self.vol = vol
        self.fail = fail
        self.calls = []

    def fetch(self, symbol):
        self.calls.append(symbol)
        if self.fail:
            raise QuoteError(f"{self.name} is down")
        return make_quote(symbol, self.price, self.vol, self.name)


class FakeClock:
    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def default_inputs():
    return PricingInput(
        spot_price=150.0,
        protection_level=0.95,
        horizon_days=90,
        risk_free_rate=0.05,
        implied_volatility=0.25,
        shares=100,
    )


@pytest.fixture
def synthetic_ohlc():
    return generate_synthetic_ohlc()


@pytest.fixture
def fake_provider_factory():
    return FakeProvider


@pytest.fixture
def fake_clock():
    return FakeClock()
