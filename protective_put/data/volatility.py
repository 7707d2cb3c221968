"""Volatility estimates used as the implied-volatility input when none is given."""

import numpy as np
import pandas as pd

MIN_ESTIMATED_VOL = 0.10
MAX_ESTIMATED_VOL = 2.00
DEFAULT_VOL = 0.25


def clamp_volatility(value: float) -> float:
    return max(MIN_ESTIMATED_VOL, min(MAX_ESTIMATED_VOL, value))


def range_volatility(high: float, low: float, reference_price: float) -> float:
    """
    Crude annual vol proxy from a price range: (high - low) / reference,
    clamped to [0.10, 2.00]. Falls back to the default for a bad reference.
    """
    if not reference_price or reference_price <= 0:
        return DEFAULT_VOL
    return clamp_volatility((high - low) / reference_price)


def realized_volatility(closes, trading_days: int = 252) -> float:
    """
    Annualized close-to-close volatility of a price series.

    Returns the default when fewer than 10 returns are available.
    """
    series = pd.Series(closes, dtype=float).dropna()
    series = series[series > 0]
    log_ret = np.log(series / series.shift(1)).dropna()
    if len(log_ret) < 10:
        return DEFAULT_VOL
    vol = float(log_ret.std() * np.sqrt(trading_days))
    if not np.isfinite(vol) or vol <= 0:
        return DEFAULT_VOL
    return clamp_volatility(vol)
