"""
Pure-Python Black-Scholes put pricing and Greeks (no scipy dependency).

The normal CDF is the Abramowitz & Stegun 7.1.26 erf approximation, so the
pricer depends on nothing outside the standard library.
"""

import math
from dataclasses import dataclass
from typing import Optional

DAYS_PER_YEAR = 365.0

_SQRT_2 = math.sqrt(2.0)
_INV_SQRT_2PI = 1.0 / math.sqrt(2.0 * math.pi)


def norm_cdf(x: float) -> float:
    """Standard normal CDF via Abramowitz & Stegun (7.1.26). Max err ~1.5e-7."""
    a1, a2, a3, a4, a5 = (
        0.254829592, -0.284496736, 1.421413741, -1.453152027, 1.061405429,
    )
    p = 0.3275911
    sign = 1.0 if x >= 0 else -1.0
    z = abs(x) / _SQRT_2
    t = 1.0 / (1.0 + p * z)
    y = 1.0 - (((((a5 * t + a4) * t) + a3) * t + a2) * t + a1) * t * math.exp(
        -z * z
    )
    return 0.5 * (1.0 + sign * y)


def norm_pdf(x: float) -> float:
    """Standard normal density."""
    return _INV_SQRT_2PI * math.exp(-0.5 * x * x)


@dataclass(frozen=True)
class PutGreeks:
    delta: float    # dPut/dS, in [-1, 0]
    gamma: float    # d2Put/dS2
    theta: float    # per calendar day
    vega: float     # per 1 vol point (0.01)


@dataclass(frozen=True)
class PutValuation:
    premium: float
    d1: float
    d2: float
    greeks: PutGreeks


def price_put(
    S: float, K: float, T: float, r: float, sigma: float,
) -> Optional[PutValuation]:
    """
    European put premium and Greeks.

    Returns None when S, K, T or sigma is not strictly positive; callers
    treat that as "cannot calculate" rather than an error.
    """
    if S <= 0 or K <= 0 or T <= 0 or sigma <= 0:
        return None

    sqrt_T = math.sqrt(T)
    vol_sqrt_T = sigma * sqrt_T
    d1 = (math.log(S / K) + (r + 0.5 * sigma**2) * T) / vol_sqrt_T
    d2 = d1 - vol_sqrt_T

    n_minus_d1 = norm_cdf(-d1)
    n_minus_d2 = norm_cdf(-d2)
    pdf_d1 = norm_pdf(d1)
    discounted_strike = K * math.exp(-r * T)

    premium = discounted_strike * n_minus_d2 - S * n_minus_d1

    greeks = PutGreeks(
        delta=n_minus_d1 - 1.0,
        gamma=pdf_d1 / (S * vol_sqrt_T),
        theta=(
            -S * pdf_d1 * sigma / (2.0 * sqrt_T)
            - r * discounted_strike * n_minus_d2
        ) / DAYS_PER_YEAR,
        vega=S * sqrt_T * pdf_d1 / 100.0,
    )
    return PutValuation(premium=premium, d1=d1, d2=d2, greeks=greeks)
