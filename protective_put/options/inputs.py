"""Calculation inputs for a protective put and their validation."""

from dataclasses import dataclass
from typing import Optional

from protective_put.options.black_scholes import DAYS_PER_YEAR


@dataclass(frozen=True)
class PricingInput:
    spot_price: float
    protection_level: float      # strike as a fraction of spot, in (0, 1]
    horizon_days: int
    risk_free_rate: float
    implied_volatility: float
    shares: int

    @property
    def strike_price(self) -> float:
        return self.spot_price * self.protection_level

    @property
    def time_to_expiry(self) -> float:
        """Years to expiry on a 365-day calendar."""
        return self.horizon_days / DAYS_PER_YEAR

    def validate(self) -> Optional[str]:
        """Return the reason the inputs cannot be priced, or None if they can."""
        if self.spot_price <= 0:
            return f"Spot price must be positive, got {self.spot_price}"
        if not 0 < self.protection_level <= 1:
            return f"Protection level must be in (0, 1], got {self.protection_level}"
        if self.strike_price <= 0:
            return f"Strike price must be positive, got {self.strike_price}"
        if self.horizon_days <= 0:
            return f"Time horizon must be a positive number of days, got {self.horizon_days}"
        if self.risk_free_rate < 0:
            return f"Risk-free rate cannot be negative, got {self.risk_free_rate}"
        if self.implied_volatility <= 0:
            return f"Implied volatility must be positive, got {self.implied_volatility}"
        if self.shares <= 0:
            return f"Number of shares must be positive, got {self.shares}"
        return None

    def is_valid(self) -> bool:
        return self.validate() is None
