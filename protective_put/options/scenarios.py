"""Expiry P&L of the hedged position across a symmetric band of stock prices."""

from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class ScenarioPoint:
    stock_price: float
    stock_value: float
    put_value: float      # intrinsic value of the puts at this price
    total_value: float    # stock + puts - premium paid
    pnl: float
    pnl_percent: float


def scenario_sweep(
    spot: float,
    strike_price: float,
    shares: int,
    total_premium_cost: float,
    portfolio_value: float,
    points: int = 11,
    range_fraction: float = 0.20,
) -> List[ScenarioPoint]:
    """
    Evenly spaced prices from spot * (1 - range_fraction) to
    spot * (1 + range_fraction) inclusive, ascending.

    With an odd number of points the middle one sits on the spot price.
    """
    if points < 2:
        raise ValueError(f"points must be at least 2, got {points}")

    half_range = range_fraction * spot
    step = 2 * half_range / (points - 1)
    cost_basis = portfolio_value - total_premium_cost

    scenarios: List[ScenarioPoint] = []
    for i in range(points):
        stock_price = spot - half_range + i * step
        stock_value = stock_price * shares
        put_value = max(strike_price - stock_price, 0.0) * shares
        total_value = stock_value + put_value - total_premium_cost
        pnl = total_value - cost_basis

        scenarios.append(
            ScenarioPoint(
                stock_price=stock_price,
                stock_value=stock_value,
                put_value=put_value,
                total_value=total_value,
                pnl=pnl,
                pnl_percent=pnl / portfolio_value * 100,
            )
        )

    return scenarios
