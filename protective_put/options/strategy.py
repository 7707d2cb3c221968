"""Portfolio-level metrics for a stock position hedged with a single put."""

from dataclasses import dataclass

from protective_put.options.black_scholes import DAYS_PER_YEAR


@dataclass(frozen=True)
class StrategyMetrics:
    portfolio_value: float
    total_premium_cost: float
    cost_percentage: float       # premium as % of portfolio value
    annualized_cost: float       # cost_percentage scaled to one year
    max_loss: float
    breakeven_price: float
    protected_value: float       # floor value net of premium, never negative


def compute_strategy_metrics(
    put_premium: float,
    strike_price: float,
    spot_price: float,
    shares: int,
    horizon_days: int,
) -> StrategyMetrics:
    portfolio_value = spot_price * shares
    total_premium_cost = put_premium * shares
    cost_percentage = total_premium_cost / portfolio_value * 100
    annualized_cost = cost_percentage * DAYS_PER_YEAR / horizon_days

    return StrategyMetrics(
        portfolio_value=portfolio_value,
        total_premium_cost=total_premium_cost,
        cost_percentage=cost_percentage,
        annualized_cost=annualized_cost,
        max_loss=(spot_price - strike_price + put_premium) * shares,
        breakeven_price=spot_price + put_premium,
        protected_value=max(strike_price * shares - total_premium_cost, 0.0),
    )
