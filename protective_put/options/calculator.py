"""
Protective put calculation: price the put, derive the strategy metrics,
sweep expiry scenarios and classify advisories in one pass.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from protective_put.config import AdvisoryThresholds
from protective_put.options.advisories import (
    Advisory,
    RecommendationCode,
    classify_advisories,
    strategy_recommendations,
)
from protective_put.options.black_scholes import PutGreeks, price_put
from protective_put.options.inputs import PricingInput
from protective_put.options.scenarios import ScenarioPoint, scenario_sweep
from protective_put.options.strategy import compute_strategy_metrics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StrategyResult:
    put_premium: float
    strike_price: float
    spot_price: float
    portfolio_value: float
    total_premium_cost: float
    cost_percentage: float
    annualized_cost: float
    max_loss: float
    breakeven_price: float
    protected_value: float
    greeks: PutGreeks
    scenarios: List[ScenarioPoint]
    warnings: List[Advisory]
    recommendations: List[RecommendationCode]
    currency: str = "USD"
    fx_rate: float = 1.0


def calculate_protective_put(
    inputs: PricingInput,
    fx_rate: float = 1.0,
    currency: str = "USD",
    thresholds: Optional[AdvisoryThresholds] = None,
) -> Optional[StrategyResult]:
    """
    Full protective put analysis, or None when the inputs cannot be priced.

    Inputs are USD-denominated. Monetary outputs are converted with fx_rate
    immediately after pricing, so every derived figure is in the display
    currency and the percentage figures do not depend on it.
    """
    problem = inputs.validate()
    if problem is None and fx_rate <= 0:
        problem = f"Exchange rate must be positive, got {fx_rate}"
    if problem is not None:
        logger.debug("Cannot calculate protective put: %s", problem)
        return None

    valuation = price_put(
        inputs.spot_price,
        inputs.strike_price,
        inputs.time_to_expiry,
        inputs.risk_free_rate,
        inputs.implied_volatility,
    )
    if valuation is None:
        logger.debug("Pricer rejected inputs %s", inputs)
        return None

    premium = valuation.premium * fx_rate
    spot = inputs.spot_price * fx_rate
    strike = inputs.strike_price * fx_rate
    greeks = PutGreeks(
        delta=valuation.greeks.delta,
        gamma=valuation.greeks.gamma,
        theta=valuation.greeks.theta * fx_rate,
        vega=valuation.greeks.vega * fx_rate,
    )

    metrics = compute_strategy_metrics(
        put_premium=premium,
        strike_price=strike,
        spot_price=spot,
        shares=inputs.shares,
        horizon_days=inputs.horizon_days,
    )
    scenarios = scenario_sweep(
        spot=spot,
        strike_price=strike,
        shares=inputs.shares,
        total_premium_cost=metrics.total_premium_cost,
        portfolio_value=metrics.portfolio_value,
    )
    warnings = classify_advisories(
        inputs, metrics.annualized_cost, greeks.delta, thresholds,
    )
    recommendations = strategy_recommendations(
        inputs, metrics.annualized_cost, greeks.delta, thresholds,
    )

    return StrategyResult(
        put_premium=premium,
        strike_price=strike,
        spot_price=spot,
        portfolio_value=metrics.portfolio_value,
        total_premium_cost=metrics.total_premium_cost,
        cost_percentage=metrics.cost_percentage,
        annualized_cost=metrics.annualized_cost,
        max_loss=metrics.max_loss,
        breakeven_price=metrics.breakeven_price,
        protected_value=metrics.protected_value,
        greeks=greeks,
        scenarios=scenarios,
        warnings=warnings,
        recommendations=recommendations,
        currency=currency,
        fx_rate=fx_rate,
    )
