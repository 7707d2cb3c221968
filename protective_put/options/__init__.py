"""Protective put pricing, strategy metrics and scenario analysis."""
from .black_scholes import PutGreeks, PutValuation, norm_cdf, norm_pdf, price_put
from .inputs import PricingInput
from .strategy import StrategyMetrics, compute_strategy_metrics
from .scenarios import ScenarioPoint, scenario_sweep
from .advisories import (
    Advisory,
    AdvisoryCode,
    AdvisoryKind,
    RecommendationCode,
    classify_advisories,
    strategy_recommendations,
)
from .calculator import StrategyResult, calculate_protective_put
