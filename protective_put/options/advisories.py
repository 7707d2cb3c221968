"""
Advisory rules for a protective put.

Rules emit structured codes plus parameters; turning them into text is left
to protective_put.i18n.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from protective_put.config import AdvisoryThresholds
from protective_put.options.inputs import PricingInput


class AdvisoryKind(Enum):
    WARNING = "warning"
    INFO = "info"


class AdvisoryCode(Enum):
    HIGH_COST = "HIGH_COST"
    SHORT_HORIZON = "SHORT_HORIZON"
    HIGH_VOLATILITY = "HIGH_VOLATILITY"
    EXPENSIVE_PROTECTION = "EXPENSIVE_PROTECTION"
    LOW_DELTA = "LOW_DELTA"


class RecommendationCode(Enum):
    COST_EFFECTIVE = "COST_EFFECTIVE"
    ADEQUATE_PROTECTION = "ADEQUATE_PROTECTION"
    REASONABLE_HORIZON = "REASONABLE_HORIZON"
    MONITOR_TIME_DECAY = "MONITOR_TIME_DECAY"
    CONSIDER_ROLLING = "CONSIDER_ROLLING"
    EVALUATE_COST_BENEFIT = "EVALUATE_COST_BENEFIT"


@dataclass(frozen=True)
class Advisory:
    kind: AdvisoryKind
    code: AdvisoryCode
    params: Dict[str, str] = field(default_factory=dict)


def classify_advisories(
    inputs: PricingInput,
    annualized_cost: float,
    delta: float,
    thresholds: Optional[AdvisoryThresholds] = None,
) -> List[Advisory]:
    """Evaluate every rule independently, in a fixed order."""
    th = thresholds or AdvisoryThresholds()
    advisories: List[Advisory] = []

    if annualized_cost > th.max_annualized_cost_pct:
        advisories.append(Advisory(
            AdvisoryKind.WARNING,
            AdvisoryCode.HIGH_COST,
            {"cost": f"{annualized_cost:.2f}",
             "threshold": f"{th.max_annualized_cost_pct:g}"},
        ))

    if inputs.horizon_days < th.min_horizon_days:
        advisories.append(Advisory(
            AdvisoryKind.INFO,
            AdvisoryCode.SHORT_HORIZON,
            {"days": str(inputs.horizon_days)},
        ))

    if inputs.implied_volatility > th.max_implied_volatility:
        advisories.append(Advisory(
            AdvisoryKind.WARNING,
            AdvisoryCode.HIGH_VOLATILITY,
            {"volatility": f"{inputs.implied_volatility * 100:.0f}"},
        ))

    if inputs.protection_level > th.max_protection_level:
        advisories.append(Advisory(
            AdvisoryKind.INFO,
            AdvisoryCode.EXPENSIVE_PROTECTION,
            {"level": f"{inputs.protection_level * 100:.0f}"},
        ))

    if abs(delta) < th.min_abs_delta:
        advisories.append(Advisory(
            AdvisoryKind.INFO,
            AdvisoryCode.LOW_DELTA,
            {"delta": f"{delta:.3f}"},
        ))

    return advisories


def strategy_recommendations(
    inputs: PricingInput,
    annualized_cost: float,
    delta: float,
    thresholds: Optional[AdvisoryThresholds] = None,
) -> List[RecommendationCode]:
    """Positive checks that passed, followed by the standing reminders."""
    th = thresholds or AdvisoryThresholds()
    recs: List[RecommendationCode] = []

    if annualized_cost <= th.max_annualized_cost_pct:
        recs.append(RecommendationCode.COST_EFFECTIVE)
    if abs(delta) >= th.min_abs_delta:
        recs.append(RecommendationCode.ADEQUATE_PROTECTION)
    if inputs.horizon_days >= th.reasonable_horizon_days:
        recs.append(RecommendationCode.REASONABLE_HORIZON)

    recs.extend([
        RecommendationCode.MONITOR_TIME_DECAY,
        RecommendationCode.CONSIDER_ROLLING,
        RecommendationCode.EVALUATE_COST_BENEFIT,
    ])
    return recs
