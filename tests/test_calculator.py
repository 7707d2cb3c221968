"""Tests for the protective put orchestration."""
import dataclasses

import pytest

from protective_put.options import (
    AdvisoryCode,
    PricingInput,
    RecommendationCode,
    calculate_protective_put,
    price_put,
)


# ── Result contents ──

def test_result_invariants(default_inputs):
    r = calculate_protective_put(default_inputs)
    assert r is not None
    assert r.strike_price == pytest.approx(142.5)
    assert r.strike_price < r.spot_price
    assert r.total_premium_cost == pytest.approx(r.put_premium * 100)
    assert r.protected_value == pytest.approx(max(r.strike_price * 100 - r.total_premium_cost, 0.0))
    assert r.annualized_cost == r.cost_percentage * 365.0 / 90
    assert len(r.scenarios) == 11
    assert r.scenarios[5].stock_price == pytest.approx(150.0)
    assert r.currency == "USD"
    assert r.fx_rate == 1.0


def test_premium_matches_pricer(default_inputs):
    r = calculate_protective_put(default_inputs)
    v = price_put(150.0, 142.5, 90 / 365, 0.05, 0.25)
    assert r.put_premium == v.premium
    assert r.greeks == v.greeks


def test_default_inputs_flag_only_cost(default_inputs):
    # ~2.3% for 90 days annualizes to ~9.45%
    r = calculate_protective_put(default_inputs)
    assert [a.code for a in r.warnings] == [AdvisoryCode.HIGH_COST]
    assert r.annualized_cost == pytest.approx(9.45, abs=0.3)
    assert r.recommendations[:2] == [
        RecommendationCode.ADEQUATE_PROTECTION,
        RecommendationCode.REASONABLE_HORIZON,
    ]


def test_long_cheap_put_is_cost_effective(default_inputs):
    inputs = dataclasses.replace(
        default_inputs, protection_level=0.80, horizon_days=365, implied_volatility=0.15,
    )
    r = calculate_protective_put(inputs)
    assert r.annualized_cost <= 5.0
    assert r.recommendations[0] is RecommendationCode.COST_EFFECTIVE


def test_high_cost_short_horizon(default_inputs):
    inputs = dataclasses.replace(
        default_inputs, horizon_days=7, implied_volatility=0.8, protection_level=0.99,
    )
    r = calculate_protective_put(inputs)
    codes = [a.code for a in r.warnings]
    assert codes[:4] == [
        AdvisoryCode.HIGH_COST,
        AdvisoryCode.SHORT_HORIZON,
        AdvisoryCode.HIGH_VOLATILITY,
        AdvisoryCode.EXPENSIVE_PROTECTION,
    ]


def test_idempotent(default_inputs):
    assert calculate_protective_put(default_inputs) == calculate_protective_put(default_inputs)


def test_higher_protection_costs_more(default_inputs):
    high = calculate_protective_put(dataclasses.replace(default_inputs, protection_level=0.99))
    low = calculate_protective_put(dataclasses.replace(default_inputs, protection_level=0.80))
    assert high.put_premium > low.put_premium
    assert high.max_loss < low.max_loss


def test_full_protection_strike_equals_spot(default_inputs):
    r = calculate_protective_put(dataclasses.replace(default_inputs, protection_level=1.0))
    assert r.strike_price == pytest.approx(r.spot_price)


# ── Invalid inputs ──

@pytest.mark.parametrize("changes", [
    {"spot_price": 0.0},
    {"spot_price": -10.0},
    {"protection_level": 0.0},
    {"protection_level": 1.2},
    {"horizon_days": 0},
    {"implied_volatility": 0.0},
    {"risk_free_rate": -0.01},
    {"shares": 0},
])
def test_invalid_inputs_yield_none(default_inputs, changes):
    inputs = dataclasses.replace(default_inputs, **changes)
    assert inputs.validate() is not None
    assert not inputs.is_valid()
    assert calculate_protective_put(inputs) is None


def test_non_positive_fx_rate_yields_none(default_inputs):
    assert calculate_protective_put(default_inputs, fx_rate=0.0) is None


def test_validate_message():
    inputs = PricingInput(150.0, 0.95, 90, 0.05, 0.0, 100)
    assert "volatility" in inputs.validate().lower()


# ── Currency conversion ──

@pytest.mark.parametrize("fx_rate, currency", [(0.85, "EUR"), (110.0, "JPY"), (3.25, "ILS")])
def test_currency_invariance(default_inputs, fx_rate, currency):
    usd = calculate_protective_put(default_inputs)
    conv = calculate_protective_put(default_inputs, fx_rate=fx_rate, currency=currency)

    assert conv.currency == currency
    assert conv.cost_percentage == pytest.approx(usd.cost_percentage)
    assert conv.annualized_cost == pytest.approx(usd.annualized_cost)
    assert conv.greeks.delta == usd.greeks.delta
    assert conv.greeks.gamma == usd.greeks.gamma

    for field in ("put_premium", "strike_price", "spot_price", "portfolio_value",
                  "total_premium_cost", "max_loss", "breakeven_price", "protected_value"):
        assert getattr(conv, field) == pytest.approx(getattr(usd, field) * fx_rate)
    assert conv.greeks.theta == pytest.approx(usd.greeks.theta * fx_rate)
    assert conv.greeks.vega == pytest.approx(usd.greeks.vega * fx_rate)

    for a, b in zip(conv.scenarios, usd.scenarios):
        assert a.stock_price == pytest.approx(b.stock_price * fx_rate)
        assert a.pnl == pytest.approx(b.pnl * fx_rate, abs=1e-6)
        assert a.pnl_percent == pytest.approx(b.pnl_percent, abs=1e-9)

    assert [w.code for w in conv.warnings] == [w.code for w in usd.warnings]
