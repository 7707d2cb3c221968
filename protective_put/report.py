"""
Terminal report for a protective put analysis.

Labels and advisory text come from protective_put.i18n; monetary values are
already in the result's currency and are formatted with format_currency.
"""

from typing import List, Optional

from protective_put.currency import format_currency
from protective_put.data.providers import StockQuote
from protective_put.i18n import render_advisory, render_recommendation, translate
from protective_put.options.advisories import AdvisoryKind
from protective_put.options.calculator import StrategyResult
from protective_put.options.inputs import PricingInput

WIDTH = 72


def _banner(title: str) -> List[str]:
    return ["", "=" * WIDTH, f"  {title}", "=" * WIDTH]


def _section(title: str) -> List[str]:
    return ["", f"  {title}", "  " + "-" * (WIDTH - 4)]


def _row(label: str, value: str, note: str = "") -> str:
    line = f"  {label + ':':<26}{value:>16}"
    return f"{line}  {note}" if note else line


def format_report(
    result: Optional[StrategyResult],
    inputs: PricingInput,
    language: str = "en",
    quote: Optional[StockQuote] = None,
) -> str:
    def t(key, **params):
        return translate(key, language, **params)

    lines: List[str] = []
    title = t("app_title")
    if quote is not None:
        title = f"{quote.symbol}  {title}"
    lines.extend(_banner(title))

    if quote is not None:
        source = t("live_data") if quote.is_live else t("fallback_data")
        lines.append(f"  {quote.name} | {source} {t('via_provider', provider=quote.provider)}")
        if quote.error:
            lines.append(f"  ! {quote.error}")

    if result is None:
        lines.append("")
        lines.append("  " + t("cannot_calculate", reason=inputs.validate() or "invalid inputs"))
        lines.append("=" * WIDTH)
        return "\n".join(lines)

    cur = result.currency

    def money(amount):
        return format_currency(amount, cur)

    # ── Overview ──
    lines.extend(_section(t("strategy_overview")))
    lines.append(_row(t("current_stock_price"), money(result.spot_price)))
    lines.append(_row(t("number_of_shares"), f"{inputs.shares:,}"))
    lines.append(_row(t("protection_level"), f"{inputs.protection_level:.0%}"))
    lines.append(_row(t("time_horizon"), t("days", days=inputs.horizon_days)))
    lines.append(_row(t("risk_free_rate"), f"{inputs.risk_free_rate:.2%}"))
    lines.append(_row(t("implied_volatility"), f"{inputs.implied_volatility:.1%}"))
    lines.append("  " + "-" * (WIDTH - 4))
    lines.append(_row(t("strike_price"), money(result.strike_price)))
    lines.append(_row(t("put_premium"), money(result.put_premium)))
    lines.append(_row(t("total_cost"), money(result.total_premium_cost),
                      f"{result.cost_percentage:.2f}% {t('of_portfolio')}"))
    lines.append(_row(t("annualized_cost"), f"{result.annualized_cost:.2f}%", t("per_year")))
    lines.append(_row(t("portfolio_value"), money(result.portfolio_value)))
    lines.append(_row(t("max_loss"), money(result.max_loss)))
    lines.append(_row(t("breakeven"), money(result.breakeven_price)))
    lines.append(_row(t("protected_value"), money(result.protected_value)))

    # ── Greeks ──
    g = result.greeks
    lines.extend(_section(t("option_greeks")))
    lines.append(_row(t("delta"), f"{g.delta:.4f}"))
    lines.append(_row(t("gamma"), f"{g.gamma:.4f}"))
    lines.append(_row(t("theta"), money(g.theta)))
    lines.append(_row(t("vega"), money(g.vega)))

    # ── Warnings ──
    if result.warnings:
        lines.extend(_section(t("warnings")))
        for advisory in result.warnings:
            marker = "!" if advisory.kind is AdvisoryKind.WARNING else "i"
            lines.append(f"  [{marker}] {render_advisory(advisory, language)}")

    # ── Scenarios ──
    lines.extend(_section(t("scenario_analysis")))
    headers = [t("stock_price"), t("stock_value"), t("put_value"),
               t("total_value"), t("pnl"), t("pnl_percent")]
    lines.append("  " + "".join(f"{h:>12}" for h in headers))
    for s in result.scenarios:
        cells = [money(s.stock_price), money(s.stock_value), money(s.put_value),
                 money(s.total_value), money(s.pnl), f"{s.pnl_percent:+.2f}%"]
        lines.append("  " + "".join(f"{c:>12}" for c in cells))

    # ── Recommendations ──
    lines.extend(_section(t("strategy_recommendations")))
    for code in result.recommendations:
        lines.append(f"  {render_recommendation(code, language)}")

    lines.append("=" * WIDTH)
    return "\n".join(lines)
