"""
CLI runner for the protective put calculator.

Usage:
    # Fetch a live quote and price a 95% put for 90 days
    python -m protective_put.runner --symbol MSFT --shares 200

    # Manual inputs, no network
    python -m protective_put.runner --no-fetch --price 150 --volatility 0.30 \
        --protection 0.90 --horizon 180 --no-plot

    # Report in euros, Dutch labels, chart saved to disk
    python -m protective_put.runner --symbol AAPL --currency EUR --live-fx \
        --language nl --save-plot payoff.png
"""

import argparse
import logging

from protective_put.config import HORIZON_CHOICES, CalculatorConfig
from protective_put.currency import CURRENCIES, ExchangeRates
from protective_put.i18n import LANGUAGES
from protective_put.options.inputs import PricingInput
from protective_put.report import format_report
from protective_put.session import CalculatorSession

logger = logging.getLogger(__name__)


def build_parser(config: CalculatorConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Protective put pricing, Greeks and scenario analysis (Black-Scholes)"
    )
    parser.add_argument("--symbol", default=config.symbol,
                        help=f"Stock symbol (default: {config.symbol})")
    parser.add_argument("--price", type=float, default=None,
                        help="Override spot price (skips the quoted price)")
    parser.add_argument("--volatility", type=float, default=None,
                        help="Override implied volatility, e.g. 0.25 (skips the estimate)")
    parser.add_argument("--shares", type=int, default=config.shares,
                        help=f"Number of shares (default: {config.shares})")
    parser.add_argument("--protection", type=float, default=config.protection_level,
                        help=f"Strike as a fraction of spot (default: {config.protection_level})")
    parser.add_argument("--horizon", type=int, choices=HORIZON_CHOICES,
                        default=config.horizon_days,
                        help=f"Days to expiry (default: {config.horizon_days})")
    parser.add_argument("--rate", type=float, default=config.risk_free_rate,
                        help=f"Risk-free rate (default: {config.risk_free_rate})")
    parser.add_argument("--currency", choices=sorted(CURRENCIES), default=config.currency,
                        help=f"Display currency (default: {config.currency})")
    parser.add_argument("--language", choices=sorted(LANGUAGES), default=config.language,
                        help=f"Report language (default: {config.language})")
    parser.add_argument("--no-fetch", action="store_true",
                        help="Do not fetch a quote; use --price/--volatility or defaults")
    parser.add_argument("--live-fx", action="store_true",
                        help="Refresh exchange rates before converting")
    parser.add_argument("--no-plot", action="store_true",
                        help="Disable the payoff chart")
    parser.add_argument("--save-plot", default=None,
                        help="Save the payoff chart to this path instead of showing it")
    parser.add_argument("--verbose", action="store_true",
                        help="Debug logging")
    return parser


def run(args=None, quote_service=None):
    config = CalculatorConfig.from_env()
    parsed = build_parser(config).parse_args(args)

    logging.basicConfig(
        level=logging.DEBUG if parsed.verbose else config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    inputs = PricingInput(
        spot_price=parsed.price if parsed.price is not None else config.spot_price,
        protection_level=parsed.protection,
        horizon_days=parsed.horizon,
        risk_free_rate=parsed.rate,
        implied_volatility=(parsed.volatility if parsed.volatility is not None
                            else config.implied_volatility),
        shares=parsed.shares,
    )

    rates = ExchangeRates()
    if parsed.live_fx and parsed.currency != "USD":
        print(f"\nRefreshing exchange rates from {config.exchange_rate_url}...")
        rates = rates.refreshed(config.exchange_rate_url, config.http_timeout_seconds)

    if not parsed.no_fetch and quote_service is None:
        from protective_put.data.quote_service import default_quote_service
        quote_service = default_quote_service(config)

    session = CalculatorSession(
        inputs,
        quote_service=None if parsed.no_fetch else quote_service,
        currency=parsed.currency,
        exchange_rates=rates,
        thresholds=config.thresholds,
    )

    quote = None
    if not parsed.no_fetch:
        # ── Quote: price and volatility estimate, manual flags win ──
        print(f"\nFetching {parsed.symbol.upper()} quote...")
        session.refresh_quote(parsed.symbol)
        quote = session.last_quote
        print(f"  {quote.symbol} {quote.price:,.2f} USD via {quote.provider} "
              f"(est. vol {quote.estimated_volatility:.1%}, market {quote.market_session})")

        overrides = {}
        if parsed.price is not None:
            overrides["spot_price"] = parsed.price
        if parsed.volatility is not None:
            overrides["implied_volatility"] = parsed.volatility
        if overrides:
            session.update(**overrides)

    result = session.result
    print(format_report(result, session.inputs, parsed.language, quote))

    if result is None:
        return None

    # ── Plot ──
    if not parsed.no_plot:
        from protective_put.plotting import plot_payoff
        plot_payoff(result, symbol=parsed.symbol.upper(), save_path=parsed.save_plot)

    return result


def main():
    run()


if __name__ == "__main__":
    main()
