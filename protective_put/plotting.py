"""Protective put payoff chart: hedged vs unhedged P&L + value breakdown at expiry."""

import numpy as np
import matplotlib
import matplotlib.pyplot as plt
import matplotlib.ticker as mticker

from protective_put.currency import currency_symbol


def plot_payoff(result, symbol: str = "AAPL", save_path=None, show: bool = True):
    """
    Two-panel plot of the scenario sweep:
      1. Expiry P&L of the hedged position against holding the stock alone,
         with strike, spot and breakeven markers
      2. Stock value and put value stacked per scenario price

    Saves to save_path when given; otherwise shows the figure if show is set.
    Returns the figure.
    """
    plt.close("all")

    sym = currency_symbol(result.currency)
    prices = np.array([s.stock_price for s in result.scenarios])
    hedged = np.array([s.pnl for s in result.scenarios])
    shares = result.portfolio_value / result.spot_price
    unhedged = (prices - result.spot_price) * shares

    fig, (ax_pnl, ax_val) = plt.subplots(
        2, 1, figsize=(12, 9), height_ratios=[3, 2], sharex=True,
    )

    title_parts = [
        f"{symbol} Protective Put",
        f"Strike {sym}{result.strike_price:,.2f}",
        f"Premium {sym}{result.put_premium:,.2f}",
        f"Cost {result.cost_percentage:.2f}% ({result.annualized_cost:.2f}% ann.)",
    ]
    fig.suptitle("  |  ".join(title_parts), fontsize=11, fontweight="bold")

    # ── Panel 1: P&L at expiry ──
    ax_pnl.plot(prices, hedged, color="#2c3e50", linewidth=2, marker="o",
                markersize=4, label="Stock + Put")
    ax_pnl.plot(prices, unhedged, color="#e67e22", linewidth=1.5,
                linestyle="--", label="Stock only")
    ax_pnl.fill_between(prices, hedged, unhedged, where=hedged > unhedged,
                        color="#27ae60", alpha=0.15, label="Protection")
    ax_pnl.axhline(y=0, color="black", linewidth=0.8, alpha=0.6)
    # scenario P&L already nets the premium out of the basis
    floor = (result.strike_price - result.spot_price) * shares
    ax_pnl.axhline(y=floor, color="#c0392b", linestyle=":",
                   linewidth=1, label=f"Floor {sym}{floor:,.0f}")

    ax_pnl.axvline(x=result.strike_price, color="#8e44ad", linestyle="--",
                   linewidth=1, label=f"Strike {sym}{result.strike_price:,.2f}")
    ax_pnl.axvline(x=result.spot_price, color="gray", linestyle=":",
                   linewidth=1, label=f"Spot {sym}{result.spot_price:,.2f}")
    ax_pnl.axvline(x=result.breakeven_price, color="#16a085", linestyle="-.",
                   linewidth=1, label=f"Breakeven {sym}{result.breakeven_price:,.2f}")

    ax_pnl.set_ylabel(f"P&L ({sym})", fontsize=10)
    ax_pnl.legend(loc="upper left", fontsize=8, framealpha=0.9)
    ax_pnl.grid(True, alpha=0.25, linestyle="--")
    ax_pnl.yaxis.set_major_formatter(
        mticker.FuncFormatter(lambda x, _: f"{sym}{x:,.0f}")
    )

    # ── Panel 2: Value breakdown ──
    stock_values = np.array([s.stock_value for s in result.scenarios])
    put_values = np.array([s.put_value for s in result.scenarios])
    width = (prices[1] - prices[0]) * 0.8 if len(prices) > 1 else 1.0

    ax_val.bar(prices, stock_values, width=width, color="#3498db",
               alpha=0.7, label="Stock value")
    ax_val.bar(prices, put_values, width=width, bottom=stock_values,
               color="#27ae60", alpha=0.7, label="Put value")
    ax_val.axhline(y=result.portfolio_value, color="red", linestyle="--",
                   linewidth=0.8, alpha=0.7,
                   label=f"Portfolio {sym}{result.portfolio_value:,.0f}")

    ax_val.set_xlabel(f"{symbol} price at expiry ({sym})", fontsize=10)
    ax_val.set_ylabel(f"Value ({sym})", fontsize=10)
    ax_val.legend(loc="upper left", fontsize=8, framealpha=0.9)
    ax_val.grid(True, alpha=0.25, linestyle="--")
    ax_val.yaxis.set_major_formatter(
        mticker.FuncFormatter(lambda x, _: f"{sym}{x:,.0f}")
    )
    ax_val.xaxis.set_major_formatter(
        mticker.FuncFormatter(lambda x, _: f"{sym}{x:,.0f}")
    )

    plt.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches="tight", facecolor="white")
        print(f"Chart saved to {save_path}")
    elif show and matplotlib.get_backend().lower() != "agg":
        plt.show(block=True)

    return fig
