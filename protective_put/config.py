import os
from dataclasses import dataclass, field, fields

HORIZON_CHOICES = (30, 60, 90, 180, 365)

PROVIDER_NAMES = ("fmp", "alpha_vantage", "twelve_data", "yfinance", "alpaca")

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class AdvisoryThresholds:
    """Trigger levels for the advisory rules."""

    max_annualized_cost_pct: float = 5.0
    min_horizon_days: int = 30
    max_implied_volatility: float = 0.50
    max_protection_level: float = 0.98
    min_abs_delta: float = 0.30

    # Recommendations
    reasonable_horizon_days: int = 90


@dataclass
class CalculatorConfig:
    """Defaults for the calculator, quote fetching and presentation."""

    # Inputs
    symbol: str = "AAPL"
    spot_price: float = 150.0
    shares: int = 100
    protection_level: float = 0.95
    horizon_days: int = 90
    risk_free_rate: float = 0.05
    implied_volatility: float = 0.25

    # Presentation
    currency: str = "USD"
    language: str = "en"

    # Quote fetching
    providers: tuple[str, ...] = PROVIDER_NAMES
    quote_ttl_seconds: float = 60.0     # 1 minute cache
    http_timeout_seconds: float = 10.0
    fmp_base_url: str = "https://financialmodelingprep.com/api/v3"
    alpha_vantage_base_url: str = "https://www.alphavantage.co/query"
    twelve_data_base_url: str = "https://api.twelvedata.com"
    exchange_rate_url: str = "https://api.exchangerate-api.com/v4/latest/USD"

    thresholds: AdvisoryThresholds = field(default_factory=AdvisoryThresholds)

    log_level: str = "INFO"

    def __post_init__(self):
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {_LOG_LEVELS}, got {self.log_level!r}")
        unknown = [p for p in self.providers if p not in PROVIDER_NAMES]
        if unknown:
            raise ValueError(f"Unknown quote providers: {unknown}")
        if self.quote_ttl_seconds <= 0:
            raise ValueError(f"quote_ttl_seconds must be positive, got {self.quote_ttl_seconds}")
        if self.http_timeout_seconds <= 0:
            raise ValueError(f"http_timeout_seconds must be positive, got {self.http_timeout_seconds}")

    @classmethod
    def from_env(cls, prefix: str = "PROTECTIVE_PUT_") -> "CalculatorConfig":
        """
        Overlay PROTECTIVE_PUT_<FIELD> environment variables on the defaults.

        PROTECTIVE_PUT_PROVIDERS is a comma-separated provider list.
        """
        overrides = {}
        for f in fields(cls):
            if f.name == "thresholds":
                continue
            raw = os.getenv(prefix + f.name.upper())
            if raw is None or raw == "":
                continue
            if f.name == "providers":
                overrides[f.name] = tuple(p.strip() for p in raw.split(",") if p.strip())
            elif f.type in (int, "int"):
                overrides[f.name] = int(raw)
            elif f.type in (float, "float"):
                overrides[f.name] = float(raw)
            else:
                overrides[f.name] = raw
        return cls(**overrides)
