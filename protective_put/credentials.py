"""
Credential resolution for quote providers: env vars -> GitHub repo variables.

Usage:
    from protective_put.credentials import get_provider_key, get_alpaca_keys
    fmp_key = get_provider_key("fmp")
    api_key, secret_key = get_alpaca_keys()
"""

import os
import subprocess
import logging

logger = logging.getLogger(__name__)

GH_REPO_ENV = "PROTECTIVE_PUT_GH_REPO"

PROVIDER_KEY_VARS = {
    "fmp": "FMP_API_KEY",
    "alpha_vantage": "ALPHA_VANTAGE_KEY",
    "twelve_data": "TWELVE_DATA_KEY",
}

# Financial Modeling Prep serves a limited number of requests with this key.
FMP_DEMO_KEY = "demo"


def _gh_variable_get(name: str) -> str:
    """Fetch a variable from the configured GitHub repo via `gh` CLI."""
    repo = os.getenv(GH_REPO_ENV, "")
    if not repo:
        return ""
    try:
        result = subprocess.run(
            ["gh", "variable", "get", name, "--repo", repo],
            capture_output=True, text=True, timeout=10,
        )
        if result.returncode == 0:
            return result.stdout.strip()
    except (FileNotFoundError, subprocess.TimeoutExpired):
        pass
    return ""


def get_provider_key(provider: str) -> str:
    """
    Resolve the API key for a keyed quote provider.

    Priority:
      1. FMP_API_KEY / ALPHA_VANTAGE_KEY / TWELVE_DATA_KEY env vars
      2. GitHub repo variables via `gh variable get` (repo from
         PROTECTIVE_PUT_GH_REPO)
      3. "demo" for Financial Modeling Prep, "" otherwise
    """
    if provider not in PROVIDER_KEY_VARS:
        raise ValueError(f"No API key is defined for provider {provider!r}")

    var_name = PROVIDER_KEY_VARS[provider]
    key = os.getenv(var_name, "")
    if key:
        return key

    key = _gh_variable_get(var_name)
    if key:
        logger.info("Loaded %s from GitHub repo variables", var_name)
        return key

    if provider == "fmp":
        return FMP_DEMO_KEY
    logger.debug("%s not set; %s provider will be skipped", var_name, provider)
    return ""


def get_alpaca_keys() -> tuple[str, str]:
    """
    Resolve Alpaca API credentials.

    Priority:
      1. ALPACA_API_KEY / ALPACA_SECRET_KEY env vars
      2. GitHub repo variables via `gh variable get`
    """
    api_key = os.getenv("ALPACA_API_KEY", "")
    secret_key = os.getenv("ALPACA_SECRET_KEY", "")

    if api_key and secret_key:
        return api_key, secret_key

    logger.info("Env vars not set, trying GitHub repo variables...")
    if not api_key:
        api_key = _gh_variable_get("ALPACA_API_KEY")
    if not secret_key:
        secret_key = _gh_variable_get("ALPACA_SECRET_KEY")

    if api_key and secret_key:
        logger.info("Loaded Alpaca keys from GitHub repo variables")
    else:
        logger.warning(
            "Alpaca keys not found. Set ALPACA_API_KEY/ALPACA_SECRET_KEY "
            "env vars or store them as GitHub variables in the repo named by %s",
            GH_REPO_ENV,
        )

    return api_key, secret_key
