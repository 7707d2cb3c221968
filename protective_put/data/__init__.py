"""Market data collaborators: quote providers, caching and volatility estimates."""
from .providers import QuoteError, StockQuote, fallback_quote, is_market_open
from .quote_service import QuoteBatchItem, QuoteService, default_quote_service
from .volatility import range_volatility, realized_volatility
