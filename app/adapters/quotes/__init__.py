"""Quote source adapters - abstract over upstream price providers."""

from app.adapters.quotes.base import AbstractQuoteSource, Quote
from app.adapters.quotes.factory import create_quote_source
from app.adapters.quotes.proxy_client import ProxyQuoteSource

__all__ = [
    "AbstractQuoteSource",
    "ProxyQuoteSource",
    "Quote",
    "create_quote_source",
]
