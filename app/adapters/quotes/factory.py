"""Factory for creating quote source instances."""

from app.adapters.quotes.base import AbstractQuoteSource
from app.adapters.quotes.proxy_client import ProxyQuoteSource
from app.core.config import settings
from app.core.errors import ValidationAppError


def create_quote_source() -> AbstractQuoteSource:
    """Instantiate the quote source selected by ``QUOTE_PROVIDER``.

    Returns:
        AbstractQuoteSource: Configured quote source.

    Raises:
        ValidationAppError: If the provider is unknown or misconfigured.
    """
    provider = settings.quote.provider.lower()

    if provider == "proxy":
        if not settings.quote.base_url:
            raise ValidationAppError(
                code="quote_missing_base_url",
                message="Proxy quote provider requires QUOTE_BASE_URL",
            )
        return ProxyQuoteSource(
            base_url=settings.quote.base_url,
            timeout_seconds=settings.quote.timeout_seconds,
        )

    raise ValidationAppError(
        code="quote_unknown_provider",
        message=f"Unknown quote provider: '{provider}'. Supported providers: proxy",
    )
