"""Random-quote proxy (ZenQuotes ``[{"q": ..., "a": ...}]`` shape)."""
from __future__ import annotations
import logging
from typing import Any

import httpx

from upstream_proxy.common.config import ProxySettings
from upstream_proxy.common.http import ClientFactory, describe_error
from upstream_proxy.common.schema import ProxyResult, QuoteResult, UpstreamError

LOGGER = logging.getLogger("upstream_proxy.handlers.quote")

UPSTREAM_LABEL = "quote"


def _first_quote(payload: Any) -> QuoteResult:
    if not isinstance(payload, list) or not payload:
        raise ValueError("Quote service returned no quotes")
    first = payload[0]
    try:
        quote, author = first["q"], first["a"]
    except (KeyError, TypeError) as e:
        raise ValueError(f"Malformed quote entry: {first!r}") from e
    if quote is None or author is None:
        raise ValueError(f"Malformed quote entry: {first!r}")
    return QuoteResult(quote=quote, author=author)


class QuoteProxy:
    def __init__(self, settings: ProxySettings | None = None, client_factory: ClientFactory | None = None) -> None:
        self.settings = settings or ProxySettings()
        self.client_factory = client_factory or httpx.Client

    def handle(self) -> ProxyResult[QuoteResult]:
        LOGGER.info("Quote function called")
        try:
            with self.client_factory(timeout=self.settings.http_timeout) as client:
                r = client.get(self.settings.quote_url)
                r.raise_for_status()
                payload = r.json()
            LOGGER.info("Quote service payload: %s", payload)
            result = _first_quote(payload)
        except Exception as e:
            message = describe_error(e)
            LOGGER.error("Quote service error: %s", message)
            return ProxyResult.failure(UpstreamError(f"Error fetching {UPSTREAM_LABEL}: {message}"))
        return ProxyResult.success(result)
