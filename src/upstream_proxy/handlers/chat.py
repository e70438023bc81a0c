"""Chat-completion proxy.

Injects the server-held API key, forwards one request to an
OpenAI-compatible ``/v1/chat/completions`` endpoint and reduces the
response to ``{result, usage}``.
"""
from __future__ import annotations
import logging
from typing import Any, Mapping

import httpx

from upstream_proxy.common.config import ProxySettings, SecretProvider
from upstream_proxy.common.http import ClientFactory, describe_error
from upstream_proxy.common.schema import (
    ChatRequest,
    ChatResult,
    ConfigurationError,
    ProxyResult,
    UpstreamError,
)

LOGGER = logging.getLogger("upstream_proxy.handlers.chat")

UPSTREAM_LABEL = "OpenAI API"
MISSING_KEY_MESSAGE = "Server configuration error: API key not found"


def _extract_completion(data: Any) -> ChatResult:
    """Pull the first choice's text and the usage block out of a completion body."""
    if not isinstance(data, dict):
        raise ValueError("Malformed response: expected a JSON object")
    choices = data.get("choices")
    if not choices:
        raise ValueError("Malformed response: no completion choices returned")
    try:
        content = choices[0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        raise ValueError(f"Malformed response: missing message content ({e})") from e
    if content is None:
        raise ValueError("Malformed response: message content is null")
    return ChatResult(result=content, usage=data.get("usage"))


class ChatCompletionProxy:
    def __init__(
        self,
        secrets: SecretProvider,
        settings: ProxySettings | None = None,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self.secrets = secrets
        self.settings = settings or ProxySettings()
        self.client_factory = client_factory or httpx.Client

    def handle(self, request: ChatRequest | Mapping[str, Any] | None = None) -> ProxyResult[ChatResult]:
        LOGGER.info("OpenAI function called")

        api_key = self.secrets.get_secret()
        if not api_key:
            LOGGER.error("OpenAI API key not found")
            return ProxyResult.failure(ConfigurationError(MISSING_KEY_MESSAGE))

        headers = {"Authorization": f"Bearer {api_key}"}
        try:
            if request is None:
                request = ChatRequest()
            elif not isinstance(request, ChatRequest):
                request = ChatRequest.model_validate(dict(request))
            params = request.resolved()

            LOGGER.info(
                "Calling OpenAI with params model=%s message_count=%d max_tokens=%s",
                params.model,
                params.message_count,
                params.max_tokens,
            )

            with self.client_factory(timeout=self.settings.http_timeout) as client:
                r = client.post(self.settings.chat_url, headers=headers, json=params.as_payload())
                r.raise_for_status()
                data = r.json()
            result = _extract_completion(data)
        except Exception as e:
            message = describe_error(e)
            LOGGER.error("OpenAI API error: %s", message)
            return ProxyResult.failure(UpstreamError(f"Error calling {UPSTREAM_LABEL}: {message}"))

        LOGGER.info("OpenAI response received")
        return ProxyResult.success(result)
