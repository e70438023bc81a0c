"""FastAPI front for the upstream proxies, using the callable envelope.

Endpoints:
- GET /health
- POST /callOpenAI  { "data": { "model": ..., "messages": [...], "max_tokens": ... } }
- POST /getQuote    { "data": null }

Success bodies are ``{"result": {...}}``; failures are
``{"error": {"status": ..., "message": ...}}`` with a matching HTTP status.
"""
from __future__ import annotations
import logging
from typing import Any

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from upstream_proxy.common.config import (
    EnvSecretProvider,
    ProxySettings,
    SecretProvider,
    load_settings,
)
from upstream_proxy.common.http import ClientFactory
from upstream_proxy.common.logging_setup import setup_logging
from upstream_proxy.common.schema import ChatRequest, ProxyResult
from upstream_proxy.handlers.chat import ChatCompletionProxy
from upstream_proxy.handlers.quote import QuoteProxy

LOGGER = logging.getLogger("upstream_proxy.serve.app")


class ChatCallIn(BaseModel):
    data: ChatRequest | None = None


class QuoteCallIn(BaseModel):
    data: Any = None


def _respond(outcome: ProxyResult[Any]) -> JSONResponse:
    if outcome.error is not None:
        err = outcome.error
        return JSONResponse(
            status_code=err.status_code,
            content={"error": {"status": err.status, "message": err.message}},
        )
    return JSONResponse(content={"result": outcome.value.as_dict()})


def create_app(
    settings: ProxySettings | None = None,
    secrets: SecretProvider | None = None,
    client_factory: ClientFactory | None = None,
) -> FastAPI:
    settings = settings or load_settings()
    secrets = secrets or EnvSecretProvider(settings.api_key_env)
    chat = ChatCompletionProxy(secrets, settings=settings, client_factory=client_factory)
    quote = QuoteProxy(settings=settings, client_factory=client_factory)

    app = FastAPI(title="upstream-proxy")

    @app.on_event("startup")
    def _check_secret_on_startup() -> None:
        """Warn early when the chat credential is not configured."""
        if not secrets.get_secret():
            LOGGER.warning("Chat API key not set; /callOpenAI will fail until it is")

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/callOpenAI")
    def call_openai(body: ChatCallIn | None = None) -> JSONResponse:
        request = body.data if body is not None and body.data is not None else ChatRequest()
        return _respond(chat.handle(request))

    @app.post("/getQuote")
    def get_quote(body: QuoteCallIn | None = None) -> JSONResponse:
        return _respond(quote.handle())

    return app


_settings = load_settings()
setup_logging(_settings.log_level)
app = create_app(_settings)
