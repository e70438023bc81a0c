"""Command-line entry point: one-shot chat/quote calls and the HTTP server."""
from __future__ import annotations
import argparse
import json
import logging
import sys
from typing import Any

from upstream_proxy.common.config import EnvSecretProvider, load_settings
from upstream_proxy.common.logging_setup import setup_logging
from upstream_proxy.common.schema import ChatRequest, ProxyResult
from upstream_proxy.handlers.chat import ChatCompletionProxy
from upstream_proxy.handlers.quote import QuoteProxy

LOGGER = logging.getLogger("upstream_proxy.cli")


def parse_message(raw: str) -> dict[str, str]:
    """Parse ``ROLE:CONTENT``; a bare string is a user message."""
    role, sep, content = raw.partition(":")
    if not sep:
        return {"role": "user", "content": raw}
    return {"role": role.strip(), "content": content}


def _emit(outcome: ProxyResult[Any]) -> int:
    if outcome.error is not None:
        print(outcome.error.message, file=sys.stderr)
        return 1
    print(json.dumps(outcome.value.as_dict(), ensure_ascii=False))
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="upstream-proxy", description="Proxy calls to chat and quote APIs")
    ap.add_argument("--cfg", default="configs/proxy.yaml", help="Config path")
    sub = ap.add_subparsers(dest="command", required=True)

    chat = sub.add_parser("chat", help="Send one chat completion request")
    chat.add_argument("--model", default=None)
    chat.add_argument("--message", action="append", default=None, help="ROLE:CONTENT, repeatable")
    chat.add_argument("--max-tokens", type=int, default=None)

    sub.add_parser("quote", help="Fetch one random quote")

    serve = sub.add_parser("serve", help="Run the HTTP server")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings(args.cfg)
    setup_logging(settings.log_level)

    if args.command == "chat":
        messages = [parse_message(m) for m in args.message] if args.message else None
        request = ChatRequest(model=args.model, messages=messages, max_tokens=args.max_tokens)
        proxy = ChatCompletionProxy(EnvSecretProvider(settings.api_key_env), settings=settings)
        return _emit(proxy.handle(request))

    if args.command == "quote":
        return _emit(QuoteProxy(settings=settings).handle())

    import uvicorn

    from upstream_proxy.serve.fastapi_app import create_app

    LOGGER.info("Serving on %s:%s", args.host, args.port)
    uvicorn.run(create_app(settings), host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
