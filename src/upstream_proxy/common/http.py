"""HTTP helpers shared by the upstream handlers."""
from __future__ import annotations
from typing import Any, Callable

import httpx

ClientFactory = Callable[..., Any]


def describe_error(exc: Exception) -> str:
    """Return the most useful message for an upstream failure.

    For HTTP status errors prefer the upstream's own ``error.message``
    (OpenAI error body shape) over httpx's generic status text.
    """
    if isinstance(exc, httpx.HTTPStatusError):
        try:
            body = exc.response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            err = body.get("error")
            if isinstance(err, dict) and err.get("message"):
                return str(err["message"])
            if isinstance(err, str) and err:
                return err
    return str(exc) or exc.__class__.__name__
