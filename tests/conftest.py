from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest


class _FakeClient:
    def __init__(self, upstream: "FakeUpstream", timeout: float | int | None = None) -> None:  # signature-compatible
        self.upstream = upstream
        self.timeout = timeout

    def __enter__(self) -> "_FakeClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        return None

    def _reply(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        self.upstream.calls.append({"method": method, "url": url, **kwargs})
        if self.upstream.exc is not None:
            raise self.upstream.exc
        request = httpx.Request(method, url)
        if self.upstream.text is not None:
            return httpx.Response(self.upstream.status, text=self.upstream.text, request=request)
        return httpx.Response(self.upstream.status, json=self.upstream.json_data, request=request)

    def post(self, url: str, headers: dict[str, str] | None = None, json: Any = None) -> httpx.Response:  # noqa: A002
        return self._reply("POST", url, headers=headers, json=json)

    def get(self, url: str, headers: dict[str, str] | None = None) -> httpx.Response:
        return self._reply("GET", url, headers=headers)


class FakeUpstream:
    """Stands in for httpx.Client; records every request and counts clients built."""

    def __init__(
        self,
        status: int = 200,
        json_data: Any = None,
        text: str | None = None,
        exc: Exception | None = None,
    ) -> None:
        self.status = status
        self.json_data = json_data
        self.text = text
        self.exc = exc
        self.calls: list[dict[str, Any]] = []
        self.clients_built = 0

    def __call__(self, timeout: float | int | None = None) -> _FakeClient:
        self.clients_built += 1
        return _FakeClient(self, timeout=timeout)


@pytest.fixture
def fake_upstream() -> Callable[..., FakeUpstream]:
    return FakeUpstream
