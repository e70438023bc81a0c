"""Pydantic models and dataclasses for request/response types."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel

DEFAULT_MODEL = "gpt-3.5-turbo"
DEFAULT_MAX_TOKENS = 500

T = TypeVar("T")


class ChatRequest(BaseModel):
    """Chat invocation payload. Every field is optional.

    Values are not type-checked: whatever the caller sends is forwarded
    and the upstream decides whether it is acceptable.
    """
    model: Any = None
    messages: Any = None
    max_tokens: Any = None

    def resolved(self) -> ResolvedChatRequest:
        """Apply defaults to absent (missing or null) fields only."""
        return ResolvedChatRequest(
            model=DEFAULT_MODEL if self.model is None else self.model,
            messages=[] if self.messages is None else self.messages,
            max_tokens=DEFAULT_MAX_TOKENS if self.max_tokens is None else self.max_tokens,
        )


@dataclass
class ResolvedChatRequest:
    model: Any
    messages: Any = field(default_factory=list)
    max_tokens: Any = DEFAULT_MAX_TOKENS

    @property
    def message_count(self) -> int:
        return len(self.messages) if isinstance(self.messages, list) else 0

    def as_payload(self) -> dict[str, Any]:
        return {"model": self.model, "messages": self.messages, "max_tokens": self.max_tokens}


@dataclass
class ChatResult:
    """Generated text plus the upstream's token accounting, passed through unchanged."""
    result: str
    usage: dict[str, Any] | None = None

    def as_dict(self) -> dict[str, Any]:
        return {"result": self.result, "usage": self.usage}


@dataclass
class QuoteResult:
    quote: str
    author: str

    def as_dict(self) -> dict[str, str]:
        return {"quote": self.quote, "author": self.author}


@dataclass
class ProxyError:
    """Failure carried as data. Subclasses fix the transport status."""
    message: str

    status_code: ClassVar[int] = 500
    status: ClassVar[str] = "INTERNAL"


class ConfigurationError(ProxyError):
    """Required server-side configuration (the API key) is missing."""
    status_code = 500
    status = "FAILED_PRECONDITION"


class UpstreamError(ProxyError):
    """The upstream call failed or returned an unusable payload."""
    status_code = 502
    status = "UNAVAILABLE"


@dataclass
class ProxyResult(Generic[T]):
    """Either a value or an error, never both."""
    value: T | None = None
    error: ProxyError | None = None

    @classmethod
    def success(cls, value: T) -> ProxyResult[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: ProxyError) -> ProxyResult[T]:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None
