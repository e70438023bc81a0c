"""
Upstream proxy package.

Provides:
- Chat-completion proxy (OpenAI-compatible) with server-side API key injection
- Random-quote proxy (ZenQuotes)
- FastAPI callable-style endpoints and a small CLI
"""
