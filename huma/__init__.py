"""Building blocks for HTTP APIs: a router, middleware chains, content formats, cookies, conditional requests and casing."""

__version__ = "0.1.0"

__all__ = ["api", "autoconfig", "casing", "chain", "conditional", "cookie", "flow"]