"""
Exception types raised by HyperAgent browser providers.

Every error carries a short machine-readable ``reason_code`` so callers can
branch on the kind of failure without inspecting message text.
"""

from __future__ import annotations


class HyperAgentError(Exception):
    """Base class for all HyperAgent errors."""

    def __init__(self, reason_code: str, message: str) -> None:
        super().__init__(message)
        self.reason_code = reason_code


class BrowserProviderError(HyperAgentError):
    """Raised by a browser provider while establishing or using a session."""


class CDPConfigurationError(BrowserProviderError, ValueError):
    """The provider was constructed with an unusable configuration."""


class CDPEndpointFormatError(BrowserProviderError, ValueError):
    """The CDP endpoint does not use a ws:// or wss:// scheme."""

    def __init__(self, endpoint: str) -> None:
        super().__init__(
            "invalid_endpoint_format",
            f"Invalid CDP WebSocket endpoint format: {endpoint}. Must start with ws:// or wss://",
        )
        self.endpoint = endpoint


class CDPConnectionError(BrowserProviderError, ConnectionError):
    """The underlying connect call failed."""

    def __init__(self, endpoint: str, cause: BaseException) -> None:
        super().__init__(
            "connect_failed",
            f"Failed to connect to CDP WebSocket endpoint: {endpoint}. {cause}",
        )
        self.endpoint = endpoint
        self.cause = cause


class DevToolsUnavailableError(HyperAgentError):
    """The DevTools HTTP endpoint did not answer with version information."""

    def __init__(self, url: str, detail: str) -> None:
        super().__init__("devtools_unavailable", f"Chrome DevTools is not accessible at {url}: {detail}")
        self.url = url
