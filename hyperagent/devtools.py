"""
Chrome DevTools discovery helpers.

- fetch_devtools_version(): read /json/version from the DevTools HTTP endpoint
- candidate_ws_endpoints(): common WebSocket endpoints for a debugging port
- find_working_endpoint(): probe endpoints one at a time until one connects
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .browser_providers.cdp import CDPBrowserConfig, CDPBrowserProvider, CDPConnectOptions
from .constants import DEFAULT_CDP_PORT, DEFAULT_DEVTOOLS_URL
from .errors import BrowserProviderError, DevToolsUnavailableError

logger = logging.getLogger(__name__)


class DevToolsVersion(BaseModel):
    """Response body of GET /json/version"""

    model_config = ConfigDict(populate_by_name=True)

    browser: str = Field(default="", alias="Browser")
    protocol_version: str | None = Field(default=None, alias="Protocol-Version")
    user_agent: str | None = Field(default=None, alias="User-Agent")
    v8_version: str | None = Field(default=None, alias="V8-Version")
    webkit_version: str | None = Field(default=None, alias="WebKit-Version")
    web_socket_debugger_url: str | None = Field(default=None, alias="webSocketDebuggerUrl")


async def fetch_devtools_version(
    http_url: str = DEFAULT_DEVTOOLS_URL,
    *,
    timeout_s: float = 5.0,
    client: httpx.AsyncClient | None = None,
) -> DevToolsVersion:
    """
    Query the DevTools HTTP endpoint for browser version information.

    Args:
        http_url: Base URL of the DevTools HTTP server, e.g. http://localhost:9222
        timeout_s: Request timeout in seconds (ignored when `client` is given)
        client: Optional preconfigured httpx client

    Raises:
        DevToolsUnavailableError: on transport errors, non-2xx status or malformed JSON
    """
    url = f"{http_url.rstrip('/')}/json/version"
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=timeout_s) as owned:
                response = await owned.get(url)
        else:
            response = await client.get(url)
        response.raise_for_status()
        return DevToolsVersion.model_validate(response.json())
    except httpx.HTTPStatusError as e:
        raise DevToolsUnavailableError(http_url, f"HTTP {e.response.status_code}") from e
    except httpx.HTTPError as e:
        raise DevToolsUnavailableError(http_url, str(e) or type(e).__name__) from e
    except (ValueError, ValidationError) as e:
        raise DevToolsUnavailableError(http_url, f"malformed version response: {e}") from e


def candidate_ws_endpoints(
    hosts: Sequence[str] = ("localhost", "127.0.0.1"),
    port: int = DEFAULT_CDP_PORT,
) -> list[str]:
    endpoints: list[str] = []
    for host in hosts:
        endpoints.append(f"ws://{host}:{port}/devtools/browser")
        endpoints.append(f"ws://{host}:{port}")
    return endpoints


@dataclass(frozen=True)
class EndpointProbe:
    endpoint: str
    ok: bool
    contexts: int = 0
    error: BrowserProviderError | None = None


async def probe_endpoint(endpoint: str, *, timeout_ms: float = 5_000) -> EndpointProbe:
    """Connect to `endpoint`, count its contexts and close the connection again."""
    try:
        provider = CDPBrowserProvider(
            CDPBrowserConfig(ws_endpoint=endpoint, options=CDPConnectOptions(timeout=timeout_ms))
        )
        browser = await provider.start()
    except BrowserProviderError as e:
        logger.debug("CDP probe failed for %s: %s", endpoint, e)
        return EndpointProbe(endpoint=endpoint, ok=False, error=e)

    try:
        contexts = len(browser.contexts)
    finally:
        await provider.close()
    return EndpointProbe(endpoint=endpoint, ok=True, contexts=contexts)


async def find_working_endpoint(
    endpoints: Iterable[str] | None = None,
    *,
    timeout_ms: float = 5_000,
    on_result: Callable[[EndpointProbe], None] | None = None,
) -> str | None:
    """
    Try each endpoint in order and return the first one that connects.

    Every successful connection is closed before returning. `on_result` is
    called once per attempted endpoint.
    """
    for endpoint in endpoints if endpoints is not None else candidate_ws_endpoints():
        result = await probe_endpoint(endpoint, timeout_ms=timeout_ms)
        if on_result is not None:
            on_result(result)
        if result.ok:
            return endpoint
    return None
