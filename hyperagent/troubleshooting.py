"""
Troubleshooting hints for browser connection failures.

Hints are chosen from the exception type, so callers can print them for any
error raised by a provider or the DevTools helpers.
"""

from __future__ import annotations

from .constants import (
    CHROME_REMOTE_DEBUGGING_COMMAND,
    DEFAULT_CDP_PORT,
    DEFAULT_DEVTOOLS_URL,
    DOCKER_CHROME_CONTAINER,
    DOCKER_CHROME_IMAGE,
)
from .errors import (
    CDPConfigurationError,
    CDPConnectionError,
    CDPEndpointFormatError,
    DevToolsUnavailableError,
)


def docker_run_hint() -> list[str]:
    return [
        f"docker run -d --rm --name {DOCKER_CHROME_CONTAINER} -p {DEFAULT_CDP_PORT}:{DEFAULT_CDP_PORT} \\",
        f"  {DOCKER_CHROME_IMAGE} \\",
        "  --no-sandbox --remote-debugging-address=0.0.0.0 \\",
        f"  --remote-debugging-port={DEFAULT_CDP_PORT} --disable-gpu --disable-dev-shm-usage",
    ]


def connection_hints(devtools_url: str = DEFAULT_DEVTOOLS_URL) -> list[str]:
    return [
        "Make sure Chrome/Chromium is running with the --remote-debugging-port flag:",
        f"  {CHROME_REMOTE_DEBUGGING_COMMAND}",
        f"Check that Chrome DevTools is accessible at {devtools_url}",
        "Or run Chrome in Docker:",
        *(f"  {line}" for line in docker_run_hint()),
    ]


def troubleshooting_hints(error: BaseException, devtools_url: str = DEFAULT_DEVTOOLS_URL) -> list[str]:
    """
    Return human-readable hints for ``error``.

    Args:
        error: Exception raised while connecting.
        devtools_url: DevTools HTTP URL to mention in connection hints.

    Returns:
        Hint lines, empty when nothing useful can be suggested.
    """
    if isinstance(error, CDPEndpointFormatError):
        return [
            "The CDP endpoint must be a WebSocket URL starting with ws:// or wss://",
            f"Look up webSocketDebuggerUrl at {devtools_url}/json/version",
        ]
    if isinstance(error, CDPConfigurationError):
        return ["Pass a CDPBrowserConfig with a non-empty ws_endpoint and valid options"]
    if isinstance(error, (CDPConnectionError, DevToolsUnavailableError)):
        return connection_hints(devtools_url)
    return []
