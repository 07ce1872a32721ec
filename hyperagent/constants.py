"""HyperAgent constants."""

from __future__ import annotations

DEFAULT_CDP_PORT = 9222

DEFAULT_DEVTOOLS_URL = f"http://localhost:{DEFAULT_CDP_PORT}"

DEFAULT_CDP_ENDPOINT = f"ws://localhost:{DEFAULT_CDP_PORT}/devtools/browser"

WS_SCHEMES = ("ws://", "wss://")

CHROME_REMOTE_DEBUGGING_COMMAND = (
    f"chrome --remote-debugging-port={DEFAULT_CDP_PORT} --remote-debugging-address=0.0.0.0"
)

DOCKER_CHROME_IMAGE = "zenika/alpine-chrome:latest"
DOCKER_CHROME_CONTAINER = "chrome-cdp"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def env_flag(value: str | None, default: bool = False) -> bool:
    """Parse an environment flag such as "1", "true", "no" or "OFF". Unknown or empty values give `default`."""
    if value is None:
        return default
    value = value.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    return default
