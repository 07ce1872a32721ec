from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, ValidationError

from ..constants import DEFAULT_CDP_ENDPOINT, WS_SCHEMES, env_flag
from ..errors import CDPConfigurationError, CDPConnectionError, CDPEndpointFormatError
from ..troubleshooting import connection_hints
from .base import BrowserProvider

if TYPE_CHECKING:
    from playwright.async_api import Browser

logger = logging.getLogger(__name__)


class CDPConnectOptions(BaseModel):
    """Options passed through to ``chromium.connect_over_cdp``."""

    model_config = ConfigDict(extra="forbid")

    timeout: float | None = None  # ms, 0 disables
    slow_mo: float | None = None  # ms between operations
    headers: dict[str, str] | None = None

    def to_kwargs(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


@dataclass(frozen=True)
class CDPBrowserConfig:
    ws_endpoint: str = ""
    options: CDPConnectOptions | Mapping[str, Any] | None = None
    debug: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> CDPBrowserConfig:
        """
        Build a config from HYPERAGENT_CDP_* environment variables.

        Recognised variables:
            HYPERAGENT_CDP_ENDPOINT: WebSocket endpoint (default ws://localhost:9222/devtools/browser)
            HYPERAGENT_CDP_TIMEOUT_MS: connect timeout in milliseconds
            HYPERAGENT_CDP_SLOW_MO_MS: delay between operations in milliseconds
            HYPERAGENT_DEBUG: "1"/"true"/"yes"/"on" enables debug logging
        """
        env = os.environ if environ is None else environ
        timeout = env.get("HYPERAGENT_CDP_TIMEOUT_MS", "").strip()
        slow_mo = env.get("HYPERAGENT_CDP_SLOW_MO_MS", "").strip()
        try:
            options = CDPConnectOptions(
                timeout=float(timeout) if timeout else None,
                slow_mo=float(slow_mo) if slow_mo else None,
            )
        except (ValueError, ValidationError) as e:
            raise CDPConfigurationError(
                "invalid_options",
                f"Invalid CDP connect options in environment (timeout={timeout!r}, slow_mo={slow_mo!r}): {e}",
            ) from e
        return cls(
            ws_endpoint=env.get("HYPERAGENT_CDP_ENDPOINT", DEFAULT_CDP_ENDPOINT).strip(),
            options=options,
            debug=env_flag(env.get("HYPERAGENT_DEBUG")),
        )


def _coerce_options(options: CDPConnectOptions | Mapping[str, Any] | None) -> CDPConnectOptions | None:
    if options is None or isinstance(options, CDPConnectOptions):
        return options
    try:
        return CDPConnectOptions.model_validate(dict(options))
    except (TypeError, ValueError, ValidationError) as e:
        raise CDPConfigurationError("invalid_options", f"Invalid CDP connect options: {e}") from e


class CDPBrowserProvider(BrowserProvider["Browser"]):
    """
    Connects to an already-running Chrome/Chromium over the DevTools protocol.

    The provider performs exactly one connection attempt per ``start()``; it
    neither retries nor enforces its own timeout (pass ``timeout`` in the
    options to bound the attempt). ``close()`` closes the connection, clears
    the stored session and stops the Playwright driver.
    """

    def __init__(self, config: CDPBrowserConfig | None = None) -> None:
        super().__init__()
        if config is None or not config.ws_endpoint:
            raise CDPConfigurationError("missing_endpoint", "CDP ws_endpoint is required but was not provided")
        self.ws_endpoint = config.ws_endpoint
        self.options = _coerce_options(config.options)
        self.debug = bool(config.debug)

    async def start(self) -> Browser:
        if self.debug:
            logger.info("Connecting to CDP WebSocket endpoint: %s", self.ws_endpoint)

        if not self.ws_endpoint.startswith(WS_SCHEMES):
            raise CDPEndpointFormatError(self.ws_endpoint)

        if self.session is not None:
            logger.warning("Replacing existing CDP session for %s without closing it", self.ws_endpoint)

        kwargs = self.options.to_kwargs() if self.options is not None else {}
        try:
            pw = await self._ensure_playwright()
            browser = await pw.chromium.connect_over_cdp(self.ws_endpoint, **kwargs)
        except Exception as e:
            if self.debug:
                logger.error("Failed to connect to CDP browser: %s", e)
                for hint in connection_hints():
                    logger.error(hint)
            if self.session is None:
                await self._stop_playwright()
            raise CDPConnectionError(self.ws_endpoint, e) from e

        self.session = browser
        if self.debug:
            logger.info("Successfully connected to CDP browser")
            logger.info("Connected browser has %d context(s)", len(browser.contexts))
        return browser

    async def close(self) -> None:
        session = self.session
        if session is not None and self.debug:
            logger.info("Closing CDP browser connection")
        await self._close_session()
