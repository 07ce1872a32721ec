from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..constants import env_flag
from .base import BrowserProvider

if TYPE_CHECKING:
    from playwright.async_api import Browser

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LocalBrowserConfig:
    headless: bool = True
    args: list[str] = field(default_factory=list)
    channel: str | None = None  # e.g. "chrome", "msedge"
    debug: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> LocalBrowserConfig:
        env = os.environ if environ is None else environ
        return cls(
            headless=env_flag(env.get("HYPERAGENT_HEADLESS"), default=True),
            debug=env_flag(env.get("HYPERAGENT_DEBUG")),
        )


class LocalBrowserProvider(BrowserProvider["Browser"]):
    """Launches a fresh Chromium instance through Playwright."""

    def __init__(self, config: LocalBrowserConfig | None = None) -> None:
        super().__init__()
        self.config = config or LocalBrowserConfig()
        self.debug = self.config.debug

    async def start(self) -> Browser:
        if self.session is not None:
            logger.warning("Replacing existing local browser session without closing it")
        pw = await self._ensure_playwright()
        launch_kwargs: dict = {"headless": self.config.headless, "args": list(self.config.args)}
        if self.config.channel:
            launch_kwargs["channel"] = self.config.channel
        if self.debug:
            logger.info("Launching local Chromium (headless=%s)", self.config.headless)
        self.session = await pw.chromium.launch(**launch_kwargs)
        return self.session

    async def close(self) -> None:
        session = self.session
        if session is not None and self.debug:
            logger.info("Closing local browser")
        await self._close_session()
