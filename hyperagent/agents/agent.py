from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..browser_providers import (
    BrowserProvider,
    CDPBrowserConfig,
    CDPBrowserProvider,
    LocalBrowserConfig,
    LocalBrowserProvider,
)
from ..errors import BrowserProviderError, CDPConfigurationError

if TYPE_CHECKING:
    from playwright.async_api import Browser, BrowserContext, Page

logger = logging.getLogger(__name__)

_PROVIDERS = {"local", "cdp"}


@dataclass(frozen=True)
class HyperAgentConfig:
    """
    Agent-level configuration.

    `browser_provider` selects how the browser is obtained:
    - "local": launch Chromium (configured by `local_config`)
    - "cdp": connect to a running Chrome (requires `cdp_config`)

    `debug` is propagated into the provider's own debug flag.
    """

    browser_provider: str = "local"
    cdp_config: CDPBrowserConfig | None = None
    local_config: LocalBrowserConfig | None = None
    debug: bool = False


def _build_provider(config: HyperAgentConfig) -> BrowserProvider[Browser]:
    kind = (config.browser_provider or "local").strip().lower()
    if kind not in _PROVIDERS:
        raise BrowserProviderError(
            "unknown_provider",
            f"browser_provider must be one of {sorted(_PROVIDERS)}, got {config.browser_provider!r}",
        )

    if kind == "cdp":
        if config.cdp_config is None:
            raise CDPConfigurationError(
                "missing_endpoint", 'cdp_config is required when browser_provider="cdp"'
            )
        cdp_config = config.cdp_config
        if config.debug and not cdp_config.debug:
            cdp_config = dataclasses.replace(cdp_config, debug=True)
        return CDPBrowserProvider(cdp_config)

    local_config = config.local_config or LocalBrowserConfig()
    if config.debug and not local_config.debug:
        local_config = dataclasses.replace(local_config, debug=True)
    return LocalBrowserProvider(local_config)


class HyperAgent:
    """
    Owns one browser provider and hands out pages to the agent core.

    Usage:
        async with HyperAgent(config=HyperAgentConfig(browser_provider="cdp", cdp_config=...)) as agent:
            page = await agent.get_current_page()
            await page.goto("https://example.com")
    """

    def __init__(self, *, config: HyperAgentConfig = HyperAgentConfig()) -> None:
        self.config = config
        self.browser_provider = _build_provider(config)
        self.browser: Browser | None = None
        self.context: BrowserContext | None = None
        self._current_page: Page | None = None

    async def init_browser(self) -> Browser:
        if self.browser is None:
            self.browser = await self.browser_provider.start()
        return self.browser

    async def _ensure_context(self) -> BrowserContext:
        browser = await self.init_browser()
        if self.context is None:
            contexts = browser.contexts
            self.context = contexts[0] if contexts else await browser.new_context()
        return self.context

    async def get_current_page(self) -> Page:
        if self._current_page is not None and not self._current_page.is_closed():
            return self._current_page

        context = await self._ensure_context()
        open_pages = [p for p in context.pages if not p.is_closed()]
        if open_pages:
            self._current_page = open_pages[0]
        else:
            self._current_page = await context.new_page()
            logger.debug("Opened new page")
        return self._current_page

    async def new_page(self) -> Page:
        context = await self._ensure_context()
        self._current_page = await context.new_page()
        return self._current_page

    async def close_agent(self) -> None:
        self._current_page = None
        self.context = None
        self.browser = None
        await self.browser_provider.close()

    async def __aenter__(self) -> HyperAgent:
        await self.init_browser()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close_agent()
