from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Generic, TypeVar

from playwright.async_api import async_playwright

if TYPE_CHECKING:
    from playwright.async_api import Playwright

logger = logging.getLogger(__name__)

SessionT = TypeVar("SessionT")


class BrowserProvider(ABC, Generic[SessionT]):
    """
    Owns a single browser session on behalf of the agent.

    Subclasses decide how the session is obtained (launch, connect, ...). The
    base class owns the Playwright driver: it is started lazily on the first
    ``start()`` and stopped by ``close()``.

    Usage:
        async with SomeProvider(config) as browser:
            ...
    """

    def __init__(self) -> None:
        self.session: SessionT | None = None
        self._playwright: Playwright | None = None

    @abstractmethod
    async def start(self) -> SessionT:
        """Establish the session and return it."""

    @abstractmethod
    async def close(self) -> None:
        """Release the session. Safe to call when no session exists."""

    def get_session(self) -> SessionT | None:
        return self.session

    async def _ensure_playwright(self) -> Playwright:
        if self._playwright is None:
            logger.debug("Starting Playwright driver")
            self._playwright = await async_playwright().start()
        return self._playwright

    async def _stop_playwright(self) -> None:
        if self._playwright is None:
            return
        pw = self._playwright
        self._playwright = None
        logger.debug("Stopping Playwright driver")
        await pw.stop()

    async def _close_session(self) -> None:
        """
        Close the stored session, clear it and stop the driver.

        An error from ``session.close()`` propagates unchanged; a driver stop
        failure while that error is in flight is logged instead of replacing it.
        """
        session = self.session
        self.session = None
        try:
            if session is not None:
                await session.close()
        except BaseException:
            try:
                await self._stop_playwright()
            except Exception:
                logger.warning("Failed to stop Playwright driver after close error", exc_info=True)
            raise
        await self._stop_playwright()

    async def __aenter__(self) -> SessionT:
        return await self.start()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
