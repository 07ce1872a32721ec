from __future__ import annotations

import pytest

from hyperagent.browser_providers import base as base_module


class FakePage:
    def __init__(self) -> None:
        self._closed = False

    def is_closed(self) -> bool:
        return self._closed

    async def close(self) -> None:
        self._closed = True


class FakeContext:
    def __init__(self, pages: list[FakePage] | None = None) -> None:
        self.pages = pages if pages is not None else []

    async def new_page(self) -> FakePage:
        page = FakePage()
        self.pages.append(page)
        return page


class FakeBrowser:
    def __init__(self, contexts: list[FakeContext] | None = None) -> None:
        self.contexts = contexts if contexts is not None else []
        self.closed = False
        self.close_error: Exception | None = None

    async def new_context(self) -> FakeContext:
        ctx = FakeContext()
        self.contexts.append(ctx)
        return ctx

    async def close(self) -> None:
        if self.close_error is not None:
            raise self.close_error
        self.closed = True


class FakeChromium:
    def __init__(self) -> None:
        self.connect_calls: list[tuple[str, dict]] = []
        self.launch_calls: list[dict] = []
        self.browsers: list[FakeBrowser] = []
        self.connect_error: Exception | None = None
        self.failing_endpoints: set[str] = set()
        self.initial_contexts = 1

    async def connect_over_cdp(self, endpoint_url: str, **kwargs) -> FakeBrowser:
        self.connect_calls.append((endpoint_url, kwargs))
        if self.connect_error is not None:
            raise self.connect_error
        if endpoint_url in self.failing_endpoints:
            raise RuntimeError(f"connect ECONNREFUSED {endpoint_url}")
        browser = FakeBrowser([FakeContext() for _ in range(self.initial_contexts)])
        self.browsers.append(browser)
        return browser

    async def launch(self, **kwargs) -> FakeBrowser:
        self.launch_calls.append(kwargs)
        browser = FakeBrowser()
        self.browsers.append(browser)
        return browser


class FakePlaywright:
    def __init__(self) -> None:
        self.chromium = FakeChromium()
        self.start_count = 0
        self.stop_count = 0
        self.stop_error: Exception | None = None

    @property
    def stopped(self) -> bool:
        return self.stop_count >= self.start_count > 0

    async def stop(self) -> None:
        self.stop_count += 1
        if self.stop_error is not None:
            raise self.stop_error


class _FakePlaywrightStarter:
    def __init__(self, pw: FakePlaywright) -> None:
        self._pw = pw

    async def start(self) -> FakePlaywright:
        self._pw.start_count += 1
        return self._pw


@pytest.fixture
def fake_playwright(monkeypatch) -> FakePlaywright:
    pw = FakePlaywright()
    monkeypatch.setattr(base_module, "async_playwright", lambda: _FakePlaywrightStarter(pw))
    return pw
