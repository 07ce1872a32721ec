"""
Browser providers: obtain and release a browser session for the agent.

- CDPBrowserProvider: connect to an already-running Chrome over the DevTools protocol
- LocalBrowserProvider: launch a fresh Chromium through Playwright
"""

from .base import BrowserProvider
from .cdp import CDPBrowserConfig, CDPBrowserProvider, CDPConnectOptions
from .local import LocalBrowserConfig, LocalBrowserProvider

__all__ = [
    "BrowserProvider",
    "CDPBrowserConfig",
    "CDPBrowserProvider",
    "CDPConnectOptions",
    "LocalBrowserConfig",
    "LocalBrowserProvider",
]
