"""
Check which CDP endpoint HyperAgent can use.

For every candidate endpoint this builds a HyperAgent, opens a page on a
data: URL, reads its title and closes the agent again. Stops at the first
endpoint that works.

Usage:
  python examples/browser_providers/cdp_connection_check.py
"""

import asyncio
import sys

from playwright.async_api import Error as PlaywrightError

from hyperagent import (
    CDPBrowserConfig,
    CDPConnectOptions,
    HyperAgent,
    HyperAgentConfig,
    HyperAgentError,
    candidate_ws_endpoints,
    fetch_devtools_version,
    troubleshooting_hints,
)


async def check(endpoint: str) -> bool:
    agent = HyperAgent(
        config=HyperAgentConfig(
            browser_provider="cdp",
            cdp_config=CDPBrowserConfig(ws_endpoint=endpoint, options=CDPConnectOptions(timeout=5_000)),
        )
    )
    try:
        page = await agent.get_current_page()
        await page.goto("data:text/html,<title>CDP Test Page</title><h1>CDP Test Page</h1>")
        print(f'OK      {endpoint} (page title: "{await page.title()}")')
        return True
    except (HyperAgentError, PlaywrightError) as e:
        print(f"FAILED  {endpoint}: {e}")
        return False
    finally:
        await agent.close_agent()


async def main() -> int:
    try:
        version = await fetch_devtools_version()
        print(f"Chrome DevTools is running: {version.browser}")
        print(f"WebSocket debugger URL: {version.web_socket_debugger_url}\n")
    except HyperAgentError as e:
        print(f"{e}\n")
        for hint in troubleshooting_hints(e):
            print(hint)
        print()

    for endpoint in candidate_ws_endpoints():
        if await check(endpoint):
            print(f"\nUse this endpoint in your CDP configuration: {endpoint}")
            return 0

    print("\nNone of the endpoints worked. Kill any Chrome started without remote debugging")
    print("and restart it with --remote-debugging-port=9222, or expose port 9222 from your container.")
    return 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
