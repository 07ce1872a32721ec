"""
Example: the smallest possible CDP session.

Connects through HyperAgent, navigates to example.com, prints the title and
saves a screenshot.

Chrome must be listening for remote debugging on port 9222, e.g.:
  docker run -d --rm --name chrome-cdp -p 9222:9222 \\
    zenika/alpine-chrome:latest \\
    --no-sandbox --remote-debugging-address=0.0.0.0 \\
    --remote-debugging-port=9222 --disable-gpu

Usage:
  python examples/browser_providers/simple_cdp.py
"""

import asyncio
import sys

from dotenv import load_dotenv

from hyperagent import (
    CDPBrowserConfig,
    CDPConnectOptions,
    HyperAgent,
    HyperAgentConfig,
    HyperAgentError,
    troubleshooting_hints,
)
from hyperagent.constants import DEFAULT_CDP_ENDPOINT


async def main() -> int:
    load_dotenv()

    config = HyperAgentConfig(
        browser_provider="cdp",
        cdp_config=CDPBrowserConfig(
            ws_endpoint=DEFAULT_CDP_ENDPOINT,
            options=CDPConnectOptions(timeout=10_000),
        ),
        debug=True,
    )

    try:
        async with HyperAgent(config=config) as agent:
            page = await agent.get_current_page()
            await page.goto("https://example.com")
            print(f'Page title: "{await page.title()}"')

            await page.screenshot(path="cdp-test-screenshot.png")
            print("Screenshot saved as cdp-test-screenshot.png")
    except HyperAgentError as e:
        print(f"Error: {e}", file=sys.stderr)
        for hint in troubleshooting_hints(e):
            print(hint, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
