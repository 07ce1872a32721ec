"""
Example: HyperAgent with the CDP browser provider.

Connects to an already-running Chrome/Chromium over the DevTools protocol,
opens a page and reads some basic information from it.

Start Chrome with remote debugging first:
  chrome --remote-debugging-port=9222 --remote-debugging-address=0.0.0.0
or headless:
  chrome --headless --remote-debugging-port=9222 --remote-debugging-address=0.0.0.0

Usage:
  python examples/browser_providers/cdp.py
  HYPERAGENT_CDP_ENDPOINT=ws://chrome:9222/devtools/browser python examples/browser_providers/cdp.py
"""

import asyncio
import logging
import sys

from dotenv import load_dotenv

from hyperagent import CDPBrowserConfig, HyperAgent, HyperAgentConfig, HyperAgentError, troubleshooting_hints


async def main() -> int:
    load_dotenv()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    cdp_config = CDPBrowserConfig.from_env()
    agent = HyperAgent(
        config=HyperAgentConfig(browser_provider="cdp", cdp_config=cdp_config, debug=True)
    )

    try:
        print("Initializing CDP browser connection...")
        browser = await agent.init_browser()
        print("CDP browser connected")

        context = browser.contexts[0] if browser.contexts else await browser.new_context()
        page = await context.new_page()

        print("Navigating to example.com...")
        await page.goto("https://example.com")
        print(f'Page title: "{await page.title()}"')

        content = await page.text_content("body")
        print(f"Page contains {len(content or '')} characters of text")
    except HyperAgentError as e:
        print(f"Error: {e}", file=sys.stderr)
        for hint in troubleshooting_hints(e):
            print(hint, file=sys.stderr)
        return 1
    finally:
        await agent.close_agent()
        print("CDP browser connection closed")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
