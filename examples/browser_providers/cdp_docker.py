"""
Example: CDP against Chrome running in Docker.

Use this when Chrome isn't installed locally. The script reuses a running
`chrome-cdp` container or starts one, waits for DevTools to answer, then
connects through HyperAgent and reads the caller's IP from httpbin.

Stop the container when done:
  docker stop chrome-cdp

Usage:
  python examples/browser_providers/cdp_docker.py
"""

import asyncio
import json
import logging
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
from hyperagent.docker_chrome import DockerChromeOptions, ensure_chrome_container, is_container_running
from hyperagent.troubleshooting import docker_run_hint


async def main() -> int:
    load_dotenv()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    docker = DockerChromeOptions()
    try:
        version = await ensure_chrome_container(docker, timeout_s=20.0)
    except HyperAgentError as e:
        print(f"Chrome container did not become ready: {e}", file=sys.stderr)
        print(f"Check the container logs: docker logs {docker.container_name}", file=sys.stderr)
        return 1
    if version is None:
        print("Failed to start Chrome in Docker. Please run manually:", file=sys.stderr)
        for line in docker_run_hint():
            print(line, file=sys.stderr)
        return 1
    print(f"Chrome is ready: {version.browser}")

    config = HyperAgentConfig(
        browser_provider="cdp",
        cdp_config=CDPBrowserConfig(
            ws_endpoint=version.web_socket_debugger_url or docker.ws_endpoint,
            # containers can be slow to accept the first connection
            options=CDPConnectOptions(timeout=15_000),
        ),
        debug=True,
    )

    try:
        async with HyperAgent(config=config) as agent:
            page = await agent.get_current_page()
            await page.goto("https://httpbin.org/get")
            body = json.loads(await page.inner_text("body"))
            print(f"origin: {body.get('origin')}")
    except HyperAgentError as e:
        print(f"Error: {e}", file=sys.stderr)
        if not is_container_running(docker.container_name):
            print(f"Docker container '{docker.container_name}' is not running", file=sys.stderr)
        for hint in troubleshooting_hints(e, devtools_url=docker.devtools_url):
            print(hint, file=sys.stderr)
        return 1

    print(f"The container is still running. To stop it: docker stop {docker.container_name}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
