from __future__ import annotations

import asyncio
import logging
import subprocess
import time
from dataclasses import dataclass, field

from .constants import DEFAULT_CDP_PORT, DOCKER_CHROME_CONTAINER, DOCKER_CHROME_IMAGE
from .devtools import DevToolsVersion, fetch_devtools_version
from .errors import DevToolsUnavailableError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DockerChromeOptions:
    """Options for running headless Chrome with remote debugging in Docker."""

    container_name: str = DOCKER_CHROME_CONTAINER
    image: str = DOCKER_CHROME_IMAGE
    host_port: int = DEFAULT_CDP_PORT
    extra_args: list[str] = field(default_factory=list)

    @property
    def devtools_url(self) -> str:
        return f"http://localhost:{self.host_port}"

    @property
    def ws_endpoint(self) -> str:
        return f"ws://localhost:{self.host_port}/devtools/browser"


def build_run_command(options: DockerChromeOptions | None = None) -> list[str]:
    options = options or DockerChromeOptions()
    return [
        "docker",
        "run",
        "-d",
        "--rm",
        "--name",
        options.container_name,
        "-p",
        f"{options.host_port}:{DEFAULT_CDP_PORT}",
        options.image,
        "--no-sandbox",
        "--remote-debugging-address=0.0.0.0",
        f"--remote-debugging-port={DEFAULT_CDP_PORT}",
        "--disable-gpu",
        "--disable-dev-shm-usage",
        *options.extra_args,
    ]


def is_container_running(name: str = DOCKER_CHROME_CONTAINER) -> bool:
    """Return True if a container named `name` is running. False if docker is unavailable."""
    try:
        result = subprocess.run(
            ["docker", "ps", "--filter", f"name={name}", "--format", "{{.Names}}"],
            capture_output=True,
            timeout=10,
        )
    except (subprocess.TimeoutExpired, FileNotFoundError, OSError):
        return False
    if result.returncode != 0:
        return False
    names = result.stdout.decode("utf-8", errors="replace").split()
    return name in names


def start_container(options: DockerChromeOptions | None = None) -> bool:
    options = options or DockerChromeOptions()
    cmd = build_run_command(options)
    logger.info("Starting Chrome in Docker: %s", " ".join(cmd))
    try:
        result = subprocess.run(cmd, capture_output=True, timeout=120)
    except subprocess.TimeoutExpired:
        logger.warning("docker run timed out")
        return False
    except (FileNotFoundError, OSError) as e:
        logger.warning(f"Could not run docker: {e}")
        return False

    if result.returncode != 0:
        logger.warning(
            f"docker run failed with return code {result.returncode}: "
            f"{result.stderr.decode('utf-8', errors='replace')[:500]}"
        )
        return False
    return True


async def wait_for_devtools(
    http_url: str,
    *,
    timeout_s: float = 15.0,
    poll_s: float = 0.5,
) -> DevToolsVersion:
    """
    Poll the DevTools HTTP endpoint until it answers.

    Raises:
        DevToolsUnavailableError: the last failure, if `timeout_s` elapses first
    """
    start = time.monotonic()
    while True:
        try:
            remaining = timeout_s - (time.monotonic() - start)
            request_timeout = min(max(poll_s, 1.0), max(remaining, 0.1))
            return await fetch_devtools_version(http_url, timeout_s=request_timeout)
        except DevToolsUnavailableError:
            if time.monotonic() - start >= timeout_s:
                raise
        await asyncio.sleep(poll_s)


async def ensure_chrome_container(
    options: DockerChromeOptions | None = None,
    *,
    timeout_s: float = 15.0,
) -> DevToolsVersion | None:
    """
    Reuse a running Chrome container or start one, then wait for DevTools.

    Returns the DevTools version info, or None if the container could not be started.
    """
    options = options or DockerChromeOptions()
    if is_container_running(options.container_name):
        logger.info("Chrome container %s is already running", options.container_name)
    elif not start_container(options):
        return None
    return await wait_for_devtools(options.devtools_url, timeout_s=timeout_s)
