from __future__ import annotations

import subprocess

import pytest

from hyperagent import docker_chrome
from hyperagent.devtools import DevToolsVersion
from hyperagent.docker_chrome import (
    DockerChromeOptions,
    build_run_command,
    ensure_chrome_container,
    is_container_running,
    start_container,
    wait_for_devtools,
)
from hyperagent.errors import DevToolsUnavailableError


class RunRecorder:
    def __init__(self, results: list[subprocess.CompletedProcess | Exception]) -> None:
        self.results = results
        self.calls: list[list[str]] = []

    def __call__(self, cmd, **kwargs):
        _ = kwargs
        self.calls.append(list(cmd))
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


def completed(returncode: int = 0, stdout: bytes = b"", stderr: bytes = b"") -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


def test_build_run_command_maps_host_port() -> None:
    cmd = build_run_command(DockerChromeOptions(host_port=9333, extra_args=["--lang=en-US"]))
    assert cmd[:6] == ["docker", "run", "-d", "--rm", "--name", "chrome-cdp"]
    assert "9333:9222" in cmd
    assert "zenika/alpine-chrome:latest" in cmd
    assert "--remote-debugging-port=9222" in cmd
    assert "--remote-debugging-address=0.0.0.0" in cmd
    assert cmd[-1] == "--lang=en-US"


def test_options_urls() -> None:
    opts = DockerChromeOptions(host_port=9333)
    assert opts.devtools_url == "http://localhost:9333"
    assert opts.ws_endpoint == "ws://localhost:9333/devtools/browser"


def test_is_container_running(monkeypatch) -> None:
    recorder = RunRecorder([completed(stdout=b"chrome-cdp\n")])
    monkeypatch.setattr(docker_chrome.subprocess, "run", recorder)

    assert is_container_running("chrome-cdp") is True
    assert recorder.calls == [
        ["docker", "ps", "--filter", "name=chrome-cdp", "--format", "{{.Names}}"]
    ]


def test_is_container_running_ignores_partial_name_matches(monkeypatch) -> None:
    monkeypatch.setattr(docker_chrome.subprocess, "run", RunRecorder([completed(stdout=b"chrome-cdp-old\n")]))
    assert is_container_running("chrome-cdp") is False


def test_is_container_running_without_docker(monkeypatch) -> None:
    monkeypatch.setattr(docker_chrome.subprocess, "run", RunRecorder([FileNotFoundError("docker")]))
    assert is_container_running() is False


def test_start_container_reports_failure(monkeypatch) -> None:
    monkeypatch.setattr(
        docker_chrome.subprocess,
        "run",
        RunRecorder([completed(returncode=125, stderr=b"port is already allocated")]),
    )
    assert start_container() is False


def test_start_container_success(monkeypatch) -> None:
    recorder = RunRecorder([completed(stdout=b"3f1c0d\n")])
    monkeypatch.setattr(docker_chrome.subprocess, "run", recorder)
    assert start_container() is True
    assert recorder.calls == [build_run_command()]


@pytest.mark.asyncio
async def test_wait_for_devtools_polls_until_available(monkeypatch) -> None:
    attempts: list[str] = []

    async def fake_fetch(http_url: str, **kwargs) -> DevToolsVersion:
        _ = kwargs
        attempts.append(http_url)
        if len(attempts) < 3:
            raise DevToolsUnavailableError(http_url, "connection refused")
        return DevToolsVersion(Browser="HeadlessChrome/120.0")

    monkeypatch.setattr(docker_chrome, "fetch_devtools_version", fake_fetch)

    version = await wait_for_devtools("http://localhost:9222", timeout_s=5.0, poll_s=0)

    assert version.browser == "HeadlessChrome/120.0"
    assert len(attempts) == 3


@pytest.mark.asyncio
async def test_wait_for_devtools_raises_after_timeout(monkeypatch) -> None:
    async def fake_fetch(http_url: str, **kwargs) -> DevToolsVersion:
        _ = kwargs
        raise DevToolsUnavailableError(http_url, "connection refused")

    monkeypatch.setattr(docker_chrome, "fetch_devtools_version", fake_fetch)

    with pytest.raises(DevToolsUnavailableError):
        await wait_for_devtools("http://localhost:9222", timeout_s=0, poll_s=0)


@pytest.mark.asyncio
async def test_ensure_chrome_container_reuses_running_container(monkeypatch) -> None:
    recorder = RunRecorder([completed(stdout=b"chrome-cdp\n")])
    monkeypatch.setattr(docker_chrome.subprocess, "run", recorder)

    async def fake_wait(http_url: str, **kwargs) -> DevToolsVersion:
        _ = kwargs
        return DevToolsVersion(Browser="HeadlessChrome/120.0")

    monkeypatch.setattr(docker_chrome, "wait_for_devtools", fake_wait)

    version = await ensure_chrome_container()

    assert version is not None
    assert len(recorder.calls) == 1  # only `docker ps`


@pytest.mark.asyncio
async def test_ensure_chrome_container_returns_none_when_start_fails(monkeypatch) -> None:
    monkeypatch.setattr(
        docker_chrome.subprocess,
        "run",
        RunRecorder([completed(stdout=b""), completed(returncode=1, stderr=b"daemon not running")]),
    )
    assert await ensure_chrome_container() is None


@pytest.mark.asyncio
async def test_wait_for_devtools_caps_request_timeout_at_remaining_time(monkeypatch) -> None:
    request_timeouts: list[float] = []

    async def fake_fetch(http_url: str, **kwargs) -> DevToolsVersion:
        request_timeouts.append(kwargs["timeout_s"])
        raise DevToolsUnavailableError(http_url, "connection refused")

    monkeypatch.setattr(docker_chrome, "fetch_devtools_version", fake_fetch)

    with pytest.raises(DevToolsUnavailableError):
        await wait_for_devtools("http://localhost:9222", timeout_s=0.3, poll_s=0.05)

    assert request_timeouts
    assert all(t <= 0.3 for t in request_timeouts)


def test_default_options_are_not_shared_between_calls() -> None:
    first = build_run_command()
    first.append("--mutated")
    assert build_run_command() == build_run_command(DockerChromeOptions())
    assert "--mutated" not in build_run_command()
    assert DockerChromeOptions().extra_args is not DockerChromeOptions().extra_args
