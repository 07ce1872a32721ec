"""
HyperAgent - browser connection layer for the HyperAgent automation agent.
"""

from .agents import HyperAgent, HyperAgentConfig
from .browser_providers import (
    BrowserProvider,
    CDPBrowserConfig,
    CDPBrowserProvider,
    CDPConnectOptions,
    LocalBrowserConfig,
    LocalBrowserProvider,
)
from .devtools import (
    DevToolsVersion,
    EndpointProbe,
    candidate_ws_endpoints,
    fetch_devtools_version,
    find_working_endpoint,
    probe_endpoint,
)
from .errors import (
    BrowserProviderError,
    CDPConfigurationError,
    CDPConnectionError,
    CDPEndpointFormatError,
    DevToolsUnavailableError,
    HyperAgentError,
)
from .troubleshooting import troubleshooting_hints

__version__ = "0.1.0"

__all__ = [
    "BrowserProvider",
    "BrowserProviderError",
    "CDPBrowserConfig",
    "CDPBrowserProvider",
    "CDPConfigurationError",
    "CDPConnectOptions",
    "CDPConnectionError",
    "CDPEndpointFormatError",
    "DevToolsUnavailableError",
    "DevToolsVersion",
    "EndpointProbe",
    "HyperAgent",
    "HyperAgentConfig",
    "HyperAgentError",
    "LocalBrowserConfig",
    "LocalBrowserProvider",
    "candidate_ws_endpoints",
    "fetch_devtools_version",
    "find_working_endpoint",
    "probe_endpoint",
    "troubleshooting_hints",
]
