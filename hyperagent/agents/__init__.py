"""
Agent shell: owns a browser provider and exposes pages to the agent core.
"""

from .agent import HyperAgent, HyperAgentConfig

__all__ = [
    "HyperAgent",
    "HyperAgentConfig",
]
