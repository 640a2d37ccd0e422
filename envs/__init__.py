"""
Game environments for the discovery game.
"""

from envs.discovery_env import DiscoveryEnv

__all__ = ["DiscoveryEnv"]
