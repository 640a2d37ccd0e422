"""
Player agents for the discovery game.

This module provides simulated players that drive a DiscoveryEnv through
its guess API.
"""

from agents.player.base_player import BasePlayer, PlayerParams
from agents.player.random_player import RandomPlayer

__all__ = [
    "BasePlayer",
    "PlayerParams",
    "RandomPlayer",
]
