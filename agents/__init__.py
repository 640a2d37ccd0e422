"""
Agents package for the discovery game.

Modules:
    player: Simulated player implementations (RandomPlayer)
"""

from agents.player import BasePlayer, RandomPlayer, PlayerParams

__all__ = [
    "BasePlayer",
    "RandomPlayer",
    "PlayerParams",
]
