"""
Base class for simulated players of the discovery game.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass
class PlayerParams:
    """
    Parameters for player agents.

    Attributes:
        decoy_rate: Probability of guessing a decoy instead of a teased label
        case_noise: Whether to randomise the casing of guesses
        seed: Random seed for reproducibility
    """
    decoy_rate: float = 0.0
    case_noise: bool = False
    seed: Optional[int] = None


class BasePlayer(ABC):
    """
    Abstract base class for player agents.

    Players only see what the screen shows: the labels of teased nodes are
    handed to them as if the player somehow knew the answers, and they
    choose what to type next.
    """

    def __init__(self, params: Optional[PlayerParams] = None):
        """
        Initialize player agent.

        Args:
            params: PlayerParams with configuration
        """
        self.params = params if params is not None else PlayerParams()

    @abstractmethod
    def get_guess(self, teased_labels: list[str], decoys: list[str]) -> str:
        """
        Choose the next guess.

        Args:
            teased_labels: Labels of visible, not yet found nodes
            decoys: Labels the player may type that are not teased
                    (hidden or unknown words)

        Returns:
            Text to submit
        """
        pass

    def reset(self) -> None:
        """Reset agent state for a new game (optional)."""
        pass
