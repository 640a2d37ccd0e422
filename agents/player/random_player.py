"""
Random baseline player agent.
"""

from __future__ import annotations

import random
from typing import Optional

from agents.player.base_player import BasePlayer, PlayerParams


class RandomPlayer(BasePlayer):
    """
    Simple random baseline player.

    Guesses a random teased label, or with probability decoy_rate a random
    decoy. With case_noise, each guess gets random casing.
    """

    def __init__(self, params: Optional[PlayerParams] = None):
        super().__init__(params)
        self.rng = random.Random(self.params.seed)

    def get_guess(self, teased_labels: list[str], decoys: list[str]) -> str:
        use_decoy = decoys and (not teased_labels or self.rng.random() < self.params.decoy_rate)
        if use_decoy:
            guess = self.rng.choice(decoys)
        elif teased_labels:
            guess = self.rng.choice(teased_labels)
        else:
            return ""

        if self.params.case_noise:
            guess = "".join(
                ch.upper() if self.rng.random() < 0.5 else ch.lower() for ch in guess
            )
        return guess

    def reset(self) -> None:
        self.rng = random.Random(self.params.seed)
