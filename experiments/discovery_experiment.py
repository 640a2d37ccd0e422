"""
Simulation runner for discovery games.

This module provides the DiscoveryExperiment class for playing many games
with a simulated player and collecting results through trackers.
"""

from __future__ import annotations

from typing import Callable, Optional, Any
import random

from agents.player.base_player import BasePlayer
from envs.discovery_env import DiscoveryEnv
from experiments.trackers import GameTracker, PlacementTracker


class DiscoveryExperiment:
    """
    Experiment runner for the discovery game.

    Example:
        ```python
        exp = DiscoveryExperiment(
            env_factory=lambda seed: DiscoveryEnv(
                generate_random_definition(200, extra_edges=100, seed=seed), seed=seed
            ),
            max_steps=1000
        )
        results = exp.run_games(RandomPlayer(), n_games=10, tracker=PlacementTracker())
        print(f"Overlaps: {results['total_overlaps']}")
        ```

    Attributes:
        env_factory: Callable that creates an environment given a seed
        max_steps: Maximum guesses per game
    """

    DECOYS = ["xyzzy", "plugh", "nothing", "wrong guess"]

    def __init__(
        self,
        env_factory: Callable[[int], DiscoveryEnv],
        max_steps: int = 1000
    ):
        """
        Initialize experiment runner.

        Args:
            env_factory: Function that creates an environment given a seed
            max_steps: Maximum number of guesses per game
        """
        self.env_factory = env_factory
        self.max_steps = max_steps

    def play_game(
        self,
        env: DiscoveryEnv,
        player: BasePlayer,
        tracker: Optional[GameTracker] = None
    ) -> int:
        """
        Play one game until nothing is left to guess or max_steps is hit.

        Decoys offered to the player are the still-hidden labels plus a few
        unknown words, so decoy guesses exercise both INCORRECT paths.

        Returns:
            Number of guesses made
        """
        player.reset()
        step = 0
        while step < self.max_steps and not env.is_complete():
            teased = env.teased_labels()
            decoys = [n.label for n in env.store.nodes if not n.visible] + self.DECOYS
            guess = player.get_guess(teased, decoys)
            result = env.guess(guess)
            if tracker is not None:
                tracker.on_step(step, result, env)
            step += 1
        return step

    def run_games(
        self,
        player: BasePlayer,
        n_games: int,
        tracker: Optional[GameTracker] = None,
        seed: Optional[int] = None,
        verbose: bool = False
    ) -> Any:
        """
        Run n_games with the given player and tracker.

        Args:
            player: Player agent
            n_games: Number of games to play
            tracker: GameTracker (defaults to PlacementTracker)
            seed: Seed used to derive one seed per game
            verbose: Print a line per game

        Returns:
            tracker.get_results()
        """
        if tracker is None:
            tracker = PlacementTracker()

        rng = random.Random(seed)
        for episode_idx in range(n_games):
            env = self.env_factory(rng.randint(0, 2**31 - 1))
            steps = self.play_game(env, player, tracker)
            tracker.on_episode_end(episode_idx, env)
            if verbose:
                progress = env.progress()
                print(
                    f"Game {episode_idx + 1}/{n_games}: {steps} guesses, "
                    f"{progress['found']}/{progress['total']} found"
                )

        return tracker.get_results()
