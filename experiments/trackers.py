"""
Game trackers for simulated discovery games.

Trackers receive callbacks during game execution and accumulate data
for analysis of the reveal cascade and of placement crowding.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import Counter
from typing import Any
import numpy as np

from core.events import ConnectionEstablished, NodeBecameVisible, NodeFound, SelectionChanged
from core.placement import find_overlaps, min_clearance
from core.reveal_engine import GuessResult
from envs.discovery_env import DiscoveryEnv


class GameTracker(ABC):
    """
    Abstract base class for game trackers.

    Trackers receive callbacks during game execution:
    - on_step: Called after each guess
    - on_episode_end: Called when a game ends
    - get_results: Returns accumulated results
    """

    @abstractmethod
    def on_step(self, step: int, result: GuessResult, env: DiscoveryEnv) -> None:
        """
        Called after each guess.

        Args:
            step: Guess number within the game
            result: GuessResult returned by the environment
            env: The environment, after the guess
        """
        pass

    @abstractmethod
    def on_episode_end(self, episode_idx: int, env: DiscoveryEnv) -> None:
        """
        Called when a game ends.

        Args:
            episode_idx: Index of the completed game
            env: The environment in its final state
        """
        pass

    @abstractmethod
    def get_results(self) -> Any:
        """
        Get accumulated results.

        Returns:
            Results in tracker-specific format
        """
        pass

    def reset(self) -> None:
        """
        Reset tracker state (optional).

        Default implementation does nothing. Override if tracker needs reset.
        """
        pass


class PlacementTracker(GameTracker):
    """
    Tracker for placement quality.

    Per game it records the number of visible nodes, the smallest clearance
    between any two shapes, the overlap count, the fallback count, the number of nodes placed
    outside the viewport margin and the mean number of candidates drawn per placement.
    """

    def __init__(self):
        self.visible_counts: list[int] = []
        self.clearances: list[float] = []
        self.overlaps: list[int] = []
        self.fallbacks: list[int] = []
        self.offscreen: list[int] = []
        self.candidates_per_placement: list[float] = []

    def on_step(self, step: int, result: GuessResult, env: DiscoveryEnv) -> None:
        pass

    def on_episode_end(self, episode_idx: int, env: DiscoveryEnv) -> None:
        visible = env.store.visible_nodes()
        placement = env.engine.placement

        self.visible_counts.append(len(visible))
        clearance = min_clearance(visible, env.params)
        self.clearances.append(np.nan if clearance is None else clearance)
        self.overlaps.append(len(find_overlaps(visible, env.params)))
        self.fallbacks.append(placement.total_fallbacks)
        self.offscreen.append(placement.total_offscreen)
        if placement.total_placements > 0:
            self.candidates_per_placement.append(
                placement.total_candidates / placement.total_placements
            )

    def get_results(self) -> dict[str, Any]:
        """
        Get placement statistics.

        Returns:
            Dictionary with:
                - total_games: Number of games tracked
                - avg_visible: Mean visible nodes at game end
                - min_clearance: Smallest clearance seen in any game
                - total_overlaps: Overlapping pairs summed over games
                - total_fallbacks: Fallback placements summed over games
                - total_offscreen: Nodes placed outside the viewport margin
                - avg_candidates: Mean candidates drawn per placement
        """
        if not self.visible_counts:
            return {
                "total_games": 0,
                "avg_visible": 0.0,
                "min_clearance": None,
                "total_overlaps": 0,
                "total_fallbacks": 0,
                "total_offscreen": 0,
                "avg_candidates": 0.0,
            }

        clearances = np.asarray(self.clearances, dtype=np.float64)
        return {
            "total_games": len(self.visible_counts),
            "avg_visible": float(np.mean(self.visible_counts)),
            "min_clearance": None if np.all(np.isnan(clearances)) else float(np.nanmin(clearances)),
            "total_overlaps": int(np.sum(self.overlaps)),
            "total_fallbacks": int(np.sum(self.fallbacks)),
            "total_offscreen": int(np.sum(self.offscreen)),
            "avg_candidates": float(np.mean(self.candidates_per_placement)) if self.candidates_per_placement else 0.0,
        }

    def reset(self) -> None:
        """Reset all statistics."""
        self.__init__()


class EventTracker(GameTracker):
    """
    Tracker that stores per-game outcome and event counts.

    More memory intensive than PlacementTracker but useful for checking the
    reveal cascade game by game.
    """

    EVENT_NAMES = {
        NodeBecameVisible: "visible",
        ConnectionEstablished: "connection",
        NodeFound: "found",
        SelectionChanged: "selection",
    }

    def __init__(self):
        self.episodes: list[dict[str, Any]] = []
        self._outcomes: Counter = Counter()

    def on_step(self, step: int, result: GuessResult, env: DiscoveryEnv) -> None:
        self._outcomes[result.outcome.value] += 1

    def on_episode_end(self, episode_idx: int, env: DiscoveryEnv) -> None:
        events = Counter(self.EVENT_NAMES[type(e)] for e in env.session.events)
        self.episodes.append({
            "episode_idx": episode_idx,
            "outcomes": dict(self._outcomes),
            "events": dict(events),
            "progress": env.progress(),
            "connected_pairs": len(env.session.connected_pairs),
        })
        self._outcomes = Counter()

    def get_results(self) -> list[dict[str, Any]]:
        return self.episodes

    def reset(self) -> None:
        self.__init__()
