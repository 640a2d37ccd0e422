"""
Experiments module for the discovery game.

Runs simulated players over generated graphs and collects results through
callback-based trackers.

Exported Classes:
    DiscoveryExperiment: Simulation orchestration class
    GameTracker: Abstract base class for trackers
    PlacementTracker: Placement crowding statistics (O(n_games) memory)
    EventTracker: Per-game outcome and event counts

Example:
    >>> from experiments import DiscoveryExperiment, PlacementTracker
    >>> from envs import DiscoveryEnv
    >>> from agents import RandomPlayer
    >>> from utils import generate_random_definition
    >>>
    >>> exp = DiscoveryExperiment(
    ...     env_factory=lambda seed: DiscoveryEnv(
    ...         generate_random_definition(150, extra_edges=50, seed=seed), seed=seed
    ...     )
    ... )
    >>> results = exp.run_games(RandomPlayer(), n_games=5, tracker=PlacementTracker(), seed=42)
    >>> print(results["total_overlaps"])
"""

from experiments.trackers import GameTracker, PlacementTracker, EventTracker
from experiments.discovery_experiment import DiscoveryExperiment

__all__ = [
    "DiscoveryExperiment",
    "GameTracker",
    "PlacementTracker",
    "EventTracker",
]
