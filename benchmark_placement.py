"""
Placement Benchmark for the discovery game

Plays whole games on generated graphs of growing size and reports how long
placement takes and how crowded the board gets.
"""

import time
import torch

from agents.player import RandomPlayer, PlayerParams
from envs.discovery_env import DiscoveryEnv
from experiments import DiscoveryExperiment, PlacementTracker
from utils.random_graph import generate_random_definition
from utils.device import get_device_name


def benchmark_size(n_nodes: int, n_games: int = 3):
    """Play n_games full games on graphs of n_nodes nodes."""
    exp = DiscoveryExperiment(
        env_factory=lambda seed: DiscoveryEnv(
            generate_random_definition(n_nodes, extra_edges=n_nodes // 2, seed=seed),
            seed=seed,
        ),
        max_steps=n_nodes * 2,
    )
    tracker = PlacementTracker()

    start = time.time()
    results = exp.run_games(RandomPlayer(PlayerParams(seed=42)), n_games=n_games, tracker=tracker, seed=42)
    elapsed = (time.time() - start) / n_games

    return elapsed, results


def main():
    print("=" * 60)
    print("PLACEMENT BENCHMARK - discovery game")
    print("=" * 60)
    print()
    print(f"PyTorch version: {torch.__version__}")
    print(f"Device: {get_device_name()}")
    print()

    sizes = [25, 50, 100, 200, 400]

    print(f"{'Nodes':>6} | {'ms/game':>10} | {'Cand/place':>10} | {'Clearance':>10} | {'Overlaps':>8} | {'Fallbacks':>9} | {'Offscreen':>9}")
    print("-" * 82)

    for n_nodes in sizes:
        elapsed, results = benchmark_size(n_nodes)
        clearance = results["min_clearance"]
        clearance_str = f"{clearance:10.1f}" if clearance is not None else f"{'-':>10}"
        print(
            f"{n_nodes:6d} | {elapsed * 1000:10.1f} | {results['avg_candidates']:10.1f} | "
            f"{clearance_str} | {results['total_overlaps']:8d} | {results['total_fallbacks']:9d} | {results['total_offscreen']:9d}"
        )

    print()


if __name__ == "__main__":
    main()
