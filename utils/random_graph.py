"""
Seeded random graph definitions for simulations and tests.
"""

from __future__ import annotations

from typing import Any, Optional
import random

from utils.wordlist import WORD_POOL


def sample_labels(n: int, word_pool: Optional[list[str]] = None, seed: Optional[int] = None) -> list[str]:
    """
    Draw n distinct labels, numbering repeats once the pool runs out.

    Args:
        n: Number of labels
        word_pool: Candidate labels (defaults to WORD_POOL)
        seed: Random seed

    Returns:
        List of n labels, unique case-insensitively
    """
    pool = word_pool if word_pool is not None else WORD_POOL
    rng = random.Random(seed)

    labels = []
    seen = set()
    round_idx = 0
    while len(labels) < n:
        batch = rng.sample(pool, len(pool))
        for word in batch:
            label = word if round_idx == 0 else f"{word} {round_idx + 1}"
            if label.lower() in seen:
                continue
            seen.add(label.lower())
            labels.append(label)
            if len(labels) == n:
                break
        round_idx += 1

    return labels


def generate_random_definition(
    n_nodes: int,
    extra_edges: int = 0,
    n_starting: int = 1,
    duplicate_links: int = 0,
    word_pool: Optional[list[str]] = None,
    seed: Optional[int] = None
) -> dict[str, Any]:
    """
    Build a connected random graph definition.

    A random spanning tree keeps every node reachable from the first
    starting node; extra_edges random non-loop edges are added on top, and
    duplicate_links existing links are repeated verbatim.

    Args:
        n_nodes: Number of nodes
        extra_edges: Additional random edges beyond the spanning tree
        n_starting: Number of starting nodes
        duplicate_links: Number of links to repeat
        word_pool: Candidate labels (defaults to WORD_POOL)
        seed: Random seed

    Returns:
        Definition record with "nodes", "links" and "starting"

    Raises:
        ValueError: If n_nodes < 1 or n_starting is out of range
    """
    if n_nodes < 1:
        raise ValueError(f"n_nodes must be positive, got {n_nodes}")
    if not 0 <= n_starting <= n_nodes:
        raise ValueError(f"n_starting must be in [0, {n_nodes}], got {n_starting}")

    rng = random.Random(seed)
    labels = sample_labels(n_nodes, word_pool, seed=rng.randint(0, 2**31 - 1))

    links = []
    for i in range(1, n_nodes):
        j = rng.randrange(i)
        links.append({"source": labels[j], "target": labels[i]})

    if n_nodes > 1:
        for _ in range(extra_edges):
            a, b = rng.sample(range(n_nodes), 2)
            links.append({"source": labels[a], "target": labels[b]})

    for _ in range(min(duplicate_links, len(links))):
        link = rng.choice(links)
        links.append(dict(link))

    return {
        "nodes": [{"name": label} for label in labels],
        "links": links,
        "starting": labels[:n_starting],
    }
