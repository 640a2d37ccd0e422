"""
Per-session game context.

GameSession carries all mutable game state explicitly (store, selection,
drawn connections, adapters, random generator) so the engine and placement
can run without any presentation environment.
"""

from __future__ import annotations

from typing import Any, Optional
import torch

from core.events import GameEvent
from core.graph_store import GraphStore, Node


class GameSession:
    """
    Explicit game context passed to RevealEngine and Placement calls.

    Attributes:
        store: GraphStore owning every node
        selected: Currently focused node, or None
        connected_pairs: Unordered (min, max) index pairs already drawn
        adapters: Presentation adapters notified of every event
        events: Every event emitted this session, in order
        generator: Seeded torch generator used for placement sampling
        started: Whether starting nodes have been exposed
    """

    def __init__(
        self,
        store: GraphStore,
        adapters: Optional[list[Any]] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize a session.

        Args:
            store: Fully constructed GraphStore
            adapters: Objects with a handle(event) method
            seed: Random seed for placement
        """
        self.store = store
        self.selected: Optional[Node] = None
        self.connected_pairs: set[tuple[int, int]] = set()
        self.adapters = list(adapters) if adapters is not None else []
        self.events: list[GameEvent] = []
        self.started = False

        self.generator = torch.Generator()
        if seed is not None:
            self.generator.manual_seed(seed)
        else:
            self.generator.seed()

    def add_adapter(self, adapter: Any) -> None:
        self.adapters.append(adapter)

    def emit(self, event: GameEvent) -> None:
        """Record an event and forward it to every adapter."""
        self.events.append(event)
        for adapter in self.adapters:
            adapter.handle(event)

    @staticmethod
    def pair_key(a: Node, b: Node) -> tuple[int, int]:
        return (a.index, b.index) if a.index < b.index else (b.index, a.index)

    def is_connected(self, a: Node, b: Node) -> bool:
        return self.pair_key(a, b) in self.connected_pairs

    def mark_connected(self, a: Node, b: Node) -> bool:
        """
        Record a drawn connection.

        Returns:
            True if the pair was new, False if it was already drawn
        """
        key = self.pair_key(a, b)
        if key in self.connected_pairs:
            return False
        self.connected_pairs.add(key)
        return True
