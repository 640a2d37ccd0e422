"""
Core game logic for the discovery game.

This module provides the graph store, the reveal state machine and the
placement algorithm, with no dependence on any rendering layer.
"""

from core.graph_store import (
    GraphStore,
    Node,
    GraphDefinitionError,
    DuplicateLabel,
    InvalidEdge,
    UnknownLabel,
    normalize_label,
)
from core.session import GameSession
from core.placement import Placement, PlacementParams
from core.reveal_engine import RevealEngine, GuessOutcome, GuessResult

__all__ = [
    "GraphStore",
    "Node",
    "GraphDefinitionError",
    "DuplicateLabel",
    "InvalidEdge",
    "UnknownLabel",
    "normalize_label",
    "GameSession",
    "Placement",
    "PlacementParams",
    "RevealEngine",
    "GuessOutcome",
    "GuessResult",
]
