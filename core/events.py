"""
Events raised by the reveal engine for presentation adapters.

These four events are the entire surface a rendering layer needs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from core.graph_store import Node


@dataclass(frozen=True)
class NodeBecameVisible:
    """A node went from hidden to teased (or straight to found at start)."""
    node: Node


@dataclass(frozen=True)
class ConnectionEstablished:
    """A connection line between two nodes should be drawn, once per pair."""
    node_a: Node
    node_b: Node


@dataclass(frozen=True)
class NodeFound:
    """A teased node was guessed correctly."""
    node: Node


@dataclass(frozen=True)
class SelectionChanged:
    """Focus moved to a node, or was cleared (node is None)."""
    node: Optional[Node]


GameEvent = Union[NodeBecameVisible, ConnectionEstablished, NodeFound, SelectionChanged]
