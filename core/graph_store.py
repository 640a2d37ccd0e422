"""
Canonical node/edge storage for the discovery game.

Nodes live in an arena indexed by a stable integer id. Edges are kept as an
ordered list of index pairs, and each node carries an append-only list of
neighbor ids, so the graph stays free of object cycles and serialises
trivially.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Optional


class GraphDefinitionError(ValueError):
    """Raised when a graph definition cannot be turned into a graph."""


class DuplicateLabel(GraphDefinitionError):
    """Two nodes share the same label after case normalisation."""


class InvalidEdge(GraphDefinitionError):
    """An edge would connect a node to itself."""


class UnknownLabel(GraphDefinitionError):
    """A link refers to a label that has no node."""


def normalize_label(label: str) -> str:
    """
    Normalise a label for lookup.

    Lowercases only; surrounding whitespace is the caller's business.
    """
    return label.lower()


@dataclass(eq=False)
class Node:
    """
    A discoverable entity.

    Attributes:
        index: Stable arena id assigned by the GraphStore
        label: Display label (original casing)
        found: Guessed correctly
        visible: Shown on screen (teased or found)
        is_starting_node: Found and visible from game start
        is_parent_category: Visually emphasised grouping node
        position: (x, y) centre, None until placed. Starting nodes are
            visible from construction but only get a position once
            RevealEngine.start() runs
        neighbor_ids: Adjacency list of arena ids, append-only
    """
    index: int
    label: str
    found: bool = False
    visible: bool = False
    is_starting_node: bool = False
    is_parent_category: bool = False
    position: Optional[tuple[float, float]] = None
    neighbor_ids: list[int] = field(default_factory=list)

    @property
    def key(self) -> str:
        return normalize_label(self.label)


class GraphStore:
    """
    Owns every Node and every edge of a session.

    Lookup is case-insensitive. Nodes and edges are never removed.

    Attributes:
        nodes: Arena of Node instances, position == Node.index
        edges: Ordered list of (a, b) index pairs as they were connected
    """

    def __init__(self):
        self.nodes: list[Node] = []
        self.edges: list[tuple[int, int]] = []
        self._index_by_key: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def __contains__(self, label: str) -> bool:
        return self.has(label)

    def add(
        self,
        label: str,
        is_starting_node: bool = False,
        is_parent_category: bool = False
    ) -> Node:
        """
        Create a node and insert it under its normalised label.

        Starting nodes are created found and visible.

        Args:
            label: Node label
            is_starting_node: Whether the node is known from the start
            is_parent_category: Whether the node is a grouping node

        Returns:
            The new Node

        Raises:
            DuplicateLabel: If the normalised label is already present
        """
        key = normalize_label(label)
        if key in self._index_by_key:
            existing = self.nodes[self._index_by_key[key]]
            raise DuplicateLabel(
                f"Label '{label}' collides with existing node '{existing.label}'"
            )

        node = Node(
            index=len(self.nodes),
            label=label,
            found=is_starting_node,
            visible=is_starting_node,
            is_starting_node=is_starting_node,
            is_parent_category=is_parent_category,
        )
        self.nodes.append(node)
        self._index_by_key[key] = node.index
        return node

    def get(self, label: str) -> Optional[Node]:
        """Case-insensitive lookup; None if the label is unknown."""
        index = self._index_by_key.get(normalize_label(label))
        if index is None:
            return None
        return self.nodes[index]

    def has(self, label: str) -> bool:
        return normalize_label(label) in self._index_by_key

    def connect(self, a: Node, b: Node) -> None:
        """
        Add an undirected edge between two nodes.

        Repeating an existing edge is tolerated and stored again.

        Raises:
            InvalidEdge: If a and b are the same node
        """
        if a.index == b.index:
            raise InvalidEdge(f"Node '{a.label}' cannot be connected to itself")

        a.neighbor_ids.append(b.index)
        b.neighbor_ids.append(a.index)
        self.edges.append((a.index, b.index))

    def neighbors(self, node: Node) -> list[Node]:
        """Neighbors of a node in adjacency order (repeated edges repeat)."""
        return [self.nodes[i] for i in node.neighbor_ids]

    def unique_neighbors(self, node: Node) -> list[Node]:
        """Neighbors of a node in adjacency order, each listed once."""
        seen = set()
        result = []
        for i in node.neighbor_ids:
            if i not in seen:
                seen.add(i)
                result.append(self.nodes[i])
        return result

    def visible_nodes(self) -> list[Node]:
        return [n for n in self.nodes if n.visible]

    def found_nodes(self) -> list[Node]:
        return [n for n in self.nodes if n.found]

    @staticmethod
    def from_definition(definition: dict[str, Any]) -> GraphStore:
        """
        Build a complete graph from a definition record.

        The record has the shape::

            {"nodes": [{"name": str}, ...],
             "links": [{"source": str, "target": str}, ...],
             "starting": [str, ...]}

        Nodes named in "starting" become starting nodes and are flagged as
        parent categories. Construction is all-or-nothing: any error aborts
        before a store is returned.

        Args:
            definition: Graph definition record

        Returns:
            Populated GraphStore

        Raises:
            DuplicateLabel: If two node names collide case-insensitively
            InvalidEdge: If a link is a self-loop
            UnknownLabel: If a link or starting entry names an unknown node
            GraphDefinitionError: If an entry is not of the shape above
        """
        store = GraphStore()
        starting_labels = definition.get("starting", [])
        for i, label in enumerate(starting_labels):
            if not isinstance(label, str):
                raise GraphDefinitionError(f"starting[{i}] must be a string")
        starting = {normalize_label(s) for s in starting_labels}

        for i, entry in enumerate(definition.get("nodes", [])):
            name = entry.get("name") if isinstance(entry, dict) else None
            if not isinstance(name, str):
                raise GraphDefinitionError(f"nodes[{i}] must be an object with a string 'name'")
            is_start = normalize_label(name) in starting
            store.add(name, is_starting_node=is_start, is_parent_category=is_start)

        for key in starting:
            if not store.has(key):
                raise UnknownLabel(f"Starting label '{key}' has no node")

        for i, link in enumerate(definition.get("links", [])):
            if (
                not isinstance(link, dict)
                or not isinstance(link.get("source"), str)
                or not isinstance(link.get("target"), str)
            ):
                raise GraphDefinitionError(f"links[{i}] must have string 'source' and 'target'")
            source = store.get(link["source"])
            target = store.get(link["target"])
            if source is None or target is None:
                missing = link["source"] if source is None else link["target"]
                raise UnknownLabel(f"Link refers to unknown label '{missing}'")
            store.connect(source, target)

        return store

    def to_definition(self) -> dict[str, Any]:
        """Serialise topology back to the definition record shape."""
        return {
            "nodes": [{"name": n.label} for n in self.nodes],
            "links": [
                {"source": self.nodes[a].label, "target": self.nodes[b].label}
                for a, b in self.edges
            ],
            "starting": [n.label for n in self.nodes if n.is_starting_node],
        }
