"""
Presentation adapters for the discovery game.

Adapters observe the events raised by the reveal engine and keep whatever
render model they need. They read node state; they never change it.
"""

from __future__ import annotations

from abc import ABC
from collections import deque
from dataclasses import dataclass, field
from typing import Optional

from core.events import (
    ConnectionEstablished,
    GameEvent,
    NodeBecameVisible,
    NodeFound,
    SelectionChanged,
)
from core.graph_store import GraphStore, Node
from core.placement import PlacementParams, label_radius
from core.reveal_engine import GuessOutcome, GuessResult
from views.labels import display_text, title_hint


class PresentationAdapter(ABC):
    """
    Base class for event consumers.

    handle() dispatches each event to the matching on_* hook. Hooks do
    nothing by default; subclasses override the ones they need.
    """

    def handle(self, event: GameEvent) -> None:
        if isinstance(event, NodeBecameVisible):
            self.on_node_visible(event.node)
        elif isinstance(event, ConnectionEstablished):
            self.on_connection(event.node_a, event.node_b)
        elif isinstance(event, NodeFound):
            self.on_node_found(event.node)
        elif isinstance(event, SelectionChanged):
            self.on_selection_changed(event.node)
        else:
            raise TypeError(f"Unknown event type: {type(event).__name__}")

    def on_node_visible(self, node: Node) -> None:
        pass

    def on_connection(self, node_a: Node, node_b: Node) -> None:
        pass

    def on_node_found(self, node: Node) -> None:
        pass

    def on_selection_changed(self, node: Optional[Node]) -> None:
        pass


@dataclass
class Shape:
    """Drawn node: circle plus text, with a hover title."""
    index: int
    text: str
    title: str
    center: tuple[float, float]
    radius: float
    css_class: str


@dataclass
class Line:
    """Drawn connection between two node centres."""
    pair: tuple[int, int]
    start: tuple[float, float]
    end: tuple[float, float]
    css_class: str = "link"


@dataclass
class Panel:
    """Focus panel: selected node's text and its visible neighbours."""
    title: Optional[str] = None
    items: list[str] = field(default_factory=list)


class GuessLog:
    """
    Bounded history of guess feedback, newest first.

    Attributes:
        entries: (text, css_class) pairs, at most max_entries long
    """

    def __init__(self, max_entries: int = 10):
        self.entries: deque[tuple[str, str]] = deque(maxlen=max_entries)

    def record(self, result: GuessResult) -> str:
        """
        Add the feedback line for a guess.

        Returns:
            The line that was added
        """
        if result.outcome == GuessOutcome.ALREADY_FOUND:
            text, css_class = f"{result.label}: already found", ""
        elif result.outcome == GuessOutcome.CORRECT:
            text, css_class = f"{result.label}: yep!", ""
        else:
            text, css_class = f"{result.guess}: nope", "incorrect"

        self.entries.appendleft((text, css_class))
        return text

    def lines(self) -> list[str]:
        return [text for text, _ in self.entries]


class SceneView(PresentationAdapter):
    """
    Headless render model of the game board.

    Keeps what a drawing surface would show: one shape per visible node,
    one line per connected pair, highlighted links for the focused node,
    and the focus panel.

    Attributes:
        store: GraphStore read for neighbour lists
        params: PlacementParams used to size shapes
        shapes: Arena index -> Shape
        lines: Unordered index pair -> Line
        panel: Current focus Panel
    """

    def __init__(self, store: GraphStore, params: Optional[PlacementParams] = None):
        self.store = store
        self.params = params if params is not None else PlacementParams()
        self.shapes: dict[int, Shape] = {}
        self.lines: dict[tuple[int, int], Line] = {}
        self.panel = Panel()
        self._selected: Optional[Node] = None

    def on_node_visible(self, node: Node) -> None:
        self.shapes[node.index] = Shape(
            index=node.index,
            text=display_text(node),
            title=title_hint(node.label),
            center=node.position,
            radius=label_radius(node.label, self.params),
            css_class="node parent" if node.is_parent_category else "node",
        )

    def on_node_found(self, node: Node) -> None:
        shape = self.shapes.get(node.index)
        if shape is not None:
            shape.text = display_text(node)

    def on_connection(self, node_a: Node, node_b: Node) -> None:
        pair = (min(node_a.index, node_b.index), max(node_a.index, node_b.index))
        css_class = "link"
        if self._selected is not None and self._selected.index in pair:
            css_class = "link active"
        self.lines[pair] = Line(pair, node_a.position, node_b.position, css_class)

    def on_selection_changed(self, node: Optional[Node]) -> None:
        for line in self.lines.values():
            line.css_class = "link"
        self._selected = node

        if node is None:
            self.panel = Panel()
            return

        for pair, line in self.lines.items():
            if node.index in pair:
                line.css_class = "link active"

        self.panel = Panel(
            title=display_text(node),
            items=[
                display_text(n) for n in self.store.unique_neighbors(node) if n.visible
            ],
        )

    def active_lines(self) -> list[Line]:
        return [line for line in self.lines.values() if line.css_class == "link active"]

    def render_text(self) -> str:
        """Plain-text rendering of the board and panel, for terminals."""
        rows = []
        for shape in sorted(self.shapes.values(), key=lambda s: s.index):
            x, y = shape.center
            marker = "*" if "parent" in shape.css_class else " "
            rows.append(f"{marker} {shape.text:<30} ({x:7.1f}, {y:7.1f})")
        if self.panel.title is not None:
            rows.append("")
            rows.append(f"[{self.panel.title}]")
            rows.extend(f"  - {item}" for item in self.panel.items)
        return "\n".join(rows)
