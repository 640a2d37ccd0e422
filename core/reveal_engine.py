"""
Reveal state machine for the discovery game.

Every node is Hidden (not visible), Teased (visible, not found) or Found
(visible and found). Hidden -> Teased happens only when a neighbour is found;
Teased -> Found happens only on a correct guess. Both flags only ever go
from False to True.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional
import logging

from core.events import (
    ConnectionEstablished,
    GameEvent,
    NodeBecameVisible,
    NodeFound,
    SelectionChanged,
)
from core.graph_store import Node
from core.placement import Placement
from core.session import GameSession

logger = logging.getLogger(__name__)


class GuessOutcome(Enum):
    ALREADY_FOUND = "already_found"
    CORRECT = "correct"
    INCORRECT = "incorrect"


@dataclass
class GuessResult:
    """
    Typed result of a guess.

    An INCORRECT result never carries a node, whether the guess was unknown
    or names a node that is still hidden; the two cases are indistinguishable.

    Attributes:
        outcome: GuessOutcome
        guess: The raw text as submitted
        node: The matched node for ALREADY_FOUND / CORRECT, else None
        events: Events emitted while resolving this guess
    """
    outcome: GuessOutcome
    guess: str
    node: Optional[Node] = None
    events: list[GameEvent] = field(default_factory=list)

    @property
    def label(self) -> Optional[str]:
        return self.node.label if self.node is not None else None


class RevealEngine:
    """
    Single authority on what the player has discovered.

    The engine holds no game state of its own; everything lives on the
    GameSession passed to each call. It performs no rendering, it only
    emits events through the session.

    Attributes:
        placement: Placement used for nodes as they become visible
    """

    def __init__(self, placement: Optional[Placement] = None):
        self.placement = placement if placement is not None else Placement()

    def start(self, session: GameSession) -> list[GameEvent]:
        """
        Expose the starting nodes and tease their neighbours.

        Starting nodes are found from construction, so no guess will ever
        cascade from them; this mirrors that cascade once at game start.
        Calling it again on a started session does nothing.

        Args:
            session: Session whose store was just built

        Returns:
            Events emitted
        """
        if session.started:
            return []
        session.started = True
        first_event = len(session.events)

        starting = [n for n in session.store.nodes if n.is_starting_node]
        for node in starting:
            self.placement.place(session, node)
            session.emit(NodeBecameVisible(node))

        for node in starting:
            self._cascade(session, node)

        logger.info(
            "Game started with %d starting node(s), %d visible",
            len(starting), len(session.store.visible_nodes())
        )
        return session.events[first_event:]

    def submit_guess(self, session: GameSession, raw_text: str) -> GuessResult:
        """
        Resolve one guess.

        Args:
            session: Current GameSession
            raw_text: Guess as typed (the host trims it; lookup lowercases)

        Returns:
            GuessResult with outcome and the events this guess produced
        """
        first_event = len(session.events)
        node = session.store.get(raw_text)

        if node is not None and node.found:
            logger.debug("Guess '%s': already found", raw_text)
            return GuessResult(GuessOutcome.ALREADY_FOUND, raw_text, node)

        if node is None or not node.visible:
            logger.debug("Guess '%s': incorrect", raw_text)
            return GuessResult(GuessOutcome.INCORRECT, raw_text)

        node.found = True
        session.emit(NodeFound(node))
        self._cascade(session, node)
        logger.info("Found '%s'", node.label)

        # refresh the focus panel so it lists newly teased neighbours
        if session.selected is not None:
            session.emit(SelectionChanged(session.selected))

        return GuessResult(GuessOutcome.CORRECT, raw_text, node, session.events[first_event:])

    def _cascade(self, session: GameSession, node: Node) -> None:
        """Tease every hidden neighbour of a found node and connect them."""
        for neighbor in session.store.neighbors(node):
            if not neighbor.visible:
                neighbor.visible = True
                self.placement.place(session, neighbor)
                session.emit(NodeBecameVisible(neighbor))
            if session.mark_connected(node, neighbor):
                session.emit(ConnectionEstablished(node, neighbor))

    def select(self, session: GameSession, label: str) -> Optional[Node]:
        """
        Focus a visible node.

        Selecting a teased node is allowed; focus is not discovery. A label
        that is unknown or still hidden leaves the selection unchanged.

        Returns:
            The selected node, or None if the label is not selectable
        """
        node = session.store.get(label)
        if node is None or not node.visible:
            return None

        session.selected = node
        session.emit(SelectionChanged(node))
        return node

    def deselect(self, session: GameSession) -> None:
        """Clear the focus, if any."""
        if session.selected is None:
            return
        session.selected = None
        session.emit(SelectionChanged(None))

    def visible_children(self, session: GameSession, node: Optional[Node] = None) -> list[Node]:
        """
        Neighbours to list for a focused node: visible ones only, each once.

        Args:
            session: Current GameSession
            node: Node to list for (defaults to the current selection)

        Returns:
            Visible neighbours in adjacency order
        """
        node = node if node is not None else session.selected
        if node is None:
            return []
        return [n for n in session.store.unique_neighbors(node) if n.visible]
