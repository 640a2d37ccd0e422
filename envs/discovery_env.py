"""
Single-player discovery game environment.

Wires a GraphStore, GameSession, Placement, RevealEngine and SceneView
together and exposes the player actions: guess, click, deselect.
"""

from __future__ import annotations

from typing import Any, Optional
import logging

from core.graph_store import GraphStore, Node
from core.placement import Placement, PlacementParams
from core.reveal_engine import GuessResult, RevealEngine
from core.session import GameSession
from utils.graph_loader import SAMPLE_DEFINITION
from views.presentation import GuessLog, SceneView

logger = logging.getLogger(__name__)


class DiscoveryEnv:
    """
    Host application for one discovery game.

    The graph and the placement are rebuilt on every reset, so a reset
    always starts a fresh session with fresh placement counters.

    Attributes:
        definition: Graph definition record
        params: PlacementParams
        seed: Seed of the current session
        store: GraphStore of the current session
        session: Current GameSession
        engine: RevealEngine of the current session, with its own Placement
        scene: SceneView kept up to date from session events
        guess_log: Bounded guess feedback history
    """

    def __init__(
        self,
        definition: Optional[dict[str, Any]] = None,
        params: Optional[PlacementParams] = None,
        adapters: Optional[list[Any]] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize and start a game.

        Args:
            definition: Graph definition (defaults to the sample graph)
            params: PlacementParams shared by placement and the scene
            adapters: Extra presentation adapters to notify
            seed: Random seed for placement

        Raises:
            GraphDefinitionError: If the definition cannot be built
        """
        self.definition = definition if definition is not None else SAMPLE_DEFINITION
        self.params = params if params is not None else PlacementParams()
        self.extra_adapters = list(adapters) if adapters is not None else []
        self.reset(seed)

    def reset(self, seed: Optional[int] = None) -> SceneView:
        """
        Start a new game from the definition.

        Args:
            seed: Random seed for placement

        Returns:
            The fresh SceneView
        """
        self.seed = seed
        # build fully before touching any state
        self.store = GraphStore.from_definition(self.definition)
        self.scene = SceneView(self.store, self.params)
        self.guess_log = GuessLog()
        self.engine = RevealEngine(Placement(self.params))
        self.session = GameSession(
            self.store,
            adapters=[self.scene] + self.extra_adapters,
            seed=seed,
        )
        self.engine.start(self.session)
        logger.info("New game: %d nodes, %d links", len(self.store), len(self.store.edges))
        return self.scene

    def guess(self, raw_text: str) -> GuessResult:
        """
        Submit what the player typed.

        Args:
            raw_text: Raw input; surrounding whitespace is trimmed

        Returns:
            GuessResult
        """
        result = self.engine.submit_guess(self.session, raw_text.strip())
        self.guess_log.record(result)
        return result

    def click(self, label: str) -> Optional[Node]:
        """Focus a visible node, replacing any current focus."""
        return self.engine.select(self.session, label)

    def deselect(self) -> None:
        self.engine.deselect(self.session)

    def visible_children(self) -> list[Node]:
        return self.engine.visible_children(self.session)

    def teased_labels(self) -> list[str]:
        """Labels of nodes that are visible but not yet found."""
        return [n.label for n in self.store.nodes if n.visible and not n.found]

    def progress(self) -> dict[str, int]:
        """
        Discovery counts.

        Returns:
            Dictionary with "found", "teased", "hidden" and "total"
        """
        found = sum(1 for n in self.store.nodes if n.found)
        visible = sum(1 for n in self.store.nodes if n.visible)
        return {
            "found": found,
            "teased": visible - found,
            "hidden": len(self.store) - visible,
            "total": len(self.store),
        }

    def is_complete(self) -> bool:
        """True once no teased node is left to guess."""
        return not self.teased_labels()
