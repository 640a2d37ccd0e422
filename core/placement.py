"""
Spatial placement of newly visible nodes.

Incremental rejection sampling: candidates are drawn uniformly inside the
viewport (minus a margin) and rejected while they come closer to an already
placed visible node than the sum of both radii plus a fixed buffer. Once a
node has a position it is never moved.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
import logging
import torch

from core.graph_store import Node
from core.session import GameSession
from utils.device import resolve_device

logger = logging.getLogger(__name__)


@dataclass
class PlacementParams:
    """
    Parameters for rejection-sampled placement.

    Attributes:
        width: Viewport width
        height: Viewport height
        margin: Distance kept free along each viewport edge
        min_radius: Radius of a node with a short label (the drawn circle)
        char_width: Width of one rendered character; radius grows with text
        buffer: Extra gap required between two node shapes
        candidates_per_round: Candidates drawn and tested together
        max_rounds: Sampling rounds before falling back
        growth: Factor the sampling region grows by after a failed round
    """
    width: float = 1280.0
    height: float = 800.0
    margin: float = 40.0
    min_radius: float = 15.0
    char_width: float = 7.0
    buffer: float = 10.0
    candidates_per_round: int = 64
    max_rounds: int = 8
    growth: float = 1.5

    def __post_init__(self):
        if self.width <= 2 * self.margin or self.height <= 2 * self.margin:
            raise ValueError(
                f"Viewport {self.width}x{self.height} leaves no room inside margin {self.margin}"
            )
        if self.candidates_per_round < 1 or self.max_rounds < 1:
            raise ValueError("candidates_per_round and max_rounds must be positive")
        if self.min_radius <= 0 or self.char_width < 0 or self.buffer < 0:
            raise ValueError("Radii, character width and buffer must be non-negative")
        if self.growth < 1.0:
            raise ValueError(f"growth must be >= 1.0, got {self.growth}")


@dataclass
class PlacementStats:
    """Bookkeeping for one place() call."""
    candidates: int = 0
    rounds: int = 0
    fell_back: bool = False
    offscreen: bool = False


def label_radius(text: str, params: PlacementParams) -> float:
    """
    Radius needed to draw a label without touching its neighbours.

    Long labels overflow the base circle, so the radius is half the rendered
    text width once that exceeds the circle.
    """
    return max(params.min_radius, params.char_width * len(text) / 2.0)


class Placement:
    """
    Assigns non-overlapping centres to nodes as they become visible.

    Attributes:
        params: PlacementParams
        device: Device sampling tensors are built on
        last_stats: PlacementStats of the most recent placement
        total_fallbacks: Placements that had to accept an overlapping spot
        total_placements: Nodes placed by this instance
        total_candidates: Candidates drawn across all placements
        total_offscreen: Placements that landed outside the viewport margin
    """

    def __init__(
        self,
        params: Optional[PlacementParams] = None,
        device: Optional[torch.device | str] = None
    ):
        """
        Initialize placement.

        Args:
            params: PlacementParams (defaults used if None)
            device: Device for sampling tensors (defaults to utils.device;
                    distances are compared in float64, so MPS is refused)
        """
        self.params = params if params is not None else PlacementParams()
        self.device = resolve_device(device)
        self.last_stats = PlacementStats()
        self.total_fallbacks = 0
        self.total_placements = 0
        self.total_candidates = 0
        self.total_offscreen = 0

    def radius(self, node: Node) -> float:
        # placeholder and label have the same length, so the radius is
        # stable across the teased -> found transition
        return label_radius(node.label, self.params)

    def place(self, session: GameSession, node: Node) -> tuple[float, float]:
        """
        Give a node a position clear of every placed visible node.

        A node that already has a position keeps it.

        Args:
            session: Current GameSession (provides store and generator)
            node: Node being made visible

        Returns:
            The node's (x, y) centre
        """
        if node.position is not None:
            return node.position

        p = self.params
        stats = PlacementStats()

        others = [
            n for n in session.store.nodes
            if n.visible and n.position is not None and n.index != node.index
        ]
        r = self.radius(node)

        if others:
            centers = torch.tensor(
                [n.position for n in others], dtype=torch.float64, device=self.device
            )  # [M, 2]
            min_dist = torch.tensor(
                [self.radius(n) + r + p.buffer for n in others],
                dtype=torch.float64, device=self.device
            )  # [M]
        else:
            centers = None
            min_dist = None

        origin = torch.tensor([p.width / 2.0, p.height / 2.0], dtype=torch.float64, device=self.device)
        half_extent = torch.tensor(
            [p.width / 2.0 - p.margin, p.height / 2.0 - p.margin],
            dtype=torch.float64, device=self.device
        )

        chosen = None
        candidate = origin
        for round_idx in range(p.max_rounds):
            stats.rounds += 1
            scale = p.growth ** round_idx

            # Generate on CPU with the session generator, then move to device
            u = torch.rand(
                (p.candidates_per_round, 2), generator=session.generator, dtype=torch.float64
            ).to(self.device)
            candidates = origin + (u * 2.0 - 1.0) * half_extent * scale  # [K, 2]
            stats.candidates += p.candidates_per_round
            candidate = candidates[-1]

            if centers is None:
                chosen = candidates[0]
                break

            distances = torch.cdist(candidates, centers, compute_mode="donot_use_mm_for_euclid_dist")  # [K, M]
            clear = (distances >= min_dist.unsqueeze(0)).all(dim=1)  # [K]
            if torch.any(clear):
                first = int(torch.nonzero(clear, as_tuple=False)[0, 0].item())
                chosen = candidates[first]
                break

        if chosen is None:
            stats.fell_back = True
            self.total_fallbacks += 1
            chosen = candidate
            logger.warning(
                "No free spot for '%s' after %d candidates; accepting an overlapping position",
                node.label, stats.candidates
            )

        node.position = (float(chosen[0].item()), float(chosen[1].item()))
        if not in_viewport(node.position, p):
            stats.offscreen = True
            self.total_offscreen += 1
            logger.info(
                "Placed '%s' outside the viewport at (%.1f, %.1f) after %d round(s)",
                node.label, node.position[0], node.position[1], stats.rounds
            )
        self.last_stats = stats
        self.total_placements += 1
        self.total_candidates += stats.candidates
        logger.debug(
            "Placed '%s' at (%.1f, %.1f) after %d round(s)",
            node.label, node.position[0], node.position[1], stats.rounds
        )
        return node.position


def in_viewport(position: tuple[float, float], params: PlacementParams) -> bool:
    """True if a centre lies inside the viewport minus its margin."""
    x, y = position
    return (
        params.margin <= x <= params.width - params.margin
        and params.margin <= y <= params.height - params.margin
    )


def find_overlaps(nodes: list[Node], params: PlacementParams) -> list[tuple[Node, Node]]:
    """
    List every pair of placed nodes closer than their radii plus the buffer.

    Args:
        nodes: Nodes to check (those without a position are skipped)
        params: PlacementParams used for radii and buffer

    Returns:
        Violating (a, b) pairs with a.index < b.index
    """
    placed = [n for n in nodes if n.position is not None]
    if len(placed) < 2:
        return []

    centers = torch.tensor([n.position for n in placed], dtype=torch.float64)
    radii = torch.tensor([label_radius(n.label, params) for n in placed], dtype=torch.float64)

    distances = torch.cdist(centers, centers, compute_mode="donot_use_mm_for_euclid_dist")  # [M, M]
    required = radii.unsqueeze(0) + radii.unsqueeze(1) + params.buffer
    violating = torch.triu(distances < required, diagonal=1)

    pairs = []
    for i, j in torch.nonzero(violating, as_tuple=False).tolist():
        a, b = placed[i], placed[j]
        pairs.append((a, b) if a.index < b.index else (b, a))
    return pairs


def min_clearance(nodes: list[Node], params: PlacementParams) -> Optional[float]:
    """
    Smallest gap between any two placed shapes, minus the buffer.

    Negative values mean an overlap. None when fewer than two nodes are placed.
    """
    placed = [n for n in nodes if n.position is not None]
    if len(placed) < 2:
        return None

    centers = torch.tensor([n.position for n in placed], dtype=torch.float64)
    radii = torch.tensor([label_radius(n.label, params) for n in placed], dtype=torch.float64)

    distances = torch.cdist(centers, centers, compute_mode="donot_use_mm_for_euclid_dist")
    gaps = distances - radii.unsqueeze(0) - radii.unsqueeze(1) - params.buffer
    mask = torch.triu(torch.ones_like(gaps, dtype=torch.bool), diagonal=1)
    return float(gaps[mask].min().item())
