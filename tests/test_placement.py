"""
Tests for core.placement module.
"""

import math
import random
import time

import pytest

from core.graph_store import GraphStore
from core.placement import (
    Placement,
    PlacementParams,
    label_radius,
    find_overlaps,
    in_viewport,
    min_clearance,
)
from core.reveal_engine import RevealEngine
from core.session import GameSession
from utils.random_graph import generate_random_definition


def test_params_validation():
    """Test invalid parameters are rejected."""
    with pytest.raises(ValueError):
        PlacementParams(width=50, margin=40)
    with pytest.raises(ValueError):
        PlacementParams(candidates_per_round=0)
    with pytest.raises(ValueError):
        PlacementParams(max_rounds=0)
    with pytest.raises(ValueError):
        PlacementParams(min_radius=0)
    with pytest.raises(ValueError):
        PlacementParams(growth=0.5)


def test_radius_grows_with_text_length():
    """Test short labels use the circle radius and long ones get wider."""
    params = PlacementParams(min_radius=15.0, char_width=7.0)

    assert label_radius("Coco", params) == 15.0
    assert label_radius("A" * 10, params) == 35.0
    assert label_radius("Rock and Roll Hall of Fame", params) > label_radius("Rock", params)


def test_first_node_inside_viewport():
    """Test a lone node lands inside the viewport margin."""
    params = PlacementParams(width=400, height=300, margin=20)
    store = GraphStore()
    node = store.add("Coco", is_starting_node=True)
    session = GameSession(store, seed=0)

    x, y = Placement(params).place(session, node)

    assert 20 <= x <= 380
    assert 20 <= y <= 280


def test_position_never_reassigned():
    """Test placing an already placed node keeps its position."""
    store = GraphStore()
    node = store.add("Coco", is_starting_node=True)
    session = GameSession(store, seed=0)
    placement = Placement()

    first = placement.place(session, node)
    second = placement.place(session, node)

    assert first == second
    assert placement.total_placements == 1


def test_seeded_placement_is_deterministic():
    """Test the same seed gives the same layout."""
    definition = generate_random_definition(40, extra_edges=10, seed=3)

    def layout(seed):
        store = GraphStore.from_definition(definition)
        session = GameSession(store, seed=seed)
        RevealEngine(Placement()).start(session)
        return [n.position for n in store.nodes]

    assert layout(7) == layout(7)
    assert layout(7) != layout(8)


def test_dense_neighbourhood_no_overlap():
    """Test a star of many long labels placed at once never overlaps."""
    params = PlacementParams(width=600, height=400)
    store = GraphStore()
    hub = store.add("Hub", is_starting_node=True)
    for i in range(80):
        leaf = store.add(f"A fairly long label number {i}")
        store.connect(hub, leaf)

    session = GameSession(store, seed=1)
    engine = RevealEngine(Placement(params))
    engine.start(session)

    visible = store.visible_nodes()
    assert len(visible) == 81
    assert find_overlaps(visible, params) == []
    assert engine.placement.total_fallbacks == 0


@pytest.mark.parametrize("seed", [0, 1])
def test_non_overlap_after_sequential_correct_guesses(seed):
    """Test no pair of visible nodes overlaps as hundreds are revealed."""
    params = PlacementParams()
    definition = generate_random_definition(250, extra_edges=120, seed=seed)
    store = GraphStore.from_definition(definition)
    session = GameSession(store, seed=seed)
    engine = RevealEngine(Placement(params))
    engine.start(session)
    rng = random.Random(seed)

    for step in range(300):
        teased = [n.label for n in store.nodes if n.visible and not n.found]
        if not teased:
            break
        engine.submit_guess(session, rng.choice(teased))
        if step % 50 == 0:
            assert find_overlaps(store.visible_nodes(), params) == []

    visible = store.visible_nodes()
    assert len(visible) == 250
    assert find_overlaps(visible, params) == []

    # explicit pairwise check, independent of the torch helper
    for i, a in enumerate(visible):
        for b in visible[i + 1:]:
            distance = math.dist(a.position, b.position)
            required = label_radius(a.label, params) + label_radius(b.label, params) + params.buffer
            assert distance >= required - 1e-9


def test_placement_time_is_bounded():
    """Test a full reveal of a few hundred nodes finishes quickly."""
    definition = generate_random_definition(300, extra_edges=100, seed=11)
    store = GraphStore.from_definition(definition)
    session = GameSession(store, seed=11)
    placement = Placement()
    engine = RevealEngine(placement)
    engine.start(session)

    start = time.time()
    while True:
        teased = [n.label for n in store.nodes if n.visible and not n.found]
        if not teased:
            break
        engine.submit_guess(session, teased[0])
    elapsed = time.time() - start

    params = placement.params
    max_per_call = params.candidates_per_round * params.max_rounds
    assert placement.total_candidates <= placement.total_placements * max_per_call
    assert elapsed < 60.0


def test_fallback_when_no_room():
    """Test placement terminates and reports a fallback when space runs out."""
    params = PlacementParams(
        width=100, height=100, margin=10, min_radius=60,
        candidates_per_round=4, max_rounds=1, growth=1.0
    )
    store = GraphStore()
    a = store.add("A", is_starting_node=True)
    b = store.add("B", is_starting_node=True)
    session = GameSession(store, seed=0)
    placement = Placement(params)

    placement.place(session, a)
    placement.place(session, b)

    assert b.position is not None
    assert placement.last_stats.fell_back
    assert placement.total_fallbacks == 1
    assert placement.last_stats.candidates == 4
    assert len(find_overlaps([a, b], params)) == 1


def test_growth_finds_room_outside_viewport():
    """Test growing the sampling region avoids a fallback in a tiny viewport."""
    params = PlacementParams(
        width=100, height=100, margin=10, min_radius=40,
        candidates_per_round=32, max_rounds=10, growth=2.0
    )
    store = GraphStore()
    nodes = [store.add(f"N{i}", is_starting_node=True) for i in range(5)]
    session = GameSession(store, seed=0)
    placement = Placement(params)

    for node in nodes:
        placement.place(session, node)

    assert placement.total_fallbacks == 0
    assert find_overlaps(nodes, params) == []


def test_hidden_nodes_do_not_block_space():
    """Test only visible, placed nodes are considered obstacles."""
    store = GraphStore()
    a = store.add("A", is_starting_node=True)
    hidden = store.add("Hidden")
    session = GameSession(store, seed=0)

    Placement().place(session, a)

    assert hidden.position is None
    assert find_overlaps(store.nodes, PlacementParams()) == []


def test_min_clearance():
    """Test clearance is None with fewer than two nodes and matches geometry otherwise."""
    params = PlacementParams(min_radius=10, char_width=0, buffer=5)
    store = GraphStore()
    a = store.add("A")
    b = store.add("B")

    assert min_clearance([a, b], params) is None

    a.position = (0.0, 0.0)
    b.position = (30.0, 40.0)

    assert min_clearance([a, b], params) == pytest.approx(50.0 - 10 - 10 - 5)
    assert find_overlaps([a, b], params) == []

    b.position = (10.0, 0.0)
    assert min_clearance([a, b], params) < 0
    assert find_overlaps([a, b], params) == [(a, b)]


def test_explicit_cpu_device_places_nodes():
    """Test placement works with the device given explicitly."""
    store = GraphStore()
    a = store.add("A", is_starting_node=True)
    b = store.add("B", is_starting_node=True)
    session = GameSession(store, seed=0)
    placement = Placement(device="cpu")

    placement.place(session, a)
    placement.place(session, b)

    assert find_overlaps([a, b], placement.params) == []


def test_offscreen_placements_are_counted():
    """Test nodes pushed past the margin by region growth are flagged and counted."""
    params = PlacementParams(
        width=100, height=100, margin=10, min_radius=40,
        candidates_per_round=32, max_rounds=10, growth=2.0
    )
    store = GraphStore()
    nodes = [store.add(f"N{i}", is_starting_node=True) for i in range(5)]
    session = GameSession(store, seed=0)
    placement = Placement(params)

    flagged = []
    for node in nodes:
        placement.place(session, node)
        flagged.append(placement.last_stats.offscreen)

    assert flagged[0] is False
    assert placement.total_offscreen == sum(flagged)
    assert placement.total_offscreen == sum(1 for n in nodes if not in_viewport(n.position, params))
    # five 40px nodes cannot all fit inside the 80px inner square
    assert placement.total_offscreen >= 1


def test_in_viewport():
    """Test the viewport check honours the margin."""
    params = PlacementParams(width=400, height=300, margin=20)

    assert in_viewport((20.0, 20.0), params)
    assert in_viewport((380.0, 280.0), params)
    assert not in_viewport((19.0, 150.0), params)
    assert not in_viewport((200.0, -5.0), params)
