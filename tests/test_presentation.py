"""
Tests for views.presentation module.
"""

import pytest

from core.events import NodeBecameVisible, SelectionChanged
from core.graph_store import GraphStore
from core.placement import Placement, PlacementParams
from core.reveal_engine import RevealEngine, GuessOutcome, GuessResult
from core.session import GameSession
from views.labels import MASK_CHAR
from views.presentation import PresentationAdapter, SceneView, GuessLog


DEFINITION = {
    "nodes": [{"name": "Coco"}, {"name": "Cocoa"}, {"name": "Chanel"}, {"name": "Perfume"}],
    "links": [
        {"source": "Coco", "target": "Cocoa"},
        {"source": "Coco", "target": "Chanel"},
        {"source": "Chanel", "target": "Perfume"},
    ],
    "starting": ["Coco"],
}


class RecordingAdapter(PresentationAdapter):
    """Adapter that records hook calls."""

    def __init__(self):
        self.calls = []

    def on_node_visible(self, node):
        self.calls.append(("visible", node.label))

    def on_connection(self, node_a, node_b):
        self.calls.append(("connection", node_a.label, node_b.label))

    def on_node_found(self, node):
        self.calls.append(("found", node.label))

    def on_selection_changed(self, node):
        self.calls.append(("selection", node.label if node else None))


def make_scene(adapter=None):
    store = GraphStore.from_definition(DEFINITION)
    params = PlacementParams()
    scene = SceneView(store, params)
    adapters = [scene] + ([adapter] if adapter is not None else [])
    session = GameSession(store, adapters=adapters, seed=0)
    engine = RevealEngine(Placement(params))
    engine.start(session)
    return store, session, engine, scene


def test_adapter_dispatch():
    """Test handle() routes each event type to its hook."""
    recorder = RecordingAdapter()
    store, session, engine, scene = make_scene(recorder)

    engine.submit_guess(session, "chanel")
    engine.select(session, "Chanel")
    engine.deselect(session)

    assert recorder.calls[:5] == [
        ("visible", "Coco"),
        ("visible", "Cocoa"),
        ("connection", "Coco", "Cocoa"),
        ("visible", "Chanel"),
        ("connection", "Coco", "Chanel"),
    ]
    assert ("found", "Chanel") in recorder.calls
    assert recorder.calls[-2:] == [("selection", "Chanel"), ("selection", None)]


def test_adapter_rejects_unknown_event():
    """Test an unknown event type raises TypeError."""
    with pytest.raises(TypeError):
        RecordingAdapter().handle(object())


def test_base_adapter_hooks_are_noops():
    """Test the base adapter accepts every event without overriding."""
    store = GraphStore()
    node = store.add("Coco", is_starting_node=True)
    adapter = PresentationAdapter()

    adapter.handle(NodeBecameVisible(node))
    adapter.handle(SelectionChanged(None))


def test_scene_shapes_follow_reveal():
    """Test shapes appear teased and switch to the label once found."""
    store, session, engine, scene = make_scene()

    cocoa = store.get("Cocoa")
    coco = store.get("Coco")
    assert set(scene.shapes) == {coco.index, cocoa.index, store.get("Chanel").index}
    assert scene.shapes[cocoa.index].text == MASK_CHAR * 5
    assert scene.shapes[cocoa.index].title == "5"
    assert scene.shapes[cocoa.index].center == cocoa.position
    assert scene.shapes[coco.index].css_class == "node parent"
    assert scene.shapes[cocoa.index].css_class == "node"

    engine.submit_guess(session, "cocoa")
    assert scene.shapes[cocoa.index].text == "Cocoa"


def test_scene_lines_once_per_pair():
    """Test each connected pair gets exactly one line with node centres."""
    store, session, engine, scene = make_scene()
    engine.submit_guess(session, "Chanel")

    coco, chanel = store.get("Coco"), store.get("Chanel")
    assert len(scene.lines) == 3
    line = scene.lines[(coco.index, chanel.index)]
    assert {line.start, line.end} == {coco.position, chanel.position}


def test_scene_selection_highlights_and_panel():
    """Test selecting highlights the node's links and fills the panel."""
    store, session, engine, scene = make_scene()

    engine.select(session, "Chanel")

    assert scene.panel.title == MASK_CHAR * 6
    assert scene.panel.items == ["Coco"]  # Perfume still hidden
    assert len(scene.active_lines()) == 1

    engine.submit_guess(session, "chanel")

    assert scene.panel.title == "Chanel"
    assert scene.panel.items == ["Coco", MASK_CHAR * 7]
    assert len(scene.active_lines()) == 2

    engine.select(session, "Coco")
    assert len(scene.active_lines()) == 2
    assert scene.panel.items == [MASK_CHAR * 5, "Chanel"]

    engine.deselect(session)
    assert scene.panel.title is None
    assert scene.panel.items == []
    assert scene.active_lines() == []


def test_render_text_lists_visible_nodes():
    """Test the text rendering contains every visible node."""
    store, session, engine, scene = make_scene()
    engine.select(session, "Coco")

    text = scene.render_text()

    assert "Coco" in text
    assert MASK_CHAR * 5 in text
    assert "[Coco]" in text
    assert "Perfume" not in text


def test_guess_log_messages():
    """Test feedback lines for each outcome."""
    store = GraphStore()
    node = store.add("Coco", is_starting_node=True)
    log = GuessLog()

    assert log.record(GuessResult(GuessOutcome.ALREADY_FOUND, "coco", node)) == "Coco: already found"
    assert log.record(GuessResult(GuessOutcome.CORRECT, "COCO", node)) == "Coco: yep!"
    assert log.record(GuessResult(GuessOutcome.INCORRECT, "cocoa")) == "cocoa: nope"

    assert log.lines() == ["cocoa: nope", "Coco: yep!", "Coco: already found"]
    assert log.entries[0][1] == "incorrect"


def test_guess_log_is_bounded():
    """Test only the ten newest lines are kept."""
    log = GuessLog()
    for i in range(15):
        log.record(GuessResult(GuessOutcome.INCORRECT, f"guess {i}"))

    assert len(log.lines()) == 10
    assert log.lines()[0] == "guess 14: nope"
    assert log.lines()[-1] == "guess 5: nope"
