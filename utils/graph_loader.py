"""
Graph definition loading for the discovery game.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional
import json
import logging
import os

from core.graph_store import GraphDefinitionError

logger = logging.getLogger(__name__)

# Environment variable naming the default definition file
DATA_ENV_VAR = "WORDWEB_DATA"


SAMPLE_DEFINITION: dict[str, Any] = {
    "nodes": [
        {"name": "Coco"},
        {"name": "Cocoa"},
        {"name": "Chanel"},
        {"name": "Chocolate"},
        {"name": "Perfume"},
        {"name": "Paris"},
        {"name": "Hot Chocolate"},
        {"name": "Marshmallow"},
        {"name": "No. 5"},
        {"name": "Eiffel Tower"},
    ],
    "links": [
        {"source": "Coco", "target": "Cocoa"},
        {"source": "Coco", "target": "Chanel"},
        {"source": "Cocoa", "target": "Chocolate"},
        {"source": "Cocoa", "target": "Hot Chocolate"},
        {"source": "Hot Chocolate", "target": "Marshmallow"},
        {"source": "Chanel", "target": "Perfume"},
        {"source": "Chanel", "target": "Paris"},
        {"source": "Perfume", "target": "No. 5"},
        {"source": "Paris", "target": "Eiffel Tower"},
    ],
    "starting": ["Coco"],
}


def validate_definition(data: Any) -> dict[str, Any]:
    """
    Check that a record has the graph definition shape.

    Args:
        data: Parsed JSON value

    Returns:
        The same record

    Raises:
        GraphDefinitionError: If a key is missing or an entry is malformed
    """
    if not isinstance(data, dict):
        raise GraphDefinitionError(f"Expected an object, got {type(data).__name__}")

    for key in ("nodes", "links", "starting"):
        if not isinstance(data.get(key), list):
            raise GraphDefinitionError(f"Definition needs a '{key}' list")

    for i, node in enumerate(data["nodes"]):
        if not isinstance(node, dict) or not isinstance(node.get("name"), str):
            raise GraphDefinitionError(f"nodes[{i}] must be an object with a string 'name'")

    for i, link in enumerate(data["links"]):
        if (
            not isinstance(link, dict)
            or not isinstance(link.get("source"), str)
            or not isinstance(link.get("target"), str)
        ):
            raise GraphDefinitionError(f"links[{i}] must have string 'source' and 'target'")

    for i, label in enumerate(data["starting"]):
        if not isinstance(label, str):
            raise GraphDefinitionError(f"starting[{i}] must be a string")

    return data


def load_graph_definition(filepath: str | Path) -> dict[str, Any]:
    """
    Load a graph definition from a JSON file.

    Args:
        filepath: Path to a JSON file with "nodes", "links" and "starting"

    Returns:
        Validated definition record

    Raises:
        FileNotFoundError: If the file doesn't exist
        GraphDefinitionError: If the file is not a valid definition
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Graph definition not found: {filepath}")

    with open(path, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise GraphDefinitionError(f"{filepath} is not valid JSON: {e}") from e

    definition = validate_definition(data)
    logger.info(
        "Loaded %d nodes and %d links from %s",
        len(definition["nodes"]), len(definition["links"]), path
    )
    return definition


def load_default_definition(filepath: Optional[str | Path] = None) -> dict[str, Any]:
    """
    Load the definition named by filepath or $WORDWEB_DATA.

    Falls back to SAMPLE_DEFINITION when neither is set.
    """
    filepath = filepath or os.environ.get(DATA_ENV_VAR)
    if not filepath:
        logger.warning(f"No graph definition given and {DATA_ENV_VAR} unset, using sample graph")
        return SAMPLE_DEFINITION
    return load_graph_definition(filepath)
