"""
Utility functions and constants for the discovery game.
"""

from utils.wordlist import load_wordlist, WORD_POOL
from utils.graph_loader import (
    load_graph_definition,
    load_default_definition,
    validate_definition,
    SAMPLE_DEFINITION,
)
from utils.random_graph import generate_random_definition, sample_labels

__all__ = [
    "load_wordlist",
    "WORD_POOL",
    "load_graph_definition",
    "load_default_definition",
    "validate_definition",
    "SAMPLE_DEFINITION",
    "generate_random_definition",
    "sample_labels",
]
