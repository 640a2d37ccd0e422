"""
Display rules for node labels.

A teased node is shown as a placeholder that keeps the shape of its label
(punctuation and spaces stay, letters and digits are masked), with a hover
title giving the length of each word.
"""

from __future__ import annotations

from core.graph_store import Node

MASK_CHAR = "●"


def is_ascii_alphanumeric(ch: str) -> bool:
    return ("0" <= ch <= "9") or ("A" <= ch <= "Z") or ("a" <= ch <= "z")


def placeholder(label: str) -> str:
    """
    Mask every ASCII letter and digit of a label.

    Args:
        label: Label text

    Returns:
        Placeholder of the same length, e.g. "Coco Chanel" -> "●●●● ●●●●●●"
    """
    return "".join(MASK_CHAR if is_ascii_alphanumeric(ch) else ch for ch in label)


def title_hint(label: str) -> str:
    """
    Lengths of the space-separated tokens of a label.

    Args:
        label: Label text

    Returns:
        Hint string, e.g. "Coco Chanel" -> "4 6"
    """
    return " ".join(str(len(token)) for token in label.split(" "))


def display_text(node: Node) -> str:
    """Text drawn for a node: its label once found, its placeholder before."""
    return node.label if node.found else placeholder(node.label)
