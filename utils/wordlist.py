"""
Label pool for generated discovery graphs.

Labels come from wordlist.txt next to this module: free-form association
phrases with their display casing, punctuation and spaces kept.
"""

from pathlib import Path
import logging
import os

logger = logging.getLogger(__name__)
curr_dir = os.path.dirname(os.path.abspath(__file__))

WORD_LIST_FILE = os.path.join(curr_dir, "wordlist.txt")

# Lines starting with this are ignored
COMMENT_PREFIX = "#"


def load_wordlist(filepath: str | Path = WORD_LIST_FILE) -> list[str]:
    """
    Load a label list.

    Blank lines and comment lines are skipped. A label that repeats an
    earlier one case-insensitively is dropped, since the graph store would
    refuse it as a duplicate.

    Args:
        filepath: Path to a file with one label per line

    Returns:
        Labels in file order, original casing

    Raises:
        FileNotFoundError: If the file doesn't exist
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Wordlist file not found: {filepath}")

    labels = []
    seen = set()
    with open(path, 'r', encoding='utf-8') as f:
        for line in f:
            label = line.strip()
            if not label or label.startswith(COMMENT_PREFIX):
                continue
            key = label.lower()
            if key in seen:
                logger.debug("Skipping repeated label '%s' in %s", label, path)
                continue
            seen.add(key)
            labels.append(label)

    return labels


WORD_POOL = load_wordlist()
