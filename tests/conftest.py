"""
Pytest configuration for the discovery game.

Keeps a user's default graph definition out of test runs so the loader
falls back to the bundled sample graph.
"""

import os

os.environ.pop("WORDWEB_DATA", None)
