"""
Views for rendering the discovery game.
"""

from views.labels import placeholder, title_hint, display_text
from views.presentation import PresentationAdapter, SceneView, GuessLog

__all__ = [
    "placeholder",
    "title_hint",
    "display_text",
    "PresentationAdapter",
    "SceneView",
    "GuessLog",
]
