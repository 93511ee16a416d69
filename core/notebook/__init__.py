"""
Notebook - shared data model for handwritten notebook documents.

Usage:
    from core.notebook import Answer, HandwrittenFont, PageStyle

    font = HandwrittenFont(id="caveat", name="Caveat", family="Caveat",
                           url="fonts/Caveat-Regular.ttf")
    answers = [Answer(question_number=1, content="React is a library.")]
"""

from .models import (
    Answer,
    HandwrittenFont,
    PageStyle,
    CanvasLine,
    CanvasPage,
    Layout,
)
from .styles import StyleSpec, STYLE_PRESETS, get_style_spec
from .fonts import FontResolver, ResolvedFont


__all__ = [
    # Models
    'Answer',
    'HandwrittenFont',
    'PageStyle',
    'CanvasLine',
    'CanvasPage',
    'Layout',

    # Styles
    'StyleSpec',
    'STYLE_PRESETS',
    'get_style_spec',

    # Fonts
    'FontResolver',
    'ResolvedFont',
]
