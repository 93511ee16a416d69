"""
Layout Engine - deterministic pagination of answers onto notebook pages.

Usage:
    from core.layout_engine import LayoutEngine
    from core.notebook import Answer, HandwrittenFont

    engine = LayoutEngine()
    layout = engine.calculate_layout(answers, font, "ruled")
    print(layout.total_pages, layout.total_lines)
    engine.destroy()
"""

from .engine import LayoutEngine, LayoutConfig
from .text_measurement import TextMeasurer


__all__ = [
    'LayoutEngine',
    'LayoutConfig',
    'TextMeasurer',
]
