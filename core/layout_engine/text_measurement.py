"""
Text measurement backed by ReportLab font metrics.
"""

import logging
from collections import OrderedDict
from typing import Dict, Optional

from reportlab.pdfbase import pdfmetrics

from core.notebook.fonts import FontResolver
from core.notebook.models import HandwrittenFont


logger = logging.getLogger(__name__)


class TextMeasurer:
    """
    Measures rendered text width for a handwritten font.

    Widths are FIFO-cached per (font id, size, text).
    """

    def __init__(
        self,
        resolver: Optional[FontResolver] = None,
        max_cache_size: int = 1000
    ):
        self.resolver = resolver or FontResolver()
        self.max_cache_size = max_cache_size
        self._width_cache: "OrderedDict[tuple, float]" = OrderedDict()

    def measure_text_width(self, text: str, font: HandwrittenFont, font_size: float) -> float:
        """Width of `text` in the same units as `font_size`."""
        key = (font.id, font_size, text)
        cached = self._width_cache.get(key)
        if cached is not None:
            return cached

        resolved = self.resolver.resolve(font)
        width = pdfmetrics.stringWidth(text, resolved.pdf_font_name, font_size)

        if self.max_cache_size < 1:
            return width
        if len(self._width_cache) >= self.max_cache_size:
            self._width_cache.popitem(last=False)
        self._width_cache[key] = width
        return width

    def fits_within_width(
        self,
        text: str,
        max_width: float,
        font: HandwrittenFont,
        font_size: float
    ) -> bool:
        return self.measure_text_width(text, font, font_size) <= max_width

    def clear_cache(self):
        self._width_cache.clear()

    def get_cache_stats(self) -> Dict[str, int]:
        return {"width_cache_size": len(self._width_cache)}
