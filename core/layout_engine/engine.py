"""
Layout Engine - Paginates answer text onto notebook pages.

Lines are word-wrapped with measured glyph widths and stacked on the
style's line pitch until a page is full, then continue on the next page.
"""

import dataclasses
import hashlib
import logging
from collections import OrderedDict
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

from config.settings import Settings, settings as default_settings
from core.notebook.fonts import FontResolver
from core.notebook.models import (
    Answer, CanvasLine, CanvasPage, HandwrittenFont, Layout, PageStyle,
)
from core.notebook.styles import StyleSpec, get_style_spec

from .text_measurement import TextMeasurer


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutConfig:
    """Page geometry and caching knobs (pixels at 96 DPI)"""
    page_width: float = 794
    page_height: float = 1123
    font_size: float = 18
    answer_spacing: int = 1  # Blank lines between answers
    max_cache_size: int = 100

    @classmethod
    def from_settings(cls, s: Optional[Settings] = None) -> "LayoutConfig":
        s = s or default_settings
        return cls(
            page_width=s.page_width,
            page_height=s.page_height,
            font_size=s.font_size,
            answer_spacing=s.answer_spacing,
            max_cache_size=s.layout_cache_size,
        )


class LayoutEngine:
    """
    Turns answers into pages of positioned lines.

    Each instance owns a bounded layout cache keyed by a digest of the
    full answer text, the font id, the style and the config. A miss
    always re-paginates from scratch.
    """

    def __init__(
        self,
        config: Optional[LayoutConfig] = None,
        measurer: Optional[TextMeasurer] = None
    ):
        self.config = config or LayoutConfig.from_settings()
        self.measurer = measurer or TextMeasurer(
            resolver=FontResolver(default_settings.font_dirs),
            max_cache_size=default_settings.measurement_cache_size,
        )
        self._layout_cache: "OrderedDict[str, Layout]" = OrderedDict()

    def calculate_layout(
        self,
        answers: Sequence[Answer],
        font: HandwrittenFont,
        style: Union[PageStyle, str]
    ) -> Layout:
        """
        Paginate answers for a font and page style.

        Args:
            answers: Answers to lay out (sorted by question number here)
            font: Resolved handwritten font
            style: Page style token

        Returns:
            Layout with sequential, gapless page numbers starting at 1
        """
        style = PageStyle.coerce(style)
        ordered = sorted(answers, key=lambda a: a.question_number)

        cache_key = self._cache_key(ordered, font, style)
        cached = self._layout_cache.get(cache_key)
        if cached is not None:
            logger.debug(f"Layout cache hit ({len(ordered)} answers, {font.id}, {style.value})")
            return cached

        spec = get_style_spec(style)
        lines = self._answers_to_lines(ordered, font, spec)
        layout = Layout(pages=self._distribute_across_pages(lines, style, spec))

        self._cache_layout(cache_key, layout)
        logger.debug(
            f"Layout computed: {layout.total_lines} lines on {layout.total_pages} pages"
        )
        return layout

    def split_into_lines(
        self,
        text: str,
        font: HandwrittenFont,
        style: Union[PageStyle, str] = PageStyle.RULED
    ) -> List[str]:
        """
        Wrap text into lines that fit the style's content width.

        Newlines start a new paragraph; blank paragraphs become blank
        lines. Empty or whitespace-only text gives no lines at all.
        """
        spec = get_style_spec(style)
        return self._wrap_text(text, font, spec.content_width(self.config.page_width))

    def estimate_page_count(
        self,
        answers: Sequence[Answer],
        font: HandwrittenFont,
        style: Union[PageStyle, str] = PageStyle.RULED
    ) -> int:
        return self.calculate_layout(answers, font, style).total_pages

    def get_config(self) -> LayoutConfig:
        return self.config

    def update_config(self, **changes) -> LayoutConfig:
        """Replace config fields and drop every cached layout."""
        self.config = dataclasses.replace(self.config, **changes)
        self.clear_cache()
        return self.config

    def clear_cache(self):
        self._layout_cache.clear()

    def get_cache_stats(self) -> dict:
        stats = {"layout_cache_size": len(self._layout_cache)}
        stats.update(self.measurer.get_cache_stats())
        return stats

    def destroy(self):
        """Release cached layouts and measurements."""
        self.clear_cache()
        self.measurer.clear_cache()
        logger.debug("Layout engine destroyed, caches released")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _cache_key(
        self,
        answers: Sequence[Answer],
        font: HandwrittenFont,
        style: PageStyle
    ) -> str:
        digest = hashlib.sha256()
        for answer in answers:
            digest.update(f"{answer.question_number}\x1f{answer.content}\x1e".encode("utf-8"))
        digest.update(f"{font.id}\x1f{style.value}\x1f{self.config!r}".encode("utf-8"))
        return digest.hexdigest()

    def _cache_layout(self, key: str, layout: Layout):
        if self.config.max_cache_size < 1:
            return
        if len(self._layout_cache) >= self.config.max_cache_size:
            self._layout_cache.popitem(last=False)
        self._layout_cache[key] = layout

    def _answers_to_lines(
        self,
        answers: Sequence[Answer],
        font: HandwrittenFont,
        spec: StyleSpec
    ) -> List[str]:
        all_lines: List[str] = []
        max_width = spec.content_width(self.config.page_width)

        for answer in answers:
            lines = self._wrap_text(answer.content, font, max_width)
            if not lines:
                continue

            # Spacing only between answers that actually produced lines
            if all_lines:
                all_lines.extend([''] * self.config.answer_spacing)
            all_lines.extend(lines)

        return all_lines

    def _wrap_text(self, text: str, font: HandwrittenFont, max_width: float) -> List[str]:
        if not text or not text.strip():
            return []

        lines: List[str] = []
        for paragraph in text.splitlines():
            words = paragraph.split()
            if words:
                lines.extend(self._wrap_words(words, font, max_width))
            else:
                lines.append('')
        return lines

    def _wrap_words(self, words: List[str], font: HandwrittenFont, max_width: float) -> List[str]:
        """Greedy word wrap; only words wider than a full line are split."""
        size = self.config.font_size
        lines: List[str] = []
        current = ''

        for word in words:
            if self.measurer.measure_text_width(word, font, size) > max_width:
                if current:
                    lines.append(current)
                chunks = self._break_long_word(word, font, max_width)
                lines.extend(chunks[:-1])
                current = chunks[-1]
                continue

            candidate = f"{current} {word}" if current else word
            if self.measurer.measure_text_width(candidate, font, size) <= max_width:
                current = candidate
            else:
                if current:
                    lines.append(current)
                current = word

        if current:
            lines.append(current)

        return lines or ['']

    def _break_long_word(self, word: str, font: HandwrittenFont, max_width: float) -> List[str]:
        size = self.config.font_size
        chunks: List[str] = []
        current = ''

        for char in word:
            candidate = current + char
            if current and self.measurer.measure_text_width(candidate, font, size) > max_width:
                chunks.append(current)
                current = char
            else:
                current = candidate

        if current:
            chunks.append(current)

        return chunks or [word]

    def _distribute_across_pages(
        self,
        lines: List[str],
        style: PageStyle,
        spec: StyleSpec
    ) -> tuple:
        pages: List[CanvasPage] = []
        max_lines = spec.max_lines(self.config.page_height)

        current: List[CanvasLine] = []
        page_number = 1

        for text in lines:
            if len(current) >= max_lines:
                pages.append(CanvasPage(page_number, tuple(current), style))
                current = []
                page_number += 1

            current.append(CanvasLine(
                text=text,
                x=spec.margin_left,
                y=spec.line_y(len(current)),
                font_size=self.config.font_size,
            ))

        if current:
            pages.append(CanvasPage(page_number, tuple(current), style))

        return tuple(pages)
