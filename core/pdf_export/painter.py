"""
Page painter - rasterises one CanvasPage with Pillow.

Draws the notebook paper (background, rules, margin line) and the text
lines at the export quality. Coordinates in CanvasPage are pixels at
96 DPI and are scaled by quality / 96.
"""

import logging
import random
from dataclasses import dataclass
from typing import Dict, Tuple, Union

from PIL import Image, ImageColor, ImageDraw, ImageFont
from reportlab.lib.pagesizes import A4, LETTER, landscape, portrait

from core.notebook.fonts import ResolvedFont
from core.notebook.models import CanvasPage, PageStyle
from core.notebook.styles import get_style_spec

from .estimation import SCREEN_DPI
from .options import ExportFormat, Orientation


logger = logging.getLogger(__name__)

PX_PER_POINT = SCREEN_DPI / 72.0


@dataclass(frozen=True)
class PageSurface:
    """Page size at screen DPI plus its size in PDF points"""
    width_px: int
    height_px: int
    width_pt: float
    height_pt: float

    @classmethod
    def for_format(
        cls,
        page_format: Union[ExportFormat, str] = ExportFormat.A4,
        orientation: Union[Orientation, str] = Orientation.PORTRAIT
    ) -> "PageSurface":
        size = LETTER if ExportFormat(page_format) == ExportFormat.LETTER else A4
        if Orientation(orientation) == Orientation.LANDSCAPE:
            size = landscape(size)
        else:
            size = portrait(size)

        width_pt, height_pt = size
        return cls(
            width_px=round(width_pt * PX_PER_POINT),
            height_px=round(height_pt * PX_PER_POINT),
            width_pt=width_pt,
            height_pt=height_pt,
        )

    @classmethod
    def from_pixels(cls, width_px: int, height_px: int) -> "PageSurface":
        """Surface for a page laid out in 96 DPI pixels."""
        return cls(
            width_px=int(width_px),
            height_px=int(height_px),
            width_pt=width_px / PX_PER_POINT,
            height_pt=height_px / PX_PER_POINT,
        )

    @property
    def size_pt(self) -> Tuple[float, float]:
        return (self.width_pt, self.height_pt)

    def fit_into(self, target: "PageSurface") -> Tuple[float, float, float, float]:
        """
        Largest placement of this surface inside `target`, centred and
        with the aspect ratio kept. Returns (x, y, width, height) in points.
        """
        scale = min(target.width_pt / self.width_pt, target.height_pt / self.height_pt)
        width = self.width_pt * scale
        height = self.height_pt * scale
        return (
            max(0.0, (target.width_pt - width) / 2),
            max(0.0, (target.height_pt - height) / 2),
            width,
            height,
        )


class PagePainter:
    """
    Renders notebook pages to RGB images.

    The surface is the page the layout was computed for; the exporter
    scales the finished image onto the paper format.

    Glyphs get a small per-character offset for a hand-written look.
    The offsets are seeded by page number so output is reproducible.
    """

    BACKGROUND = "#FFFFFF"

    def __init__(
        self,
        surface: PageSurface,
        quality: int,
        font: ResolvedFont,
        stroke_color: str,
        style: Union[PageStyle, str],
        jitter: float = 0.0
    ):
        self.surface = surface
        self.quality = quality
        self.scale = quality / SCREEN_DPI
        self.font = font
        self.stroke_color = stroke_color
        self.style = PageStyle.coerce(style)
        self.spec = get_style_spec(self.style)
        self.jitter = jitter

        self._fonts: Dict[int, ImageFont.ImageFont] = {}

    @property
    def pixel_size(self) -> Tuple[int, int]:
        return (
            max(1, round(self.surface.width_px * self.scale)),
            max(1, round(self.surface.height_px * self.scale)),
        )

    def paint(self, page: CanvasPage) -> Image.Image:
        """Render a page; raises ValueError for an unknown stroke colour."""
        fill = ImageColor.getrgb(self.stroke_color)

        image = Image.new("RGB", self.pixel_size, self.BACKGROUND)
        draw = ImageDraw.Draw(image)

        self._draw_background(draw)
        self._draw_lines(draw, page, fill)
        return image

    def _draw_background(self, draw: ImageDraw.ImageDraw):
        spec = self.spec
        s = self.scale

        if spec.has_rules:
            width = max(1, round(spec.rule_width * s))
            left = spec.margin_left * s
            right = (self.surface.width_px - spec.margin_right) * s
            end_y = self.surface.height_px - spec.margin_bottom

            y = spec.margin_top
            while y <= end_y:
                draw.line([(left, y * s), (right, y * s)], fill=spec.rule_color, width=width)
                y += spec.line_height

        if spec.margin_rule_color and spec.margin_rule_x is not None:
            x = spec.margin_rule_x * s
            draw.line(
                [(x, spec.margin_top * s), (x, (self.surface.height_px - spec.margin_bottom) * s)],
                fill=spec.margin_rule_color,
                width=max(1, round(spec.margin_rule_width * s)),
            )

    def _draw_lines(self, draw: ImageDraw.ImageDraw, page: CanvasPage, fill):
        s = self.scale
        rng = random.Random(page.page_number)

        for line in page.lines:
            if not line.text:
                continue

            pil_font = self._get_font(line.font_size)
            # Sit the glyphs on the rule below the line slot
            top = (line.y + self.spec.line_height - line.font_size * 1.25) * s
            x = line.x * s

            if self.jitter <= 0:
                draw.text((x, top), line.text, font=pil_font, fill=fill)
                continue

            for char in line.text:
                dx = (rng.random() - 0.5) * self.jitter * s
                dy = (rng.random() - 0.5) * self.jitter * s
                draw.text((x + dx, top + dy), char, font=pil_font, fill=fill)
                x += pil_font.getlength(char)

    def _get_font(self, font_size: float) -> ImageFont.ImageFont:
        size = max(1, round(font_size * self.scale))
        if size not in self._fonts:
            if self.font.path:
                self._fonts[size] = ImageFont.truetype(self.font.path, size)
            else:
                self._fonts[size] = ImageFont.load_default(size=size)
        return self._fonts[size]
