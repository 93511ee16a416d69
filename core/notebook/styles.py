"""
Page style presets.

Each notebook style fixes the page margins, the line pitch (which is
also the spacing of the printed rules) and how the paper is decorated.
Units are pixels at 96 DPI, the same space the layout engine works in.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Union

from .models import PageStyle


@dataclass(frozen=True)
class StyleSpec:
    """Margins, line pitch and rule decoration for one page style"""
    margin_top: float
    margin_bottom: float
    margin_left: float
    margin_right: float
    line_height: float

    # Horizontal rules (None = plain paper)
    rule_color: Optional[str] = None
    rule_width: float = 1

    # Vertical margin rule (lined paper)
    margin_rule_color: Optional[str] = None
    margin_rule_x: Optional[float] = None
    margin_rule_width: float = 2

    @property
    def has_rules(self) -> bool:
        return self.rule_color is not None

    def content_width(self, page_width: float) -> float:
        return page_width - self.margin_left - self.margin_right

    def content_height(self, page_height: float) -> float:
        return page_height - self.margin_top - self.margin_bottom

    def max_lines(self, page_height: float) -> int:
        """Number of line slots that fit between the top and bottom margins."""
        return max(1, int(self.content_height(page_height) // self.line_height))

    def line_y(self, index: int) -> float:
        """Top of the given line slot on a page."""
        return self.margin_top + index * self.line_height


STYLE_PRESETS: Dict[PageStyle, StyleSpec] = {
    PageStyle.RULED: StyleSpec(
        margin_top=60, margin_bottom=60,
        margin_left=70, margin_right=50,
        line_height=32,
        rule_color="#E0E0E0",
    ),
    PageStyle.LINED: StyleSpec(
        margin_top=60, margin_bottom=60,
        margin_left=80, margin_right=50,
        line_height=32,
        rule_color="#D0E0F0",
        margin_rule_color="#FFB6C1",
        margin_rule_x=64,
    ),
    PageStyle.UNRULED: StyleSpec(
        margin_top=60, margin_bottom=60,
        margin_left=70, margin_right=50,
        line_height=32,
    ),
}


def get_style_spec(style: Union[PageStyle, str]) -> StyleSpec:
    """Look up the preset for a style token."""
    return STYLE_PRESETS[PageStyle.coerce(style)]
