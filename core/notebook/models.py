"""
Notebook data models.

Shared records passed between the layout engine and the PDF exporter.
All records are immutable so that cached layouts can be handed out
without defensive copies.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union


class PageStyle(str, Enum):
    """Notebook paper styles"""
    RULED = "ruled"
    LINED = "lined"
    UNRULED = "unruled"

    @classmethod
    def coerce(cls, value: Union["PageStyle", str]) -> "PageStyle":
        """Accept an enum member or its token, e.g. 'ruled'."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(s.value for s in cls)
            raise ValueError(f"Unknown page style: {value!r}. Available: {valid}")


@dataclass(frozen=True)
class Answer:
    """One generated answer, input to pagination"""
    question_number: int
    content: str
    word_count: int = 0  # Informational only, never drives layout

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Answer":
        """Build from API-style dicts (camelCase or snake_case keys)."""
        number = data.get("question_number", data.get("questionNumber"))
        if number is None:
            raise ValueError(f"Answer is missing a question number: {data!r}")
        content = data.get("content") or ""
        word_count = data.get("word_count", data.get("wordCount"))
        if word_count is None:
            word_count = len(content.split())
        return cls(
            question_number=int(number),
            content=content,
            word_count=int(word_count),
        )


@dataclass(frozen=True)
class HandwrittenFont:
    """A renderable typeface supplied by the font service"""
    id: str
    name: str
    family: str
    url: str
    preview: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HandwrittenFont":
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            family=data.get("family", data.get("name", data["id"])),
            url=data.get("url", ""),
            preview=data.get("preview"),
        )


@dataclass(frozen=True)
class CanvasLine:
    """One positioned line of text (pixels at 96 DPI)"""
    text: str
    x: float
    y: float
    font_size: float


@dataclass(frozen=True)
class CanvasPage:
    """A single notebook page"""
    page_number: int
    lines: Tuple[CanvasLine, ...] = ()
    style: PageStyle = PageStyle.RULED

    @property
    def line_count(self) -> int:
        return len(self.lines)


@dataclass(frozen=True)
class Layout:
    """Paginated result of the layout engine"""
    pages: Tuple[CanvasPage, ...] = field(default_factory=tuple)

    @property
    def total_pages(self) -> int:
        return len(self.pages)

    @property
    def total_lines(self) -> int:
        # Always recomputed from the pages
        return sum(len(page.lines) for page in self.pages)

    def to_dict(self) -> dict:
        return {
            "total_pages": self.total_pages,
            "total_lines": self.total_lines,
            "pages": [
                {
                    "page_number": page.page_number,
                    "style": page.style.value,
                    "lines": [
                        {"text": l.text, "x": l.x, "y": l.y, "font_size": l.font_size}
                        for l in page.lines
                    ],
                }
                for page in self.pages
            ],
        }
