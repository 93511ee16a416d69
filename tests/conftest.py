"""
Pytest Configuration and Fixtures
"""

import re

import pytest

from config.settings import Settings
from core.layout_engine import LayoutEngine
from core.notebook import Answer, CanvasLine, CanvasPage, HandwrittenFont, PageStyle
from core.pdf_export import PdfExporter


@pytest.fixture
def test_settings():
    """Settings tuned for fast tests"""
    return Settings(batch_yield_delay=0.0, default_quality=72)


@pytest.fixture
def mock_font():
    """Font with a remote url, resolved to the fallback font"""
    return HandwrittenFont(
        id="test-font",
        name="Test Font",
        family="Caveat",
        url="https://fonts.googleapis.com/css2?family=Caveat",
        preview="Test preview text",
    )


@pytest.fixture
def engine():
    layout_engine = LayoutEngine()
    yield layout_engine
    layout_engine.destroy()


@pytest.fixture
def exporter(test_settings):
    return PdfExporter(settings=test_settings)


@pytest.fixture
def sample_answers():
    return [
        Answer(question_number=1, content="React is a JavaScript library for building user interfaces.", word_count=9),
        Answer(question_number=2, content="Python is a programming language.", word_count=5),
    ]


def make_pages(count, style=PageStyle.RULED):
    """Simple one-line pages numbered 1..count"""
    return [
        CanvasPage(
            page_number=i,
            lines=(CanvasLine(text=f"Page {i} text", x=70, y=60, font_size=18),),
            style=style,
        )
        for i in range(1, count + 1)
    ]


def count_pdf_pages(data: bytes) -> int:
    """Count page objects in an uncompressed-object PDF"""
    return len(re.findall(rb"/Type /Page\b", data))
