"""
Unit tests for the notebook data model and paper styles
"""

import pytest

from core.notebook import (
    Answer,
    CanvasLine,
    CanvasPage,
    HandwrittenFont,
    Layout,
    PageStyle,
    STYLE_PRESETS,
    get_style_spec,
)


class TestPageStyle:
    def test_coerce_token(self):
        assert PageStyle.coerce("ruled") is PageStyle.RULED
        assert PageStyle.coerce(" Lined ") is PageStyle.LINED
        assert PageStyle.coerce(PageStyle.UNRULED) is PageStyle.UNRULED

    def test_coerce_unknown(self):
        with pytest.raises(ValueError, match="Unknown page style"):
            PageStyle.coerce("graph")


class TestAnswer:
    def test_from_camel_case_dict(self):
        answer = Answer.from_dict({"questionNumber": 3, "content": "Text here", "wordCount": 2})
        assert answer == Answer(question_number=3, content="Text here", word_count=2)

    def test_word_count_derived_when_missing(self):
        answer = Answer.from_dict({"question_number": 1, "content": "one two three"})
        assert answer.word_count == 3

    def test_missing_content(self):
        assert Answer.from_dict({"question_number": 1}).content == ""


class TestHandwrittenFont:
    def test_from_dict_defaults(self):
        font = HandwrittenFont.from_dict({"id": "caveat"})
        assert font.name == "caveat"
        assert font.family == "caveat"
        assert font.url == ""
        assert font.preview is None


class TestLayout:
    def test_totals_derived_from_pages(self):
        line = CanvasLine(text="x", x=70, y=60, font_size=18)
        layout = Layout(pages=(
            CanvasPage(page_number=1, lines=(line, line)),
            CanvasPage(page_number=2, lines=(line,)),
        ))
        assert layout.total_pages == 2
        assert layout.total_lines == 3

    def test_to_dict(self):
        line = CanvasLine(text="x", x=70, y=60, font_size=18)
        data = Layout(pages=(CanvasPage(page_number=1, lines=(line,)),)).to_dict()
        assert data["total_pages"] == 1
        assert data["pages"][0]["style"] == "ruled"
        assert data["pages"][0]["lines"][0] == {"text": "x", "x": 70, "y": 60, "font_size": 18}

    def test_empty_layout(self):
        assert Layout().total_pages == 0
        assert Layout().total_lines == 0


class TestStyleSpec:
    def test_presets_cover_all_styles(self):
        assert set(STYLE_PRESETS) == set(PageStyle)

    def test_ruled_a4_capacity(self):
        spec = get_style_spec("ruled")
        assert spec.content_width(794) == 674
        assert spec.max_lines(1123) == 31

    def test_line_positions(self):
        spec = get_style_spec(PageStyle.RULED)
        assert spec.line_y(0) == 60
        assert spec.line_y(2) == 124

    def test_lined_has_margin_rule(self):
        spec = get_style_spec("lined")
        assert spec.margin_rule_color is not None
        assert spec.margin_left > spec.margin_rule_x

    def test_unruled_has_no_rules(self):
        spec = get_style_spec("unruled")
        assert spec.has_rules is False
        assert spec.margin_rule_color is None

    def test_tiny_page_still_holds_one_line(self):
        assert get_style_spec("ruled").max_lines(100) == 1


class TestAnswerValidation:
    def test_missing_question_number_rejected(self):
        with pytest.raises(ValueError, match="question number"):
            Answer.from_dict({"content": "Unnumbered answer"})
