"""
Unit tests for page rasterisation
"""

import pytest

from core.notebook import CanvasLine, CanvasPage, FontResolver, PageStyle, get_style_spec
from core.pdf_export import PagePainter, PageSurface


@pytest.fixture
def resolved_font(mock_font):
    return FontResolver().resolve(mock_font)


def make_painter(resolved_font, style=PageStyle.RULED, quality=96, color="#000000", jitter=0.0):
    return PagePainter(PageSurface.for_format(), quality, resolved_font, color, style, jitter=jitter)


def text_page(number=1, style=PageStyle.RULED):
    return CanvasPage(
        page_number=number,
        lines=(
            CanvasLine(text="Handwritten answer text", x=70, y=60, font_size=18),
            CanvasLine(text="", x=70, y=92, font_size=18),
            CanvasLine(text="Second paragraph", x=70, y=124, font_size=18),
        ),
        style=style,
    )


class TestPageSurface:
    def test_a4_portrait(self):
        surface = PageSurface.for_format("a4", "portrait")
        assert (surface.width_px, surface.height_px) == (794, 1123)

    def test_letter_portrait(self):
        surface = PageSurface.for_format("letter", "portrait")
        assert (surface.width_px, surface.height_px) == (816, 1056)
        assert surface.size_pt == (612.0, 792.0)

    def test_landscape_swaps_dimensions(self):
        surface = PageSurface.for_format("letter", "landscape")
        assert (surface.width_px, surface.height_px) == (1056, 816)

    @pytest.mark.parametrize("page_format", ["a4", "letter"])
    @pytest.mark.parametrize("orientation", ["portrait", "landscape"])
    def test_layout_page_fits_paper(self, page_format, orientation):
        layout_page = PageSurface.from_pixels(794, 1123)
        paper = PageSurface.for_format(page_format, orientation)

        x, y, width, height = layout_page.fit_into(paper)
        assert x >= 0 and y >= 0
        assert x + width <= paper.width_pt + 1e-6
        assert y + height <= paper.height_pt + 1e-6
        assert width / height == pytest.approx(794 / 1123)

    def test_fit_into_same_size_is_identity(self):
        a4 = PageSurface.for_format("a4", "portrait")
        x, y, width, height = PageSurface.from_pixels(a4.width_px, a4.height_px).fit_into(a4)
        assert (x, y) == pytest.approx((0, 0), abs=0.5)
        assert (width, height) == pytest.approx(a4.size_pt, abs=0.5)


class TestPagePainter:
    def test_pixel_size_scales_with_quality(self, resolved_font):
        assert make_painter(resolved_font, quality=96).pixel_size == (794, 1123)
        assert make_painter(resolved_font, quality=192).pixel_size == (1588, 2246)

    def test_image_matches_pixel_size(self, resolved_font):
        painter = make_painter(resolved_font, quality=72)
        image = painter.paint(CanvasPage(page_number=1))
        assert image.size == painter.pixel_size
        assert image.mode == "RGB"

    def test_ruled_background(self, resolved_font):
        image = make_painter(resolved_font).paint(CanvasPage(page_number=1))
        assert image.getpixel((400, 60)) == (224, 224, 224)
        assert image.getpixel((400, 75)) == (255, 255, 255)
        assert image.getpixel((10, 10)) == (255, 255, 255)

    def test_lined_background_has_margin_rule(self, resolved_font):
        image = make_painter(resolved_font, style=PageStyle.LINED).paint(
            CanvasPage(page_number=1, style=PageStyle.LINED)
        )
        row = [image.getpixel((x, 500)) for x in range(60, 69)]
        assert (255, 182, 193) in row

    def test_unruled_blank_page_is_white(self, resolved_font):
        image = make_painter(resolved_font, style=PageStyle.UNRULED).paint(
            CanvasPage(page_number=1, style=PageStyle.UNRULED)
        )
        assert image.getextrema() == ((255, 255), (255, 255), (255, 255))

    def test_text_is_drawn(self, resolved_font):
        image = make_painter(resolved_font, style=PageStyle.UNRULED).paint(
            text_page(style=PageStyle.UNRULED)
        )
        darkest, _ = image.convert("L").getextrema()
        assert darkest < 200

    def test_jittered_output_reproducible(self, resolved_font):
        painter = make_painter(resolved_font, quality=72, jitter=0.3)
        first = painter.paint(text_page())
        second = painter.paint(text_page())
        assert first.tobytes() == second.tobytes()

    def test_invalid_colour(self, resolved_font):
        painter = make_painter(resolved_font, color="not-a-colour")
        with pytest.raises(ValueError):
            painter.paint(text_page())

    def test_every_line_of_full_page_on_surface(self, resolved_font):
        spec = get_style_spec(PageStyle.RULED)
        capacity = spec.max_lines(1123)
        page = CanvasPage(
            page_number=1,
            lines=tuple(
                CanvasLine(text=f"line {i}", x=spec.margin_left, y=spec.line_y(i), font_size=18)
                for i in range(capacity)
            ),
        )

        painter = PagePainter(PageSurface.from_pixels(794, 1123), 96, resolved_font, "#000000", "ruled")
        image = painter.paint(page)

        last = page.lines[-1]
        assert last.y + spec.line_height <= image.height
        # Ink appears in the last line slot
        slot = image.convert("L").crop((0, int(last.y), image.width, int(last.y + spec.line_height)))
        assert slot.getextrema()[0] < 200
