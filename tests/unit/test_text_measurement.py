"""
Unit tests for text measurement
"""

from core.layout_engine import TextMeasurer


class TestTextMeasurer:
    def test_width_grows_with_text(self, mock_font):
        measurer = TextMeasurer()
        short = measurer.measure_text_width("Hello", mock_font, 18)
        longer = measurer.measure_text_width("Hello world", mock_font, 18)
        assert 0 < short < longer

    def test_width_scales_with_size(self, mock_font):
        measurer = TextMeasurer()
        assert measurer.measure_text_width("Hello", mock_font, 36) > \
            measurer.measure_text_width("Hello", mock_font, 18)

    def test_empty_text(self, mock_font):
        assert TextMeasurer().measure_text_width("", mock_font, 18) == 0

    def test_results_cached(self, mock_font):
        measurer = TextMeasurer()
        measurer.measure_text_width("Hello", mock_font, 18)
        measurer.measure_text_width("Hello", mock_font, 18)
        assert measurer.get_cache_stats() == {"width_cache_size": 1}

    def test_cache_bounded(self, mock_font):
        measurer = TextMeasurer(max_cache_size=3)
        for word in ("one", "two", "three", "four"):
            measurer.measure_text_width(word, mock_font, 18)
        assert measurer.get_cache_stats()["width_cache_size"] == 3

    def test_clear_cache(self, mock_font):
        measurer = TextMeasurer()
        measurer.measure_text_width("Hello", mock_font, 18)
        measurer.clear_cache()
        assert measurer.get_cache_stats()["width_cache_size"] == 0

    def test_fits_within_width(self, mock_font):
        measurer = TextMeasurer()
        assert measurer.fits_within_width("Hi", 674, mock_font, 18) is True
        assert measurer.fits_within_width("Hi " * 200, 674, mock_font, 18) is False

    def test_zero_cache_size_disables_cache(self, mock_font):
        measurer = TextMeasurer(max_cache_size=0)
        assert measurer.measure_text_width("Hello", mock_font, 18) > 0
        assert measurer.get_cache_stats()["width_cache_size"] == 0
