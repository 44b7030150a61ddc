"""
Unit tests for multi-product boundary detection and batch parsing.
"""
import pytest

from specpaste.services.batch_parser import detect_boundaries, parse_batch


TWO_HEADINGS = (
    "# Sony FX3\n"
    "Sensor Type: Full-Frame CMOS\n"
    "Weight: 640 g\n"
    "# Canon R5 C\n"
    "Sensor Type: Full-Frame CMOS\n"
    "Weight: 770 g\n"
)


class TestDetectBoundaries:
    """Tests for splitting text into product segments."""

    def test_markdown_headings(self):
        """Should start a segment at each heading and name it after the heading."""
        segments = detect_boundaries(TWO_HEADINGS)
        assert len(segments) == 2
        assert [s.name for s in segments] == ["Sony FX3", "Canon R5 C"]
        assert (segments[0].start_line, segments[0].end_line) == (0, 2)
        assert (segments[1].start_line, segments[1].end_line) == (3, 6)
        assert "Canon" not in segments[0].text
        assert "640 g" not in segments[1].text

    def test_horizontal_rules(self):
        """Should split on rules and number unnamed segments."""
        text = (
            "Weight: 640 g\nSensor: CMOS\nMount: E\n"
            "---\n"
            "Weight: 770 g\nSensor: CMOS\nMount: RF"
        )
        segments = detect_boundaries(text)
        assert [s.name for s in segments] == ["Product 1", "Product 2"]

    def test_brand_line_after_blank(self):
        """Should treat a known-brand line after a blank line as a new product."""
        text = (
            "Sony FX3\nWeight: 640 g\nSensor: Full-Frame CMOS\n"
            "\n"
            "Canon EOS R5\nWeight: 738 g\nSensor: Full-Frame CMOS"
        )
        segments = detect_boundaries(text)
        assert len(segments) == 2
        assert segments[1].name == "Canon EOS R5"
        assert segments[1].start_line == 4

    def test_labeled_names(self):
        text = (
            "Product Name: Sony FX3\nWeight: 640 g\nSensor: CMOS\n"
            "Product Name: Canon R5 C\nWeight: 770 g\nSensor: CMOS"
        )
        segments = detect_boundaries(text)
        assert [s.name for s in segments] == ["Sony FX3", "Canon R5 C"]

    def test_single_product(self):
        """Should return nothing when only one product is present."""
        assert detect_boundaries("Weight: 640 g\nSensor: CMOS") == []

    def test_boundaries_too_close_together(self):
        """Should not split on a boundary within two lines of the segment start."""
        text = "# Sony FX3\n# Canon R5\nWeight: 640 g\nSensor Type: Full-Frame"
        assert detect_boundaries(text) == []

    @pytest.mark.parametrize("value", [None, "", 7])
    def test_missing_text(self, value):
        assert detect_boundaries(value) == []


class TestParseBatch:
    """Tests for parsing each segment."""

    def test_parses_each_segment(self, simple_schema):
        items = parse_batch(TWO_HEADINGS, simple_schema)
        assert len(items) == 2
        assert items[0].result.fields["Weight"].value == "640 g"
        assert items[1].result.fields["Weight"].value == "770 g"

    def test_single_product_fallback(self, simple_schema):
        """Should parse the whole text as one item when there are no boundaries."""
        items = parse_batch("Sensor Type\tCMOS\nWeight\t640 g", simple_schema)
        assert len(items) == 1
        assert items[0].segment.name == "Single Product"
        assert items[0].segment.start_line == 0
        assert items[0].segment.end_line == 1
        assert items[0].result.fields["Sensor Type"].value == "CMOS"

    def test_empty_text(self, simple_schema):
        items = parse_batch("", simple_schema)
        assert len(items) == 1
        assert items[0].result.is_empty()
