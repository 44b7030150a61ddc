"""
Unit tests for raw key/value pair extraction.

Tests:
- Separator recognition and precedence
- Noise filtering
- Two-line label/value pairs
- Product name detection
"""
import pytest

from specpaste.services.pair_extractor import Separator, extract_raw_pairs, is_noise, split_pair


class TestSplitPair:
    """Tests for single-line separator matching."""

    @pytest.mark.parametrize("line,separator,key,value", [
        ("Sensor Type\tFull-Frame CMOS", Separator.TAB, "Sensor Type", "Full-Frame CMOS"),
        ("Mount | Sony E", Separator.PIPE, "Mount", "Sony E"),
        ("Bit Depth = 10-bit", Separator.EQUALS, "Bit Depth", "10-bit"),
        ("Weight → 640 g", Separator.ARROW, "Weight", "640 g"),
        ("Battery - NP-FZ100", Separator.DASH, "Battery", "NP-FZ100"),
    ])
    def test_separators(self, line, separator, key, value):
        """Should split on each supported separator."""
        assert split_pair(line) == (separator, key, value)

    def test_colon_needs_space(self):
        """Should only split on a colon followed by whitespace."""
        assert split_pair("Time: 10:30") == (Separator.COLON, "Time", "10:30")
        assert split_pair("Ratio:16x9") is None

    def test_colon_beats_dash(self):
        """Should prefer the colon over a later dash."""
        assert split_pair("Range: 10 - 20 m") == (Separator.COLON, "Range", "10 - 20 m")

    def test_url_value_falls_through(self):
        """Should reject URL values and try the next separator."""
        assert split_pair("Note: http://a | Rev 2") == (Separator.PIPE, "Note: http://a", "Rev 2")

    def test_url_only_rejected(self):
        assert split_pair("Manual: https://example.com/manual.pdf") is None

    def test_long_value_rejected(self):
        """Should reject values over 200 characters."""
        assert split_pair("Description: " + "x" * 201) is None


class TestNoise:
    """Tests for boilerplate detection."""

    @pytest.mark.parametrize("line", ["Add to Cart", "Sign in | Register", "12.5", "SKU123", "[Video]"])
    def test_noise_lines(self, line):
        assert is_noise(line)

    def test_spec_line_is_not_noise(self):
        assert not is_noise("Sensor Type: CMOS")


class TestExtractRawPairs:
    """Tests for extraction over whole line lists."""

    def test_pair_fields(self):
        """Should record key, value, source line and line index."""
        pairs, _ = extract_raw_pairs(["Sensor Type\tFull-Frame CMOS"])
        assert len(pairs) == 1
        assert pairs[0].key == "Sensor Type"
        assert pairs[0].value == "Full-Frame CMOS"
        assert pairs[0].source_line == "Sensor Type\tFull-Frame CMOS"
        assert pairs[0].line_index == 0

    def test_line_indices(self):
        """Should index pairs by their position in the line list."""
        pairs, _ = extract_raw_pairs(["Add to Cart", "Weight: 640 g", "Mount: Sony E"])
        assert [p.line_index for p in pairs] == [1, 2]

    def test_skips_noise_and_short_lines(self):
        """Should skip noise and lines under three characters."""
        pairs, _ = extract_raw_pairs(["Add to Cart", "Sign in | Register", "ab"])
        assert pairs == []

    def test_two_line_pair(self):
        """Should pair a label line with a value-looking next line."""
        pairs, _ = extract_raw_pairs(["Weight", "640 g", "Mount: Sony E"])
        assert len(pairs) == 2
        assert pairs[0].key == "Weight"
        assert pairs[0].value == "640 g"
        assert pairs[0].source_line == "Weight → 640 g"
        assert pairs[0].line_index == 0
        assert pairs[1].key == "Mount"

    def test_heading_swallows_following_row(self):
        """Should pair a heading with a row whose first word looks like a value prefix."""
        pairs, _ = extract_raw_pairs(["Aputure LS 600d Pro", "Max Power Output\t720 W", "Weight\t3.9 kg"])
        assert [(p.key, p.value) for p in pairs] == [
            ("Aputure LS 600d Pro", "Max Power Output\t720 W"),
            ("Weight", "3.9 kg"),
        ]

    def test_two_line_needs_value_shape(self):
        """Should not pair lines when the second does not look like a value."""
        pairs, name = extract_raw_pairs(["Color", "Black"])
        assert pairs == []
        assert name == ""

    def test_name_from_label(self):
        """Should take the product name from a name-labeled pair."""
        pairs, name = extract_raw_pairs(["Product Name: Sony FX3", "Weight: 640 g"])
        assert name == "Sony FX3"
        assert len(pairs) == 2

    def test_name_from_brand_line(self):
        """Should fall back to a free-standing line mentioning a known brand."""
        _, name = extract_raw_pairs(["Canon EOS R5 Mirrorless Camera", "Sensor Type: Full-Frame CMOS"])
        assert name == "Canon EOS R5 Mirrorless Camera"

    def test_empty(self):
        assert extract_raw_pairs([]) == ([], "")
