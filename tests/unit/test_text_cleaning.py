"""
Unit tests for input text cleaning.

Tests:
- Table and definition list flattening
- Script, style and chrome removal
- Entity decoding
- Whitespace normalization
"""
import pytest

from specpaste.utils.text_cleaning import (
    clean_input_text,
    normalize_whitespace,
    split_lines,
    strip_html_tags,
)


class TestTables:
    """Tests for table and definition list flattening."""

    def test_table_row_becomes_tab_line(self):
        """Should turn a two-cell row into key<TAB>value."""
        html = "<table><tr><td>Weight</td><td>658 g</td></tr></table>"
        assert clean_input_text(html) == "Weight\t658 g"

    def test_extra_cells_are_joined(self):
        """Should join cells after the first with commas."""
        html = "<table><tr><th>Ports</th><td>HDMI</td><td>USB-C</td></tr></table>"
        assert clean_input_text(html) == "Ports\tHDMI, USB-C"

    def test_multiple_rows(self):
        """Should put each row on its own line."""
        html = (
            "<table>"
            "<tr><td>Weight</td><td>658 g</td></tr>"
            "<tr><td>Mount</td><td>Sony E</td></tr>"
            "</table>"
        )
        assert clean_input_text(html) == "Weight\t658 g\nMount\tSony E"

    def test_definition_list(self):
        """Should pair dt/dd into tab lines."""
        html = "<dl><dt>Weight</dt><dd>658 g</dd><dt>Mount</dt><dd>E-mount</dd></dl>"
        assert clean_input_text(html) == "Weight\t658 g\nMount\tE-mount"


class TestMarkupRemoval:
    """Tests for dropping non-product markup."""

    def test_removes_scripts(self):
        """Should drop script contents entirely."""
        html = "<p>Hello</p><script>var x = 1;</script><p>World</p>"
        assert clean_input_text(html) == "Hello\nWorld"

    def test_removes_navigation(self):
        """Should drop nav, button and footer blocks."""
        html = "<nav>Home Shop</nav><p>Sensor: CMOS</p><button>Add to Cart</button><footer>(c)</footer>"
        assert clean_input_text(html) == "Sensor: CMOS"

    def test_line_breaks(self):
        """Should turn <br> into a newline."""
        assert clean_input_text("Line one<br>Line two") == "Line one\nLine two"


class TestEntitiesAndWhitespace:
    """Tests for entity decoding and whitespace cleanup."""

    def test_decodes_entities(self):
        """Should decode entities and turn non-breaking spaces into spaces."""
        assert clean_input_text("Size&nbsp;&amp;&nbsp;Weight") == "Size & Weight"

    def test_drops_unknown_entities(self):
        """Should drop named entities that do not decode."""
        assert clean_input_text("A&zzz;B") == "AB"

    def test_collapses_blank_lines(self):
        """Should keep at most one blank line between blocks."""
        assert clean_input_text("A\n\n\n\nB") == "A\n\nB"

    @pytest.mark.parametrize("value", [None, "", 42])
    def test_non_text_input(self, value):
        """Should return an empty string for missing or non-string input."""
        assert clean_input_text(value) == ""

    def test_plain_text_untouched(self):
        """Should leave clean text as it is."""
        text = "Sensor Type\tFull-Frame CMOS\nWeight\t658g"
        assert clean_input_text(text) == text


class TestHelpers:
    """Tests for the small string helpers."""

    def test_normalize_whitespace(self):
        assert normalize_whitespace("hello    world\n\ntest") == "hello world test"

    def test_strip_html_tags(self):
        assert strip_html_tags("<b>Bold</b> &amp; plain") == "Bold &amp; plain"

    def test_split_lines_drops_blank(self):
        assert split_lines("  a \n\n b\n   \n") == ["a", "b"]
