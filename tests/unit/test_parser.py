"""
Unit tests for the single-product parser.

Tests:
- Empty and invalid input
- End-to-end parsing of a retailer spec sheet
- Read-only, repeatable results
- Crowd alias use
"""
import dataclasses

import pytest

from specpaste.models import CrowdAlias, ParseResult
from specpaste.services.diff_engine import diff_specs
from specpaste.services.parser import parse


class TestEmptyInput:
    """Tests for input the parser cannot use."""

    @pytest.mark.parametrize("text", [None, "", 123, ["Weight: 640 g"]])
    def test_returns_empty_result(self, text, simple_schema):
        """Should return an empty result instead of raising."""
        result = parse(text, simple_schema)
        assert result == ParseResult.empty()
        assert result.is_empty()
        assert dict(result.fields) == {}

    def test_no_schema(self):
        """Should still extract pairs without a schema."""
        result = parse("Weight: 640 g", None)
        assert dict(result.fields) == {}
        assert len(result.raw_extracted) == 1
        assert len(result.unmatched_pairs) == 1


class TestParseSpecSheet:
    """Tests for parsing realistic spec text."""

    def test_exact_names(self, simple_schema):
        """Should match exact field names at confidence 100."""
        result = parse("Sensor Type\tFull-Frame CMOS\nWeight\t658g", simple_schema)
        assert result.fields["Sensor Type"].value == "Full-Frame CMOS"
        assert result.fields["Sensor Type"].confidence == 100
        assert result.fields["Weight"].value == "658g"
        assert result.fields["Weight"].confidence == 100
        assert result.fields["Weight"].validation_warning is None

    def test_alias_match(self, camera_schema):
        result = parse("Megapixels: 24.1 MP", camera_schema)
        assert result.fields["Effective Pixels"].value == "24.1 MP"
        assert result.fields["Effective Pixels"].confidence == 80

    def test_retailer_sheet(self, sample_spec_text, camera_schema):
        result = parse(sample_spec_text, camera_schema)

        assert result.name == "Sony FX3 Full-Frame Cinema Camera"
        assert result.brand == "Sony"
        assert result.category == "Cameras"
        assert result.purchase_price == "3898.00"
        assert result.price_note == ""
        assert result.serial_number == "5123456"
        assert result.model_number == "ILME-FX3"

        assert result.fields["Sensor Type"].value == "Full-Frame CMOS"
        assert result.fields["Effective Pixels"].value == "12.1 MP"
        assert result.fields["ISO Range"].value == "80 - 102,400"
        assert result.fields["Weight"].value == "640 g"
        assert len(result.raw_extracted) == 7
        assert "Add to Cart" in result.source_lines

    def test_unmatched_pairs_are_kept(self, simple_schema):
        result = parse("Weight: 640 g\nShipping Box: Cardboard", simple_schema)
        assert [p.key for p in result.unmatched_pairs] == ["Shipping Box"]

    def test_html_input(self, simple_schema):
        html = "<table><tr><td>Sensor Type</td><td>CMOS</td></tr><tr><td>Weight</td><td>640 g</td></tr></table>"
        result = parse(html, simple_schema)
        assert result.fields["Sensor Type"].value == "CMOS"
        assert result.fields["Weight"].value == "640 g"

    def test_exact_match_beats_fuzzy(self, camera_schema):
        """Should never score an exact name below a fuzzy label."""
        exact = parse("Sensor Type: CMOS", camera_schema).fields["Sensor Type"]
        fuzzy = parse("Sensor Type Details: CMOS", camera_schema).fields["Sensor Type"]
        assert exact.confidence >= fuzzy.confidence

    def test_confidence_bounds(self, sample_spec_text, camera_schema):
        result = parse(sample_spec_text, camera_schema)
        for resolved in result.fields.values():
            assert 0 <= resolved.confidence <= 100


class TestResultProperties:
    """Tests for the shape of ParseResult."""

    def test_result_is_read_only(self, simple_schema):
        result = parse("Weight: 640 g", simple_schema)
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.name = "changed"
        with pytest.raises(TypeError):
            result.fields["Weight"] = None

    def test_default_fields_are_read_only(self):
        """Should give a bare result its own empty read-only mapping."""
        field_default = {f.name: f for f in dataclasses.fields(ParseResult)}["fields"]
        assert field_default.default is dataclasses.MISSING

        result = ParseResult()
        assert dict(result.fields) == {}
        with pytest.raises(TypeError):
            result.fields["Weight"] = None

    def test_repeatable(self, sample_spec_text, camera_schema):
        """Should give identical results for identical input."""
        first = parse(sample_spec_text, camera_schema)
        second = parse(sample_spec_text, camera_schema)
        assert first.to_dict() == second.to_dict()

    def test_diff_against_itself_is_unchanged(self, sample_spec_text, camera_schema):
        """Should report no changes when diffing a parse against its own values."""
        result = parse(sample_spec_text, camera_schema)
        stored = {name: field.value for name, field in result.fields.items()}
        entries = diff_specs(stored, result.fields)
        assert entries
        assert all(e.status.value == "unchanged" for e in entries)


class TestCrowdAliases:
    """Tests for parsing with crowd-learned aliases."""

    def test_crowd_alias_match(self, simple_schema):
        result = parse("Cam Heft: 640 g", simple_schema, [CrowdAlias("cam heft", "Weight", 3)])
        assert result.fields["Weight"].value == "640 g"
        assert result.fields["Weight"].confidence == 55

    def test_aliases_accepted_as_iterator(self, simple_schema):
        aliases = iter([CrowdAlias("cam heft", "Weight", 10)])
        result = parse("Cam Heft: 640 g", simple_schema, aliases)
        assert result.fields["Weight"].confidence == 65
