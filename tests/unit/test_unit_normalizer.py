"""
Unit tests for unit normalization and value coercion.
"""
import pytest

from specpaste.services.unit_normalizer import coerce_field_value, normalize_units


class TestNormalizeUnitsMetric:
    """Tests for conversion into metric units."""

    def test_inches(self):
        conversion = normalize_units("10 inches")
        assert conversion.normalized == "254.0 mm"
        assert conversion.unit == "mm"
        assert conversion.original == "10 inches"

    def test_inch_mark(self):
        assert normalize_units('7"').normalized == "177.8 mm"

    def test_compound_weight_in_grams(self):
        """Should add pounds and ounces before converting."""
        assert normalize_units("1 lb 5 oz").normalized == "595 g"

    def test_compound_weight_in_kilograms(self):
        conversion = normalize_units("3 lbs 4 oz")
        assert conversion.normalized == "1.47 kg"
        assert conversion.unit == "kg"

    def test_pounds(self):
        assert normalize_units("2 lbs").normalized == "907 g"

    def test_ounces(self):
        assert normalize_units("16 oz").normalized == "454 g"

    def test_dimensions(self):
        """Should convert each side of a dimension triple."""
        assert normalize_units("6.5 x 4.3 x 3.1 inches").normalized == "165 × 109 × 79 mm"

    def test_dimension_pair(self):
        assert normalize_units("10 x 5 in").normalized == "254 × 127 mm"

    def test_fahrenheit(self):
        conversion = normalize_units("104°F")
        assert conversion.normalized == "40 °C"
        assert conversion.unit == "°C"

    def test_metric_value_unchanged(self):
        """Should return None when there is nothing to convert."""
        assert normalize_units("658 g") is None

    @pytest.mark.parametrize("value", [None, "", 12])
    def test_missing_value(self, value):
        assert normalize_units(value) is None


class TestNormalizeUnitsImperial:
    """Tests for conversion into imperial units."""

    def test_dimensions(self):
        conversion = normalize_units("165 x 109 x 79 mm", prefer_metric=False)
        assert conversion.normalized == "6.50 × 4.29 × 3.11 in"
        assert conversion.unit == "in"

    def test_millimetres(self):
        assert normalize_units("50 mm", prefer_metric=False).normalized == "1.97 in"

    def test_fahrenheit_only_in_metric_mode(self):
        assert normalize_units("104°F", prefer_metric=False) is None


class TestCoerceFieldValue:
    """Tests for canonical value formats."""

    @pytest.mark.parametrize("value,expected", [
        ("Yes", "Yes"),
        ("built-in", "Yes"),
        ("Included", "Yes"),
        ("n/a", "No"),
        ("false", "No"),
    ])
    def test_boolean_fields(self, value, expected):
        assert coerce_field_value("Weather Sealing", value).coerced == expected

    def test_boolean_field_by_substring(self):
        assert coerce_field_value("Touchscreen LCD", "supported").coerced == "Yes"

    def test_unrecognized_boolean(self):
        assert coerce_field_value("Weather Sealing", "Partial") is None

    @pytest.mark.parametrize("value", ["2700K-6500K", "2700 - 6500", "2700 to 6500"])
    def test_color_temperature_range(self, value):
        assert coerce_field_value("Color Temperature Range", value).coerced == "2700–6500 K"

    def test_bare_aperture(self):
        coercion = coerce_field_value("Maximum Aperture", "2.8")
        assert coercion.coerced == "f/2.8"
        assert coercion.original == "2.8"

    def test_aperture_already_formatted(self):
        assert coerce_field_value("Maximum Aperture", "f/2.8") is None

    def test_unrelated_field(self):
        assert coerce_field_value("Sensor Type", "Yes") is None

    def test_blank_input(self):
        assert coerce_field_value("Weather Sealing", "") is None
        assert coerce_field_value("", "Yes") is None
