"""
Unit tests for price, brand, category and identifier detection.
"""
from specpaste.models import RawPair
from specpaste.services.detectors import (
    detect_brand,
    detect_category,
    extract_price,
    extract_serial_model,
)


def _pair(key, value, index=0):
    return RawPair(key=key, value=value, source_line=f"{key}: {value}", line_index=index)


class TestExtractPrice:
    """Tests for purchase price detection."""

    def test_best_ranked_label_wins(self):
        """Should prefer a sale price over an MSRP regardless of order."""
        pairs = [_pair("MSRP", "$4,299.00"), _pair("Sale Price", "$3,899.99", 1)]
        assert extract_price(pairs, "") == ("3899.99", "")

    def test_street_price_beats_plain_price(self):
        pairs = [_pair("Price", "$999"), _pair("Street Price", "$949", 1)]
        assert extract_price(pairs, "") == ("949", "")

    def test_range_in_text(self):
        """Should take the low end of a price range and note the range."""
        assert extract_price([], "Available from $1,299 - $1,499") == ("1299", "Range: $1,299 - $1,499")

    def test_single_amount_in_text(self):
        assert extract_price([], "Now only $1,299.95 while stocks last") == ("1299.95", "")

    def test_non_dollar_currency_noted(self):
        """Should note currencies other than the dollar."""
        assert extract_price([], "Now only €899") == ("899", "Currency: EUR")
        assert extract_price([], "Yours for £450") == ("450", "Currency: GBP")

    def test_no_price(self):
        assert extract_price([_pair("Weight", "640 g")], "Weight: 640 g") == ("", "")

    def test_missing_text(self):
        assert extract_price([], None) == ("", "")


class TestDetectBrand:
    """Tests for brand detection."""

    def test_brand_in_name(self):
        assert detect_brand("Sony FX3", "") == "Sony"

    def test_name_checked_before_text(self):
        """Should use the name's brand even if the text mentions an earlier-listed one."""
        text = "sigma 35mm art for canon"
        assert detect_brand("Sigma 35mm Art", text) == "Sigma"
        assert detect_brand("", text) == "Canon"

    def test_brand_in_text(self):
        assert detect_brand("", "made by aputure in shenzhen") == "Aputure"

    def test_no_brand(self):
        assert detect_brand("", "generic sandbag") == ""


class TestDetectCategory:
    """Tests for keyword-based category detection."""

    def test_camera_text(self):
        assert detect_category("full-frame mirrorless camera with 4k video") == "Cameras"

    def test_lens_text(self):
        assert detect_category("50mm prime lens with f/1.4 aperture") == "Lenses"

    def test_empty(self):
        assert detect_category("") == ""


class TestSerialModel:
    """Tests for serial and model number extraction."""

    def test_first_of_each(self):
        """Should take the first serial and the first model identifier."""
        pairs = [
            _pair("S/N", "ABC123"),
            _pair("Serial Number", "ZZZ999", 1),
            _pair("SKU", "ILME-FX3", 2),
            _pair("Model", "FX3", 3),
        ]
        assert extract_serial_model(pairs) == ("ABC123", "ILME-FX3")

    def test_absent(self):
        assert extract_serial_model([_pair("Weight", "640 g")]) == ("", "")
