"""
Pytest configuration and fixtures for specpaste tests.
"""
import sys
from pathlib import Path

# Add src to path for imports
project_root = Path(__file__).parent.parent
src_path = project_root / "src"
sys.path.insert(0, str(src_path))

import pytest
from specpaste.models import SpecField


@pytest.fixture
def camera_schema():
    """Schema with a camera category and a lens category."""
    return {
        "Cameras": [
            SpecField("Sensor Type", required=True),
            SpecField("Sensor Size"),
            SpecField("Effective Pixels"),
            SpecField("Video Resolution"),
            SpecField("ISO Range"),
            SpecField("Weight"),
            SpecField("Dimensions"),
            SpecField("Weather Sealing"),
        ],
        "Lenses": [
            SpecField("Focal Length"),
            SpecField("Maximum Aperture"),
            SpecField("Filter Size"),
        ],
    }


@pytest.fixture
def simple_schema():
    """Minimal schema given as plain dicts, the way API callers send it."""
    return {
        "Cameras": [
            {"name": "Sensor Type", "required": True},
            {"name": "Weight"},
        ],
    }


@pytest.fixture
def sample_spec_text():
    """Spec sheet text as pasted from a retailer page."""
    return (
        "Sony FX3 Full-Frame Cinema Camera\n"
        "Price: $3,898.00\n"
        "Sensor Type\tFull-Frame CMOS\n"
        "Megapixels: 12.1 MP\n"
        "ISO Range: 80 - 102,400\n"
        "Weight\t640 g\n"
        "Serial Number: 5123456\n"
        "Model Number: ILME-FX3\n"
        "Add to Cart\n"
    )


@pytest.fixture
def sample_product_html():
    """Product page HTML with a spec table and JSON-LD data."""
    return """
    <!DOCTYPE html>
    <html>
    <head>
        <title>Aputure LS 600d Pro</title>
        <meta property="og:title" content="Aputure LS 600d Pro LED Light">
        <script type="application/ld+json">
        {"@context": "https://schema.org", "@type": "Product",
         "name": "Aputure LS 600d Pro", "brand": {"@type": "Brand", "name": "Aputure"},
         "sku": "APLS600DP", "offers": {"@type": "Offer", "price": "1890.00"},
         "additionalProperty": [{"@type": "PropertyValue", "name": "Color Temperature", "value": "5600K"}]}
        </script>
    </head>
    <body>
        <nav><a href="/">Home</a></nav>
        <h1>Aputure LS 600d Pro</h1>
        <p>Mount: Bowens</p>
        <table>
            <tr><th>Max Power Output</th><td>720 W</td></tr>
            <tr><th>Weight</th><td>3.9 kg</td></tr>
        </table>
    </body>
    </html>
    """


@pytest.fixture
def sample_url():
    """Sample URL for testing."""
    return "https://shop.example.com/product/ls-600d"
