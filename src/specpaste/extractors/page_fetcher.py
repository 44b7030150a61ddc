"""
Product page fetching for URL import.

Fetches a product page (directly or through a configured proxy) and turns
it into parser-ready text: a preamble of ``Key: value`` lines built from the
page's structured data, followed by the cleaned page body.
"""
from __future__ import annotations

import json
from typing import Iterator, List, Optional
from urllib.parse import urlparse

import requests
from bs4 import BeautifulSoup

from ..config import Config
from ..errors import PageFetchError
from ..logger import get_logger
from ..models import PageContent
from ..utils.text_cleaning import clean_input_text
from ..utils.validators import validate_url

logger = get_logger(__name__)

USER_AGENT = "specpaste/1.0 (Product Spec Importer)"
STRUCTURED_SEPARATOR = "\n\n---\n\n"
MAX_HTML_CHARS = 500_000
READ_CHUNK_BYTES = 64 * 1024


class PageFetcher:
    """
    Fetch product pages and extract their text.

    Example:
        >>> fetcher = PageFetcher.from_config()
        >>> page = fetcher.fetch("https://shop.example.com/p/fx3")
        >>> result = parse(page.text, schema)
    """

    def __init__(
        self,
        *,
        proxy_url: Optional[str] = None,
        proxy_key: Optional[str] = None,
        timeout_s: int = 10,
        max_bytes: int = 5 * 1024 * 1024,
        allowed_domains: Optional[List[str]] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """
        Initialize the fetcher.

        Args:
            proxy_url: Fetch through this proxy endpoint instead of directly
            proxy_key: Bearer token for the proxy
            timeout_s: Request timeout in seconds
            max_bytes: Largest page accepted
            allowed_domains: Restrict direct fetches to these domains (and subdomains)
            session: Optional requests session (tests inject one)
        """
        self.proxy_url = proxy_url
        self.proxy_key = proxy_key
        self.timeout_s = timeout_s
        self.max_bytes = max_bytes
        self.allowed_domains = [d.lower() for d in (allowed_domains or [])]
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls) -> PageFetcher:
        """Build a fetcher from FETCH_* settings."""
        return cls(
            proxy_url=Config.FETCH_PROXY_URL,
            proxy_key=Config.FETCH_PROXY_KEY,
            timeout_s=Config.FETCH_TIMEOUT_S,
            max_bytes=Config.FETCH_MAX_BYTES,
            allowed_domains=Config.get_allowed_domains(),
        )

    def fetch(self, url: str) -> PageContent:
        """
        Fetch a page and return parser-ready text.

        Raises:
            PageFetchError: Invalid URL, disallowed domain, network failure,
                non-HTML or oversized response. Nothing is retried.
        """
        normalized = validate_url(url)
        if normalized is None:
            raise PageFetchError("Only absolute HTTP/HTTPS URLs are supported", url=url)
        self._check_domain(normalized)

        if self.proxy_url:
            return self._fetch_via_proxy(normalized)
        return self._fetch_direct(normalized)

    def _check_domain(self, url: str) -> None:
        if not self.allowed_domains:
            return
        hostname = (urlparse(url).hostname or "").lower()
        if hostname.startswith("www."):
            hostname = hostname[4:]
        if any(hostname == d or hostname.endswith("." + d) for d in self.allowed_domains):
            return
        raise PageFetchError(
            f'Domain "{hostname}" is not in the allowed list. Paste the page content manually instead.',
            url=url,
            status_code=403,
        )

    def _fetch_via_proxy(self, url: str) -> PageContent:
        headers = {"Content-Type": "application/json"}
        if self.proxy_key:
            headers["Authorization"] = f"Bearer {self.proxy_key}"

        logger.debug("FETCH Proxy request for %s", url)
        try:
            r = self.session.post(self.proxy_url, json={"url": url}, headers=headers, timeout=self.timeout_s)
        except requests.Timeout:
            logger.error("FETCH Proxy timeout after %ds for URL: %s", self.timeout_s, url)
            raise PageFetchError(f"Request timed out ({self.timeout_s}s limit)", url=url, status_code=504)
        except requests.RequestException as e:
            logger.error("FETCH Proxy request error for URL %s: %s: %s", url, type(e).__name__, e)
            raise PageFetchError(f"Proxy fetch failed: {e}", url=url)

        if r.status_code != 200:
            logger.error("FETCH Proxy failed with status %d for URL: %s", r.status_code, url)
            raise PageFetchError(f"Proxy fetch failed: {r.status_code} {r.reason}", url=url, status_code=r.status_code)

        try:
            data = r.json()
        except ValueError:
            raise PageFetchError("Proxy returned a non-JSON response", url=url)
        if not isinstance(data, dict):
            raise PageFetchError("Proxy returned an unexpected payload", url=url)
        if data.get("error"):
            raise PageFetchError(f"Proxy error: {data['error']}", url=url)

        return PageContent(
            text=data.get("text") or "",
            html=data.get("html") or "",
            source_url=url,
            title=data.get("title"),
        )

    def _fetch_direct(self, url: str) -> PageContent:
        headers = {
            "User-Agent": USER_AGENT,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
        }

        logger.debug("FETCH Direct request for %s", url)
        try:
            r = self.session.get(url, headers=headers, timeout=self.timeout_s, stream=True)
        except requests.Timeout:
            logger.error("FETCH Timeout after %ds for URL: %s", self.timeout_s, url)
            raise PageFetchError(f"Request timed out ({self.timeout_s}s limit)", url=url, status_code=504)
        except requests.RequestException as e:
            logger.error("FETCH Request error for URL %s: %s: %s", url, type(e).__name__, e)
            raise PageFetchError(f"Failed to fetch URL: {e}", url=url)

        try:
            html = self._read_html(r, url)
        finally:
            r.close()

        soup = BeautifulSoup(html, "html.parser")
        structured = extract_structured_data(soup)
        body = clean_input_text(html)
        logger.debug("FETCH Got %d chars of text (%s structured data)",
                     len(body), "with" if structured else "no")

        return PageContent(
            text=structured + body,
            html=html[:MAX_HTML_CHARS],
            source_url=url,
            title=extract_title(soup),
        )

    def _read_html(self, r: requests.Response, url: str) -> str:
        """Check status and headers, then read at most ``max_bytes`` of body."""
        if r.status_code != 200:
            logger.error("FETCH Failed with status %d for URL: %s", r.status_code, url)
            raise PageFetchError(
                f"Remote server returned {r.status_code} {r.reason}", url=url, status_code=r.status_code
            )

        content_type = r.headers.get("Content-Type", "")
        if "text/html" not in content_type and "application/xhtml" not in content_type:
            raise PageFetchError(f"Expected HTML but got {content_type or 'unknown'}", url=url, status_code=415)

        try:
            declared = int(r.headers.get("Content-Length") or 0)
        except ValueError:
            declared = 0
        if declared > self.max_bytes:
            raise PageFetchError(
                f"Page too large ({declared / 1024 / 1024:.1f}MB, max {self.max_bytes / 1024 / 1024:.0f}MB)",
                url=url,
                status_code=413,
            )

        # Content-Length may be missing or wrong
        body = bytearray()
        try:
            for chunk in r.iter_content(chunk_size=READ_CHUNK_BYTES):
                body.extend(chunk)
                if len(body) > self.max_bytes:
                    logger.error("FETCH Body passed %d bytes for URL: %s", self.max_bytes, url)
                    raise PageFetchError("Page content exceeds size limit", url=url, status_code=413)
        except requests.RequestException as e:
            logger.error("FETCH Read error for URL %s: %s: %s", url, type(e).__name__, e)
            raise PageFetchError(f"Failed to read page: {e}", url=url)

        # requests falls back to ISO-8859-1 for text/* without a charset
        encoding = r.encoding if "charset=" in content_type.lower() and r.encoding else "utf-8"
        try:
            return bytes(body).decode(encoding, errors="replace")
        except LookupError:
            return bytes(body).decode("utf-8", errors="replace")


def _iterate_jsonld(data) -> Iterator[dict]:
    """Recursively iterate through JSON-LD data structures."""
    if isinstance(data, dict):
        yield data
        graph = data.get("@graph")
        if isinstance(graph, list):
            for item in graph:
                yield from _iterate_jsonld(item)
    elif isinstance(data, list):
        for item in data:
            yield from _iterate_jsonld(item)


def _is_product(obj: dict) -> bool:
    obj_type = obj.get("@type", "")
    types = obj_type if isinstance(obj_type, list) else [obj_type]
    return any(str(t).lower() == "product" for t in types)


def _product_lines(product: dict) -> List[str]:
    lines = []
    if product.get("name"):
        lines.append(f"Product Name: {product['name']}")
    brand = product.get("brand")
    brand_name = brand.get("name") if isinstance(brand, dict) else brand
    if isinstance(brand_name, str) and brand_name:
        lines.append(f"Brand: {brand_name}")
    if product.get("description"):
        lines.append(f"Description: {product['description']}")
    if product.get("sku"):
        lines.append(f"SKU: {product['sku']}")
    if product.get("model"):
        model = product["model"]
        lines.append(f"Model: {model.get('name', '') if isinstance(model, dict) else model}")
    weight = product.get("weight")
    if isinstance(weight, dict) and weight.get("value"):
        lines.append(f"Weight: {weight['value']} {weight.get('unitText') or ''}".rstrip())

    offers = product.get("offers")
    if isinstance(offers, list):
        offers = offers[0] if offers else None
    if isinstance(offers, dict) and offers.get("price"):
        lines.append(f"Price: ${offers['price']}")

    for prop in product.get("additionalProperty") or []:
        if isinstance(prop, dict) and prop.get("name") and prop.get("value"):
            lines.append(f"{prop['name']}: {prop['value']}")
    return lines


def extract_structured_data(soup: BeautifulSoup) -> str:
    """
    Turn JSON-LD Product data and Open Graph tags into ``Key: value`` lines.

    Returns:
        The lines followed by a ``---`` separator, or "" when the page has none
    """
    lines: List[str] = []

    for script in soup.find_all("script", attrs={"type": "application/ld+json"}):
        raw = (script.string or script.get_text() or "").strip()
        if not raw:
            continue
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.debug("JSON-LD parsing failed: %s", e)
            continue
        product = next((obj for obj in _iterate_jsonld(data) if _is_product(obj)), None)
        if product is not None:
            lines.extend(_product_lines(product))

    for prop, label in (("og:title", "Product Name"), ("og:description", "Description")):
        tag = soup.find("meta", attrs={"property": prop})
        if tag and tag.get("content", "").strip():
            lines.append(f"{label}: {tag['content'].strip()}")

    if not lines:
        return ""
    return "\n".join(lines) + STRUCTURED_SEPARATOR


def extract_title(soup: BeautifulSoup) -> Optional[str]:
    """Page title from <title>, falling back to og:title."""
    tag = soup.find("title")
    if tag:
        text = tag.get_text().strip()
        if text:
            return text
    tag = soup.find("meta", attrs={"property": "og:title"})
    if tag and tag.get("content"):
        return tag["content"].strip() or None
    return None
