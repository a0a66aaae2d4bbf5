"""
Image Candidate Extractor.

Listing pages mix server-rendered markup, JSON blobs inside script tags and
CSS backgrounds, so no single technique finds every photo. Each pass below is
a cheap, independent heuristic; their results are unioned and cleaned up later
by the normalizer.
"""
import re
from typing import Callable, Dict, Iterable, List, Tuple

from bs4 import BeautifulSoup

from propscraper.utils.logger import LayerLogger

IMAGE_EXTENSIONS = r"(?:jpg|jpeg|png|webp)"

# Absolute image URLs anywhere in the page text, including JSON-escaped slashes
SCRIPT_URL_PATTERN = re.compile(
    r"(https?:\\?/\\?/[^\"'\s<>;,\[\]{}]+\." + IMAGE_EXTENSIONS + r"(?:\?[^\"'\s<>;,\[\]{}]*)?)",
    re.IGNORECASE,
)

# Image URLs wrapped in CSS url(...), optionally quoted
CSS_URL_PATTERN = re.compile(
    r"url\(['\"]?(https?:[^)'\"]+\." + IMAGE_EXTENSIONS + r"[^)'\"]*)['\"]?\)",
    re.IGNORECASE,
)

INLINE_STYLE_PATTERN = re.compile(r"url\(['\"]?(.*?)['\"]?\)")
ATTRIBUTE_EXTENSION_PATTERN = re.compile(r"\.(?:jpe?g|png|webp)", re.IGNORECASE)

SCANNED_TAGS = ("img", "a", "div")
SCANNED_ATTRIBUTES = ("src", "href", "data-src", "data-url", "data-original", "data-large-img-url")
VENDOR_IMAGE_HOSTS = ("images.prop24",)

logger = LayerLogger("image_extractor")


def scan_script_urls(html: str) -> List[str]:
    """Pass a: absolute image URLs anywhere in the raw HTML text."""
    return SCRIPT_URL_PATTERN.findall(html or "")


def scan_css_urls(html: str) -> List[str]:
    """Pass b: image URLs inside CSS ``url(...)`` wrappers."""
    return CSS_URL_PATTERN.findall(html or "")


def scan_dom_attributes(
    soup: BeautifulSoup,
    vendor_hosts: Iterable[str] = VENDOR_IMAGE_HOSTS,
) -> List[str]:
    """Pass c: image-looking values of src/href/data-* attributes on img, a and div."""
    found = []
    for el in soup.find_all(SCANNED_TAGS):
        for attr in SCANNED_ATTRIBUTES:
            value = el.get(attr)
            if not value or not isinstance(value, str):
                continue
            if ATTRIBUTE_EXTENSION_PATTERN.search(value) or any(h in value for h in vendor_hosts):
                found.append(value)
    return found


def scan_inline_styles(soup: BeautifulSoup) -> List[str]:
    """Pass d: first ``url(...)`` payload of every inline style that has one."""
    found = []
    for el in soup.find_all(style=True):
        style = el.get("style") or ""
        if "url(" not in style:
            continue
        match = INLINE_STYLE_PATTERN.search(style)
        if match and match.group(1):
            found.append(match.group(1))
    return found


TextPass = Callable[[str], List[str]]
DomPass = Callable[[BeautifulSoup], List[str]]

TEXT_PASSES: Tuple[Tuple[str, TextPass], ...] = (
    ("script", scan_script_urls),
    ("css", scan_css_urls),
)
DOM_PASSES: Tuple[Tuple[str, DomPass], ...] = (
    ("attributes", scan_dom_attributes),
    ("inline_style", scan_inline_styles),
)


def extract_image_candidates(html: str, base_url: str = "") -> List[str]:
    """
    Run every pass over ``html`` and union the results.

    The union keeps first-discovery order so the final image list is stable.
    """
    if not html:
        return []
    soup = BeautifulSoup(html, "lxml")
    counts: Dict[str, int] = {}
    candidates: Dict[str, None] = {}

    for name, text_pass in TEXT_PASSES:
        found = text_pass(html)
        counts[name] = len(found)
        candidates.update(dict.fromkeys(found))

    for name, dom_pass in DOM_PASSES:
        found = dom_pass(soup)
        counts[name] = len(found)
        candidates.update(dict.fromkeys(found))

    logger.log_extraction(source="html", counts=counts, url=base_url, unique=len(candidates))
    return list(candidates)
