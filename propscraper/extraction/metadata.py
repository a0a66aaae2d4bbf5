"""
Metadata Extractor: title, best-guess price and plain body text.
"""
import re
from typing import NamedTuple, Optional

from bs4 import BeautifulSoup

from propscraper.config import config

NON_CONTENT_TAGS = ["script", "style", "nav", "footer", "header", "noscript", "iframe"]
PRICE_SELECTORS = (".p24_price", '[class*="price"]')
DEFAULT_TITLE = "Untitled"

_WHITESPACE = re.compile(r"\s+")


class PageMetadata(NamedTuple):
    title: str
    price: str
    body_text: str


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text or "").strip()


def extract_metadata(html: str, text_limit: Optional[int] = None) -> PageMetadata:
    """
    Extract title, price and body text from raw HTML.

    Non-content subtrees are removed first so navigation, scripts and
    embedded frames do not leak into the body text.
    """
    limit = config.BODY_TEXT_LIMIT if text_limit is None else text_limit
    soup = BeautifulSoup(html or "", "lxml")

    for tag in soup.find_all(NON_CONTENT_TAGS):
        tag.decompose()

    title_tag = soup.find("title")
    title = collapse_whitespace(title_tag.get_text()) if title_tag else ""

    price = ""
    for selector in PRICE_SELECTORS:
        elem = soup.select_one(selector)
        if elem is not None:
            price = collapse_whitespace(elem.get_text(separator=" "))
            break

    body = soup.body.get_text(separator=" ") if soup.body else ""
    body_text = collapse_whitespace(body)[:limit]

    return PageMetadata(title=title or DEFAULT_TITLE, price=price, body_text=body_text)
