"""
URL Normalizer/Filter.

Heuristic extraction over-collects on purpose. This module repairs the raw
candidates (protocol-relative, escaped, quoted, relative) and then filters the
resolved URLs down to plausible listing images.
"""
import re
from typing import Iterable, List, Optional, Tuple
from urllib.parse import urljoin, urlparse

from pydantic import BaseModel


class FilterRules(BaseModel):
    """Substring rules applied to resolved candidate URLs."""
    # Non-content resources, always dropped
    denylist: Tuple[str, ...] = ("svg", "tracker", "analytics", "facebook", "google", "whatsapp")
    # Vendor image hosts, kept even when they look like icons
    allowlist: Tuple[str, ...] = ("images.prop24.com", "property24")
    icon_markers: Tuple[str, ...] = ("icon", "logo")
    icon_exemptions: Tuple[str, ...] = ("property",)


DEFAULT_RULES = FilterRules()

_WRAPPING_QUOTES = re.compile(r"^['\"]|['\"]$")


def repair_candidate(candidate: str, base_url: str) -> Optional[str]:
    """
    Turn one raw candidate into an absolute URL, or None if it cannot be resolved.
    """
    url = candidate.strip()
    if url.startswith("//"):
        url = f"https:{url}"
    url = url.replace("\\", "")
    url = _WRAPPING_QUOTES.sub("", url)
    if not url:
        return None
    try:
        resolved = urljoin(base_url, url)
        parsed = urlparse(resolved)
        parsed.port
    except ValueError:
        return None
    if not parsed.netloc:
        return None
    return resolved


def is_wanted_image(url: str, rules: FilterRules = DEFAULT_RULES) -> bool:
    """Apply the scheme, denylist, allowlist and icon rules to one resolved URL."""
    if urlparse(url).scheme not in ("http", "https"):
        return False
    lowered = url.lower()
    if any(term in lowered for term in rules.denylist):
        return False
    if any(host in lowered for host in rules.allowlist):
        return True
    if any(marker in lowered for marker in rules.icon_markers):
        return any(exempt in lowered for exempt in rules.icon_exemptions)
    return True


def clean_images(
    candidates: Iterable[str],
    base_url: str,
    rules: FilterRules = DEFAULT_RULES,
) -> List[str]:
    """
    Repair, resolve, filter and de-duplicate candidate image URLs.

    Order of first discovery is preserved.
    """
    cleaned: List[str] = []
    seen = set()
    for candidate in candidates:
        if not isinstance(candidate, str):
            continue
        url = repair_candidate(candidate, base_url)
        if url is None or url in seen:
            continue
        seen.add(url)
        if is_wanted_image(url, rules):
            cleaned.append(url)
    return cleaned
