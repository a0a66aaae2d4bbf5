"""URL validation and parsing of user-submitted URL lists."""
from typing import Iterable, List, Union
from urllib.parse import urlparse


def is_valid_url(value: str) -> bool:
    """Return True if ``value`` parses as an absolute URL (scheme + host)."""
    if not isinstance(value, str) or not value:
        return False
    try:
        parsed = urlparse(value)
        # Accessing .port validates the netloc (raises on garbage like "host:abc")
        parsed.port
    except ValueError:
        return False
    return bool(parsed.scheme and parsed.netloc)


def parse_url_lines(raw: Union[str, Iterable[str]]) -> List[str]:
    """
    Turn newline separated text (or a list of lines) into the validated work set.

    Lines are trimmed; empty and invalid lines are dropped silently and
    duplicates collapse onto their first occurrence.
    """
    lines = raw.split("\n") if isinstance(raw, str) else list(raw)
    urls = [line.strip() for line in lines]
    return list(dict.fromkeys(u for u in urls if u and is_valid_url(u)))
