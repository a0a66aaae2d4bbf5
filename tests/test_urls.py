from propscraper.utils.urls import is_valid_url, parse_url_lines


def test_valid_absolute_urls():
    assert is_valid_url("https://www.property24.com/for-sale/cape-town/123")
    assert is_valid_url("http://example.com")
    assert is_valid_url("http://localhost:3001/scrape?url=x")


def test_malformed_urls_are_rejected():
    assert not is_valid_url("not a url")
    assert not is_valid_url("")
    assert not is_valid_url("example.com/path")
    assert not is_valid_url("http://")
    assert not is_valid_url("https://host:notaport/")


def test_parse_url_lines_drops_blank_and_invalid_lines():
    raw = "  https://a.example.com/1  \n\nnot a url\nhttps://b.example.com/2\n"
    assert parse_url_lines(raw) == ["https://a.example.com/1", "https://b.example.com/2"]


def test_parse_url_lines_collapses_duplicates_in_order():
    raw = ["https://b.example.com", "https://a.example.com", "https://b.example.com"]
    assert parse_url_lines(raw) == ["https://b.example.com", "https://a.example.com"]
