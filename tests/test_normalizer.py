from propscraper.extraction.normalizer import FilterRules, clean_images, is_wanted_image, repair_candidate

BASE = "https://site.com/x"


def test_protocol_relative_url_is_expanded():
    assert "https://img.example.com/a.jpg" in clean_images(["//img.example.com/a.jpg"], BASE)


def test_escaped_slashes_are_removed():
    assert "https://img.example.com/a.jpg" in clean_images(["https:\\/\\/img.example.com\\/a.jpg"], BASE)


def test_wrapping_quotes_are_stripped():
    assert clean_images(["'https://img.example.com/a.jpg'"], BASE) == ["https://img.example.com/a.jpg"]


def test_relative_url_resolves_against_base():
    assert clean_images(["/photos/1.jpg", "2.png"], BASE) == [
        "https://site.com/photos/1.jpg",
        "https://site.com/2.png",
    ]


def test_unresolvable_candidate_is_dropped():
    assert repair_candidate("http://[broken/a.jpg", BASE) is None
    assert clean_images(["http://[broken/a.jpg", "https://img.example.com/ok.jpg"], BASE) == [
        "https://img.example.com/ok.jpg"
    ]


def test_non_http_schemes_are_dropped():
    assert clean_images(["data:image/png;base64,AAAA", "ftp://files.example.com/a.jpg"], BASE) == []


def test_denylisted_terms_always_win():
    url = "https://www.facebook.com/tr/images.prop24.com/a.jpg"
    assert not is_wanted_image(url)
    assert clean_images([url], BASE) == []


def test_vendor_host_kept_even_with_icon():
    url = "https://images.prop24.com/icons/icon-123.jpg"
    assert clean_images([url], BASE) == [url]


def test_logo_without_property_is_dropped():
    assert clean_images(["https://cdn.example.com/logo.png"], BASE) == []


def test_logo_with_property_is_kept():
    url = "https://cdn.example.com/property/logo-overlay.jpg"
    assert clean_images([url], BASE) == [url]


def test_output_is_deduplicated_in_discovery_order():
    candidates = [
        "https://img.example.com/b.jpg",
        "//img.example.com/a.jpg",
        "https:\\/\\/img.example.com\\/b.jpg",
        "https://img.example.com/a.jpg",
    ]
    assert clean_images(candidates, BASE) == [
        "https://img.example.com/b.jpg",
        "https://img.example.com/a.jpg",
    ]


def test_custom_rules():
    rules = FilterRules(denylist=("watermark",), allowlist=("cdn.agency.test",))
    assert clean_images(["https://x.test/watermark.jpg"], BASE, rules) == []
    assert clean_images(["https://cdn.agency.test/logo.jpg"], BASE, rules) == ["https://cdn.agency.test/logo.jpg"]
