import pytest

from sitemaps.errors import InvalidNodeError
from sitemaps.markers import SitemapHint, get_hint, sitemap
from sitemaps.node import ChangeFrequency


def test_marker_returns_handler_unchanged():
    def handler():
        return "ok"

    marked = sitemap(frequency="Daily", priority=1)(handler)

    assert marked is handler
    assert marked() == "ok"
    assert get_hint(handler) == SitemapHint(frequency=ChangeFrequency.DAILY, priority=1.0)


def test_single_sitemap_name_is_not_split():
    @sitemap(sitemaps="news")
    def handler():
        pass

    assert get_hint(handler).sitemaps == frozenset({"news"})


def test_unmarked_handler_has_no_hint():
    def handler():
        pass

    assert get_hint(handler) is None


def test_invalid_hints_fail_at_decoration():
    with pytest.raises(InvalidNodeError):
        sitemap(priority=2.0)
    with pytest.raises(ValueError):
        sitemap(frequency="sometimes")
