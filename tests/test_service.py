import hashlib
import xml.etree.ElementTree as ET

from conftest import FakeDiscovery, FakeResolver, make_endpoints, make_nodes, make_urls
from sitemaps.renderer import SITEMAPS_NAMESPACE
from sitemaps.service import SitemapService, compute_etag

NS = {"sm": SITEMAPS_NAMESPACE}


def _service(static_count=0, page_size=None):
    discovery = FakeDiscovery(make_endpoints(static_count))
    resolver = FakeResolver(make_urls(static_count))
    return SitemapService(discovery, page_size=page_size), resolver


def test_static_nodes_come_before_dynamic_nodes():
    service, resolver = _service(static_count=3)
    dynamic = make_nodes(2)
    service.add_nodes(dynamic)

    page = service.get_nodes(resolver)

    assert page.total_count == 5
    assert [n.url for n in page.items] == [
        "https://example.com/page/0",
        "https://example.com/page/1",
        "https://example.com/page/2",
        dynamic[0].url,
        dynamic[1].url,
    ]


def test_default_name_and_named_sitemaps_are_separate():
    service, resolver = _service()
    a, b, c = make_nodes(3)

    service.add_nodes([a])
    service.add_nodes([b, c], name="news")

    assert service.get_dynamic_nodes() == (a,)
    assert service.get_dynamic_nodes("sitemap") == (a,)
    assert service.get_dynamic_nodes("news") == (b, c)
    assert service.get_nodes(resolver, "unknown").total_count == 0


def test_add_nodes_replaces_previous_set():
    service, _ = _service()
    a, b, c = make_nodes(3)

    service.add_nodes([a, b], name="x")
    service.add_nodes([c], name="x")

    assert service.get_dynamic_nodes("x") == (c,)


def test_page_size_comes_from_settings_unless_overridden():
    assert SitemapService(FakeDiscovery()).page_size == 125
    assert SitemapService(FakeDiscovery(), page_size=10).page_size == 10


def test_get_nodes_pages_merged_source():
    service, resolver = _service(static_count=3, page_size=2)
    service.add_nodes(make_nodes(2))

    page = service.get_nodes(resolver, page=2)

    assert page.total_count == 5
    assert page.page_size == 2
    assert [n.url for n in page.items] == ["https://example.com/page/2", "https://example.com/dyn/0"]


def test_get_xml_empty_named_sitemap():
    service, resolver = _service()
    root = ET.fromstring(service.get_xml(resolver, "X").encode("utf-8"))

    assert root.tag == f"{{{SITEMAPS_NAMESPACE}}}urlset"
    assert root.findall("sm:url", NS) == []


def test_get_xml_index_for_130_static_nodes():
    service, resolver = _service(static_count=130)
    root = ET.fromstring(service.get_xml(resolver).encode("utf-8"))
    locs = [e.text for e in root.findall("sm:sitemap/sm:loc", NS)]

    assert root.tag.endswith("sitemapindex")
    assert locs == ["https://example.com/sitemap?page=1", "https://example.com/sitemap?page=2"]


def test_get_xml_scans_once_across_index_pages():
    discovery = FakeDiscovery(make_endpoints(300))
    service = SitemapService(discovery)
    resolver = FakeResolver(make_urls(300))

    service.get_xml(resolver)
    service.get_xml(resolver, page=2)

    assert discovery.calls == 1
    assert service.metrics.count("render.index") == 1
    assert service.metrics.count("render.urlset") == 1


def test_document_carries_content_hash():
    service, resolver = _service(static_count=2)
    doc = service.get_document(resolver)

    assert doc.etag == hashlib.md5(doc.content.encode("utf-8")).hexdigest()
    assert service.get_document(resolver).etag == doc.etag

    service.add_nodes(make_nodes(1))
    assert service.get_document(resolver).etag != doc.etag


def test_compute_etag_is_stable():
    assert compute_etag("abc") == compute_etag("abc")
    assert compute_etag("abc") != compute_etag("abd")
    assert SitemapService.compute_etag("abc") == compute_etag("abc")


def test_reset_static_nodes_triggers_rescan():
    discovery = FakeDiscovery(make_endpoints(1))
    service = SitemapService(discovery)
    resolver = FakeResolver(make_urls(1))

    service.get_static_nodes(resolver)
    service.reset_static_nodes()
    service.get_static_nodes(resolver)

    assert discovery.calls == 2
