import tempfile
from datetime import datetime, timezone
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from file_index.main import app
from file_index.services.listing import listing_service
from file_index.services.sitemap import build_sitemap_index, build_urlset, is_indexable, page_urls


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def temp_directory():
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        (root / "a.txt").write_text("a")
        (root / "pub").mkdir()
        (root / "pub" / "b.txt").write_text("b")
        (root / "404").mkdir()
        (root / "404" / "missing.txt").write_text("gone")

        listing_service.load(root)
        yield root
        listing_service.reset()


def test_robots_txt(client):
    response = client.get("/robots.txt")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text == (
        "User-agent: *\n"
        "Allow: /\n"
        "\n"
        "Sitemap: https://example.com/sitemap-index.xml"
    )


def test_sitemap_index(client):
    response = client.get("/sitemap-index.xml")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/xml")
    assert "<loc>https://example.com/sitemap-0.xml</loc>" in response.text


def test_sitemap_lists_pages(client, temp_directory):
    response = client.get("/sitemap-0.xml")

    assert response.status_code == 200
    text = response.text
    assert "<loc>https://example.com/</loc>" in text
    assert "<loc>https://example.com/pub/</loc>" in text
    assert "/404/" not in text


class TestSitemap:
    """Tests for sitemap building"""

    def test_is_indexable(self):
        assert is_indexable("/")
        assert is_indexable("/docs/")
        assert not is_indexable("/404/")
        assert not is_indexable("/errors/403/")

    def test_page_urls_with_base(self):
        urls = page_urls("https://example.com", "/files/", ["/sub/", "/", "/404/"])

        assert urls == [
            "https://example.com/files/",
            "https://example.com/files/sub/",
        ]

    def test_build_urlset(self):
        lastmod = datetime(2024, 3, 4, 5, 6, 7, tzinfo=timezone.utc)

        xml = build_urlset(["https://example.com/a/"], lastmod)

        assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>')
        assert 'xmlns="http://www.sitemaps.org/schemas/sitemap/0.9"' in xml
        assert "<loc>https://example.com/a/</loc>" in xml
        assert "<lastmod>2024-03-04T05:06:07Z</lastmod>" in xml

    def test_build_urlset_escapes_urls(self):
        xml = build_urlset(["https://example.com/?a=1&b=2"], datetime.now(timezone.utc))

        assert "a=1&amp;b=2" in xml

    def test_build_sitemap_index_with_base(self):
        xml = build_sitemap_index("https://example.com", "/files/")

        assert "<loc>https://example.com/files/sitemap-0.xml</loc>" in xml
