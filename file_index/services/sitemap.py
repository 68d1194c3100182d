"""
Sitemap generation from the listing collection.

One urlset (sitemap-0.xml) holds every listing page; the sitemap index
points at it. Error pages are left out.
"""

import xml.etree.ElementTree as ET
from datetime import datetime
from typing import Iterable, List
from urllib.parse import urljoin

from file_index.utils.format import join_url

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
SITEMAP_FILE = "sitemap-0.xml"
EXCLUDED_PAGES = {"404", "403"}

LASTMOD_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def is_indexable(listing_id: str) -> bool:
    """False for error pages such as /404/"""
    segments = [s for s in listing_id.split("/") if s]
    return not segments or segments[-1] not in EXCLUDED_PAGES


def page_urls(site: str, base: str, listing_ids: Iterable[str]) -> List[str]:
    """Absolute URLs of the indexable listing pages, in route order"""
    urls = []
    for listing_id in sorted(listing_ids):
        if not is_indexable(listing_id):
            continue
        route = join_url(base, *listing_id.split("/"), directory=True)
        urls.append(urljoin(site, route))
    return urls


def _to_xml(root: ET.Element) -> str:
    body = ET.tostring(root, encoding="unicode")
    return f'<?xml version="1.0" encoding="UTF-8"?>\n{body}'


def build_urlset(urls: Iterable[str], lastmod: datetime) -> str:
    """
    Build a sitemap urlset document.

    Args:
        urls: Absolute page URLs
        lastmod: Modification time applied to every page (the build time)

    Returns:
        XML document as a string
    """
    root = ET.Element("urlset", xmlns=SITEMAP_NS)
    lastmod_str = lastmod.strftime(LASTMOD_FORMAT)
    for url in urls:
        entry = ET.SubElement(root, "url")
        ET.SubElement(entry, "loc").text = url
        ET.SubElement(entry, "lastmod").text = lastmod_str
    return _to_xml(root)


def build_sitemap_index(site: str, base: str) -> str:
    """Sitemap index pointing at the single urlset"""
    root = ET.Element("sitemapindex", xmlns=SITEMAP_NS)
    entry = ET.SubElement(root, "sitemap")
    ET.SubElement(entry, "loc").text = urljoin(site, join_url(base, SITEMAP_FILE))
    return _to_xml(root)
