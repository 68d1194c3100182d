from fastapi import APIRouter
from fastapi.responses import PlainTextResponse, Response

from file_index.config import get_settings
from file_index.services.listing import listing_service
from file_index.services.sitemap import build_sitemap_index, build_urlset, page_urls
from file_index.utils.format import get_sitemap_index_url

router = APIRouter(tags=["site"])

XML_MEDIA_TYPE = "application/xml"


@router.get("/robots.txt", response_class=PlainTextResponse)
async def get_robots():
    settings = get_settings()
    sitemap_url = get_sitemap_index_url(settings.site, settings.base)
    return f"User-agent: *\nAllow: {settings.base}\n\nSitemap: {sitemap_url}"


@router.get("/sitemap-index.xml")
async def get_sitemap_index():
    settings = get_settings()
    return Response(build_sitemap_index(settings.site, settings.base), media_type=XML_MEDIA_TYPE)


@router.get("/sitemap-0.xml")
async def get_sitemap():
    settings = get_settings()
    listings = listing_service.listings
    urls = page_urls(settings.site, settings.base, listings.keys())
    return Response(build_urlset(urls, listing_service.generated_at), media_type=XML_MEDIA_TYPE)
