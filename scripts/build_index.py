#!/usr/bin/env python3
"""
File Index build script

Scans a public directory once and writes the build outputs:
1. listings.json with one listing record per directory
2. robots.txt
3. sitemap-index.xml and sitemap-0.xml

Usage:
    python scripts/build_index.py [ROOT] [--out-dir DIR]
"""

import argparse
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

from file_index.config import get_settings
from file_index.services.listing import scan_listings
from file_index.services.sitemap import build_sitemap_index, build_urlset, page_urls
from file_index.utils.format import get_sitemap_index_url

logger = logging.getLogger("build_index")


def build(root: Path, out_dir: Path) -> int:
    """
    Scan root and write the build outputs into out_dir.

    Returns:
        Number of listing records written
    """
    settings = get_settings()

    listings = scan_listings(root, **settings.scan_options())
    built_at = datetime.now(timezone.utc)

    out_dir.mkdir(parents=True, exist_ok=True)

    # 1. Listing records
    payload = {
        listing_id: record.model_dump(mode="json")
        for listing_id, record in listings.items()
    }
    (out_dir / "listings.json").write_text(json.dumps(payload, indent=2, ensure_ascii=False))
    logger.info(f"Wrote {len(payload)} listings to {out_dir / 'listings.json'}")

    # 2. robots.txt
    sitemap_url = get_sitemap_index_url(settings.site, settings.base)
    (out_dir / "robots.txt").write_text(f"User-agent: *\nAllow: {settings.base}\n\nSitemap: {sitemap_url}")

    # 3. Sitemaps
    urls = page_urls(settings.site, settings.base, listings.keys())
    (out_dir / "sitemap-index.xml").write_text(build_sitemap_index(settings.site, settings.base))
    (out_dir / "sitemap-0.xml").write_text(build_urlset(urls, built_at))
    logger.info(f"Wrote sitemap with {len(urls)} pages")

    return len(payload)


def main(argv=None):
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Build the file index for a public directory")
    parser.add_argument("root", nargs="?", type=Path, default=settings.public_dir,
                        help="Directory to index (default: FILE_INDEX_PUBLIC_DIR)")
    parser.add_argument("--out-dir", type=Path, default=Path("dist"), help="Output directory")
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        build(args.root, args.out_dir)
    except OSError as e:
        # A scan that cannot read the tree must fail the build
        logger.error(f"Failed to index {args.root}: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
