"""
Display helpers for listing pages and site metadata.
"""

import posixpath
from datetime import datetime, timezone
from typing import Tuple
from urllib.parse import quote, urljoin
from zoneinfo import ZoneInfo

# Smallest first, so the first unit is the fallback
BYTE_UNITS = (
    (1, "B"),
    (1024, "KiB"),
    (1024 ** 2, "MiB"),
    (1024 ** 3, "GiB"),
    (1024 ** 4, "TiB"),
)

DATETIME_FORMAT = "%Y/%m/%d %H:%M:%S"


def format_bytes(size: int) -> Tuple[str, str]:
    """
    Format a byte count with the largest binary unit it reaches.

    Args:
        size: Byte count

    Returns:
        (value, unit) - bytes as a plain integer ("512", "B"),
        larger units with one decimal ("1.5", "KiB")
    """
    threshold, unit = BYTE_UNITS[0]
    for candidate_threshold, candidate_unit in BYTE_UNITS:
        if size >= candidate_threshold:
            threshold, unit = candidate_threshold, candidate_unit

    if threshold == 1:
        return str(size), unit
    return f"{size / threshold:.1f}", unit


def format_datetime(value: datetime, tz: str = "Asia/Shanghai") -> str:
    """
    Format a timestamp as "YYYY/MM/DD HH:MM:SS" (24h) in the given time zone.

    Naive datetimes are taken as UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(ZoneInfo(tz)).strftime(DATETIME_FORMAT)


def join_url(base: str, *parts: str, directory: bool = False) -> str:
    """
    Join a site base path and path segments into a route.

    Segments are percent-encoded; directory routes end with a slash.
    """
    path = posixpath.join(base, *(quote(part.strip("/")) for part in parts if part.strip("/")))
    if directory and not path.endswith("/"):
        path += "/"
    return path


def get_sitemap_index_url(site: str, base: str) -> str:
    return urljoin(site, posixpath.join(base, "sitemap-index.xml"))
