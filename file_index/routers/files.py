from typing import Optional

from fastapi import APIRouter, HTTPException

from file_index.config import get_settings
from file_index.schemas.listing import FileRow, ListingPage, ListingRecord
from file_index.services.listing import listing_service, to_listing_id
from file_index.utils.format import format_bytes, format_datetime, join_url

router = APIRouter(prefix="/api/files", tags=["files"])


def parent_href(listing_id: str, base: str) -> Optional[str]:
    """Route of the parent listing, None for the root"""
    if listing_id == "/":
        return None
    segments = listing_id.strip("/").split("/")[:-1]
    return join_url(base, *segments, directory=True)


def build_page(record: ListingRecord) -> ListingPage:
    """Turn a listing record into a display page"""
    settings = get_settings()
    segments = record.id.strip("/").split("/")

    rows = []
    for entry in record.children:
        size_value, size_unit = format_bytes(entry.size)
        rows.append(FileRow(
            kind=entry.kind,
            name=entry.name,
            href=join_url(settings.base, *segments, entry.name, directory=entry.kind == "directory"),
            size=entry.size,
            size_value=size_value,
            size_unit=size_unit,
            modified=entry.modified,
            modified_display=format_datetime(entry.modified, settings.timezone)
        ))

    return ListingPage(
        id=record.id,
        parent=parent_href(record.id, settings.base),
        total_size=sum(entry.size for entry in record.children),
        rows=rows
    )


@router.get("", response_model=ListingPage)
async def get_root_listing():
    """
    Listing of the public directory root
    """
    return await get_listing("")


@router.get("/{path:path}", response_model=ListingPage)
async def get_listing(path: str):
    """
    Listing of a directory below the public root
    """
    record = listing_service.get(to_listing_id(path))
    if record is None:
        raise HTTPException(status_code=404, detail="Listing not found")
    return build_page(record)
