from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class FileEntry(BaseModel):
    """One child shown in a directory listing"""
    model_config = ConfigDict(frozen=True)

    kind: Literal["file", "directory"]
    name: str
    size: int = Field(ge=0)
    modified: datetime


class ListingRecord(BaseModel):
    """Listing of a single directory, keyed by its path from the scan root"""
    model_config = ConfigDict(frozen=True)

    id: str
    children: tuple[FileEntry, ...]


class FileRow(BaseModel):
    """FileEntry prepared for display"""
    kind: Literal["file", "directory"]
    name: str
    href: str
    size: int
    size_value: str
    size_unit: str
    modified: datetime
    modified_display: str


class ListingPage(BaseModel):
    """Listing page served for one directory"""
    id: str
    parent: Optional[str] = None
    total_size: int
    rows: list[FileRow]
