"""
Directory listing service for the file index.

Walks the public directory once, depth-first and post-order, producing one
ListingRecord per directory that has something to show. Directory sizes are
aggregated bottom-up from the retained children only.
"""

import os
import time
import logging
import unicodedata
from datetime import datetime, timezone
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from file_index.config import Settings, get_settings
from file_index.schemas.listing import FileEntry, ListingRecord

logger = logging.getLogger(__name__)

# Names starting with this are ignored by the site build and never published
EXCLUDED_PREFIX = "_"

HIDDEN_PREFIX = "."

# An author-provided page in a directory replaces the generated listing
INDEX_NAME = "index.html"


# Whitespace, punctuation and symbols sort ahead of digits, digits ahead of letters
CHAR_CLASS_RANKS = {"Z": 0, "P": 1, "S": 2, "N": 3}
LETTER_RANK = 4


def _char_rank(char: str) -> int:
    return CHAR_CLASS_RANKS.get(unicodedata.category(char)[0], LETTER_RANK)


def name_sort_key(name: str):
    """
    Locale-aware ordering key for entry names.

    Compares character classes first (punctuation before digits before
    letters) and letters case- and accent-insensitively. Ties are broken by
    accents, then by case with lowercase first, so the order is total and
    stable.
    """
    folded = unicodedata.normalize("NFKD", name)
    base = "".join(c for c in folded if not unicodedata.combining(c))
    primary = tuple((_char_rank(c), c.casefold()) for c in base)
    return (primary, folded.casefold(), name.swapcase())


def entry_sort_key(entry: FileEntry):
    return (entry.kind != "directory", name_sort_key(entry.name))


def to_listing_id(relative_path: str) -> str:
    """
    Convert a posix path relative to the scan root into a listing id.

    The root is "/", every other directory is "/a/b/".
    """
    relative_path = relative_path.strip("/")
    return f"/{relative_path}/" if relative_path else "/"


def _mtime(stat_result: os.stat_result) -> datetime:
    return datetime.fromtimestamp(stat_result.st_mtime, tz=timezone.utc)


def scan_listings(
    root,
    *,
    excluded_prefix: str = EXCLUDED_PREFIX,
    hidden_prefix: str = HIDDEN_PREFIX,
    index_name: str = INDEX_NAME,
    ignored_names: frozenset = frozenset(),
) -> Mapping[str, ListingRecord]:
    """
    Scan a directory tree and build the listing for every directory.

    Filesystem errors are not caught: if a directory or entry cannot be read,
    publishing it would fail the same way, so the scan aborts.

    Args:
        root: Directory to scan
        excluded_prefix: Entries starting with this are skipped entirely
        hidden_prefix: Entries starting with this are not listed or counted
        index_name: File name that suppresses the generated listing
        ignored_names: Extra names to skip entirely

    Returns:
        Read-only mapping of listing id to ListingRecord, children before parents

    Raises:
        NotADirectoryError: If root is not a directory
        OSError: If any directory or entry cannot be read
    """
    root_path = Path(root)
    if not root_path.is_dir():
        raise NotADirectoryError(f"Invalid directory: {root}")

    records: Dict[str, ListingRecord] = {}

    def scan_dir(path: Path, relative_path: str) -> Optional[int]:
        """Scan one directory; return its retained size, or None if it has no content"""
        children: List[FileEntry] = []
        total_size = 0
        has_hidden_content = False
        has_index = False

        with os.scandir(path) as it:
            items = sorted(it, key=lambda item: item.name)

        for item in items:
            if item.name.startswith(excluded_prefix) or item.name in ignored_names:
                logger.debug(f"Skipping excluded entry: {item.path}")
                continue

            is_hidden = item.name.startswith(hidden_prefix)
            is_directory = item.is_dir(follow_symlinks=False)
            is_file = item.is_file(follow_symlinks=False)

            # Symlinks, sockets, fifos and devices are not published
            if not is_directory and not is_file:
                logger.debug(f"Skipping special entry: {item.path}")
                continue

            stats = item.stat(follow_symlinks=False)

            if is_directory:
                size = scan_dir(Path(item.path), f"{relative_path}/{item.name}")
                # Hidden directories get their own page but no link from the parent
                if is_hidden:
                    if size is not None:
                        has_hidden_content = True
                    continue
                if size is None:
                    continue
                children.append(FileEntry(
                    kind="directory",
                    name=item.name,
                    size=size,
                    modified=_mtime(stats)
                ))
                total_size += size
            else:
                if item.name == index_name:
                    has_index = True
                if is_hidden:
                    has_hidden_content = True
                    continue
                children.append(FileEntry(
                    kind="file",
                    name=item.name,
                    size=stats.st_size,
                    modified=_mtime(stats)
                ))
                total_size += stats.st_size

        if not children and not has_hidden_content and not has_index:
            return None

        if has_index:
            logger.debug(f"Listing suppressed by {index_name}: {path}")
        else:
            children.sort(key=entry_sort_key)
            listing_id = to_listing_id(relative_path)
            records[listing_id] = ListingRecord(id=listing_id, children=tuple(children))

        return total_size

    scan_dir(root_path, "")
    return MappingProxyType(records)


class ListingService:
    """
    Holds the listing collection for the configured public directory.

    The collection is computed once and is read-only afterwards.
    """

    def __init__(self):
        self._listings: Optional[Mapping[str, ListingRecord]] = None
        self.root: Optional[Path] = None
        self.generated_at: Optional[datetime] = None

    def load(self, root, settings: Optional[Settings] = None) -> Mapping[str, ListingRecord]:
        """
        Scan a directory and store the resulting collection.

        Args:
            root: Directory to scan
            settings: Scan policy to apply (defaults to the configured settings)

        Returns:
            The listing collection
        """
        if settings is None:
            settings = get_settings()
        start_time = time.time()
        listings = scan_listings(root, **settings.scan_options())

        self._listings = listings
        self.root = Path(root)
        self.generated_at = datetime.now(timezone.utc)

        process_time = (time.time() - start_time) * 1000  # ms
        logger.info(f"Scanned {root}: {len(listings)} listings in {process_time:.2f}ms")
        return listings

    @property
    def listings(self) -> Mapping[str, ListingRecord]:
        if self._listings is None:
            settings = get_settings()
            self.load(settings.public_dir, settings)
        return self._listings

    def get(self, listing_id: str) -> Optional[ListingRecord]:
        return self.listings.get(listing_id)

    def reset(self):
        """Forget the current collection so the next access rescans"""
        self._listings = None
        self.root = None
        self.generated_at = None


# Global listing service instance
listing_service = ListingService()
