"""
Persistent list of known tag names.

Used only to populate editor dropdowns; it is independent of which tags are
live on which objects. The record is a single JSON file:

    {"TagList": ["boss", "enemy", "pickup"]}

A missing file is the first-run case and loads as an empty list. Write
failures are logged and swallowed so losing presentation metadata can never
take the host down.
"""
import json
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)

# Field name inside the JSON record
TAG_LIST_FIELD = "TagList"

DEFAULT_FILENAME = "tagStore.json"


class TagNameCache:
    """
    Sorted, deduplicated tag-name list backed by a JSON file.

    Every mutation merges with what is currently on disk, writes the result
    back atomically, then reloads, so two editors sharing a file don't drop
    each other's additions.
    """

    def __init__(self, cache_path: Path):
        """
        Initialize the cache and load it from disk.

        Args:
            cache_path: Path to the JSON record
        """
        self.cache_path = Path(cache_path)
        self._names: List[str] = []
        self.load()

    def load(self) -> None:
        """Replace the in-memory list with the on-disk record."""
        names = self._read()
        self._names = names if names is not None else []

    def add_names(self, names: Iterable[str]) -> None:
        """
        Add names to the persistent list.

        Args:
            names: Tag names to add; blank ones are ignored
        """
        incoming = [n.strip() for n in names if isinstance(n, str) and n.strip()]
        on_disk = self._read()
        if on_disk is None:
            logger.info("No tag cache found at %s, creating one", self.cache_path)
            on_disk = []

        merged = sorted(set(on_disk) | set(self._names) | set(incoming))
        if self._write(merged):
            self.load()
        else:
            self._names = merged

    def destroy_name(self, name: str) -> None:
        """
        Remove a name from the persistent list.

        Args:
            name: Tag name to remove; absent names are ignored
        """
        on_disk = self._read()
        if on_disk is None:
            # Nothing persisted yet, nothing to delete
            return
        if name not in on_disk:
            self.load()
            return

        remaining = [n for n in on_disk if n != name]
        if self._write(remaining):
            self.load()
        else:
            self._names = [n for n in self._names if n != name]

    def all_names(self) -> Tuple[str, ...]:
        """Current sorted names (read-only)."""
        return tuple(self._names)

    def __contains__(self, name: str) -> bool:
        return name in self._names

    def __len__(self) -> int:
        return len(self._names)

    def _read(self) -> Optional[List[str]]:
        """
        Read the record from disk.

        Returns:
            Sorted, deduplicated names, or None if the file doesn't exist
        """
        if not self.cache_path.exists():
            return None
        try:
            with open(self.cache_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            # Corrupted cache - start fresh
            logger.warning("Tag cache at %s is unreadable, treating as empty: %s", self.cache_path, e)
            return []

        names = data.get(TAG_LIST_FIELD) if isinstance(data, dict) else None
        if not isinstance(names, list):
            logger.warning("Tag cache at %s has no %s list, treating as empty", self.cache_path, TAG_LIST_FIELD)
            return []
        return sorted({n for n in names if isinstance(n, str) and n})

    def _write(self, names: List[str]) -> bool:
        """
        Persist the record atomically.

        Returns:
            True on success, False if the write failed
        """
        temp_path = self.cache_path.with_suffix('.tmp')
        try:
            self.cache_path.parent.mkdir(parents=True, exist_ok=True)
            # Write to temp file then rename for atomicity
            with open(temp_path, 'w', encoding='utf-8') as f:
                json.dump({TAG_LIST_FIELD: names}, f, indent=2, ensure_ascii=False)
            temp_path.replace(self.cache_path)
        except OSError as e:
            logger.error("Failed to write tag cache to %s: %s", self.cache_path, e)
            if temp_path.exists():
                temp_path.unlink()
            return False
        return True
