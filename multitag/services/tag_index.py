"""
Bidirectional tag index for scene objects.

Keeps two mappings in sync:
- object -> ordered tag list (its Tag Set)
- tag -> ordered object list (its Object Set)

Objects are keyed by identity, not equality, so any host object can be
registered regardless of how it implements ``__eq__``/``__hash__``.

Nothing in here raises on benign misuse (re-registering, removing absent
tags, querying unknown keys); those cases degrade to a no-op or an empty
result and are logged.
"""
import logging
from typing import Any, Dict, Iterable, List

logger = logging.getLogger(__name__)


class TagIndex:
    """
    In-memory object <-> tag registry.

    Usage:
        index = TagIndex()
        index.register_tags(goblin, ["enemy", "melee"])
        index.objects_with_tag("enemy")   # [goblin]
        index.has_all_tags(goblin, ["enemy", "melee"])   # True

    All returned collections are fresh lists; mutating them never touches
    index state.
    """

    def __init__(self):
        # id(obj) -> (obj, tags). The object reference pins the id.
        self._tag_store: Dict[int, tuple[Any, List[str]]] = {}
        # tag -> {id(obj): obj}, insertion ordered
        self._object_store: Dict[str, Dict[int, Any]] = {}

    # -- Registration --

    def register_tags(self, obj: Any, tags: Iterable[str]) -> None:
        """
        Add tags to an object, creating its entry if needed.

        Union semantics: tags already on the object are left alone, so
        calling this repeatedly with the same tags is harmless.

        Args:
            obj: Host object to tag
            tags: Tags to add
        """
        new_tags = self._clean_tag_list(list(tags))
        if not new_tags:
            return

        key = id(obj)
        entry = self._tag_store.get(key)
        current = entry[1] if entry else []
        added = [t for t in new_tags if t not in current]
        if not added:
            return

        self._tag_store[key] = (obj, current + added)

        for tag in added:
            self._object_store.setdefault(tag, {})[key] = obj

    def register_tag(self, obj: Any, tag: str) -> None:
        """Add a single tag to an object."""
        self.register_tags(obj, [tag])

    def unregister_tags(self, obj: Any, tags: Iterable[str]) -> None:
        """
        Remove tags from an object.

        Objects left with no tags are dropped from the index entirely.
        Object Sets that become empty are kept, so the tag still resolves
        to an empty result.

        Args:
            obj: Host object to untag
            tags: Tags to remove; ones the object doesn't carry are ignored
        """
        tags = list(tags)
        key = id(obj)
        entry = self._tag_store.get(key)

        if entry is None:
            logger.warning("Attempted to remove tags %s from object %r which didn't have any", tags, obj)
        else:
            remaining = [t for t in entry[1] if t not in tags]
            if remaining:
                self._tag_store[key] = (obj, remaining)
            else:
                del self._tag_store[key]

        for tag in tags:
            objects = self._object_store.get(tag)
            if objects is not None:
                objects.pop(key, None)

    def unregister_tag(self, obj: Any, tag: str) -> None:
        """Remove a single tag from an object."""
        self.unregister_tags(obj, [tag])

    def unregister_all(self, obj: Any) -> None:
        """Remove every tag from an object. Unknown objects are ignored."""
        key = id(obj)
        entry = self._tag_store.pop(key, None)
        if entry is None:
            return

        for tag in entry[1]:
            objects = self._object_store.get(tag)
            if objects is None:
                logger.warning(
                    "Tag %r was present in tag store but not object store; index is inconsistent", tag
                )
                continue
            objects.pop(key, None)

    def clear(self) -> None:
        """Wipe both mappings (scene teardown)."""
        self._tag_store.clear()
        self._object_store.clear()

    # -- Queries --

    def tags_of(self, obj: Any) -> List[str]:
        """Return a copy of the object's tags, or an empty list."""
        entry = self._tag_store.get(id(obj))
        return list(entry[1]) if entry else []

    def objects_with_tag(self, tag: str) -> List[Any]:
        """Return every object carrying ``tag``, or an empty list."""
        objects = self._object_store.get(tag)
        return list(objects.values()) if objects else []

    def has_tag(self, obj: Any, tag: str) -> bool:
        entry = self._tag_store.get(id(obj))
        return entry is not None and tag in entry[1]

    def has_any_tag(self, obj: Any, tags: Iterable[str]) -> bool:
        """True if the object carries at least one of ``tags``."""
        entry = self._tag_store.get(id(obj))
        if entry is None:
            return False
        return not set(entry[1]).isdisjoint(tags)

    def has_all_tags(self, obj: Any, tags: Iterable[str]) -> bool:
        """
        True if the object carries every one of ``tags``.

        An empty ``tags`` is vacuously true, even for unknown objects
        (intersection size 0 == candidate size 0).
        """
        candidates = set(tags)
        if not candidates:
            return True
        entry = self._tag_store.get(id(obj))
        if entry is None:
            return False
        return len(candidates.intersection(entry[1])) == len(candidates)

    def known_tags(self) -> List[str]:
        """Tags that have an Object Set, including now-empty ones."""
        return list(self._object_store)

    def known_objects(self) -> List[Any]:
        """Objects that currently carry at least one tag."""
        return [obj for obj, _ in self._tag_store.values()]

    def __len__(self) -> int:
        return len(self._tag_store)

    def __contains__(self, obj: Any) -> bool:
        return id(obj) in self._tag_store

    # -- Internals --

    @staticmethod
    def _clean_tag_list(tags: List[str]) -> List[str]:
        """
        Drop empty and duplicate entries from an incoming tag list, keeping order.

        A well-authored tag list never has either; when one does, it is
        fixed here and the incoming list is logged.
        """
        valid = [t for t in tags if isinstance(t, str) and t]
        if len(valid) != len(tags):
            logger.warning("Tag list had empty or non-string tags in it, dropping them. Bad tag list: %s", tags)
            tags = valid
        cleaned = list(dict.fromkeys(tags))
        if len(cleaned) != len(tags):
            logger.warning("Tag list had duplicates in it, fixing. Bad tag list: %s", tags)
        return cleaned
