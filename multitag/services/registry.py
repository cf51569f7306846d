"""
Multitag service: the single owned registry for one scene.

Composes the tag index, hierarchy queries and (in editor mode) the tag name
cache behind one object that the host constructs once and wires into its
lifecycle and teardown signals.
"""
import logging
from pathlib import Path
from typing import Any, Iterable, List, Optional, Tuple

from .hierarchy import HierarchyQuery, ParentAccessor, Predicate
from .name_cache import TagNameCache
from .tag_index import TagIndex

logger = logging.getLogger(__name__)


class Multitag:
    """
    Multi-tag registry for scene objects.

    Flow:
    1. Host builds one instance per scene with its parent accessor
    2. Components call register_tags / unregister_tags on enable / disable
    3. Gameplay code queries tags and ancestors
    4. Host calls on_scene_unloaded when the scene goes away

    Usage:
        multitag = Multitag(parent_of=scene_parent_of, cache_path=data_dir / "tagStore.json")
        scene.on_unloaded(multitag.on_scene_unloaded)
    """

    def __init__(
        self,
        parent_of: ParentAccessor,
        cache_path: Optional[Path] = None,
        editor_mode: bool = True
    ):
        """
        Initialize the service.

        Args:
            parent_of: Returns an object's parent, or None at the root
            cache_path: Tag name cache file; required for editor mode
            editor_mode: If False, the tag name cache is not created and
                name operations do nothing
        """
        self.index = TagIndex()
        self.hierarchy = HierarchyQuery(self.index, parent_of)
        self.editor_mode = editor_mode and cache_path is not None
        self.name_cache: Optional[TagNameCache] = (
            TagNameCache(cache_path) if self.editor_mode else None
        )

    # -- Lifecycle --

    def on_scene_unloaded(self, scene: Any = None) -> None:
        """Teardown hook: drop every assignment."""
        logger.debug("Scene %r unloaded, clearing %d tagged objects", scene, len(self.index))
        self.index.clear()

    # -- Index --

    def register_tags(self, obj: Any, tags: Iterable[str]) -> None:
        self.index.register_tags(obj, tags)

    def register_tag(self, obj: Any, tag: str) -> None:
        self.index.register_tag(obj, tag)

    def unregister_tags(self, obj: Any, tags: Iterable[str]) -> None:
        self.index.unregister_tags(obj, tags)

    def unregister_tag(self, obj: Any, tag: str) -> None:
        self.index.unregister_tag(obj, tag)

    def unregister_all(self, obj: Any) -> None:
        self.index.unregister_all(obj)

    def tags_of(self, obj: Any) -> List[str]:
        return self.index.tags_of(obj)

    def objects_with_tag(self, tag: str) -> List[Any]:
        return self.index.objects_with_tag(tag)

    def has_tag(self, obj: Any, tag: str) -> bool:
        return self.index.has_tag(obj, tag)

    def has_any_tag(self, obj: Any, tags: Iterable[str]) -> bool:
        return self.index.has_any_tag(obj, tags)

    def has_all_tags(self, obj: Any, tags: Iterable[str]) -> bool:
        return self.index.has_all_tags(obj, tags)

    def clear(self) -> None:
        self.index.clear()

    # -- Hierarchy --

    def first_ancestor_matching(self, obj: Any, predicate: Predicate) -> Optional[Any]:
        return self.hierarchy.first_ancestor_matching(obj, predicate)

    def all_ancestors_matching(self, obj: Any, predicate: Predicate) -> List[Any]:
        return self.hierarchy.all_ancestors_matching(obj, predicate)

    def first_parent_with_tag(self, obj: Any, tag: str) -> Optional[Any]:
        return self.hierarchy.first_parent_with_tag(obj, tag)

    def first_parent_with_all_tags(self, obj: Any, tags: Iterable[str]) -> Optional[Any]:
        return self.hierarchy.first_parent_with_all_tags(obj, tags)

    def first_parent_with_any_tags(self, obj: Any, tags: Iterable[str]) -> Optional[Any]:
        return self.hierarchy.first_parent_with_any_tags(obj, tags)

    def all_parents_with_tag(self, obj: Any, tag: str) -> List[Any]:
        return self.hierarchy.all_parents_with_tag(obj, tag)

    def all_parents_with_all_tags(self, obj: Any, tags: Iterable[str]) -> List[Any]:
        return self.hierarchy.all_parents_with_all_tags(obj, tags)

    def all_parents_with_any_tags(self, obj: Any, tags: Iterable[str]) -> List[Any]:
        return self.hierarchy.all_parents_with_any_tags(obj, tags)

    # -- Tag name cache (editor only) --

    def add_names(self, names: Iterable[str]) -> None:
        if self.name_cache is None:
            logger.debug("Tag name cache disabled, ignoring add_names")
            return
        self.name_cache.add_names(names)

    def destroy_name(self, name: str) -> None:
        if self.name_cache is None:
            logger.debug("Tag name cache disabled, ignoring destroy_name(%r)", name)
            return
        self.name_cache.destroy_name(name)

    def all_names(self) -> Tuple[str, ...]:
        if self.name_cache is None:
            return ()
        return self.name_cache.all_names()
