"""
Hierarchy-aware tag queries.

Walks a host-supplied parent chain (object -> parent, or None at the root)
and tests each ancestor against a TagIndex. The starting object itself is
never tested. The parent chain is assumed acyclic; that is the host's
invariant to keep, not something checked here.
"""
from typing import Any, Callable, Iterable, Iterator, List, Optional

from .tag_index import TagIndex

ParentAccessor = Callable[[Any], Optional[Any]]
Predicate = Callable[[Any], bool]


class HierarchyQuery:
    """
    Nearest / all ancestor lookups over a TagIndex.

    Usage:
        query = HierarchyQuery(index, parent_of=lambda o: o.parent)
        query.first_ancestor_matching(hand, query.with_tag("player"))
        query.all_parents_with_any_tags(hand, ["armor", "weapon"])
    """

    def __init__(self, index: TagIndex, parent_of: ParentAccessor):
        self.index = index
        self.parent_of = parent_of

    def ancestors(self, obj: Any) -> Iterator[Any]:
        """Yield the parent chain of ``obj``, nearest first."""
        current = self.parent_of(obj)
        while current is not None:
            yield current
            current = self.parent_of(current)

    def first_ancestor_matching(self, obj: Any, predicate: Predicate) -> Optional[Any]:
        """Return the nearest ancestor satisfying ``predicate``, or None."""
        for ancestor in self.ancestors(obj):
            if predicate(ancestor):
                return ancestor
        return None

    def all_ancestors_matching(self, obj: Any, predicate: Predicate) -> List[Any]:
        """Return every ancestor satisfying ``predicate``, nearest first."""
        return [ancestor for ancestor in self.ancestors(obj) if predicate(ancestor)]

    # -- Predicates --

    def with_tag(self, tag: str) -> Predicate:
        return lambda o: self.index.has_tag(o, tag)

    def with_all_tags(self, tags: Iterable[str]) -> Predicate:
        tags = list(tags)
        return lambda o: self.index.has_all_tags(o, tags)

    def with_any_tags(self, tags: Iterable[str]) -> Predicate:
        tags = list(tags)
        return lambda o: self.index.has_any_tag(o, tags)

    # -- Shortcuts --

    def first_parent_with_tag(self, obj: Any, tag: str) -> Optional[Any]:
        return self.first_ancestor_matching(obj, self.with_tag(tag))

    def first_parent_with_all_tags(self, obj: Any, tags: Iterable[str]) -> Optional[Any]:
        return self.first_ancestor_matching(obj, self.with_all_tags(tags))

    def first_parent_with_any_tags(self, obj: Any, tags: Iterable[str]) -> Optional[Any]:
        return self.first_ancestor_matching(obj, self.with_any_tags(tags))

    def all_parents_with_tag(self, obj: Any, tag: str) -> List[Any]:
        return self.all_ancestors_matching(obj, self.with_tag(tag))

    def all_parents_with_all_tags(self, obj: Any, tags: Iterable[str]) -> List[Any]:
        return self.all_ancestors_matching(obj, self.with_all_tags(tags))

    def all_parents_with_any_tags(self, obj: Any, tags: Iterable[str]) -> List[Any]:
        return self.all_ancestors_matching(obj, self.with_any_tags(tags))
