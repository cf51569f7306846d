"""Service layer for multi-tag operations."""

from .hierarchy import HierarchyQuery
from .name_cache import TagNameCache
from .registry import Multitag
from .tag_index import TagIndex

__all__ = ["HierarchyQuery", "Multitag", "TagIndex", "TagNameCache"]
