"""
Inspector model for editing a component's tag list.

Holds the editing rules of the tag inspector without any drawing code:
what the dropdowns offer, how typed-in tags are accepted, and how entries
are registered into or destroyed from the tag name cache. When the
component is live, edits are pushed straight into the index so the
registry never drifts from the component's list.
"""
from typing import Any, List

from multitag.hooks.base import MultitagComponent


class TagEditor:
    """Edits one object's MultitagComponent."""

    def __init__(self, obj: Any, component: MultitagComponent):
        self.obj = obj
        self.component = component

    @property
    def multitag(self):
        return self.component.multitag

    @property
    def tags(self) -> List[str]:
        return self.component.tags

    def add_tag(self, text: str) -> bool:
        """
        Append a typed-in tag.

        Args:
            text: Raw text from the input field; surrounding whitespace is trimmed

        Returns:
            True if a tag was added
        """
        tag = (text or "").strip()
        if not tag:
            return False
        self.tags.append(tag)
        if self.component.enabled:
            self.multitag.register_tag(self.obj, tag)
        return True

    def remove_tag(self, index: int) -> bool:
        """Remove the entry at ``index``; out-of-range indexes are ignored."""
        if not 0 <= index < len(self.tags):
            return False
        tag = self.tags.pop(index)
        if self.component.enabled and tag not in self.tags:
            self.multitag.unregister_tag(self.obj, tag)
        return True

    def replace_tag(self, index: int, name: str) -> bool:
        """Swap the entry at ``index`` for ``name`` (dropdown selection)."""
        if not 0 <= index < len(self.tags) or not name:
            return False
        old = self.tags[index]
        if old == name:
            return False
        self.tags[index] = name
        if self.component.enabled:
            if old not in self.tags:
                self.multitag.unregister_tag(self.obj, old)
            self.multitag.register_tag(self.obj, name)
        return True

    def selection_options(self, index: int) -> List[str]:
        """Dropdown entries for the row at ``index``.

        The cached names, plus the row's own tag at the end if the cache
        doesn't know it.
        """
        options = list(self.multitag.all_names())
        if 0 <= index < len(self.tags) and self.tags[index] not in options:
            options.append(self.tags[index])
        return options

    def add_choices(self) -> List[str]:
        """Cached names not already on the component."""
        return [n for n in self.multitag.all_names() if n not in self.tags]

    def is_registered(self, index: int) -> bool:
        return 0 <= index < len(self.tags) and self.tags[index] in self.multitag.all_names()

    def register_name(self, index: int) -> None:
        """Add the row's tag to the tag name cache."""
        if 0 <= index < len(self.tags):
            self.multitag.add_names([self.tags[index]])

    def unregister_name(self, index: int) -> None:
        """Destroy the row's tag in the tag name cache."""
        if 0 <= index < len(self.tags):
            self.multitag.destroy_name(self.tags[index])
