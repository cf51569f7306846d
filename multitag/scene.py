"""
Minimal host scene: a tree of named objects with lifecycle hooks.

Stands in for the engine's object hierarchy. It supplies the two things
the registry needs from a host: a parent accessor and a teardown signal.
"""
import logging
from typing import Any, Callable, Dict, Iterator, List, Optional

from multitag.hooks.base import LifecycleHook

logger = logging.getLogger(__name__)

PATH_SEPARATOR = "/"


class SceneObject:
    """A node in the scene tree."""

    def __init__(self, name: str, parent: Optional["SceneObject"] = None):
        if not name or PATH_SEPARATOR in name:
            raise ValueError(f"Invalid object name: {name!r}")
        self.name = name
        self.parent: Optional[SceneObject] = None
        self.children: List[SceneObject] = []
        self.components: List[LifecycleHook] = []
        self.active = True
        if parent is not None:
            self.set_parent(parent)

    @property
    def path(self) -> str:
        parts = []
        node: Optional[SceneObject] = self
        while node is not None:
            parts.append(node.name)
            node = node.parent
        return PATH_SEPARATOR.join(reversed(parts))

    @property
    def active_in_hierarchy(self) -> bool:
        node: Optional[SceneObject] = self
        while node is not None:
            if not node.active:
                return False
            node = node.parent
        return True

    def set_parent(self, parent: Optional["SceneObject"]) -> None:
        """
        Re-parent this object.

        Raises:
            ValueError: If ``parent`` is this object or one of its descendants
        """
        node = parent
        while node is not None:
            if node is self:
                raise ValueError(f"Cannot parent {self.path!r} under its own descendant")
            node = node.parent

        if self.parent is not None:
            self.parent.children.remove(self)
        self.parent = parent
        if parent is not None:
            parent.children.append(self)
        self._sync_components()

    def add_component(self, component: LifecycleHook) -> LifecycleHook:
        """Attach a hook; it is enabled right away if the object is live."""
        self.components.append(component)
        if self.active_in_hierarchy:
            component.enable(self)
        return component

    def get_component(self, kind: type) -> Optional[LifecycleHook]:
        for component in self.components:
            if isinstance(component, kind):
                return component
        return None

    def set_active(self, active: bool) -> None:
        """Toggle this object; hooks in the subtree follow the effective state."""
        self.active = active
        self._sync_components()

    def _sync_components(self) -> None:
        """Enable or disable hooks in the subtree to match the effective state."""
        for node in self.walk():
            live = node.active_in_hierarchy
            for component in node.components:
                if live:
                    component.enable(node)
                else:
                    component.disable(node)

    def walk(self) -> Iterator["SceneObject"]:
        """This object and all descendants, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def __repr__(self) -> str:
        return f"SceneObject({self.path!r})"


def parent_of(obj: Any) -> Optional[Any]:
    """Parent accessor for the registry."""
    return getattr(obj, "parent", None)


class Scene:
    """
    A set of root objects with path lookup and an unload signal.

    Usage:
        scene = Scene("level1")
        scene.on_unloaded(multitag.on_scene_unloaded)
        sword = scene.create("player/hand/sword")
    """

    def __init__(self, name: str = "scene"):
        self.name = name
        self.roots: Dict[str, SceneObject] = {}
        self._unload_listeners: List[Callable[["Scene"], None]] = []

    def create(self, path: str) -> SceneObject:
        """Return the object at ``path``, creating it and any missing parents."""
        names = [n for n in path.split(PATH_SEPARATOR) if n]
        if not names:
            raise ValueError(f"Invalid object path: {path!r}")

        node = self._root(names[0])
        if node is None:
            node = self.roots[names[0]] = SceneObject(names[0])
        for name in names[1:]:
            child = next((c for c in node.children if c.name == name), None)
            if child is None:
                child = SceneObject(name, parent=node)
            node = child
        return node

    def find(self, path: str) -> Optional[SceneObject]:
        """Return the object at ``path``, or None."""
        names = [n for n in path.split(PATH_SEPARATOR) if n]
        if not names:
            return None
        node = self._root(names[0])
        for name in names[1:]:
            if node is None:
                return None
            node = next((c for c in node.children if c.name == name), None)
        return node

    def move(self, obj: SceneObject, parent: Optional[SceneObject]) -> None:
        """
        Re-parent ``obj``, keeping the root table in step.

        Raises:
            ValueError: On a cycle, or if another root already has ``obj``'s name
        """
        if parent is None:
            existing = self._root(obj.name)
            if existing is not None and existing is not obj:
                raise ValueError(f"A root named {obj.name!r} already exists")
        obj.set_parent(parent)
        if parent is None:
            self.roots[obj.name] = obj
        elif self.roots.get(obj.name) is obj:
            del self.roots[obj.name]

    def objects(self) -> Iterator[SceneObject]:
        for name in list(self.roots):
            root = self._root(name)
            if root is not None:
                yield from root.walk()

    def _root(self, name: str) -> Optional[SceneObject]:
        """Root lookup; entries re-parented behind the scene's back are dropped."""
        root = self.roots.get(name)
        if root is not None and root.parent is not None:
            del self.roots[name]
            return None
        return root

    def on_unloaded(self, callback: Callable[["Scene"], None]) -> None:
        self._unload_listeners.append(callback)

    def unload(self) -> None:
        """Disable every hook, drop the tree, then notify listeners."""
        for obj in list(self.objects()):
            for component in obj.components:
                component.disable(obj)
        self.roots.clear()
        logger.info("Scene %r unloaded", self.name)
        for callback in self._unload_listeners:
            callback(self)
