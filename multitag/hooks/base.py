"""Base class for object lifecycle hooks.

A hook is attached to a scene object and is told when that object becomes
active or inactive. The host calls ``enable()`` / ``disable()``; the hook
turns those into ``on_activate()`` / ``on_deactivate()`` exactly once per
state change.

Usage:
    from multitag.hooks.base import LifecycleHook

    class LoggingHook(LifecycleHook):
        name = "logging"

        def on_activate(self, obj, tags):
            print("up", obj, tags)

        def on_deactivate(self, obj, tags):
            print("down", obj, tags)
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Optional

from multitag.services.registry import Multitag

logger = logging.getLogger(__name__)


class LifecycleHook(ABC):
    """Base class for per-object lifecycle hooks.

    Subclass this and implement ``on_activate()`` and ``on_deactivate()``.
    """

    name: str = "unnamed-hook"

    def __init__(self, tags: Optional[Iterable[str]] = None):
        self.tags: List[str] = list(tags or [])
        self.enabled = False

    @abstractmethod
    def on_activate(self, obj: Any, tags: List[str]) -> None:
        """Called when ``obj`` becomes active.

        Args:
            obj: The host object this hook is attached to.
            tags: The hook's tag list at activation time.
        """
        ...

    @abstractmethod
    def on_deactivate(self, obj: Any, tags: List[str]) -> None:
        """Called when ``obj`` becomes inactive."""
        ...

    def enable(self, obj: Any) -> None:
        if self.enabled:
            return
        self.enabled = True
        logger.debug("Hook %r activating on %r with %s", self.name, obj, self.tags)
        self.on_activate(obj, list(self.tags))

    def disable(self, obj: Any) -> None:
        if not self.enabled:
            return
        self.enabled = False
        logger.debug("Hook %r deactivating on %r with %s", self.name, obj, self.tags)
        self.on_deactivate(obj, list(self.tags))


class MultitagComponent(LifecycleHook):
    """Registers an object's tag list with a Multitag service while active.

    At most one per object; the host is expected to enforce that.
    """

    name = "multitag"

    def __init__(self, multitag: Multitag, tags: Optional[Iterable[str]] = None):
        super().__init__(tags)
        self.multitag = multitag

    def on_activate(self, obj: Any, tags: List[str]) -> None:
        self.multitag.register_tags(obj, tags)

    def on_deactivate(self, obj: Any, tags: List[str]) -> None:
        if not tags:
            return
        self.multitag.unregister_tags(obj, tags)
