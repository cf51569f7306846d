"""Lifecycle hooks that connect host objects to the tag registry."""

from .base import LifecycleHook, MultitagComponent

__all__ = ["LifecycleHook", "MultitagComponent"]
