"""
Shared fixtures for multitag tests.
"""
import pytest
import tempfile
from pathlib import Path

from multitag.scene import Scene, parent_of
from multitag.services.registry import Multitag
from multitag.services.tag_index import TagIndex


class Node:
    """Bare host object with a parent link."""

    def __init__(self, name, parent=None):
        self.name = name
        self.parent = parent

    def __repr__(self):
        return f"Node({self.name!r})"


@pytest.fixture
def temp_cache_dir():
    """Create temporary directory for cache files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def index():
    return TagIndex()


@pytest.fixture
def chain():
    """Parent chain A -> B -> C -> D, with D the root."""
    d = Node("D")
    c = Node("C", d)
    b = Node("B", c)
    a = Node("A", b)
    return a, b, c, d


@pytest.fixture
def multitag(temp_cache_dir):
    return Multitag(parent_of=parent_of, cache_path=temp_cache_dir / "tagStore.json")


@pytest.fixture
def scene(multitag):
    """Scene wired to the multitag teardown hook."""
    scene = Scene("test")
    scene.on_unloaded(multitag.on_scene_unloaded)
    return scene
