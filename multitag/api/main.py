"""
Multitag editor API service.

FastAPI application exposing a live scene, its tag registry and the tag
name cache, so editor tooling can inspect and edit tags over HTTP.
"""
# Load .env file if present (for local development)
from dotenv import load_dotenv
load_dotenv()

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel

from ..editor import TagEditor
from ..hooks.base import MultitagComponent
from ..scene import Scene, SceneObject, parent_of
from ..services.name_cache import DEFAULT_FILENAME
from ..services.registry import Multitag

logger = logging.getLogger(__name__)


def env_flag(name: str, default: bool) -> bool:
    """Parse a boolean environment variable."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# Global instances
multitag: Optional[Multitag] = None
scene: Optional[Scene] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Builds the scene and registry on startup; unloads the scene on shutdown.
    """
    global multitag, scene

    data_dir = Path(os.getenv('MULTITAG_DATA_DIR', '/tmp/multitag'))
    editor_mode = env_flag('MULTITAG_EDITOR_MODE', True)

    scene = Scene(os.getenv('MULTITAG_SCENE', 'main'))
    multitag = Multitag(
        parent_of=parent_of,
        cache_path=data_dir / DEFAULT_FILENAME,
        editor_mode=editor_mode
    )
    scene.on_unloaded(multitag.on_scene_unloaded)
    logger.info("Multitag ready (editor_mode=%s, data_dir=%s)", multitag.editor_mode, data_dir)

    yield

    # Cleanup
    scene.unload()


app = FastAPI(
    title="Multitag Editor API",
    description="REST API for assigning and querying multiple tags on scene objects",
    version="1.0.0",
    lifespan=lifespan
)


# Request/Response Models

class NamesRequest(BaseModel):
    """Request model for adding names to the tag name cache."""
    names: list[str]


class NamesResponse(BaseModel):
    """Response model for the tag name cache."""
    names: list[str]
    editor_mode: bool


class CreateObjectRequest(BaseModel):
    """Request model for creating a tagged scene object."""
    path: str
    tags: list[str] = []
    active: bool = True


class TagsRequest(BaseModel):
    """Request model for adding tags to an object."""
    tags: list[str]


class ObjectTagsResponse(BaseModel):
    """Response model for an object's tags."""
    path: str
    tags: list[str]
    component_tags: list[str]
    active: bool


class TaggedObjectsResponse(BaseModel):
    """Response model for a tag lookup."""
    tag: str
    paths: list[str]


class AncestorsResponse(BaseModel):
    """Response model for hierarchy queries."""
    path: str
    tags: list[str]
    match: str
    paths: list[str]


class HealthResponse(BaseModel):
    """Response model for health check."""
    status: str
    tagged_objects: int
    cached_names: int
    editor_mode: bool


# Helpers

def get_object(path: str) -> SceneObject:
    obj = scene.find(path)
    if obj is None:
        raise HTTPException(status_code=404, detail=f"No object at path: {path}")
    return obj


def get_editor(obj: SceneObject) -> TagEditor:
    component = obj.get_component(MultitagComponent)
    if component is None:
        component = obj.add_component(MultitagComponent(multitag))
    return TagEditor(obj, component)


def object_tags_response(obj: SceneObject) -> ObjectTagsResponse:
    component = obj.get_component(MultitagComponent)
    return ObjectTagsResponse(
        path=obj.path,
        tags=multitag.tags_of(obj),
        component_tags=list(component.tags) if component else [],
        active=obj.active_in_hierarchy
    )


def names_response() -> NamesResponse:
    return NamesResponse(names=list(multitag.all_names()), editor_mode=multitag.editor_mode)


# API Endpoints

@app.get("/api/v1/names", response_model=NamesResponse)
async def list_names():
    """List the tag name cache."""
    return names_response()


@app.post("/api/v1/names", response_model=NamesResponse)
async def add_names(req: NamesRequest):
    """
    Add names to the tag name cache.

    Args:
        req: NamesRequest with names to add

    Returns:
        NamesResponse with the updated, sorted list
    """
    multitag.add_names(req.names)
    return names_response()


@app.delete("/api/v1/names/{name}", response_model=NamesResponse)
async def destroy_name(name: str):
    """Remove a name from the tag name cache (no-op if absent)."""
    multitag.destroy_name(name)
    return names_response()


@app.post("/api/v1/objects", response_model=ObjectTagsResponse)
async def create_object(req: CreateObjectRequest):
    """
    Create a scene object (and missing parents) carrying a tag component.

    Args:
        req: CreateObjectRequest with path, initial tags and active flag

    Returns:
        ObjectTagsResponse for the new object
    """
    try:
        obj = scene.create(req.path)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    editor = get_editor(obj)
    for tag in req.tags:
        editor.add_tag(tag)
    obj.set_active(req.active)
    return object_tags_response(obj)


@app.get("/api/v1/objects/{path:path}/tags", response_model=ObjectTagsResponse)
async def get_object_tags(path: str):
    """Get an object's registered and authored tags."""
    return object_tags_response(get_object(path))


@app.post("/api/v1/objects/{path:path}/tags", response_model=ObjectTagsResponse)
async def add_object_tags(path: str, req: TagsRequest):
    """Append tags to an object's component."""
    obj = get_object(path)
    editor = get_editor(obj)
    for tag in req.tags:
        editor.add_tag(tag)
    return object_tags_response(obj)


@app.delete("/api/v1/objects/{path:path}/tags/{tag}", response_model=ObjectTagsResponse)
async def remove_object_tag(path: str, tag: str):
    """
    Remove a tag from an object's component.

    Raises:
        HTTPException: 404 if the object or the tag is not found
    """
    obj = get_object(path)
    component = obj.get_component(MultitagComponent)
    if component is None or tag not in component.tags:
        raise HTTPException(status_code=404, detail=f"Object {path} has no tag {tag}")
    editor = TagEditor(obj, component)
    editor.remove_tag(editor.tags.index(tag))
    return object_tags_response(obj)


@app.get("/api/v1/objects/{path:path}/ancestors", response_model=AncestorsResponse)
async def get_ancestors(
    path: str,
    tags: List[str] = Query(...),
    match: str = Query("all", pattern="^(all|any)$"),
    first: bool = False
):
    """
    Find ancestors of an object carrying the given tags.

    Args:
        path: Object path
        tags: Tags to look for
        match: "all" to require every tag, "any" for at least one
        first: Only return the nearest match

    Returns:
        AncestorsResponse with matching paths, nearest first
    """
    obj = get_object(path)
    hierarchy = multitag.hierarchy
    predicate = hierarchy.with_all_tags(tags) if match == "all" else hierarchy.with_any_tags(tags)

    if first:
        found = multitag.first_ancestor_matching(obj, predicate)
        matches = [found] if found is not None else []
    else:
        matches = multitag.all_ancestors_matching(obj, predicate)

    return AncestorsResponse(path=obj.path, tags=tags, match=match, paths=[m.path for m in matches])


@app.get("/api/v1/tags/{tag}/objects", response_model=TaggedObjectsResponse)
async def get_tagged_objects(tag: str):
    """List the paths of every live object carrying ``tag``."""
    return TaggedObjectsResponse(tag=tag, paths=[o.path for o in multitag.objects_with_tag(tag)])


@app.post("/api/v1/scene/unload")
async def unload_scene():
    """Unload the scene, clearing all tag assignments."""
    scene.unload()
    return {"status": "unloaded", "scene": scene.name}


@app.get("/health", response_model=HealthResponse)
async def health():
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        tagged_objects=len(multitag.index) if multitag else 0,
        cached_names=len(multitag.all_names()) if multitag else 0,
        editor_mode=multitag.editor_mode if multitag else False
    )


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Multitag Editor API",
        "version": "1.0.0",
        "editor_mode": multitag.editor_mode if multitag else False,
        "endpoints": {
            "list_names": "GET /api/v1/names",
            "add_names": "POST /api/v1/names",
            "destroy_name": "DELETE /api/v1/names/{name}",
            "create_object": "POST /api/v1/objects",
            "object_tags": "GET /api/v1/objects/{path}/tags",
            "add_object_tags": "POST /api/v1/objects/{path}/tags",
            "remove_object_tag": "DELETE /api/v1/objects/{path}/tags/{tag}",
            "ancestors": "GET /api/v1/objects/{path}/ancestors",
            "tagged_objects": "GET /api/v1/tags/{tag}/objects",
            "unload_scene": "POST /api/v1/scene/unload",
            "health": "GET /health",
        }
    }
