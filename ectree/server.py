"""FastAPI server for browsing an EC tree.

Endpoints are registered on an ``APIRouter`` so that a larger application
can mount them under a prefix. The standalone ``app`` object includes the
router directly and can be run on its own::

    uvicorn ectree.server:app --reload --port 8430
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, FastAPI, HTTPException
from pydantic import BaseModel

from ectree import __version__
from ectree.config import BuildConfig, DuplicatePolicy
from ectree.exceptions import DuplicateError, FormatError, MissingParentError
from ectree.hierarchy import ECNode, ECNumber, ECTree, ECTreeBuilder

logger = logging.getLogger(__name__)

router = APIRouter()

app = FastAPI(
    title="EC Tree API",
    description="Enzyme Commission classification lookup",
    version=__version__,
)

# In-memory state: the tree most recently built and its build settings
_state: dict[str, Any] = {
    "tree": None,
    "config": None,
}


# ============================================================================
# Pydantic Models for API
# ============================================================================


class BuildRequest(BaseModel):
    """Request model for building a tree.

    Exactly one of ``lines`` or ``text`` should be given. ``allow_wildcards``
    controls how EC numbers in later node requests are parsed.
    """

    lines: list[str] | None = None
    text: str | None = None
    duplicate_policy: DuplicatePolicy = DuplicatePolicy.KEEP_FIRST
    ordering: str = "prefix"
    strict: bool = False
    allow_wildcards: bool = True


class InsertRequest(BaseModel):
    ec_number: str
    description: str


# ============================================================================
# Helpers
# ============================================================================


def _get_tree() -> ECTree:
    tree = _state["tree"]
    if tree is None:
        raise HTTPException(status_code=404, detail="No tree loaded")
    return tree


def _parse(text: str) -> ECNumber:
    config = _state["config"] or BuildConfig()
    try:
        return ECNumber.parse(text, allow_wildcards=config.allow_wildcards)
    except FormatError as exc:
        raise HTTPException(status_code=400, detail=exc.to_dict()) from exc


def _summary(node: ECNode) -> dict[str, Any]:
    return node.to_dict(include_children=False)


# ============================================================================
# Endpoints
# ============================================================================


@router.get("/api/health")
async def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    tree = _state["tree"]
    return {
        "status": "ok",
        "version": __version__,
        "tree_loaded": tree is not None,
    }


@router.post("/api/ectree/build")
async def build_tree(request: BuildRequest) -> dict[str, Any]:
    """Build a tree from nomenclature lines or text and keep it."""
    if (request.lines is None) == (request.text is None):
        raise HTTPException(status_code=422, detail="Provide exactly one of lines or text")

    try:
        config = BuildConfig(
            duplicate_policy=request.duplicate_policy,
            ordering=request.ordering,
            strict=request.strict,
            allow_wildcards=request.allow_wildcards,
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    try:
        if request.lines is not None:
            tree = ECTreeBuilder.build_from_lines(request.lines, config)
        else:
            tree = ECTreeBuilder.build_from_text(request.text, config)
    except (DuplicateError, MissingParentError) as exc:
        raise HTTPException(status_code=409, detail=exc.to_dict()) from exc

    _state["tree"] = tree
    _state["config"] = config
    logger.info("Loaded EC tree with %d nodes", len(tree))
    return tree.get_statistics()


@router.get("/api/ectree")
async def get_tree() -> dict[str, Any]:
    """Get the whole tree as nested dictionaries."""
    return _get_tree().to_dict()


@router.get("/api/ectree/stats")
async def get_tree_stats() -> dict[str, Any]:
    return _get_tree().get_statistics()


@router.get("/api/ectree/nodes/{ec_number}")
async def get_node(ec_number: str) -> dict[str, Any]:
    """Get one node with its parent and direct children."""
    tree = _get_tree()
    node = tree.find_by_ec_number(_parse(ec_number))
    if node is None:
        raise HTTPException(status_code=404, detail=f"EC number {ec_number} not found")

    result = _summary(node)
    parent = node.parent
    result["parent"] = None if parent is None or parent.is_root else str(parent.ec_number)
    result["children"] = [_summary(child) for child in node.children]
    return result


@router.post("/api/ectree/nodes")
async def insert_node(request: InsertRequest) -> dict[str, Any]:
    """Insert a single node, validating that it is new and has a parent."""
    tree = _get_tree()
    number = _parse(request.ec_number)
    try:
        node = tree.insert(number, request.description)
    except (DuplicateError, MissingParentError) as exc:
        raise HTTPException(status_code=409, detail=exc.to_dict()) from exc
    return _summary(node)


@router.get("/api/ectree/search")
async def search_nodes(
    q: str, exact: bool = False, case_sensitive: bool = False
) -> dict[str, Any]:
    """Search node descriptions by substring or exact match."""
    tree = _get_tree()
    if exact:
        matches = tree.find_by_exact_description(q, case_sensitive=case_sensitive)
    else:
        matches = tree.find_by_description_substring(q, case_sensitive=case_sensitive)
    return {
        "query": q,
        "exact": exact,
        "count": len(matches),
        "results": [_summary(node) for node in matches],
    }


@router.get("/api/ectree/depth/{depth}")
async def nodes_at_depth(depth: int) -> dict[str, Any]:
    if depth < 0:
        raise HTTPException(status_code=400, detail="Depth must be non-negative")
    nodes = _get_tree().find_nodes_at_depth(depth)
    return {
        "depth": depth,
        "count": len(nodes),
        "results": [_summary(node) for node in nodes],
    }


_TRAVERSALS = {
    "list": ECTree.list_order,
    "breadth": ECTree.breadth_first,
    "depth": ECTree.depth_first,
}


@router.get("/api/ectree/traverse")
async def traverse(order: str = "list") -> dict[str, Any]:
    """List EC numbers in list, breadth-first, or depth-first order."""
    if order not in _TRAVERSALS:
        raise HTTPException(
            status_code=400,
            detail=f"Unknown order {order!r}, expected one of {sorted(_TRAVERSALS)}",
        )
    nodes = _TRAVERSALS[order](_get_tree())
    return {
        "order": order,
        "ec_numbers": [str(node.ec_number) for node in nodes if not node.is_root],
    }


app.include_router(router)
