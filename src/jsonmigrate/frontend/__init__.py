"""Frontend package - reads a user class into CallableMethod records."""

from __future__ import annotations

from ..ir import CallableMethod
from .hierarchy import check_constructor, check_markers, check_parent_shape, discover, select_instrumentable
from .signatures import extract_callable, json_type_of, visibility_of


def analyze(parent: type, base: type | None, legacy: bool) -> list[CallableMethod]:
    """Frontend pipeline: class -> instrumentable methods. Orchestrates phases 1-2.

    Returns an empty list when no override is needed. The constructor is
    only checked when there is something to generate.
    """
    check_parent_shape(parent)
    methods = discover(parent, base)
    check_markers(methods)
    selected = select_instrumentable(methods, legacy)
    if selected:
        check_constructor(parent)
    return selected


__all__ = [
    "analyze",
    "check_constructor",
    "check_markers",
    "check_parent_shape",
    "discover",
    "extract_callable",
    "json_type_of",
    "select_instrumentable",
    "visibility_of",
]
