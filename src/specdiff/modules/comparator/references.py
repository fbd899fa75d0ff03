"""Reference Resolver.

Resolves ``$ref`` markers against a components dictionary of the document
that owns them. Only local pointers (``#/components/<kind>/<name>``) are
supported, and a marker resolves only within the section matching the
referencing node type; anything else resolves to nothing.
"""

import logging
from collections.abc import Mapping
from typing import TypeVar

from specdiff.types import Header, Parameter, RequestBody, Response, Schema


logger = logging.getLogger("specdiff.references")

NodeT = TypeVar("NodeT")

# components section each node type is resolved against
COMPONENT_KINDS: dict[type, str] = {
    Schema: "schemas",
    Parameter: "parameters",
    Response: "responses",
    Header: "headers",
    RequestBody: "requestBodies",
}


def is_reference(ref: str | None) -> bool:
    """An empty or whitespace marker means "not a reference"."""
    return bool(ref and ref.strip())


def reference_name(ref: str, kind: str | None = None) -> str | None:
    """Extract the component name a local pointer designates.

    Only pointers of the exact shape ``#/components/<kind>/<name>`` name a
    component; pointers into the middle of a component do not. When ``kind``
    is given the pointer must designate that components section.
    """
    segments = ref.strip().split("/")
    if len(segments) != 4 or segments[0] != "#" or segments[1] != "components":
        return None
    if kind is not None and segments[2] != kind:
        return None
    return segments[3].replace("~1", "/").replace("~0", "~")


def resolve_reference(
    ref: str | None,
    components: Mapping[str, NodeT] | None,
    kind: str | None = None,
) -> NodeT | None:
    """Resolve a marker one hop against a components dictionary.

    Args:
        ref: The ``$ref`` marker string.
        components: Components of the kind the marker points to.
        kind: Name of the components section (``schemas``, ``parameters``...)
            the marker must point into.

    Returns:
        The referenced node, or None if it cannot be found.
    """
    if not is_reference(ref) or components is None:
        return None

    name = reference_name(ref, kind)
    if name is None:
        logger.debug(f"Unsupported reference: {ref}")
        return None

    target = components.get(name)
    if target is None:
        logger.debug(f"Cannot resolve reference: {ref}")
    return target


def dereference(
    node: NodeT | None,
    components: Mapping[str, NodeT] | None,
    max_hops: int = 32,
) -> NodeT | None:
    """Follow reference markers until a concrete node is reached.

    A node without a marker is returned unchanged. Cyclic chains
    (``A -> B -> A``) and chains longer than ``max_hops`` resolve to None.

    Args:
        node: A node exposing an optional ``ref`` attribute.
        components: Components of the node's kind in the owning document.
        max_hops: Maximum number of markers to follow.

    Returns:
        The concrete node, or None if the chain cannot be resolved.
    """
    visited: set[str] = set()
    current = node

    while current is not None:
        ref = getattr(current, "ref", None)
        if not is_reference(ref):
            return current

        if ref in visited:
            logger.warning(f"Cyclic reference chain detected at {ref}")
            return None
        if len(visited) >= max_hops:
            logger.warning(f"Reference chain longer than {max_hops} hops at {ref}")
            return None

        visited.add(ref)
        current = resolve_reference(ref, components, COMPONENT_KINDS.get(type(current)))

    return None
