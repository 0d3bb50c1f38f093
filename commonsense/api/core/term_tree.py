"""
Taxonomy term trees.

The API returns taxonomy terms as flat lists where each term points at its
parent through ``parent_id`` (``0`` for roots). `build_term_tree` nests them:

    [{"id": 1, "parent_id": 0}, {"id": 2, "parent_id": 1}]
    → [{"id": 1, "parent_id": 0, "children": [{"id": 2, "parent_id": 1, "children": []}]}]

Preconditions:
    ``terms`` must form a forest rooted at ``parent_id == 0``. Parent cycles
    are not detected and make the recursion run until the interpreter's
    recursion limit is hit.

Scaling:
    Every level rescans the whole list, so the cost is O(n²) in the number of
    terms. Term lists are tens to low hundreds of entries, where this is not
    an issue; any replacement must keep sibling order identical to input
    order.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Sequence

logger = logging.getLogger(__name__)

JSON = Dict[str, Any]

ROOT_PARENT_ID = 0


def _same_id(a: Any, b: Any) -> bool:
    # Ids arrive as ints, but some endpoints serialize them as strings.
    if a is None or b is None:
        return False
    return str(a) == str(b)


def build_term_tree(terms: Sequence[Mapping[str, Any]], parent_id: Any = ROOT_PARENT_ID) -> List[JSON]:
    """
    Convert a flat list of terms into nested nodes under ``parent_id``.

    Each node is a shallow copy of its term with a ``children`` list
    (empty for leaves). Input terms are not modified, and siblings keep
    their input order.
    """
    tree: List[JSON] = []
    for term in terms:
        if not isinstance(term, Mapping):
            continue
        if _same_id(term.get("parent_id"), parent_id):
            node = dict(term)
            node["children"] = build_term_tree(terms, term.get("id"))
            tree.append(node)
    return tree


def _assemble_field(item: JSON, name: str) -> None:
    value = item.get(name)
    if isinstance(value, list) and all(isinstance(term, Mapping) for term in value):
        item[name] = build_term_tree(value)
    else:
        logger.debug("Skipping tree assembly for field %r: not a list of terms", name)


def apply_term_trees(payload: Any, field_names: Iterable[str]) -> Any:
    """
    Replace each named field of ``payload["response"]`` with its term tree.

    ``response`` may be a single object or a list of objects; in the latter
    case every element is processed. Payloads of any other shape are
    returned untouched, as are fields that are not lists of term objects.
    """
    names = list(field_names)
    if not names or not isinstance(payload, dict):
        return payload

    response = payload.get("response")
    if isinstance(response, dict):
        items = [response]
    elif isinstance(response, list):
        items = [item for item in response if isinstance(item, dict)]
    else:
        return payload

    for name in names:
        for item in items:
            _assemble_field(item, name)
    return payload


__all__ = ["ROOT_PARENT_ID", "build_term_tree", "apply_term_trees"]
