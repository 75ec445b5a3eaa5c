# src/ragdesk/stores/filters.py
"""Metadata filter helpers shared by the document stores."""

from typing import Any

from ragdesk.stores.base import MetadataFilter

_COMPARATORS = {
    "$eq": lambda a, b: a == b,
    "$ne": lambda a, b: a != b,
    "$gt": lambda a, b: a is not None and a > b,
    "$gte": lambda a, b: a is not None and a >= b,
    "$lt": lambda a, b: a is not None and a < b,
    "$lte": lambda a, b: a is not None and a <= b,
    "$in": lambda a, b: a in b,
    "$nin": lambda a, b: a not in b,
}


def to_chroma_where(filter: MetadataFilter | None) -> dict[str, Any] | None:
    """Translate a metadata filter into a ChromaDB where clause.

    Chroma accepts a single condition per where dict, so multi-key
    filters are wrapped in $and. Filters that are already logical
    expressions ($and/$or) pass through.
    """
    if not filter:
        return None
    if any(key.startswith("$") for key in filter):
        return dict(filter)
    conditions = [{key: value} for key, value in filter.items()]
    if len(conditions) == 1:
        return conditions[0]
    return {"$and": conditions}


def matches(metadata: dict[str, Any], filter: MetadataFilter | None) -> bool:
    """Evaluate a metadata filter against one metadata dict."""
    if not filter:
        return True
    for key, condition in filter.items():
        if key == "$and":
            if not all(matches(metadata, sub) for sub in condition):
                return False
        elif key == "$or":
            if not any(matches(metadata, sub) for sub in condition):
                return False
        elif isinstance(condition, dict):
            value = metadata.get(key)
            for op, operand in condition.items():
                comparator = _COMPARATORS.get(op)
                if comparator is None:
                    raise ValueError(f"Unsupported filter operator: {op}")
                try:
                    if not comparator(value, operand):
                        return False
                except TypeError:
                    return False
        elif metadata.get(key) != condition:
            return False
    return True
