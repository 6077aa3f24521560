"""Shared helper utilities for converter implementations."""

from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..models import Item, Metadata, Section

_UNSAFE_ID_CHARS = re.compile(r"[^A-Za-z0-9]")

# Identifier helpers


def make_id(prefix: str, name: Any) -> str:
    """Derive a graph identifier from a facet prefix and a display name.

    Every character outside ``[A-Za-z0-9]`` in ``name`` becomes ``_``, so
    ``make_id("field", "Book.title")`` yields ``"field_Book_title"``. The
    result is deterministic but not guaranteed unique; see ``IdAllocator``.
    """
    return f"{prefix}_{_UNSAFE_ID_CHARS.sub('_', str(name))}"


def simple_name(qualified_name: str) -> str:
    """Return the last dotted segment, e.g. ``com.sample.book.Book`` -> ``Book``."""
    return qualified_name.rsplit(".", 1)[-1]


# Section/item builders


def make_section(
    section_id: str,
    name: str,
    items: Sequence[Item],
    metadata: Optional[Metadata] = None,
) -> Section:
    return Section(id=section_id, name=name, items=list(items), metadata=metadata)


def make_item(
    item_id: str,
    value: str,
    icon: Optional[str] = None,
    metadata: Optional[Metadata] = None,
) -> Item:
    return Item(id=item_id, value=value, icon=icon, metadata=metadata)


# Coercion of loosely-typed input records


def as_dict(value: Any) -> Dict[str, Any]:
    return dict(value) if isinstance(value, Mapping) else {}


def as_list(value: Any) -> List[Any]:
    if value is None or isinstance(value, (str, bytes, Mapping)):
        return []
    if isinstance(value, Sequence):
        return list(value)
    return []


def as_records(value: Any) -> List[Dict[str, Any]]:
    """Return the mapping entries of a list, skipping anything else."""
    return [dict(entry) for entry in as_list(value) if isinstance(entry, Mapping)]


def as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    return None


def as_str_list(value: Any) -> List[str]:
    if isinstance(value, str):
        return [value]
    result: List[str] = []
    for entry in as_list(value):
        text = as_str(entry)
        if text is not None:
            result.append(text)
    return result


__all__ = [
    "as_dict",
    "as_list",
    "as_records",
    "as_str",
    "as_str_list",
    "make_id",
    "make_item",
    "make_section",
    "simple_name",
]
