"""
Merge and left-join over the string-map view of a Fragment.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..config import get_config
from ..errors import ErrorKind, TableError
from .fragment import OptionalMap, StringMap, count_occurrences

if TYPE_CHECKING:
    from .fragment import Fragment


def _self_map(fragment: Fragment) -> StringMap:
    try:
        return fragment.to_string_map()
    except TableError as exc:
        raise TableError(ErrorKind.HASH_CONVERT, repr(fragment.inner)) from exc


def merge(fragment: Fragment, foreign: StringMap) -> StringMap:
    """Combine two tables; foreign values win on key collision."""
    merged = _self_map(fragment)
    for key, value in foreign.items():
        merged[key] = value
    return merged


def left_join(
    fragment: Fragment, foreign: OptionalMap, absent_text: str | None = None
) -> StringMap:
    """
    Join ``foreign`` onto the fragment's map.

    Only foreign keys that already exist in the fragment are kept, and they are
    stored under ``"<key>_<n>"`` where ``n`` is how many of foreign's own keys
    equal ``key``. Foreign keys the fragment lacks are dropped. An absent
    foreign value is stored as ``absent_text`` (configured, ``"None"`` by default).
    """
    if absent_text is None:
        absent_text = get_config().join_absent_text
    joined = _self_map(fragment)

    renamed = [
        (f"{key}_{count_occurrences(foreign.keys(), key)}", absent_text if value is None else value)
        for key, value in foreign.items()
        if key in joined
    ]
    for key, value in renamed:
        joined[key] = value
    return joined
