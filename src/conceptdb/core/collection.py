"""
Collection – an ordered, immutable list of one record type.

Every operation returns a new Collection. A persisted Collection is a single
table holding a JSON array, not one table per element.
"""

from __future__ import annotations

from typing import Any, Generic, List, TypeVar

from pydantic import BaseModel, Field

from ..errors import ErrorKind, TableError
from .fragment import Fragment

T = TypeVar("T")


class Collection(BaseModel, Generic[T]):
    items: List[Any] = Field(default_factory=list)
    record_type: Any = None

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    # construction
    @classmethod
    def collect(cls, fragment: Fragment[T]) -> Collection[T]:
        """Every stored table that decodes as ``fragment``'s record type."""
        try:
            found = fragment.get_all_matching_type()
        except TableError as exc:
            raise TableError(ErrorKind.COLLECT_READ_ERROR, str(exc)) from exc
        return cls(items=[f.inner for f in found], record_type=fragment.record_type)

    @classmethod
    def read_table(cls, table_name: str, record_type: Any) -> Collection[T]:
        """Load a collection previously written with :meth:`persist`."""
        stored = Fragment([], List[record_type]).read_table(table_name)
        return cls(items=stored.inner, record_type=record_type)

    def __len__(self) -> int:
        return len(self.items)

    def __contains__(self, obj: object) -> bool:
        return obj in self.items

    # copy-on-write operations
    def append(self, obj: T) -> Collection[T]:
        return self.model_copy(update={"items": [*self.items, obj]})

    def remove(self, obj: T) -> Collection[T]:
        """Drop every element equal to ``obj``, keeping the order of the rest."""
        return self.model_copy(update={"items": [x for x in self.items if x != obj]})

    def update_at(self, index: int, obj: T, strict: bool = False) -> Collection[T]:
        """
        Replace the element at ``index``. An out-of-range index returns an
        unchanged copy, or raises ``INDEX_OUT_OF_RANGE`` when ``strict``.
        """
        if not 0 <= index < len(self.items):
            if strict:
                raise TableError(
                    ErrorKind.INDEX_OUT_OF_RANGE, f"{index} not in 0..{len(self.items)}"
                )
            return self.model_copy(update={"items": list(self.items)})
        items = list(self.items)
        items[index] = obj
        return self.model_copy(update={"items": items})

    # persistence
    def to_fragment(self) -> Fragment[List[T]]:
        list_type = list if self.record_type is None else List[self.record_type]
        return Fragment(list(self.items), list_type)

    def persist(self, table_name: str) -> None:
        self.to_fragment().create_table(table_name)
