"""
Before / after change tracking.

A change-log entry is immutable: every ``set_*`` returns a new entry
(copy-on-write), and :meth:`commit` summarises the outcome.
``later`` may hold a :class:`TableError` when the new state could not be
produced (e.g. a failed ``read_table``).
"""

from __future__ import annotations

from typing import Any, Generic, List, Tuple, TypeVar

from pydantic import BaseModel, Field

from ..errors import TableError, none_error
from .collection import Collection
from .fragment import Fragment, Pairs

T = TypeVar("T")

_FROZEN = {"frozen": True, "arbitrary_types_allowed": True}

# payload not supplied; None is a valid record value
_MISSING: Any = object()


class Commit(BaseModel):
    """Outcome of a logged change. At most one payload is meaningful per call site."""

    success: bool
    fragment: Any = Field(default_factory=none_error)
    collection: Any = Field(default_factory=none_error)

    model_config = _FROZEN

    @classmethod
    def build(cls, fragment: Any = _MISSING, collection: Any = _MISSING) -> Commit:
        fragment = none_error() if fragment is _MISSING else fragment
        collection = none_error() if collection is _MISSING else collection
        success = not (
            isinstance(fragment, TableError) and isinstance(collection, TableError)
        )
        return cls(success=success, fragment=fragment, collection=collection)


class ChangeLog(BaseModel, Generic[T]):
    """Prior / later snapshot of a single record."""

    prior: Any = None
    later: Any = Field(default_factory=none_error)
    time_stamp: str = ""

    model_config = _FROZEN

    def set_prior(self, prior: T) -> ChangeLog[T]:
        return self.model_copy(update={"prior": prior})

    def set_later(self, later: T | TableError) -> ChangeLog[T]:
        return self.model_copy(update={"later": later})

    def set_time_stamp(self, time_stamp: str) -> ChangeLog[T]:
        return self.model_copy(update={"time_stamp": time_stamp})

    def diff(self) -> Tuple[Pairs, Pairs]:
        """``(prior pairs, later pairs)`` for the caller to compare."""
        if isinstance(self.later, TableError):
            raise self.later
        return Fragment(self.prior).pairs(), Fragment(self.later).pairs()

    def commit(self) -> Commit:
        return Commit.build(fragment=self.later)


class CollectionChangeLog(BaseModel, Generic[T]):
    """Prior / later snapshot of a :class:`Collection`."""

    prior: Collection = Field(default_factory=Collection)
    later: Any = Field(default_factory=none_error)
    time_stamp: str = ""

    model_config = _FROZEN

    def set_prior(self, prior: Collection[T]) -> CollectionChangeLog[T]:
        return self.model_copy(update={"prior": prior})

    def set_later(self, later: Collection[T] | TableError) -> CollectionChangeLog[T]:
        return self.model_copy(update={"later": later})

    def set_time_stamp(self, time_stamp: str) -> CollectionChangeLog[T]:
        return self.model_copy(update={"time_stamp": time_stamp})

    def diff(self) -> Tuple[List[T], List[T]]:
        """``(added, removed)`` by value membership; counts are not compared."""
        if isinstance(self.later, TableError):
            raise self.later
        before, after = self.prior.items, self.later.items
        added = [x for x in after if x not in before]
        removed = [x for x in before if x not in after]
        return added, removed

    def commit(self) -> Commit:
        return Commit.build(collection=self.later)
