"""
Fragment – the record wrapper every codec / table operation acts on.

* Serialization goes through a pydantic ``TypeAdapter`` for the record type,
  so pydantic models, dataclasses, TypedDicts and plain JSON values all work.
* Map views are re-validated *strictly*: a number, bool, null, list or
  object where a string is expected fails instead of being coerced.
* Python dicts keep insertion order, so keys / values / items of one map
  view always line up.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, ClassVar, Dict, Generic, Iterable, List, Tuple, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from ..config import get_config
from ..errors import ErrorKind, TableError
from ..events import emit_create, emit_delete
from ..observability.logging import get_logger
from ..persistence.store import TableStore

T = TypeVar("T")

StringMap = Dict[str, str]
OptionalMap = Dict[str, str | None]
ListMap = Dict[str, List[str]]
Pairs = List[Tuple[str, str]]

# bytes read per table by delete_table_if_matches_type
PREFIX_BYTES = 10

_JSON: TypeAdapter[Any] = TypeAdapter(Any)
_STRING_MAP: TypeAdapter[StringMap] = TypeAdapter(Dict[str, str])
_LIST_MAP: TypeAdapter[ListMap] = TypeAdapter(Dict[str, List[str]])

log = get_logger("fragment")


@lru_cache(maxsize=None)
def adapter_for(record_type: Any) -> TypeAdapter:
    return TypeAdapter(record_type)


class _Wrapped(BaseModel, Generic[T]):
    """A whole Fragment as JSON: ``{"inner": <record>}``."""

    inner: T


@lru_cache(maxsize=None)
def _wrapper_adapter(record_type: Any) -> TypeAdapter:
    return TypeAdapter(_Wrapped[record_type])


# helpers
def count_occurrences(values: Iterable[Any], target: str) -> int:
    """How many items stringify (stripped) to the stripped ``target``."""
    wanted = target.strip()
    return sum(1 for v in values if str(v).strip() == wanted)


def read_map(mapping: StringMap, record_type: Any) -> Any:
    """Inverse of :meth:`Fragment.to_string_map`: decode a string map as ``record_type``."""
    try:
        return adapter_for(record_type).validate_json(
            _STRING_MAP.dump_json(mapping), strict=True
        )
    except ValidationError as exc:
        raise TableError(ErrorKind.STRING_CONVERT, str(record_type)) from exc


def read_list_map(mapping: ListMap, record_type: Any) -> Any:
    """Decode a string-list map as ``record_type``."""
    try:
        return adapter_for(record_type).validate_json(
            _LIST_MAP.dump_json(mapping), strict=True
        )
    except ValidationError as exc:
        raise TableError(ErrorKind.STRING_CONVERT, str(record_type)) from exc


class Fragment(Generic[T]):
    """Owns one record value and applies the table-store functionality to it."""

    _store: ClassVar[TableStore | None] = None  # injected by init_conceptdb()

    def __init__(self, inner: T, record_type: Any = None):
        self.inner = inner
        self.record_type = type(inner) if record_type is None else record_type

    @classmethod
    def from_map(cls, mapping: StringMap, record_type: Any) -> Fragment[Any]:
        return cls(read_map(mapping, record_type), record_type)

    @property
    def adapter(self) -> TypeAdapter:
        return adapter_for(self.record_type)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Fragment):
            return NotImplemented
        return self.inner == other.inner

    def __repr__(self) -> str:
        return f"Fragment({self.inner!r})"

    # ---- codec ---------------------------------------------------------
    def _dump(self) -> bytes:
        try:
            return self.adapter.dump_json(self.inner)
        except ValueError as exc:
            raise TableError(ErrorKind.STRING_CONVERT, repr(self.inner)) from exc

    def to_json(self) -> str:
        return self._dump().decode("utf-8")

    def to_string_map(self) -> StringMap:
        try:
            return _STRING_MAP.validate_json(self._dump(), strict=True)
        except ValidationError as exc:
            raise TableError(ErrorKind.STRING_CONVERT, repr(self.inner)) from exc

    def to_optional_map(self) -> OptionalMap:
        """String map with empty values read as absent (``None``)."""
        try:
            mapping = self.to_string_map()
        except TableError as exc:
            raise TableError(ErrorKind.HASH_CONVERT, repr(self.inner)) from exc
        return {k: (v if v else None) for k, v in mapping.items()}

    def to_list_map(self) -> ListMap:
        try:
            return _LIST_MAP.validate_json(self._dump(), strict=True)
        except ValidationError as exc:
            raise TableError(ErrorKind.STRING_CONVERT, repr(self.inner)) from exc

    def pairs(self) -> Pairs:
        return list(self.to_string_map().items())

    # ---- relational ----------------------------------------------------
    def merge(self, foreign: StringMap) -> StringMap:
        from .relational import merge  # late import – avoids circular dep

        return merge(self, foreign)

    def left_join(self, foreign: OptionalMap) -> StringMap:
        from .relational import left_join

        return left_join(self, foreign)

    # ---- table reads ---------------------------------------------------
    def _decode(self, raw: bytes | str, table: str) -> T:
        try:
            return self.adapter.validate_json(raw, strict=True)
        except ValidationError as exc:
            raise TableError(ErrorKind.READ_BYTE_ERROR, table) from exc

    def read_table(self, table_name: str) -> Fragment[T]:
        """Parse ``table_name`` as this fragment's record type."""
        raw = self._ensure_store().read_bytes(table_name)
        return Fragment(self._decode(raw, table_name), self.record_type)

    def get_all(self) -> List[StringMap]:
        """String map of every table regardless of record type; first failure aborts."""
        store = self._ensure_store()
        maps: List[StringMap] = []
        for name in store.list_tables():
            raw = store.read_bytes(name)
            try:
                doc = _JSON.validate_json(raw)
            except ValidationError as exc:
                raise TableError(ErrorKind.READ_BYTE_ERROR, name) from exc
            try:
                maps.append(_STRING_MAP.validate_python(doc, strict=True))
            except ValidationError as exc:
                raise TableError(ErrorKind.HASH_CONVERT, name) from exc
        return maps

    def get_all_matching_type(self) -> List[Fragment[T]]:
        """Every table that decodes as the record type; others are skipped."""
        store = self._ensure_store()
        found: List[Fragment[T]] = []
        for name in store.list_tables():
            try:
                found.append(self.read_table(name))
            except TableError as exc:
                log.debug("table_skipped", table=name, kind=str(exc.kind))
        return found

    def find_where(self, key: str, value: str) -> List[Fragment[T]]:
        """Records whose ``key`` field equals ``value`` (both stripped)."""
        store = self._ensure_store()
        wanted = value.strip()
        matches: List[Fragment[T]] = []
        for name in store.list_tables():
            try:
                record = self.read_table(name)
            except TableError as exc:
                raise TableError(ErrorKind.READ_BYTE_ERROR, name) from exc
            try:
                mapping = record.to_string_map()
            except TableError as exc:
                raise TableError(ErrorKind.HASH_CONVERT, name) from exc
            if key in mapping and mapping[key].strip() == wanted:
                matches.append(record)
        return matches

    def update_table(self, table_name: str, key: str, value: str) -> T:
        """Return the stored record with one string field replaced. Nothing is written."""
        mapping = self.read_table(table_name).to_string_map()
        mapping[key] = value
        return read_map(mapping, self.record_type)

    def update_table_list(self, table_name: str, key: str, values: List[str]) -> T:
        """Like :meth:`update_table` for records whose fields are all string lists."""
        mapping = self.read_table(table_name).to_list_map()
        mapping[key] = list(values)
        return read_list_map(mapping, self.record_type)

    # ---- table writes --------------------------------------------------
    def create_table(self, table_name: str) -> Fragment[T]:
        """Write the record as a new table. Existing tables are never overwritten."""
        store = self._ensure_store()
        store.ensure_root()
        if store.exists(table_name):
            return self
        if store.create(table_name, self._dump()):
            emit_create(table_name, self)
        return self

    def delete_table(self, table_name: str) -> None:
        if self._ensure_store().delete(table_name):
            emit_delete(table_name, self)

    def delete_table_if_matches_type(self) -> List[str]:
        """
        Delete every table whose first ``PREFIX_BYTES`` bytes decode as a
        wrapped record, i.e. ``{"inner": <record>}``. Short reads are padded
        with NUL bytes and even the smallest wrapper does not fit in the
        prefix, so this is a no-op for any table on disk.
        """
        store = self._ensure_store()
        wrapped = _wrapper_adapter(self.record_type)
        deleted: List[str] = []
        for name in store.list_tables():
            prefix = store.read_bytes(name, limit=PREFIX_BYTES).ljust(PREFIX_BYTES, b"\0")
            try:
                value = wrapped.validate_json(
                    prefix.decode("utf-8", errors="replace"), strict=True
                )
            except ValidationError:
                continue
            if store.delete(name):
                deleted.append(name)
                emit_delete(name, Fragment(value.inner, self.record_type))
        return deleted

    # internal util
    @classmethod
    def _ensure_store(cls) -> TableStore:
        if cls._store is None:
            cls._store = TableStore(get_config().root_dir)
        return cls._store
