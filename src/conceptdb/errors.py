"""
Flat error vocabulary shared by every layer.

Every failure is raised as a :class:`TableError` whose ``kind`` names the
step that failed; the underlying ``OSError`` / pydantic error is chained.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    """What went wrong, without nesting causes."""

    FILE_NOT_FOUND = "file_not_found"
    FILE_ERROR = "file_error"  # open/create failures outside read/write
    DIR_ERROR = "dir_error"
    READ_BYTE_ERROR = "read_byte_error"
    WRITE_BYTE_ERROR = "write_byte_error"
    STRING_CONVERT = "string_convert"  # shape mismatch map <-> record
    HASH_CONVERT = "hash_convert"  # map -> map derivation step failed
    DELETE_ERROR = "delete_error"
    COLLECT_READ_ERROR = "collect_read_error"
    INDEX_OUT_OF_RANGE = "index_out_of_range"
    NONE = "none"  # placeholder payload inside Commit, not a failure


class TableError(Exception):
    """Raised by codec, store, and collection operations."""

    def __init__(self, kind: ErrorKind, detail: str = ""):
        self.kind = kind
        self.detail = detail
        super().__init__(f"{kind}: {detail}" if detail else str(kind))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TableError):
            return NotImplemented
        return self.kind == other.kind

    def __hash__(self) -> int:
        return hash(self.kind)

    def __repr__(self) -> str:
        return f"TableError({self.kind.name})"


def none_error() -> TableError:
    """The sentinel used for the unused half of a Commit."""
    return TableError(ErrorKind.NONE)
