"""
Thin data-access layer around the table directory.
One JSON document per table at ``<root>/<name>.json``.

No locking: a read followed by a write is not atomic, so two processes
writing the same table name can race. Single writer, single process.
"""

from __future__ import annotations

from pathlib import Path
from typing import List

from ..errors import ErrorKind, TableError
from ..observability.logging import get_logger

SUFFIX = ".json"

log = get_logger("store")


class TableStore:
    """Filesystem collaborator: exists / read / create / delete / list."""

    def __init__(self, root: Path | str):
        self.root = Path(root)

    def path(self, name: str) -> Path:
        return self.root / f"{name}{SUFFIX}"

    def ensure_root(self) -> None:
        """Create the root directory on first use."""
        if self.root.is_dir():
            return
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise TableError(ErrorKind.DIR_ERROR, str(self.root)) from exc
        log.debug("root_created", root=str(self.root))

    def exists(self, name: str) -> bool:
        return self.path(name).is_file()

    # ---- reads ---------------------------------------------------------
    def read_bytes(self, name: str, limit: int | None = None) -> bytes:
        """Return the table's bytes, or only its first ``limit`` bytes."""
        p = self.path(name)
        if not p.is_file():
            raise TableError(ErrorKind.FILE_NOT_FOUND, name)
        try:
            f = p.open("rb")
        except OSError as exc:
            raise TableError(ErrorKind.FILE_ERROR, name) from exc
        with f:
            try:
                return f.read() if limit is None else f.read(limit)
            except OSError as exc:
                raise TableError(ErrorKind.READ_BYTE_ERROR, name) from exc

    def list_tables(self) -> List[str]:
        """Sorted names of every table under the root."""
        self.ensure_root()
        try:
            entries = list(self.root.iterdir())
        except OSError as exc:
            raise TableError(ErrorKind.DIR_ERROR, str(self.root)) from exc
        return sorted(
            p.name[: -len(SUFFIX)]
            for p in entries
            if p.is_file() and p.name.endswith(SUFFIX)
        )

    # ---- writes --------------------------------------------------------
    def create(self, name: str, data: bytes) -> bool:
        """
        Write a new table. Returns ``False`` without touching the file
        when the table already exists.
        """
        self.ensure_root()
        p = self.path(name)
        if p.is_file():
            return False
        try:
            f = p.open("xb")
        except FileExistsError:
            return False
        except OSError as exc:
            raise TableError(ErrorKind.FILE_ERROR, name) from exc
        with f:
            try:
                f.write(data)
            except OSError as exc:
                raise TableError(ErrorKind.WRITE_BYTE_ERROR, name) from exc
        log.debug("table_created", table=name, size=len(data))
        return True

    def delete(self, name: str) -> bool:
        """Remove the table if present. Returns whether a file was removed."""
        p = self.path(name)
        if not p.is_file():
            return False
        try:
            p.unlink()
        except OSError as exc:
            raise TableError(ErrorKind.DELETE_ERROR, name) from exc
        log.debug("table_deleted", table=name)
        return True
