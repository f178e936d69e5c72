"""
Public surface for conceptdb.
Importing this module does **not** touch the filesystem; the table root is
created on first write. Call `conceptdb.init_conceptdb(root)` to pick a
directory other than the configured one.
"""

from .bootstrap import init_conceptdb
from .config import ConceptConfig, load_config
from .core.changelog import ChangeLog, CollectionChangeLog, Commit
from .core.collection import Collection
from .core.fragment import Fragment, count_occurrences, read_map
from .core.relational import left_join, merge
from .errors import ErrorKind, TableError
from .events import on
from .persistence.store import TableStore

__all__ = [
    "ChangeLog",
    "Collection",
    "CollectionChangeLog",
    "Commit",
    "ConceptConfig",
    "ErrorKind",
    "Fragment",
    "TableError",
    "TableStore",
    "count_occurrences",
    "init_conceptdb",
    "left_join",
    "load_config",
    "merge",
    "on",
    "read_map",
]
