"""
Single entry-point that wires configuration, logging and the table store.
Call once at application start-up (tests call it per temp directory).
"""

from __future__ import annotations

from pathlib import Path

from .config import ConceptConfig, load_config, set_config
from .core.fragment import Fragment
from .observability.logging import setup_logging
from .persistence.store import TableStore


def init_conceptdb(
    root: Path | str | None = None, config: ConceptConfig | None = None
) -> TableStore:
    """
    Build the global TableStore and inject it into Fragment.

    ``root`` overrides the configured root directory.
    """
    config = config or load_config()
    if root is not None:
        config = config.model_copy(update={"root_dir": Path(root)})
    set_config(config)
    setup_logging(config.log_level)

    store = TableStore(config.root_dir)
    Fragment._store = store  # type: ignore[misc]
    return store
