"""
Configuration loaded from ``CONCEPTDB_*`` environment variables.

A ``.env`` file in the working directory is honoured via python-dotenv.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

DEFAULT_ROOT = Path("./db_files")
LEGACY_ABSENT_TEXT = "None"
_LOG_LEVELS = {"debug", "info", "warning", "error"}


class ConceptConfig(BaseModel):
    """Runtime settings for the table store."""

    root_dir: Path = DEFAULT_ROOT
    log_level: str = "warning"
    # text stored by left_join for an absent foreign value
    join_absent_text: str = LEGACY_ABSENT_TEXT

    model_config = {"frozen": True}

    @field_validator("log_level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        if value.lower() not in _LOG_LEVELS:
            raise ValueError(
                f"Invalid log level: {value}. Must be one of {sorted(_LOG_LEVELS)}"
            )
        return value.lower()


def _env(key: str, default: str) -> str:
    return os.environ.get(f"CONCEPTDB_{key}", default)


def load_config() -> ConceptConfig:
    """Build a :class:`ConceptConfig` from the environment (and ``.env``)."""
    load_dotenv()
    return ConceptConfig(
        root_dir=Path(_env("ROOT", str(DEFAULT_ROOT))),
        log_level=_env("LOG_LEVEL", "warning"),
        join_absent_text=_env("JOIN_ABSENT_TEXT", LEGACY_ABSENT_TEXT),
    )


# active settings; replaced by init_conceptdb()
_active: ConceptConfig | None = None


def get_config() -> ConceptConfig:
    global _active
    if _active is None:
        _active = load_config()
    return _active


def set_config(config: ConceptConfig | None) -> None:
    global _active
    _active = config
