"""
Shared test fixtures for conceptdb unit tests.
"""
from pathlib import Path

import pytest

from conceptdb import ConceptConfig, Fragment, TableStore, init_conceptdb
from conceptdb import config as config_module
from conceptdb.events import clear_handlers

from sample_records import Task


@pytest.fixture
def temp_data_dir(tmp_path: Path) -> Path:
    """Table root that does not exist yet."""
    return tmp_path / "db_files"


@pytest.fixture
def store(temp_data_dir: Path) -> TableStore:
    """Global store rooted in a temp directory, reset after the test."""
    store = init_conceptdb(config=ConceptConfig(root_dir=temp_data_dir))
    yield store
    Fragment._store = None
    config_module.set_config(None)
    clear_handlers()


@pytest.fixture
def task() -> Task:
    return Task(title="write report", status="open")
