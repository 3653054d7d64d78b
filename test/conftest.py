"""
Shared fixtures and configuration for ranklist tests.
"""

import json
import pytest
import numpy as np


# =============================================================================
# Settings Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isolate every test from RANKLIST_* environment variables and cached settings."""
    for key in [
        "RANKLIST_ASSETS_DIR",
        "RANKLIST_STATE_DIR",
        "RANKLIST_INITIAL_FIT_ITERATIONS",
        "RANKLIST_UPDATE_FIT_ITERATIONS",
        "RANKLIST_SAMPLER_STRATEGY",
        "LOG_LEVEL",
    ]:
        monkeypatch.delenv(key, raising=False)

    from ranklist.config.settings import reset_settings
    reset_settings()
    yield
    reset_settings()


@pytest.fixture(autouse=True)
def clean_logging():
    """Drop handlers installed by setup_logging() during a test."""
    import logging
    from ranklist.utils.logger_config import ROOT_LOGGER
    yield
    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.handlers = []
    root_logger.setLevel(logging.NOTSET)


@pytest.fixture
def settings():
    """Default settings."""
    from ranklist.config.settings import Settings
    return Settings()


# =============================================================================
# Randomness Fixtures
# =============================================================================

@pytest.fixture
def rng():
    """Seeded random generator."""
    return np.random.default_rng(12345)


# =============================================================================
# State Fixtures
# =============================================================================

@pytest.fixture
def three_item_ids():
    """Item ids of a small list."""
    return ["apple", "banana", "cherry"]


@pytest.fixture
def three_item_state(three_item_ids):
    """List state with some recorded history."""
    from ranklist.core.state import ListState, derive_match_totals
    win_matrix = [
        [0, 3, 1],
        [1, 0, 2],
        [0, 1, 0],
    ]
    return ListState(
        item_ids=list(three_item_ids),
        win_matrix=win_matrix,
        abilities=[0.5, 0.3, 0.2],
        match_totals=derive_match_totals(win_matrix),
    )


# =============================================================================
# Assets Fixtures
# =============================================================================

def write_assets(root, lists):
    """
    Write an assets directory.

    Args:
        root: Directory to populate
        lists: Mapping of list id to item labels
    """
    (root / "lists").mkdir(parents=True, exist_ok=True)
    (root / "index.json").write_text(json.dumps(list(lists.keys())), encoding="utf-8")
    for list_id, labels in lists.items():
        (root / "lists" / f"{list_id}.json").write_text(json.dumps(labels), encoding="utf-8")


@pytest.fixture
def make_assets():
    """Writer for custom assets directories."""
    return write_assets


@pytest.fixture
def assets_dir(tmp_path):
    """Assets directory with a few lists."""
    root = tmp_path / "assets"
    write_assets(root, {
        "fruits": ["Green Apple", "Banana", "Cherry", "Dragon Fruit"],
        "stone_fruit": ["Peach", "Plum"],
        "single": ["Only One"],
    })
    return root


@pytest.fixture
def source(assets_dir):
    """Item source over the assets directory."""
    from ranklist.data.loader import ListDirectorySource
    return ListDirectorySource(assets_dir)


# =============================================================================
# Storage Fixtures
# =============================================================================

@pytest.fixture
def memory_store():
    """Empty in-memory blob store."""
    from ranklist.storage.blob_store import InMemoryBlobStore
    return InMemoryBlobStore()


@pytest.fixture
def gateway(memory_store):
    """Gateway over the in-memory store."""
    from ranklist.storage.gateway import StateGateway
    return StateGateway(memory_store)


# =============================================================================
# Workflow Fixtures
# =============================================================================

@pytest.fixture
def workflow(source, gateway, settings):
    """Ranking workflow over the test assets and an in-memory store."""
    from ranklist.workflow import RankingWorkflow
    return RankingWorkflow(source=source, gateway=gateway, settings=settings)
