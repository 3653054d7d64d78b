"""
Dependency injection for the ranklist API.

Provides the process-wide ranking workflow built from settings.
"""

import os
import logging
from typing import Optional

from ranklist.config.settings import get_settings
from ranklist.data.loader import DataError, ListDirectorySource
from ranklist.storage.blob_store import JsonFileBlobStore
from ranklist.storage.gateway import StateGateway
from ranklist.workflow import RankingWorkflow

logger = logging.getLogger(__name__)


_workflow: Optional[RankingWorkflow] = None


def get_workflow() -> RankingWorkflow:
    """
    Get the ranking workflow.

    Creates it on first use from the assets and state directories in settings
    and reopens the list selected in a previous run, if it still exists.

    Returns:
        RankingWorkflow instance
    """
    global _workflow

    if _workflow is None:
        settings = get_settings()
        _workflow = RankingWorkflow(
            source=ListDirectorySource(settings.assets_dir),
            gateway=StateGateway(JsonFileBlobStore(settings.state_dir)),
            settings=settings,
        )
        logger.info(
            f"Ranking workflow ready (assets={settings.assets_dir}, "
            f"state={settings.state_dir})"
        )
        try:
            _workflow.open_selected()
        except DataError as e:
            logger.warning(f"Could not reopen list '{_workflow.selected_list_id}': {e}")

    return _workflow


def storage_writable() -> bool:
    """Whether the configured state directory can be written."""
    state_dir = get_settings().state_dir
    if os.path.isdir(state_dir):
        return os.access(state_dir, os.W_OK)
    parent = os.path.dirname(os.path.abspath(state_dir))
    return os.access(parent, os.W_OK)


def cleanup() -> None:
    """Drop the workflow so the next request rebuilds it."""
    global _workflow
    _workflow = None
