"""
Persistence gateway for ranklist.

Loads and saves the whole application state as one JSON blob under a fixed
storage key. Loading never fails: unreadable or malformed data falls back
to an empty default state. Saving is best-effort: failures are logged and
not propagated.
"""

import json
import logging

from ranklist.core.constants import STORAGE_KEY
from ranklist.core.state import AppState
from ranklist.storage.blob_store import BlobStore

logger = logging.getLogger(__name__)


class StateGateway:
    """
    Application state persistence over a blob store.

    Example:
        >>> gateway = StateGateway(InMemoryBlobStore())
        >>> state = gateway.load()
        >>> state.selected_list_id = "fruits"
        >>> gateway.save(state)
    """

    def __init__(self, store: BlobStore, key: str = STORAGE_KEY):
        """
        Initialize the gateway.

        Args:
            store: Blob store backing the state
            key: Storage key of the state blob
        """
        self.store = store
        self.key = key

    def load(self) -> AppState:
        """
        Load the application state.

        Returns:
            Stored AppState, or an empty default on any read/decode failure
        """
        try:
            raw = self.store.get(self.key)
        except (OSError, ValueError) as e:
            logger.warning(f"Falling back to default app state: {e}")
            return AppState()

        if raw is None:
            return AppState()

        try:
            return AppState.from_dict(json.loads(raw))
        except (ValueError, TypeError, KeyError, RecursionError) as e:
            logger.warning(f"Falling back to default app state: {e}")
            return AppState()

    def save(self, state: AppState) -> bool:
        """
        Persist the application state.

        Args:
            state: State to store

        Returns:
            True if stored, False if the write failed (already logged)
        """
        try:
            payload = json.dumps(state.to_dict())
            self.store.set(self.key, payload)
            return True
        except (OSError, TypeError, ValueError) as e:
            logger.warning(f"Failed to persist state: {e}")
            return False
