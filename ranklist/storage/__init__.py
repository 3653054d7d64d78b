"""
Storage module for ranklist.

Provides blob stores and the application state gateway.
"""

from ranklist.storage.blob_store import BlobStore, InMemoryBlobStore, JsonFileBlobStore
from ranklist.storage.gateway import StateGateway

__all__ = [
    "BlobStore",
    "InMemoryBlobStore",
    "JsonFileBlobStore",
    "StateGateway",
]
