"""
API Routes for ranklist.

- lists: list discovery, matchups, choices and standings
"""

from ranklist.api.routes.lists import router as lists_router

__all__ = [
    "lists_router",
]
