"""
ranklist API Layer.

Provides REST API endpoints for:
- List discovery
- List sessions (open, matchup, choices, skip)
- Standings
"""

from ranklist.api.main import create_app, app

__all__ = ["create_app", "app"]
