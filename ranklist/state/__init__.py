"""
State module for ranklist.

Keeps persisted comparison history consistent with changing item sets.
"""

from ranklist.state.reconciler import align, record_outcome

__all__ = [
    "align",
    "record_outcome",
]
