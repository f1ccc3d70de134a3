"""
Immutable state for the shoejack table.

This package provides the phase enum of the round state machine and the
frozen snapshots handed to callers.
"""

from shoejack.state.models import GamePhase, HandSnapshot, TableSnapshot

__all__ = [
    "GamePhase",
    "HandSnapshot",
    "TableSnapshot",
]
