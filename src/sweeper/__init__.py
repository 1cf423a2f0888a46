"""
Follower sweeper game engine.

Provides the core game logic: board state, mine placement with follower
avatars, reveal/flag commands and snapshots for rendering.
"""
from .cell import Cell, CellState
from .snapshot import CellView, GamePhase, GameSnapshot, MoveResult
from .board import (
    GameConfig,
    GameState,
    OutOfBoundsError,
    SOCIAL_DEFAULT,
    new_game,
    reveal,
    snapshot,
    toggle_flag,
)

__all__ = [
    "Cell",
    "CellState",
    "CellView",
    "GamePhase",
    "GameSnapshot",
    "MoveResult",
    "GameConfig",
    "GameState",
    "OutOfBoundsError",
    "SOCIAL_DEFAULT",
    "new_game",
    "reveal",
    "snapshot",
    "toggle_flag",
]
