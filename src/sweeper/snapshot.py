"""
Read-only projections of a game for rendering and sharing.

Snapshots are immutable and compare by value, so callers can tell whether
a command changed anything by comparing the snapshot before and after.
"""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Optional, Tuple

import numpy as np

from .cell import Cell


# ============================================================================
# Constants
# ============================================================================

class GamePhase(Enum):
    """Coarse position of a game in its state machine."""

    AWAITING_FIRST_MOVE = auto()
    IN_PROGRESS = auto()
    WON = auto()
    LOST = auto()

    @property
    def is_terminal(self) -> bool:
        """Check if no further moves are accepted."""
        return self in (GamePhase.WON, GamePhase.LOST)


# ============================================================================
# Views
# ============================================================================

@dataclass(frozen=True)
class CellView:
    """Frozen copy of a single cell."""

    is_mine: bool
    is_revealed: bool
    is_flagged: bool
    adjacent_mines: int
    avatar: Optional[Any] = None
    observation: int = -1

    @classmethod
    def of(cls, cell: Cell) -> "CellView":
        return cls(
            is_mine=cell.is_mine,
            is_revealed=cell.is_revealed,
            is_flagged=cell.is_flagged,
            adjacent_mines=cell.adjacent_mines,
            avatar=cell.avatar,
            observation=cell.to_observation(),
        )


@dataclass(frozen=True)
class GameSnapshot:
    """
    Immutable view of a game.

    Attributes:
        phase: Phase after the last command.
        cells: Row-major grid of cell views.
        mine_count: Mines on the board (placed or to be placed).
        mines_remaining_estimate: mine_count minus flags; may be negative.
        detonated_cell: (row, col) of the mine that ended the game.
        detonated_avatar: Avatar under the detonated mine, if any.
        avoided_avatars: Avatars hidden under mines, set once the game is won.
    """

    phase: GamePhase
    cells: Tuple[Tuple[CellView, ...], ...]
    mine_count: int
    mines_remaining_estimate: int
    detonated_cell: Optional[Tuple[int, int]] = None
    detonated_avatar: Optional[Any] = None
    avoided_avatars: Optional[Tuple[Any, ...]] = None

    @property
    def height(self) -> int:
        return len(self.cells)

    @property
    def width(self) -> int:
        return len(self.cells[0]) if self.cells else 0

    @property
    def is_terminal(self) -> bool:
        return self.phase.is_terminal

    @property
    def revealed_count(self) -> int:
        """Number of revealed cells, mines included."""
        return sum(cell.is_revealed for row in self.cells for cell in row)

    @property
    def flagged_count(self) -> int:
        return sum(cell.is_flagged for row in self.cells for cell in row)

    def cell(self, row: int, col: int) -> CellView:
        return self.cells[row][col]

    def to_array(self) -> np.ndarray:
        """
        Get the grid as a numpy array of rendering codes.

        Returns:
            2D int8 array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.zeros((self.height, self.width), dtype=np.int8)
        for row, cells in enumerate(self.cells):
            for col, cell in enumerate(cells):
                obs[row, col] = cell.observation
        return obs


@dataclass(frozen=True)
class MoveResult:
    """
    Outcome of a single player command.

    Attributes:
        applied: False when the command was a no-op (revealed or flagged
            target, or game already over).
        snapshot: Game snapshot after the command.
    """

    applied: bool
    snapshot: GameSnapshot

    @property
    def phase(self) -> GamePhase:
        return self.snapshot.phase

    @property
    def game_over(self) -> bool:
        return self.snapshot.is_terminal
