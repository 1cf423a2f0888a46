"""
Cell module for the follower sweeper engine.

Represents individual cells on the game board with their state
(hidden/revealed/flagged), their content (mine/number) and, for mines,
the follower avatar hidden underneath.
"""
from enum import Enum, auto
from dataclasses import dataclass
from typing import Any, Optional


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the grid.

    Attributes:
        is_mine: Whether this cell contains a mine.
        adjacent_mines: Count of mines in neighboring cells (0-8).
        state: Current visual state (hidden, revealed, or flagged).
        avatar: Avatar record assigned to a mine, if any. Never set on
            a safe cell.
    """

    is_mine: bool = False
    adjacent_mines: int = 0
    state: CellState = CellState.HIDDEN
    avatar: Optional[Any] = None

    def __post_init__(self) -> None:
        if self.avatar is not None and not self.is_mine:
            raise ValueError("Only mine cells can carry an avatar")

    def arm(self, avatar: Optional[Any] = None) -> None:
        """
        Turn this cell into a mine.

        Args:
            avatar: Avatar to hide under the mine, or None.
        """
        self.is_mine = True
        self.adjacent_mines = 0
        self.avatar = avatar

    def reveal(self) -> bool:
        """
        Reveal this cell.

        Returns:
            True if cell was successfully revealed, False if already
            revealed or flagged.
        """
        if self.state != CellState.HIDDEN:
            return False
        self.state = CellState.REVEALED
        return True

    def expose(self) -> None:
        """Force the cell open, dropping any flag (used on loss)."""
        self.state = CellState.REVEALED

    def toggle_flag(self) -> bool:
        """
        Toggle flag on this cell.

        Returns:
            True if flag was toggled, False if cell is revealed.
        """
        if self.state == CellState.REVEALED:
            return False
        if self.state == CellState.HIDDEN:
            self.state = CellState.FLAGGED
        else:
            self.state = CellState.HIDDEN
        return True

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden."""
        return self.state == CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        """Check if cell is revealed."""
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    def to_observation(self) -> int:
        """
        Convert cell to its rendering code.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine
        """
        if self.state == CellState.HIDDEN:
            return -1
        if self.state == CellState.FLAGGED:
            return -2
        if self.is_mine:
            return 9
        return self.adjacent_mines
