"""
Board module for the follower sweeper engine.

Implements the game state machine: deferred first-click-safe mine placement,
follower avatar assignment, flood-fill reveal, flagging and win/loss
detection.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .cell import Cell
from .snapshot import CellView, GamePhase, GameSnapshot, MoveResult

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class OutOfBoundsError(IndexError):
    """Raised when a command targets a cell outside the board."""

    def __init__(self, row: int, col: int, height: int, width: int) -> None:
        super().__init__(
            f"Cell ({row}, {col}) is outside the {height}x{width} board"
        )
        self.row = row
        self.col = col


@dataclass
class GameConfig:
    """
    Configuration for a game board.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        mine_count: Total mines to place.
    """

    width: int = 8
    height: int = 8
    mine_count: int = 8

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise ValueError("Board dimensions must be positive")
        if self.mine_count < 0:
            raise ValueError("Number of mines cannot be negative")
        max_mines = self.width * self.height - 1
        if self.mine_count > max_mines:
            raise ValueError(f"Too many mines (max {max_mines})")

    @property
    def total_cells(self) -> int:
        """Number of cells on the board."""
        return self.width * self.height

    @property
    def safe_cells(self) -> int:
        """Number of cells that must be revealed to win."""
        return self.total_cells - self.mine_count


# One mine per follower in the mini-app
SOCIAL_DEFAULT = GameConfig(8, 8, 8)


# ============================================================================
# Game State Class
# ============================================================================

@dataclass
class GameState:
    """
    A single game session.

    Owns the grid and is mutated only through reveal() and toggle_flag().
    Mines are placed on the first reveal so that the first click is safe;
    the i-th mine placed receives the i-th avatar of the pool.
    """

    config: GameConfig = field(default_factory=GameConfig)
    avatar_pool: Sequence[Any] = ()
    rng: np.random.Generator = field(
        default_factory=np.random.default_rng, repr=False
    )
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)
    _phase: GamePhase = GamePhase.AWAITING_FIRST_MOVE
    _detonated_cell: Optional[Tuple[int, int]] = None
    _revealed_safe: int = 0

    def __post_init__(self) -> None:
        """Initialize the grid after dataclass creation."""
        self.avatar_pool = tuple(self.avatar_pool)
        self._init_grid()

    @classmethod
    def with_mines(
        cls,
        config: GameConfig,
        mine_positions: Iterable[Tuple[int, int]],
        avatar_pool: Sequence[Any] = (),
    ) -> "GameState":
        """
        Create a game with mines at fixed positions, skipping the draw.

        Positions are armed in the given order, so avatar assignment
        follows the same rule as random placement.

        Args:
            config: Board configuration.
            mine_positions: Exactly config.mine_count distinct (row, col).
            avatar_pool: Ordered avatars for the mines.

        Returns:
            A game already in progress.
        """
        positions = [(int(row), int(col)) for row, col in mine_positions]
        if len(positions) != config.mine_count:
            raise ValueError(
                f"Expected {config.mine_count} mine positions, "
                f"got {len(positions)}"
            )
        if len(set(positions)) != len(positions):
            raise ValueError("Mine positions must be distinct")

        state = cls(config=config, avatar_pool=avatar_pool)
        for row, col in positions:
            if not state._is_valid_position(row, col):
                raise ValueError(f"Mine position ({row}, {col}) is off the board")

        state._arm_mines(positions)
        state._calculate_adjacent_mines()
        state._phase = GamePhase.IN_PROGRESS
        return state

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create empty grid of cells."""
        self._grid = [
            [Cell() for _ in range(self.config.width)]
            for _ in range(self.config.height)
        ]

    def _place_mines(self, exclude: Tuple[int, int]) -> None:
        """
        Place mines by rejection sampling, excluding a specific cell.

        Args:
            exclude: (row, col) position to keep mine-free.
        """
        positions: List[Tuple[int, int]] = []
        taken = set()
        while len(positions) < self.config.mine_count:
            row = int(self.rng.integers(self.config.height))
            col = int(self.rng.integers(self.config.width))
            if (row, col) == exclude or (row, col) in taken:
                continue
            taken.add((row, col))
            positions.append((row, col))

        self._arm_mines(positions)
        logger.debug("Placed %d mines avoiding %s", len(positions), exclude)

    def _arm_mines(self, positions: Sequence[Tuple[int, int]]) -> None:
        """Arm cells in order, handing out avatars while the pool lasts."""
        for index, (row, col) in enumerate(positions):
            avatar = None
            if index < len(self.avatar_pool):
                avatar = self.avatar_pool[index]
            self._grid[row][col].arm(avatar)

    def _calculate_adjacent_mines(self) -> None:
        """Calculate adjacent mine counts for all cells."""
        for row in range(self.config.height):
            for col in range(self.config.width):
                if not self._grid[row][col].is_mine:
                    count = self._count_adjacent_mines(row, col)
                    self._grid[row][col].adjacent_mines = count

    def _count_adjacent_mines(self, row: int, col: int) -> int:
        """Count mines adjacent to a specific cell."""
        count = 0
        for neighbor_row, neighbor_col in self._get_neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].is_mine:
                count += 1
        return count

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def _get_neighbors(
        self, row: int, col: int
    ) -> List[Tuple[int, int]]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for in-bounds Moore neighbors.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self._is_valid_position(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def _is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.config.height and 0 <= col < self.config.width

    def _check_bounds(self, row: int, col: int) -> None:
        """Raise OutOfBoundsError if position is off the board."""
        if not self._is_valid_position(row, col):
            raise OutOfBoundsError(
                row, col, self.config.height, self.config.width
            )

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def reveal(self, row: int, col: int) -> MoveResult:
        """
        Reveal a cell at the given position.

        On first click, places mines avoiding this cell. If the cell is
        empty (0 adjacent mines), the surrounding region is revealed. If
        the cell is a mine, the game is lost.

        Args:
            row: Row index to reveal.
            col: Column index to reveal.

        Returns:
            MoveResult; applied is False for revealed or flagged cells and
            once the game is over.

        Raises:
            OutOfBoundsError: If the position is off the board.
        """
        self._check_bounds(row, col)
        if not self._can_reveal(row, col):
            return self._result(False)

        if self._phase == GamePhase.AWAITING_FIRST_MOVE:
            self._handle_first_click(row, col)

        if self._grid[row][col].is_mine:
            self._detonate(row, col)
        else:
            self._flood_reveal(row, col)
            self._check_win_condition()

        return self._result(True)

    def _can_reveal(self, row: int, col: int) -> bool:
        """Check if a cell can be revealed."""
        if self._phase.is_terminal:
            return False
        return self._grid[row][col].is_hidden

    def _handle_first_click(self, row: int, col: int) -> None:
        """Handle first click: place mines and calculate counts."""
        self._place_mines((row, col))
        self._calculate_adjacent_mines()
        self._phase = GamePhase.IN_PROGRESS

    def _flood_reveal(self, row: int, col: int) -> None:
        """Reveal a safe cell and cascade through zero-count regions."""
        stack = [(row, col)]
        while stack:
            current_row, current_col = stack.pop()
            cell = self._grid[current_row][current_col]
            if cell.is_mine or not cell.reveal():
                continue

            self._revealed_safe += 1

            if cell.adjacent_mines == 0:
                for neighbor_row, neighbor_col in self._get_neighbors(
                    current_row, current_col
                ):
                    if self._grid[neighbor_row][neighbor_col].is_hidden:
                        stack.append((neighbor_row, neighbor_col))

    def _detonate(self, row: int, col: int) -> None:
        """Lose the game and open every mine."""
        self._phase = GamePhase.LOST
        self._detonated_cell = (row, col)
        for cells in self._grid:
            for cell in cells:
                if cell.is_mine:
                    cell.expose()
        logger.info("Game lost at (%d, %d)", row, col)

    def _check_win_condition(self) -> None:
        """Check if all non-mine cells are revealed."""
        if self._revealed_safe == self.config.safe_cells:
            self._phase = GamePhase.WON
            logger.info(
                "Game won, %d safe cells revealed", self._revealed_safe
            )

    def toggle_flag(self, row: int, col: int) -> MoveResult:
        """
        Toggle flag on a cell.

        Flagging is allowed before the first reveal; no mines are placed.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            MoveResult; applied is False for revealed cells and once the
            game is over.

        Raises:
            OutOfBoundsError: If the position is off the board.
        """
        self._check_bounds(row, col)
        if self._phase.is_terminal:
            return self._result(False)
        return self._result(self._grid[row][col].toggle_flag())

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def phase(self) -> GamePhase:
        """Get current game phase."""
        return self._phase

    @property
    def is_over(self) -> bool:
        """Check if the game was won or lost."""
        return self._phase.is_terminal

    @property
    def flagged_count(self) -> int:
        """Number of flagged cells."""
        return sum(cell.is_flagged for cells in self._grid for cell in cells)

    @property
    def mines_remaining_estimate(self) -> int:
        """Mines minus flags, for display only; goes negative if over-flagged."""
        return self.config.mine_count - self.flagged_count

    @property
    def detonated_cell(self) -> Optional[Tuple[int, int]]:
        """Position of the mine that ended the game, if any."""
        return self._detonated_cell

    @property
    def detonated_avatar(self) -> Optional[Any]:
        """Avatar under the mine that ended the game, if any."""
        if self._detonated_cell is None:
            return None
        row, col = self._detonated_cell
        return self._grid[row][col].avatar

    @property
    def mine_avatars(self) -> Tuple[Any, ...]:
        """Avatars assigned to mines, in row-major order."""
        return tuple(
            cell.avatar
            for cells in self._grid
            for cell in cells
            if cell.is_mine and cell.avatar is not None
        )

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self._is_valid_position(row, col):
            return None
        return self._grid[row][col]

    def snapshot(self) -> GameSnapshot:
        """Build an immutable view of the current game."""
        avoided = None
        if self._phase == GamePhase.WON:
            avoided = self.mine_avatars
        return GameSnapshot(
            phase=self._phase,
            cells=tuple(
                tuple(CellView.of(cell) for cell in cells)
                for cells in self._grid
            ),
            mine_count=self.config.mine_count,
            mines_remaining_estimate=self.mines_remaining_estimate,
            detonated_cell=self._detonated_cell,
            detonated_avatar=self.detonated_avatar,
            avoided_avatars=avoided,
        )

    def _result(self, applied: bool) -> MoveResult:
        """Wrap the current snapshot in a move result."""
        return MoveResult(applied=applied, snapshot=self.snapshot())


# ============================================================================
# Functional API
# ============================================================================

def new_game(
    width: int,
    height: int,
    mine_count: int,
    avatar_pool: Sequence[Any] = (),
    rng: Optional[np.random.Generator] = None,
    seed: Optional[int] = None,
) -> GameState:
    """
    Start a new game.

    Args:
        width: Number of columns.
        height: Number of rows.
        mine_count: Mines to place on the first reveal.
        avatar_pool: Ordered avatars to hide under mines.
        rng: Random generator for mine placement.
        seed: Seed used when no generator is given.

    Returns:
        A game awaiting its first move.
    """
    config = GameConfig(width=width, height=height, mine_count=mine_count)
    if rng is None:
        rng = np.random.default_rng(seed)
    return GameState(config=config, avatar_pool=avatar_pool, rng=rng)


def reveal(state: GameState, row: int, col: int) -> MoveResult:
    """Reveal (row, col) on the given game."""
    return state.reveal(row, col)


def toggle_flag(state: GameState, row: int, col: int) -> MoveResult:
    """Flag or unflag (row, col) on the given game."""
    return state.toggle_flag(row, col)


def snapshot(state: GameState) -> GameSnapshot:
    """Read-only projection of the given game."""
    return state.snapshot()
