"""
Unit tests for Cell class.

Tests cell state management, reveal/flag behavior, avatar arming and
rendering codes.
"""
import pytest
from sweeper import Cell, CellState
from social import AvatarRecord


# ============================================================================
# Cell Initialization Tests
# ============================================================================

class TestCellInitialization:
    """Test cell creation and default values."""

    def test_default_cell_is_hidden_safe_and_empty(self) -> None:
        """New cell should be a hidden, avatar-less non-mine."""
        cell = Cell()
        assert cell.is_mine is False
        assert cell.state == CellState.HIDDEN
        assert cell.adjacent_mines == 0
        assert cell.avatar is None

    def test_safe_cell_with_avatar_raises_error(self) -> None:
        """Only mines may carry an avatar."""
        with pytest.raises(ValueError, match="Only mine cells"):
            Cell(avatar=AvatarRecord(fid=1, username="x"))


# ============================================================================
# Cell Arming Tests
# ============================================================================

class TestCellArm:
    """Test turning cells into mines."""

    def test_arm_makes_mine_with_avatar(self, hidden_cell: Cell) -> None:
        avatar = AvatarRecord(fid=7, username="bomb")
        hidden_cell.arm(avatar)
        assert hidden_cell.is_mine is True
        assert hidden_cell.avatar == avatar

    def test_arm_without_avatar(self, hidden_cell: Cell) -> None:
        hidden_cell.arm()
        assert hidden_cell.is_mine is True
        assert hidden_cell.avatar is None


# ============================================================================
# Cell Reveal Tests
# ============================================================================

class TestCellReveal:
    """Test cell reveal behavior."""

    def test_reveal_changes_state_to_revealed(self, hidden_cell: Cell) -> None:
        """Revealing a cell should change its state."""
        assert hidden_cell.reveal() is True
        assert hidden_cell.state == CellState.REVEALED
        assert hidden_cell.is_revealed is True

    def test_reveal_already_revealed_returns_false(
        self, hidden_cell: Cell
    ) -> None:
        """Revealing an already revealed cell should fail."""
        hidden_cell.reveal()
        assert hidden_cell.reveal() is False

    def test_reveal_flagged_cell_returns_false(self, hidden_cell: Cell) -> None:
        """Cannot reveal a flagged cell."""
        hidden_cell.toggle_flag()
        assert hidden_cell.reveal() is False
        assert hidden_cell.is_flagged is True

    def test_expose_drops_flag(self, mine_cell: Cell) -> None:
        """Exposing a flagged mine opens it and clears the flag."""
        mine_cell.toggle_flag()
        mine_cell.expose()
        assert mine_cell.is_revealed is True
        assert mine_cell.is_flagged is False


# ============================================================================
# Cell Flag Tests
# ============================================================================

class TestCellFlag:
    """Test cell flagging behavior."""

    def test_flag_changes_state_to_flagged(self, hidden_cell: Cell) -> None:
        """Flagging a cell should change its state."""
        assert hidden_cell.toggle_flag() is True
        assert hidden_cell.state == CellState.FLAGGED

    def test_unflag_returns_to_hidden(self, hidden_cell: Cell) -> None:
        """Unflagging a cell should return it to hidden."""
        hidden_cell.toggle_flag()
        hidden_cell.toggle_flag()
        assert hidden_cell.is_hidden is True

    def test_flag_revealed_cell_returns_false(self, hidden_cell: Cell) -> None:
        """Cannot flag a revealed cell."""
        hidden_cell.reveal()
        assert hidden_cell.toggle_flag() is False
        assert hidden_cell.is_revealed is True


# ============================================================================
# Cell Observation Tests
# ============================================================================

class TestCellObservation:
    """Test cell rendering codes."""

    def test_hidden_and_flagged_codes(self, hidden_cell: Cell) -> None:
        assert hidden_cell.to_observation() == -1
        hidden_cell.toggle_flag()
        assert hidden_cell.to_observation() == -2

    @pytest.mark.parametrize("count", range(0, 9))
    def test_revealed_cell_observation_matches_adjacent_count(
        self, count: int
    ) -> None:
        """Revealed cell returns its adjacent mine count."""
        cell = Cell(adjacent_mines=count)
        cell.reveal()
        assert cell.to_observation() == count

    def test_revealed_mine_observation_is_nine(self, mine_cell: Cell) -> None:
        """Revealed mine should return 9."""
        mine_cell.reveal()
        assert mine_cell.to_observation() == 9
