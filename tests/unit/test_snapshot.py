"""
Unit tests for game snapshots and move results.
"""
import dataclasses

import numpy as np
import pytest
from sweeper import GamePhase, GameState


class TestSnapshot:
    """Test the read-only projection of a game."""

    def test_snapshot_is_frozen(self, corner_game: GameState) -> None:
        view = corner_game.snapshot()
        with pytest.raises(dataclasses.FrozenInstanceError):
            view.phase = GamePhase.WON

    def test_snapshot_does_not_follow_later_moves(
        self, corner_game: GameState
    ) -> None:
        before = corner_game.snapshot()
        corner_game.reveal(1, 1)
        assert before.cell(1, 1).is_revealed is False
        assert corner_game.snapshot() != before

    def test_dimensions(self, default_game: GameState) -> None:
        view = default_game.snapshot()
        assert (view.height, view.width) == (8, 8)
        assert view.mine_count == 8

    def test_to_array_codes(self, corner_game: GameState) -> None:
        corner_game.toggle_flag(2, 2)
        corner_game.reveal(0, 2)
        obs = corner_game.snapshot().to_array()
        assert obs.dtype == np.int8
        expected = np.array([
            [-1, 1, 0],
            [-1, 2, 1],
            [-1, -1, -2],
        ], dtype=np.int8)
        np.testing.assert_array_equal(obs, expected)

    def test_revealed_mine_code_after_loss(
        self, corner_game: GameState
    ) -> None:
        obs = corner_game.reveal(2, 2).snapshot.to_array()
        assert obs[0, 0] == 9
        assert obs[2, 2] == 9

    def test_counts(self, corner_game: GameState) -> None:
        corner_game.toggle_flag(0, 0)
        view = corner_game.reveal(0, 2).snapshot
        assert view.revealed_count == 4
        assert view.flagged_count == 1
        assert view.mines_remaining_estimate == 1


class TestMoveResult:
    """Test the result returned by commands."""

    def test_result_exposes_phase_and_game_over(
        self, corner_game: GameState
    ) -> None:
        result = corner_game.reveal(0, 0)
        assert result.phase == GamePhase.LOST
        assert result.game_over is True

    def test_result_snapshot_matches_state(
        self, corner_game: GameState
    ) -> None:
        result = corner_game.reveal(0, 2)
        assert result.snapshot == corner_game.snapshot()
        assert result.game_over is False
