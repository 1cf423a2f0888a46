"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sweeper import Cell, GameConfig, GameState, new_game
from social import AvatarRecord, StaticAvatarSource


# ============================================================================
# Avatar Fixtures
# ============================================================================

@pytest.fixture
def followers() -> list:
    """Eight distinct follower avatars."""
    return [
        AvatarRecord(fid=100 + i, username=f"follower{i}",
                     display_name=f"Follower {i}")
        for i in range(8)
    ]


@pytest.fixture
def avatar_source(followers: list) -> StaticAvatarSource:
    """Source knowing the followers of user 'alice'."""
    return StaticAvatarSource({"alice": followers})


# ============================================================================
# Game Fixtures
# ============================================================================

@pytest.fixture
def default_game(followers: list) -> GameState:
    """Create a seeded 8x8 game with 8 mines and 8 followers."""
    return new_game(8, 8, 8, followers, seed=1234)


@pytest.fixture
def corner_game() -> GameState:
    """3x3 game with mines at (0, 0) and (2, 2), avatars on both."""
    pool = [
        AvatarRecord(fid=1, username="first"),
        AvatarRecord(fid=2, username="second"),
    ]
    return GameState.with_mines(GameConfig(3, 3, 2), [(0, 0), (2, 2)], pool)


@pytest.fixture
def open_game() -> GameState:
    """5x5 game with a single mine in the bottom-right corner."""
    return GameState.with_mines(GameConfig(5, 5, 1), [(4, 4)])


@pytest.fixture
def empty_game() -> GameState:
    """Create a game with no mines for cascade testing."""
    return new_game(5, 5, 0, seed=0)


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)
