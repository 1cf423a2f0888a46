"""
Render and share sinks for finished games.

A sink turns a game snapshot into an opaque handle; the renderers here
produce text. compose_cast_text() builds the post announcing the result.
"""
from abc import ABC, abstractmethod
from typing import Optional

from sweeper import GamePhase, GameSnapshot

BOMB = "\U0001F4A3"
CHECK = "✅"
BLANK = "⬜"
PARTY = "\U0001F389"
BOOM = "\U0001F4A5"

POINTS = 100


# ============================================================================
# Render Sinks
# ============================================================================

class RenderSink(ABC):
    """Abstract consumer of board snapshots."""

    @abstractmethod
    def render_board(self, snapshot: GameSnapshot) -> str:
        """
        Render a snapshot.

        Args:
            snapshot: Board to render.

        Returns:
            Handle of the rendered board (text, URL, key...).
        """
        pass


class AnsiBoardRenderer(RenderSink):
    """Render the board as terminal text, one row per line."""

    def render_board(self, snapshot: GameSnapshot) -> str:
        lines = []
        obs = snapshot.to_array()

        for row in range(snapshot.height):
            row_str = ""
            for col in range(snapshot.width):
                val = obs[row, col]
                if val == -1:
                    row_str += "."
                elif val == -2:
                    row_str += "F"
                elif val == 9:
                    row_str += "*"
                elif val == 0:
                    row_str += " "
                else:
                    row_str += str(val)
                row_str += " "
            lines.append(row_str)

        return "\n".join(lines)


class CastBoardRenderer(RenderSink):
    """
    Render the board for a cast: mines show the follower hidden there,
    revealed cells a check mark and the rest a blank square.
    """

    def render_board(self, snapshot: GameSnapshot) -> str:
        rows = []
        for cells in snapshot.cells:
            symbols = []
            for cell in cells:
                if cell.is_mine:
                    if cell.avatar is not None:
                        symbols.append(cell.avatar.mention)
                    else:
                        symbols.append(BOMB)
                elif cell.is_revealed:
                    symbols.append(CHECK)
                else:
                    symbols.append(BLANK)
            rows.append(" ".join(symbols))
        return "\n".join(rows)


# ============================================================================
# Cast Text
# ============================================================================

def format_solving_time(seconds: int) -> str:
    """Format seconds as M:SS."""
    minutes, seconds = divmod(int(seconds), 60)
    return f"{minutes}:{seconds:02d}"


def compose_cast_text(
    snapshot: GameSnapshot, solving_time: Optional[int] = None
) -> str:
    """
    Compose the post announcing a finished game.

    Args:
        snapshot: Snapshot of a won or lost game.
        solving_time: Seconds the player took, if tracked.

    Returns:
        Text mentioning the avoided followers, or the one that killed
        the player.

    Raises:
        ValueError: If the game is not over.
    """
    if not snapshot.is_terminal:
        raise ValueError("Cannot share a game that is still in progress")

    time_text = ""
    if solving_time:
        time_text = f" in {format_solving_time(solving_time)}"

    if snapshot.phase == GamePhase.WON:
        mentions = " ".join(
            avatar.mention for avatar in snapshot.avoided_avatars or ()
        )
        return f"Avoided {mentions} to win {POINTS} points{time_text}! {PARTY}"

    if snapshot.detonated_avatar is not None:
        return (
            f"Got killed by {snapshot.detonated_avatar.mention}, "
            f"lost {POINTS} points{time_text}. {BOOM}"
        )
    return f"Game over! Lost {POINTS} points{time_text}. {BOOM}"
