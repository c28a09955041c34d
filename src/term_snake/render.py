"""Curses drawing of the board, score line, FPS counter, and pause menu."""

from __future__ import annotations

import curses
from typing import TYPE_CHECKING

from term_snake.grid import BoardPiece

if TYPE_CHECKING:
    from term_snake.game import Game

GLYPHS: dict[BoardPiece, str] = {
    BoardPiece.EMPTY: " ",
    BoardPiece.SNAKE_BODY: "O",
    BoardPiece.SNAKE_HEAD: "#",
    BoardPiece.FOOD: "@",
    BoardPiece.FRUIT: "$",
}

# Border, score line, and a spare row/column around the board.
WINDOW_MARGIN = 4

# Color pair ids.
PAIR_BOARD = 1
PAIR_BORDER = 2
PAIR_TEXT = 3
PAIR_FPS = 4

_MENU_TEXT = """PAUSED

<esc> - Resume game
<q>   - Quit game"""

# Border, inner padding, and outer padding on each side of the menu.
_MENU_PADDING = 2 * (1 + 1 + 1)

_colors_enabled = False


def init_colors() -> None:
    """Register the color pairs used by the draw functions."""
    global _colors_enabled
    if not curses.has_colors():
        return
    curses.start_color()
    curses.init_pair(PAIR_BOARD, curses.COLOR_WHITE, curses.COLOR_GREEN)
    curses.init_pair(PAIR_BORDER, curses.COLOR_WHITE, curses.COLOR_BLACK)
    curses.init_pair(PAIR_TEXT, curses.COLOR_WHITE, curses.COLOR_BLACK)
    curses.init_pair(PAIR_FPS, curses.COLOR_BLACK, curses.COLOR_BLUE)
    _colors_enabled = True


def _attr(pair: int) -> int:
    return curses.color_pair(pair) if _colors_enabled else curses.A_NORMAL


def _put(screen, row: int, col: int, text: str, attr: int = 0) -> None:
    # Writing the bottom-right cell raises even though the text is drawn.
    try:
        screen.addstr(row, col, text, attr)
    except curses.error:
        pass


def board_lines(game: Game) -> list[str]:
    """Return the board as one string of glyphs per row."""
    return [
        "".join(GLYPHS[piece] for piece in row)
        for row in game.board_pieces()
    ]


def is_window_big_enough(
    dimensions: tuple[int, int], window: tuple[int, int],
) -> bool:
    """Check that a ``(rows, cols)`` window fits a board of *dimensions*."""
    return (
        window[0] >= dimensions[0] + WINDOW_MARGIN
        and window[1] >= dimensions[1] + WINDOW_MARGIN
    )


def board_origin(
    dimensions: tuple[int, int], window: tuple[int, int],
) -> tuple[int, int]:
    """Top-left screen cell of a board centred in *window*."""
    return (window[0] - dimensions[0]) // 2, (window[1] - dimensions[1]) // 2


def border_cells(
    dimensions: tuple[int, int], window: tuple[int, int],
) -> list[tuple[int, int]]:
    """Screen cells of the one-cell frame around the board."""
    rows, cols = dimensions
    top, left = board_origin(dimensions, window)
    cells: list[tuple[int, int]] = []
    for r in range(top, top + rows):
        cells.append((r, left - 1))
        cells.append((r, left + cols))
    for c in range(left - 1, left + cols + 1):
        cells.append((top - 1, c))
        cells.append((top + rows, c))
    return cells


def fps_from_delta(delta: float) -> int:
    """Frames per second for a frame that took *delta* seconds."""
    if delta <= 0:
        delta = 1.0
    return int(1.0 / delta)


def menu_lines() -> list[str]:
    return [line.strip() for line in _MENU_TEXT.splitlines()]


def menu_dimensions(lines: list[str]) -> tuple[int, int]:
    """Screen ``(rows, cols)`` needed by the pause menu, padding included."""
    return (
        len(lines) + _MENU_PADDING,
        max(len(line) for line in lines) + _MENU_PADDING,
    )


def draw_game_frame(
    screen, game: Game, window: tuple[int, int],
    delta: float, show_fps: bool = False,
) -> None:
    """Draw border, board, score line, and optionally the FPS counter."""
    dimensions = game.dimensions
    top, left = board_origin(dimensions, window)

    border = _attr(PAIR_BORDER)
    for r, c in border_cells(dimensions, window):
        _put(screen, r, c, " ", border)

    board = _attr(PAIR_BOARD)
    for i, line in enumerate(board_lines(game)):
        _put(screen, top + i, left, line, board)

    score = f"Score: {game.score}"
    if game.fruit_remaining is not None:
        score += f"  Fruit: {game.fruit_remaining}"
    score_row = top + dimensions[0] + 1
    screen.move(score_row, left)
    screen.clrtoeol()
    _put(screen, score_row, left, score, _attr(PAIR_TEXT))

    if show_fps:
        draw_fps(screen, delta, window)

    screen.refresh()


def draw_fps(screen, delta: float, window: tuple[int, int]) -> None:
    text = str(fps_from_delta(delta))
    screen.move(0, 0)
    screen.clrtoeol()
    _put(screen, 0, window[1] - len(text), text, _attr(PAIR_FPS))


def draw_pause_screen(screen, window: tuple[int, int]) -> None:
    """Draw the pause menu centred, or a bare label if it does not fit."""
    lines = menu_lines()
    rows, cols = menu_dimensions(lines)
    text = _attr(PAIR_TEXT)

    if window[0] < rows or window[1] < cols:
        _put(screen, 0, 0, "PAUSED", text)
    else:
        inset = _MENU_PADDING // 2
        top = (window[0] - rows) // 2 + inset
        left = (window[1] - cols) // 2 + inset
        for i, line in enumerate(lines):
            _put(screen, top + i, left, line, text)

    screen.refresh()


def draw_too_small(screen, dimensions: tuple[int, int]) -> None:
    rows, cols = dimensions
    _put(
        screen, 0, 0,
        f"Window too small: need {rows + WINDOW_MARGIN}x{cols + WINDOW_MARGIN}",
        _attr(PAIR_TEXT),
    )
    screen.refresh()
