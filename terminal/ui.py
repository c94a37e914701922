# terminal/ui.py
"""
curses front end: title menu, board drawing and the input loop.

Everything that touches the screen lives in this module. The pieces that
only translate keys and board values (GameController, cell_glyph) are kept
free of curses calls so they can be tested without a terminal.
"""

import curses
import logging

from engine.difficulty import BEGINNER, EXPERT, INTERMEDIATE, Difficulty
from engine.errors import GameOver, IllegalState, InvalidConfiguration
from engine.game import GameSession, GameStatus

from .settings import color_number

logger = logging.getLogger(__name__)

POLL_MS = 500

BOARD_TOP = 4
BOARD_LEFT = 2

MOVE_KEYS = {
    curses.KEY_LEFT: (0, -1), ord("a"): (0, -1), ord("A"): (0, -1), ord("h"): (0, -1),
    curses.KEY_RIGHT: (0, 1), ord("d"): (0, 1), ord("D"): (0, 1), ord("l"): (0, 1),
    curses.KEY_UP: (-1, 0), ord("w"): (-1, 0), ord("W"): (-1, 0), ord("k"): (-1, 0),
    curses.KEY_DOWN: (1, 0), ord("s"): (1, 0), ord("S"): (1, 0), ord("j"): (1, 0),
}
REVEAL_KEYS = {ord(" "), 10, 13, curses.KEY_ENTER}
FLAG_KEYS = {ord("f"), ord("F")}
RESTART_KEYS = {ord("r"), ord("R")}
QUIT_KEYS = {ord("q"), ord("Q"), 27}

MENU = [
    ("1", BEGINNER),
    ("2", INTERMEDIATE),
    ("3", EXPERT),
    ("4", "Custom"),
    ("5", "Exit"),
]

HELP = "Arrows/WASD/hjkl move  Space/Enter reveal  F flag  R new game  Q menu"


def cell_glyph(value, settings):
    """
    Map one snapshot entry to (text, style). Styles are palette keys:
    "tile", "flag", "question", "mine", "exploded", "wrong", "empty", "count1".."count8".
    """
    if value is None:
        return settings.tile_char, "tile"
    if value == "F":
        return settings.flag_char, "flag"
    if value == "?":
        return settings.question_char, "question"
    if value == "M":
        return settings.mine_char, "mine"
    if value == "*":
        return settings.mine_char, "exploded"
    if value == "X":
        return settings.flag_char, "wrong"
    if value == 0:
        return " ", "empty"
    return str(value), f"count{value}"


class GameController:
    """Cursor plus the mapping from key presses and clicks onto a session."""

    def __init__(self, session: GameSession):
        self.session = session
        self.row = 0
        self.col = 0
        self.message = ""

    def move(self, dr, dc):
        self.row = min(max(self.row + dr, 0), self.session.height - 1)
        self.col = min(max(self.col + dc, 0), self.session.width - 1)

    def _apply(self, command, row, col):
        try:
            command(row, col)
        except (GameOver, IllegalState) as e:
            self.message = str(e)
            return
        self.message = ""

    def reveal(self, row=None, col=None):
        self._apply(self.session.activate, self.row if row is None else row, self.col if col is None else col)

    def flag(self, row=None, col=None):
        self._apply(self.session.toggle_flag, self.row if row is None else row, self.col if col is None else col)

    def handle_key(self, key):
        """Returns "quit" or "restart" when the loop has to act, else None."""
        if key in QUIT_KEYS:
            return "quit"
        if key in RESTART_KEYS:
            return "restart"
        if key in MOVE_KEYS:
            self.move(*MOVE_KEYS[key])
        elif key in REVEAL_KEYS:
            self.reveal()
        elif key in FLAG_KEYS:
            self.flag()
        return None

    def handle_click(self, y, x, right_button=False):
        """Screen coordinates -> cell. Clicks outside the board are ignored."""
        row = y - BOARD_TOP
        offset = x - BOARD_LEFT - 1
        if offset < 0 or offset % 2:
            return
        col = offset // 2
        if not self.session.board.is_valid_coord(row, col):
            return
        self.row, self.col = row, col
        if right_button:
            self.flag()
        else:
            self.reveal()


class Palette:
    """curses color pairs built from the user's settings."""

    def __init__(self, settings):
        self.attrs = {}
        if not curses.has_colors():
            return
        curses.start_color()
        try:
            curses.use_default_colors()
        except curses.error:
            pass
        colors = curses.COLORS

        def pair(n, fg, bg):
            curses.init_pair(n, color_number(fg, colors), color_number(bg, colors))
            return curses.color_pair(n)

        self.attrs["border"] = pair(1, settings.border_fg, settings.border_bg)
        tile = pair(2, settings.inner_fg, settings.inner_bg)
        highlight = pair(3, settings.inner_highlight, settings.inner_bg)
        self.attrs.update(tile=tile, empty=tile, question=tile, flag=highlight | curses.A_BOLD)
        self.attrs.update(mine=highlight, exploded=highlight | curses.A_BOLD, wrong=highlight | curses.A_DIM)
        for i, fg in enumerate(settings.count_fg, start=1):
            self.attrs[f"count{i}"] = pair(3 + i, fg, settings.inner_bg)

    def __getitem__(self, style):
        return self.attrs.get(style, curses.A_NORMAL)


def _put(win, y, x, text, attr=curses.A_NORMAL):
    # Writing into the bottom-right cell or past a small terminal raises.
    try:
        win.addstr(y, x, text, attr)
    except curses.error:
        pass


def draw_menu(stdscr, store, message=""):
    stdscr.erase()
    _put(stdscr, 0, 0, "T E R M I N A L   M I N E S W E E P E R", curses.A_BOLD)
    for i, (key, item) in enumerate(MENU):
        label = item.label if isinstance(item, Difficulty) else item
        _put(stdscr, 2 + i, 0, f"{key}. {label}")

    totals = store.totals()
    lines = [
        f"Games Played: {totals.games_played}",
        f"Games Won: {totals.games_won}",
        f"Win %: {totals.win_ratio * 100:.1f}",
        f"Minutes played: {int(totals.total_playtime // 60)}",
        f"Clicks: {totals.total_clicks}",
    ]
    for i, line in enumerate(lines):
        _put(stdscr, 8 + i, 0, line, curses.A_DIM)
    if store.degraded:
        _put(stdscr, 14, 0, f"Statistics are not being saved: {store.last_error}", curses.A_DIM)
    if message:
        _put(stdscr, 16, 0, message, curses.A_BOLD)
    stdscr.refresh()


def draw_game(stdscr, controller, settings, palette, store=None):
    session = controller.session
    stdscr.erase()
    _put(stdscr, 0, 0, session.difficulty.label, curses.A_BOLD)
    _put(stdscr, 1, 0, f"Mines: {session.mines_remaining:>3}   Time: {int(session.elapsed()):>4}s   "
                       f"Moves: {session.moves_made}")

    border = palette["border"]
    width = session.width
    _put(stdscr, BOARD_TOP - 1, BOARD_LEFT, "+" + "-" * (width * 2 + 1) + "+", border)
    for r, row in enumerate(session.snapshot()):
        y = BOARD_TOP + r
        _put(stdscr, y, BOARD_LEFT, "|", border)
        _put(stdscr, y, BOARD_LEFT + 1, " " * (width * 2 + 1), palette["tile"])
        for c, value in enumerate(row):
            text, style = cell_glyph(value, settings)
            attr = palette[style]
            if (r, c) == (controller.row, controller.col) and not session.is_game_over():
                attr |= curses.A_REVERSE
            _put(stdscr, y, BOARD_LEFT + 1 + c * 2, text, attr)
        _put(stdscr, y, BOARD_LEFT + 2 + width * 2, "|", border)
    _put(stdscr, BOARD_TOP + session.height, BOARD_LEFT, "+" + "-" * (width * 2 + 1) + "+", border)

    footer = BOARD_TOP + session.height + 2
    _put(stdscr, footer, 0, HELP)
    if session.status is GameStatus.WON:
        _put(stdscr, footer + 2, 0, f"You win in {session.elapsed():.1f}s! Press R to play again.", curses.A_BOLD)
    elif session.status is GameStatus.LOST:
        _put(stdscr, footer + 2, 0, "Boom! You hit a mine. Press R to retry.", curses.A_BOLD)
    elif controller.message:
        _put(stdscr, footer + 2, 0, controller.message)
    if store is not None and store.degraded:
        _put(stdscr, footer + 3, 0, f"Statistics are not being saved: {store.last_error}", curses.A_DIM)
    stdscr.refresh()


def prompt_custom(stdscr):
    """Ask for width, height and mines. Returns a Difficulty or an error message."""
    curses.echo()
    curses.curs_set(1)
    stdscr.timeout(-1)
    answers = []
    try:
        for i, label in enumerate(("Width", "Height", "Mines")):
            _put(stdscr, 18 + i, 0, f"> {label}: ")
            stdscr.refresh()
            answers.append(stdscr.getstr(18 + i, len(label) + 4, 8).decode(errors="replace").strip())
    finally:
        curses.noecho()
        curses.curs_set(0)
        stdscr.timeout(POLL_MS)

    try:
        width, height, mines = (int(a) for a in answers)
    except ValueError:
        return f"X Error while reading input: {', '.join(repr(a) for a in answers)}"
    try:
        return Difficulty.custom(width, height, mines)
    except InvalidConfiguration as e:
        return f"X {e}"


def play(stdscr, difficulty, settings, palette, store=None, seed=None):
    """Run games on one difficulty until the player goes back to the menu."""
    session = GameSession(difficulty, stats=store, seed=seed, mode=settings.mode,
                          question_marks=settings.question_marks)
    controller = GameController(session)
    logger.debug("Starting %s (mode=%s)", difficulty.label, session.mode.value)
    while True:
        draw_game(stdscr, controller, settings, palette, store)
        key = stdscr.getch()
        if key == -1:
            # poll timeout, redraw for the clock
            continue
        if key == curses.KEY_MOUSE:
            try:
                _, x, y, _, state = curses.getmouse()
            except curses.error:
                continue
            if state & (curses.BUTTON1_CLICKED | curses.BUTTON1_PRESSED):
                controller.handle_click(y, x)
            elif state & (curses.BUTTON3_CLICKED | curses.BUTTON3_PRESSED):
                controller.handle_click(y, x, right_button=True)
            continue

        action = controller.handle_key(key)
        if action == "quit":
            session.abandon()
            return
        if action == "restart":
            session.abandon()
            session.reset()
            controller.message = ""


def run(stdscr, store, settings, difficulty=None, seed=None):
    curses.curs_set(0)
    stdscr.keypad(True)
    stdscr.timeout(POLL_MS)
    curses.mousemask(curses.ALL_MOUSE_EVENTS)
    palette = Palette(settings)

    if difficulty is not None:
        play(stdscr, difficulty, settings, palette, store, seed)
        return

    message = ""
    while True:
        draw_menu(stdscr, store, message)
        key = stdscr.getch()
        if key == -1:
            continue
        choice = chr(key) if 0 <= key < 256 else ""
        if choice in ("5", "q", "Q"):
            return
        if choice in ("1", "2", "3"):
            play(stdscr, MENU[int(choice) - 1][1], settings, palette, store, seed)
            message = ""
        elif choice == "4":
            selected = prompt_custom(stdscr)
            if isinstance(selected, Difficulty):
                play(stdscr, selected, settings, palette, store, seed)
                message = ""
            else:
                message = selected
