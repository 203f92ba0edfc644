#!/usr/bin/env python3
"""
renderer.py — draw the account table with colorama.

Every frame is computed from (accounts, now) only, so the same input always
gives the same bytes. Tests render into an io.StringIO instead of the terminal.
"""

from dataclasses import dataclass
from typing import List, Sequence, TextIO
import sys
import time

from colorama import Cursor, Fore, Style, ansi

from .config_loader import Account
from .otp_core import DEFAULT_DIGITS, code_or_placeholder, remaining

# --- Layout constants ------------------------------------------------------
PADDING = 2
MIN_ID_WIDTH = 4            # "ID" + padding
MIN_NAME_WIDTH = 6          # "Name"
MIN_USERNAME_WIDTH = 10     # "Username"
MIN_SITE_WIDTH = 6          # "Site"
CODE_WIDTH = 10             # "123 456" + padding
TIME_WIDTH = 8              # "30s" + padding
# "║ " + five "│ " separators + " ║"
FRAME_OVERHEAD = 14

URGENT_SECONDS = 5
WARNING_SECONDS = 10

# --- Styles ----------------------------------------------------------------
BORDER = Fore.LIGHTBLACK_EX
HEADER = Fore.GREEN
CELL = Fore.LIGHTWHITE_EX
CODE = Fore.WHITE + Style.BRIGHT
TIME_NEUTRAL = Fore.MAGENTA
TIME_WARNING = Fore.YELLOW + Style.BRIGHT
TIME_URGENT = Fore.RED + Style.BRIGHT
FOOTER = Fore.CYAN
HINT = Fore.LIGHTBLACK_EX

FOOTER_TEXT = "⟳ Auto-refresh | Current time: {clock}"
HINT_TEXT = "Press Ctrl+C to exit"


@dataclass(frozen=True)
class ColumnWidths:
    id: int
    name: int
    username: int
    site: int
    code: int = CODE_WIDTH
    time: int = TIME_WIDTH

    @property
    def row_width(self) -> int:
        return (self.id + self.name + self.username + self.site
                + self.code + self.time + FRAME_OVERHEAD)


def column_widths(accounts: Sequence[Account]) -> ColumnWidths:
    """
    Widths for the current account list.

    Each text column is max(header minimum, longest value) + PADDING.
    The ID column keeps two spare characters after the longest number before
    padding is added, so it never shrinks below MIN_ID_WIDTH + PADDING.
    """
    id_len = MIN_ID_WIDTH
    name_len = MIN_NAME_WIDTH
    user_len = MIN_USERNAME_WIDTH
    site_len = MIN_SITE_WIDTH
    for acc in accounts:
        id_len = max(id_len, len(str(acc.id)) + PADDING)
        name_len = max(name_len, len(acc.name))
        user_len = max(user_len, len(acc.username))
        site_len = max(site_len, len(acc.site))
    return ColumnWidths(
        id=id_len + PADDING,
        name=name_len + PADDING,
        username=user_len + PADDING,
        site=site_len + PADDING,
    )


def format_code(code: str) -> str:
    """'123456' -> '123 456'; anything else (e.g. 'ERROR') is left alone."""
    if len(code) == DEFAULT_DIGITS:
        return code[:3] + " " + code[3:]
    return code


def urgency_style(seconds_left: int) -> str:
    if seconds_left <= URGENT_SECONDS:
        return TIME_URGENT
    if seconds_left <= WARNING_SECONDS:
        return TIME_WARNING
    return TIME_NEUTRAL


class _Painter:
    """Wraps text in a style + reset, or passes it through when color is off."""

    def __init__(self, color: bool):
        self.color = color

    def __call__(self, style: str, text: str) -> str:
        if not self.color:
            return text
        return f"{style}{text}{Style.RESET_ALL}"


def build_frame(accounts: Sequence[Account], now: float, color: bool = True) -> List[str]:
    """
    All lines of one frame, without the clear-screen prefix.

    Arguments:
        accounts: accounts in display order
        now: Unix time used for codes, countdown and the footer clock
        color: emit ANSI styles
    """
    paint = _Painter(color)
    widths = column_widths(accounts)
    seconds_left = remaining(now)
    border_line = paint(BORDER, "═" * widths.row_width)

    def row(cells) -> str:
        parts = [paint(BORDER, "║ ")]
        for i, (style, text) in enumerate(cells):
            if i:
                parts.append(paint(BORDER, "│ "))
            parts.append(paint(style, text))
        parts.append(paint(BORDER, " ║"))
        return "".join(parts)

    lines = [border_line]
    lines.append(row([
        (HEADER, f"{'ID':<{widths.id}}"),
        (HEADER, f"{'Name':<{widths.name}}"),
        (HEADER, f"{'Username':<{widths.username}}"),
        (HEADER, f"{'Site':<{widths.site}}"),
        (HEADER, f"{'Code':<{widths.code}}"),
        (HEADER, f"{'Time':<{widths.time}}"),
    ]))
    lines.append(border_line)

    time_str = f"{seconds_left}s"
    time_style = urgency_style(seconds_left)
    for acc in accounts:
        code = format_code(code_or_placeholder(acc.secret, now))
        lines.append(row([
            (CELL, f"{acc.id:<{widths.id}d}"),
            (CELL, f"{acc.name:<{widths.name}}"),
            (CELL, f"{acc.username:<{widths.username}}"),
            (CELL, f"{acc.site:<{widths.site}}"),
            (CODE, f" {code:<{widths.code - 1}}"),
            (time_style, f" {time_str:<{widths.time - 1}}"),
        ]))

    lines.append(border_line)
    lines.append("")
    clock = time.strftime("%H:%M:%S", time.localtime(now))
    lines.append(paint(FOOTER, FOOTER_TEXT.format(clock=clock)))
    lines.append(paint(HINT, HINT_TEXT))
    return lines


def clear_sequence() -> str:
    return ansi.clear_screen() + Cursor.POS(1, 1)


def render(accounts: Sequence[Account], now: float, out: TextIO = None,
           color: bool = True) -> None:
    """Clear the screen and draw one frame to `out` (default sys.stdout)."""
    if out is None:
        out = sys.stdout
    out.write(clear_sequence())
    out.write("\n".join(build_frame(accounts, now, color)) + "\n")
    out.flush()
