from __future__ import annotations

import io
import re

import pytest
from colorama import Style

from totpboard.config_loader import Account
from totpboard.renderer import (
    CODE_WIDTH,
    MIN_ID_WIDTH,
    MIN_NAME_WIDTH,
    MIN_SITE_WIDTH,
    MIN_USERNAME_WIDTH,
    PADDING,
    TIME_NEUTRAL,
    TIME_URGENT,
    TIME_WARNING,
    TIME_WIDTH,
    build_frame,
    clear_sequence,
    column_widths,
    format_code,
    render,
    urgency_style,
)

ANSI_RE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")
FIXED_TS = 1234567890  # remaining == 30


def table_lines(lines):
    # border, header, border, rows..., border
    last_border = max(i for i, line in enumerate(lines) if line.startswith("═"))
    return lines[:last_border + 1]


def test_format_code():
    assert format_code("123456") == "123 456"
    assert format_code("000001") == "000 001"
    assert format_code("ERROR") == "ERROR"
    assert format_code("12345678") == "12345678"
    assert format_code("") == ""


@pytest.mark.parametrize("seconds, style", [
    (1, TIME_URGENT),
    (5, TIME_URGENT),
    (6, TIME_WARNING),
    (10, TIME_WARNING),
    (11, TIME_NEUTRAL),
    (30, TIME_NEUTRAL),
])
def test_urgency_style(seconds, style):
    assert urgency_style(seconds) == style


def test_column_widths_minimums_for_empty_fields():
    widths = column_widths([Account()])
    assert widths.id == MIN_ID_WIDTH + PADDING
    assert widths.name == MIN_NAME_WIDTH + PADDING
    assert widths.username == MIN_USERNAME_WIDTH + PADDING
    assert widths.site == MIN_SITE_WIDTH + PADDING
    assert widths.code == CODE_WIDTH
    assert widths.time == TIME_WIDTH
    assert column_widths([]) == widths


def test_column_widths_grow_with_longest_value(github_account):
    long_one = Account(id=123456, name="A" * 20, username="u" * 15, site="s" * 30)
    widths = column_widths([github_account, long_one])
    assert widths.id == len("123456") + 2 * PADDING
    assert widths.name == 20 + PADDING
    assert widths.username == 15 + PADDING
    assert widths.site == 30 + PADDING


@pytest.mark.parametrize("accounts", [
    [Account()],
    [Account(id=1, name="x", username="y", site="z")],
    [Account(id=99999999, name="Very Long Account Name", username="someone@example.com", site="accounts.example.org")],
])
def test_column_widths_bounds(accounts):
    widths = column_widths(accounts)
    for acc in accounts:
        assert widths.id >= max(MIN_ID_WIDTH, len(str(acc.id)) + PADDING)
        assert widths.name >= max(MIN_NAME_WIDTH, len(acc.name) + PADDING)
        assert widths.username >= max(MIN_USERNAME_WIDTH, len(acc.username) + PADDING)
        assert widths.site >= max(MIN_SITE_WIDTH, len(acc.site) + PADDING)


def test_end_to_end_github_row(github_account):
    lines = build_frame([github_account], FIXED_TS, color=False)
    row = lines[3]
    assert row == (
        "║ 1     │ GitHub  │ alice       │ github.com  │  742 275  │  30s     ║"
    )


def test_header_row(github_account):
    lines = build_frame([github_account], FIXED_TS, color=False)
    assert lines[1] == (
        "║ ID    │ Name    │ Username    │ Site        │ Code      │ Time     ║"
    )


def test_all_table_lines_have_the_same_width(github_account):
    accounts = [
        github_account,
        Account(id=1000, name="", username="", site="", secret=""),
        Account(id=3, name="Long service name", username="bob", site="x.io", secret="!!!"),
    ]
    lines = build_frame(accounts, FIXED_TS, color=False)
    width = column_widths(accounts).row_width
    assert {len(line) for line in table_lines(lines)} == {width}


def test_bad_secret_only_breaks_its_own_row(github_account):
    broken = Account(id=2, name="Broken", username="bob", site="example.com", secret="not base32!")
    lines = build_frame([github_account, broken], FIXED_TS, color=False)
    assert "742 275" in lines[3]
    assert "ERROR" not in lines[3]
    assert " ERROR " in lines[4]
    assert not re.search(r"\d{3} \d{3}", lines[4])


def test_footer(github_account):
    lines = build_frame([github_account], FIXED_TS, color=False)
    assert lines[-3] == ""
    assert re.fullmatch(r"⟳ Auto-refresh \| Current time: \d{2}:\d{2}:\d{2}", lines[-2])
    assert lines[-1] == "Press Ctrl+C to exit"


def test_countdown_colour_follows_urgency(github_account):
    urgent = "\n".join(build_frame([github_account], 27))   # 3s left
    warning = "\n".join(build_frame([github_account], 22))  # 8s left
    neutral = "\n".join(build_frame([github_account], 0))   # 30s left
    assert TIME_URGENT + " 3s" in urgent
    assert TIME_WARNING + " 8s" in warning
    assert TIME_NEUTRAL + " 30s" in neutral


def test_colored_frame_strips_to_plain_frame(github_account):
    colored = build_frame([github_account], FIXED_TS, color=True)
    plain = build_frame([github_account], FIXED_TS, color=False)
    assert Style.RESET_ALL in colored[0]
    assert [ANSI_RE.sub("", line) for line in colored] == plain


def test_plain_frame_has_no_escape_codes(github_account):
    assert not any("\x1b" in line for line in build_frame([github_account], FIXED_TS, color=False))


def test_render_is_idempotent(github_account):
    first, second = io.StringIO(), io.StringIO()
    render([github_account], FIXED_TS, out=first)
    render([github_account], FIXED_TS + 0.5, out=second)
    assert first.getvalue() == second.getvalue()


def test_render_clears_screen_first(github_account):
    buf = io.StringIO()
    render([github_account], FIXED_TS, out=buf, color=False)
    output = buf.getvalue()
    assert output.startswith(clear_sequence())
    assert output.endswith("Press Ctrl+C to exit\n")
    assert "742 275" in output


def test_non_ascii_secret_only_breaks_its_own_row(github_account):
    accented = Account(id=2, name="Cafe", username="bob", site="example.com", secret="café")
    lines = build_frame([github_account, accented], FIXED_TS, color=False)
    assert "742 275" in lines[3]
    assert " ERROR " in lines[4]
