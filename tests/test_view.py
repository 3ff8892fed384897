"""Test frame rendering."""

from termed.constants import EditorConfig, EditorConstants
from termed.model import EditorState
from termed.view import render_frame, welcome_banner

BANNER = b"termed -- version " + EditorConstants.VERSION.encode()
PREFIX = EditorConstants.HIDE_CURSOR + EditorConstants.CURSOR_HOME


def split_rows(frame: bytes, prefix: bytes = PREFIX) -> list[bytes]:
    assert frame.startswith(prefix)
    return frame[len(prefix):].split(b"\r\n")


def test_frame_layout():
    state = EditorState(screen_rows=24, screen_cols=80)
    frame = render_frame(state)
    rows = split_rows(frame)
    assert len(rows) == 24
    for y, row in enumerate(rows[:-1]):
        if y != 8:
            assert row == b"~\x1b[K"
    assert rows[-1] == b"~\x1b[K\x1b[1;1H\x1b[?25h"


def test_banner_row_is_centered():
    state = EditorState(screen_rows=24, screen_cols=80)
    row = split_rows(render_frame(state))[24 // 3]
    assert row.endswith(EditorConstants.ERASE_LINE)
    line = row[:-len(EditorConstants.ERASE_LINE)]
    assert line.startswith(b"~")
    assert line.endswith(BANNER)
    left = len(line) - len(BANNER)
    right = 80 - len(line)
    assert len(line) <= 80
    assert abs(left - right) <= 1


def test_banner_truncated_on_narrow_screen():
    assert welcome_banner(10) == BANNER[:10]
    # Exactly one column to spare: padding 0, no filler
    assert welcome_banner(len(BANNER) + 1) == BANNER


def test_banner_padding_uses_filler_first():
    banner = welcome_banner(len(BANNER) + 6)
    assert banner == b"~  " + BANNER


def test_banner_disabled():
    state = EditorState(screen_rows=6, screen_cols=40)
    frame = render_frame(state, EditorConfig(show_banner=False))
    assert BANNER not in frame
    assert frame.count(b"~") == 6


def test_full_clear_variant():
    state = EditorState(screen_rows=3, screen_cols=10)
    frame = render_frame(state, EditorConfig(full_clear=True, show_banner=False))
    assert frame.startswith(
        EditorConstants.HIDE_CURSOR + EditorConstants.CLEAR_SCREEN + EditorConstants.CURSOR_HOME
    )


def test_cursor_position_is_one_based():
    state = EditorState(screen_rows=24, screen_cols=80, cursor_x=9, cursor_y=4)
    frame = render_frame(state)
    assert frame.endswith(b"\x1b[5;10H\x1b[?25h")


def test_out_of_range_cursor_is_clamped_for_display():
    state = EditorState(screen_rows=24, screen_cols=80, cursor_x=500, cursor_y=99)
    frame = render_frame(state)
    assert frame.endswith(b"\x1b[24;80H\x1b[?25h")
    assert state.cursor_x == 500


def test_untracked_cursor_stays_home():
    state = EditorState(screen_rows=24, screen_cols=80, cursor_x=9, cursor_y=4)
    frame = render_frame(state, EditorConfig(track_cursor=False))
    assert frame.endswith(EditorConstants.CURSOR_HOME + EditorConstants.SHOW_CURSOR)


def test_rendering_is_idempotent():
    state = EditorState(screen_rows=24, screen_cols=80, cursor_x=3, cursor_y=7)
    assert render_frame(state) == render_frame(state)


def test_single_row_screen():
    state = EditorState(screen_rows=1, screen_cols=30)
    frame = render_frame(state)
    # Row 0 is the banner row and there is no trailing newline
    assert b"\r\n" not in frame
    assert BANNER in frame


def test_output_is_seven_bit_clean():
    state = EditorState(screen_rows=24, screen_cols=80)
    assert all(b < 0x80 for b in render_frame(state))
