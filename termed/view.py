"""Frame rendering: EditorState in, VT100 byte stream out."""

from typing import Optional

from .buffer import OutputBuffer
from .constants import EditorConfig, EditorConstants, cursor_position
from .model import EditorState


def welcome_banner(screen_cols: int) -> bytes:
    """Centered product banner for a screen ``screen_cols`` wide.
    
    The banner is cut to the screen width. Left padding starts with a ``~``
    filler when there is room for one, so the row still reads as empty
    space to the left of the text.
    """
    text = f"{EditorConstants.PRODUCT_NAME} -- version {EditorConstants.VERSION}"
    text = text[:screen_cols]
    padding = (screen_cols - len(text)) // 2
    line = b""
    if padding > 0:
        line += EditorConstants.FILLER
        padding -= 1
    line += b" " * padding
    return line + text.encode('ascii')


def draw_rows(ab: OutputBuffer, state: EditorState, config: EditorConfig):
    """Append one line per screen row to the buffer."""
    banner_row = state.screen_rows // 3
    for y in range(state.screen_rows):
        if config.show_banner and y == banner_row:
            ab.append(welcome_banner(state.screen_cols))
        else:
            ab.append(EditorConstants.FILLER)
        ab.append(EditorConstants.ERASE_LINE)
        if y < state.screen_rows - 1:
            ab.append(EditorConstants.NEWLINE)


def draw_frame(ab: OutputBuffer, state: EditorState, config: EditorConfig):
    """Append a complete frame for ``state`` to ``ab``.
    
    The state is not modified; an out-of-range cursor is clamped for
    display only.
    """
    # Hide the cursor while redrawing to avoid flicker
    ab.append(EditorConstants.HIDE_CURSOR)
    if config.full_clear:
        ab.append(EditorConstants.CLEAR_SCREEN)
    ab.append(EditorConstants.CURSOR_HOME)
    
    draw_rows(ab, state, config)
    
    if config.track_cursor:
        x, y = state.clamped_cursor()
        ab.append(cursor_position(y + 1, x + 1))
    else:
        ab.append(EditorConstants.CURSOR_HOME)
    ab.append(EditorConstants.SHOW_CURSOR)


def render_frame(state: EditorState, config: Optional[EditorConfig] = None) -> bytes:
    """Build a complete frame for ``state``.
    
    Args:
        state: Cursor and screen geometry to draw
        config: Rendering switches, defaults to EditorConfig()
        
    Returns:
        Escape-sequence stream drawing the whole screen
    """
    ab = OutputBuffer()
    draw_frame(ab, state, config or EditorConfig())
    return ab.getvalue()
