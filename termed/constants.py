"""Constants and configuration for the termed editor."""

from dataclasses import dataclass
from typing import Optional


def ctrl_key(k: str) -> int:
    """Return the byte produced by pressing Ctrl together with ``k``.

    The terminal clears the upper three bits of the key, so Ctrl-Q is 0x11.
    """
    return ord(k) & 0x1f


class EditorConstants:
    """Central constants for the editor."""
    
    PRODUCT_NAME = "termed"
    VERSION = "0.0.1"
    
    # Input
    ESCAPE = 0x1b
    QUIT_KEY = ctrl_key('q')
    
    # VT100 output sequences
    HIDE_CURSOR = b"\x1b[?25l"
    SHOW_CURSOR = b"\x1b[?25h"
    CURSOR_HOME = b"\x1b[H"
    CLEAR_SCREEN = b"\x1b[2J"
    ERASE_LINE = b"\x1b[K"
    NEWLINE = b"\r\n"
    FILLER = b"~"
    
    # Consecutive read failures tolerated before giving up
    MAX_READ_ERRORS = 5
    
    # Status messages
    READ_ERROR_MESSAGE = "Error reading key: {}"


def cursor_position(row: int, col: int) -> bytes:
    """Escape sequence moving the cursor to a 1-based row and column."""
    return f"\x1b[{row};{col}H".encode("ascii")


@dataclass
class EditorConfig:
    """Rendering and input policy switches.

    Attributes:
        show_banner: Draw the product banner a third of the way down.
        full_clear: Clear the whole screen before every frame instead of
            only homing the cursor.
        track_cursor: Place the terminal cursor at the editor cursor. When
            off the cursor stays parked at the top-left cell.
        max_read_errors: Consecutive read failures tolerated before the
            failure is treated as fatal. ``None`` retries forever.
    """
    show_banner: bool = True
    full_clear: bool = False
    track_cursor: bool = True
    max_read_errors: Optional[int] = EditorConstants.MAX_READ_ERRORS
