"""termed - a minimal full-screen terminal editor shell."""

from .constants import EditorConfig, EditorConstants
from .errors import TermedError, TerminalModeError, WindowSizeError, InputReadError
from .keyboard import KeyDecoder, KeyEvent, KeyType
from .model import EditorState
from .view import render_frame

__version__ = EditorConstants.VERSION

__all__ = [
    'EditorConfig',
    'EditorState',
    'KeyDecoder',
    'KeyEvent',
    'KeyType',
    'TermedError',
    'TerminalModeError',
    'WindowSizeError',
    'InputReadError',
    'render_frame',
]
