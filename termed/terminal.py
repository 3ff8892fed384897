"""Terminal access: raw mode via termios, geometry via Blessed."""

import logging
import os
import signal
import sys
import termios
from contextlib import contextmanager
from dataclasses import dataclass
from typing import BinaryIO, Iterator, Optional, Protocol

import blessed

from .errors import TerminalModeError, WindowSizeError

logger = logging.getLogger(__name__)

# Use file descriptor 0 for stdin to work in all environments
STDIN_FILENO = 0


@dataclass(frozen=True)
class SavedMode:
    """Terminal attributes captured before entering raw mode."""
    fd: int
    attributes: tuple


class TerminalMode(Protocol):
    """Anything that can switch a terminal into raw mode and back."""

    def enable(self) -> SavedMode:
        ...

    def restore(self, saved: SavedMode) -> None:
        ...


def make_raw(attributes: list) -> list:
    """Return a copy of termios ``attributes`` configured for raw input.
    
    Mirrors cfmakeraw(3): no echo, no line buffering, no signal keys, no
    flow control, no output post-processing, 8-bit characters, and reads
    that return as soon as one byte is available.
    """
    new = list(attributes)
    new[0] &= ~(termios.IGNBRK | termios.BRKINT | termios.PARMRK | termios.ISTRIP
                | termios.INLCR | termios.IGNCR | termios.ICRNL | termios.IXON)
    new[1] &= ~termios.OPOST
    new[2] &= ~(termios.CSIZE | termios.PARENB)
    new[2] |= termios.CS8
    new[3] &= ~(termios.ECHO | termios.ECHONL | termios.ICANON | termios.ISIG
                | termios.IEXTEN)
    cc = list(attributes[6])
    cc[termios.VMIN] = 1
    cc[termios.VTIME] = 0
    new[6] = cc
    return new


class RawModeController:
    """Owns the raw/canonical mode switch for one terminal file descriptor.
    
    Every successful ``enable`` must be paired with exactly one ``restore``.
    ``raw_mode`` wraps the pair in a context manager so the restore also
    happens when the body raises.
    """
    
    def __init__(self, fd: Optional[int] = None):
        self.fd = STDIN_FILENO if fd is None else fd
        self._active: Optional[SavedMode] = None
        
    @property
    def active(self) -> bool:
        return self._active is not None
    
    def enable(self) -> SavedMode:
        """Switch the terminal to raw mode.
        
        Returns:
            The attributes in force beforehand, for ``restore``
            
        Raises:
            TerminalModeError: No controlling terminal, or tcsetattr failed
        """
        if self._active is not None:
            raise TerminalModeError("enable raw mode", "raw mode is already enabled")
        if not os.isatty(self.fd):
            raise TerminalModeError("enable raw mode", "standard input is not a terminal")
        try:
            original = termios.tcgetattr(self.fd)
            saved = SavedMode(self.fd, tuple(original[:6]) + (tuple(original[6]),))
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, make_raw(original))
        except (termios.error, OSError) as e:
            raise TerminalModeError("enable raw mode", str(e)) from e
        self._active = saved
        logger.debug(f"Raw mode enabled on fd {self.fd}")
        return saved
    
    def restore(self, saved: SavedMode) -> None:
        """Put back the attributes captured by ``enable``.
        
        Raises:
            TerminalModeError: tcsetattr failed
        """
        if self._active is not saved:
            logger.debug("Restore skipped: terminal mode already restored")
            return
        self._active = None
        attributes = list(saved.attributes[:6]) + [list(saved.attributes[6])]
        try:
            termios.tcsetattr(saved.fd, termios.TCSAFLUSH, attributes)
        except (termios.error, OSError) as e:
            logger.error(f"Could not restore terminal mode on fd {saved.fd}: {e}")
            raise TerminalModeError("restore terminal mode", str(e)) from e
        logger.debug(f"Terminal mode restored on fd {saved.fd}")
    
    @contextmanager
    def raw_mode(self) -> Iterator[SavedMode]:
        """Context manager holding the terminal in raw mode."""
        saved = self.enable()
        try:
            yield saved
        finally:
            self.restore(saved)


# Signals that should end the session cleanly instead of killing it
# with the terminal still in raw mode
SHUTDOWN_SIGNALS = (signal.SIGTERM, signal.SIGHUP)


def _raise_system_exit(signum, frame):
    """Turn SIGTERM/SIGHUP into SystemExit so cleanup code runs."""
    del frame # Unused
    logger.info(f"Received signal {signum}, shutting down")
    raise SystemExit(128 + signum)


@contextmanager
def shutdown_signals() -> Iterator[None]:
    """Route SHUTDOWN_SIGNALS through SystemExit for the duration of the block."""
    original_handlers = {}
    for signum in SHUTDOWN_SIGNALS:
        original_handlers[signum] = signal.signal(signum, _raise_system_exit)
    try:
        yield
    finally:
        for signum, handler in original_handlers.items():
            signal.signal(signum, handler)


class TerminalInterface:
    """Screen geometry and output for the controlling terminal."""
    
    def __init__(self, terminal: Optional[blessed.Terminal] = None,
                 output: Optional[BinaryIO] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.output = output or sys.stdout.buffer
        
    def get_window_size(self) -> tuple[int, int]:
        """Return (columns, rows) of the terminal.
        
        Raises:
            WindowSizeError: Not attached to a terminal, or it reports no size
        """
        if not self.term.is_a_tty:
            raise WindowSizeError("get window size", "standard output is not a terminal")
        try:
            cols, rows = int(self.term.width), int(self.term.height)
        except (OSError, TypeError, ValueError) as e:
            raise WindowSizeError("get window size", str(e)) from e
        if cols <= 0 or rows <= 0:
            raise WindowSizeError("get window size", f"terminal reports {cols}x{rows}")
        logger.debug(f"Terminal size is {cols}x{rows}")
        return cols, rows
    
    def write(self, data: bytes) -> None:
        """Write bytes straight to the terminal."""
        self.output.write(data)
        self.output.flush()
