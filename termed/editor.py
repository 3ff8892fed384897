"""Main editor controller: raw-mode lifecycle and the input dispatch loop."""

import logging
import sys
from enum import Enum
from typing import Optional, TextIO

from .buffer import OutputBuffer
from .commands import CommandRegistry
from .constants import EditorConfig, EditorConstants
from .errors import InputReadError, TerminalModeError
from .keyboard import ByteReader, FileDescriptorReader, KeyDecoder
from .model import EditorState
from .terminal import (
    STDIN_FILENO, RawModeController, TerminalInterface, TerminalMode, shutdown_signals,
)
from .view import draw_frame

logger = logging.getLogger(__name__)


class EditorStatus(Enum):
    RUNNING = "running"
    TERMINATED = "terminated"


class Editor:
    """Full-screen terminal editor shell."""

    def __init__(self, config: Optional[EditorConfig] = None,
                 terminal: Optional[TerminalInterface] = None,
                 raw_mode: Optional[TerminalMode] = None,
                 reader: Optional[ByteReader] = None,
                 error_output: Optional[TextIO] = None):
        """Initialize the editor components.

        Args:
            config: Rendering and input policy
            terminal: Geometry and output for the screen
            raw_mode: Raw-mode switch for standard input
            reader: Byte source for key decoding
            error_output: Where read errors are reported, stderr by default
        """
        self.config = config or EditorConfig()
        self.terminal = terminal or TerminalInterface()
        self.raw_mode = raw_mode or RawModeController()
        self.keyboard = KeyDecoder(reader or FileDescriptorReader(STDIN_FILENO))
        self.command_registry = CommandRegistry()
        self.error_output = error_output
        self.state: Optional[EditorState] = None
        self.status = EditorStatus.TERMINATED
        self._read_errors = 0

    @property
    def running(self) -> bool:
        return self.status == EditorStatus.RUNNING

    def init_state(self) -> EditorState:
        """Query the terminal size and start with the cursor at the top-left."""
        cols, rows = self.terminal.get_window_size()
        self.state = EditorState(screen_rows=rows, screen_cols=cols)
        return self.state

    def run(self) -> int:
        """Run the main editor loop until the quit key.

        Returns:
            Process exit status (0 after a normal quit)

        Raises:
            WindowSizeError: Terminal size could not be determined
            TerminalModeError: Raw mode could not be entered or left
            InputReadError: Too many consecutive read failures
        """
        if self.state is None:
            self.init_state()

        # Nothing to restore if this fails
        saved = self.raw_mode.enable()

        with shutdown_signals():
            try:
                self.status = EditorStatus.RUNNING
                self._read_errors = 0
                while self.running:
                    self.refresh_screen()
                    self.process_keypress()
            except BaseException:
                self.status = EditorStatus.TERMINATED
                # Restore first, then let the original error through
                try:
                    self.raw_mode.restore(saved)
                except TerminalModeError as e:
                    logger.error(f"Terminal mode not restored after failure: {e}")
                raise

        self.raw_mode.restore(saved)
        return 0

    def refresh_screen(self):
        """Draw the current state as one frame in a single write."""
        if self.config.track_cursor:
            self.state.clamp()
        ab = OutputBuffer()
        draw_frame(ab, self.state, self.config)
        ab.flush(self.terminal.output)

    def process_keypress(self):
        """Read one key and dispatch it.

        Read failures are reported and the loop carries on. Once
        ``max_read_errors`` failures happen in a row the last one is raised.
        """
        try:
            key_event = self.keyboard.read_key()
        except InputReadError as e:
            self._read_errors += 1
            logger.warning(f"Read failure {self._read_errors}: {e}")
            self._report(EditorConstants.READ_ERROR_MESSAGE.format(e.detail))
            limit = self.config.max_read_errors
            if limit is not None and self._read_errors >= limit:
                logger.error(f"Giving up after {self._read_errors} consecutive read failures")
                raise
            return

        self._read_errors = 0
        logger.debug(f"Key event {key_event.key_type.value} {key_event.value!r}")
        self.command_registry.execute(self, key_event)

    def quit(self):
        """Clear the screen and stop the loop."""
        self.terminal.write(EditorConstants.CLEAR_SCREEN + EditorConstants.CURSOR_HOME)
        self.status = EditorStatus.TERMINATED

    def _report(self, message: str):
        # Output post-processing is off in raw mode, so send CR explicitly
        out = self.error_output or sys.stderr
        out.write(message + "\r\n")
        out.flush()
