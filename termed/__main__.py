"""termed CLI entry point.

Allows running via `python -m termed` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import platformdirs

from .constants import EditorConfig, EditorConstants
from .errors import InputReadError, TermedError
from .keyboard import ByteReader, FileDescriptorReader, KeyDecoder
from .terminal import STDIN_FILENO, RawModeController, TerminalMode, shutdown_signals
from .version import get_version_string

logger = logging.getLogger("termed")

USAGE = """\
Usage: termed [options]

Options:
  -V, --version   Show version and exit
  --keytest       Print decoded key events (quit with Ctrl-Q or ESC)
  --no-banner     Do not draw the welcome banner
  --full-clear    Clear the whole screen on every frame
  --no-cursor     Keep the cursor parked at the top-left
  --debug         Write a debug log to the user log directory
  -h, --help      Show this message and exit
"""


def log_file_path() -> Path:
    """Location of the debug log."""
    log_dir = Path(platformdirs.user_log_dir(EditorConstants.PRODUCT_NAME))
    return log_dir / f"{EditorConstants.PRODUCT_NAME}.log"


def configure_logging(debug: bool) -> Optional[Path]:
    """Send package logs to a file when debugging, nowhere otherwise.

    The screen belongs to the editor, so records never go to the terminal.

    Returns:
        The log file path, or None when logging is off
    """
    logger.handlers.clear()
    logger.propagate = False
    if not debug:
        logger.addHandler(logging.NullHandler())
        return None
    path = log_file_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, encoding="utf-8")
    except OSError as e:
        print(f"termed: cannot open log file {path}: {e}", file=sys.stderr)
        logger.addHandler(logging.NullHandler())
        return None
    handler.setFormatter(logging.Formatter(
        "%(asctime)s %(levelname)s %(name)s: %(message)s"
    ))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    return path


def run_keyboard_test(raw_mode: Optional[TerminalMode] = None,
                      reader: Optional[ByteReader] = None) -> int:
    """Print each decoded key event until Ctrl-Q or an Escape event.

    Args:
        raw_mode: Raw-mode switch for standard input
        reader: Byte source for key decoding

    Returns:
        0 after a quit key, 1 when input could not be read
    """
    print("Keyboard test mode - press keys to see decoded events.")
    print("Quit with Ctrl-Q or ESC followed by any key.")
    sys.stdout.flush()

    raw_mode = raw_mode or RawModeController()
    decoder = KeyDecoder(reader or FileDescriptorReader(STDIN_FILENO))
    saved = raw_mode.enable()
    try:
        with shutdown_signals():
            while True:
                try:
                    ev = decoder.read_key()
                except InputReadError as e:
                    sys.stdout.write(f"error: {e}\r\n")
                    sys.stdout.flush()
                    return 1
                parts = [f"type={ev.key_type.value}", f"value={ev.value!r}", f"raw={ev.raw!r}"]
                if ev.is_ctrl:
                    parts.append("ctrl")
                sys.stdout.write(" ".join(parts) + "\r\n")
                if ev.is_escape or ev.code == EditorConstants.QUIT_KEY:
                    sys.stdout.write("Exiting keyboard test.\r\n")
                    sys.stdout.flush()
                    return 0
                sys.stdout.flush()
    finally:
        raw_mode.restore(saved)


def main(argv: Optional[list[str]] = None) -> int:
    # Very small arg parsing for flags; the editor takes no positional arguments
    args = sys.argv[1:] if argv is None else list(argv)
    config = EditorConfig()
    debug = False
    keytest = False
    for arg in args:
        if arg in ("--version", "-V"):
            print(get_version_string())
            return 0
        if arg in ("--help", "-h"):
            print(USAGE, end="")
            return 0
        if arg in ("--keytest", "--keyboard-test"):
            keytest = True
        elif arg == "--no-banner":
            config.show_banner = False
        elif arg == "--full-clear":
            config.full_clear = True
        elif arg == "--no-cursor":
            config.track_cursor = False
        elif arg == "--debug":
            debug = True
        else:
            print(f"termed: unknown option {arg}", file=sys.stderr)
            print(USAGE, end="", file=sys.stderr)
            return 2

    configure_logging(debug)

    try:
        if keytest:
            return run_keyboard_test()
        # Lazy import; the editor is only needed when it runs
        from .editor import Editor
        editor = Editor(config=config)
        return editor.run()
    except TermedError as e:
        logger.error(f"Fatal: {e}")
        print(f"termed: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
