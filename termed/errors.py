"""Exception types raised by the editor."""


class TermedError(Exception):
    """Base class for editor failures that should end the process."""

    def __init__(self, operation: str, detail: str = ""):
        self.operation = operation
        self.detail = detail
        message = f"{operation}: {detail}" if detail else operation
        super().__init__(message)


class TerminalModeError(TermedError):
    """Entering or leaving raw mode failed."""


class WindowSizeError(TermedError):
    """The terminal dimensions could not be determined."""


class InputReadError(TermedError):
    """Reading from standard input failed."""
