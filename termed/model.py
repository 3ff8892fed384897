"""Editor state: screen geometry and a cursor that never leaves the screen."""

from dataclasses import dataclass


@dataclass
class EditorState:
    """Cursor and screen geometry for one editor session."""
    screen_rows: int
    screen_cols: int
    cursor_x: int = 0
    cursor_y: int = 0

    def __post_init__(self):
        if self.screen_rows <= 0 or self.screen_cols <= 0:
            raise ValueError(
                f"screen must be at least 1x1, got {self.screen_cols}x{self.screen_rows}"
            )

    def move_left(self):
        if self.cursor_x > 0:
            self.cursor_x -= 1

    def move_right(self):
        if self.cursor_x < self.screen_cols - 1:
            self.cursor_x += 1

    def move_up(self):
        if self.cursor_y > 0:
            self.cursor_y -= 1

    def move_down(self):
        if self.cursor_y < self.screen_rows - 1:
            self.cursor_y += 1

    def move_home(self):
        self.cursor_x = 0

    def move_end(self):
        self.cursor_x = self.screen_cols - 1

    def page_up(self):
        # One step per screen row; each step stops at the top edge
        for _ in range(self.screen_rows):
            self.move_up()

    def page_down(self):
        for _ in range(self.screen_rows):
            self.move_down()

    def clamped_cursor(self) -> tuple[int, int]:
        """Return (x, y) forced into the visible screen."""
        x = min(max(self.cursor_x, 0), self.screen_cols - 1)
        y = min(max(self.cursor_y, 0), self.screen_rows - 1)
        return x, y

    def clamp(self):
        self.cursor_x, self.cursor_y = self.clamped_cursor()
