"""Command pattern implementation for editor actions."""

from abc import ABC, abstractmethod
from typing import Dict, Tuple, Optional, TYPE_CHECKING
from .constants import EditorConstants
from .keyboard import (
    KeyType, ARROW_UP, ARROW_DOWN, ARROW_LEFT, ARROW_RIGHT,
    PAGE_UP, PAGE_DOWN, HOME, END,
)

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent


class EditorCommand(ABC):
    """Base class for editor commands."""
    
    @abstractmethod
    def execute(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Execute the command.
        
        Args:
            editor: Editor instance
            key_event: The key event that triggered this command
        """
        pass


class MovementCommand(EditorCommand):
    """Base class for cursor movement commands."""
    
    def execute(self, editor: 'Editor', key_event: 'KeyEvent'):
        self._move(editor.state)
    
    @abstractmethod
    def _move(self, state):
        """Perform the movement on the editor state."""
        pass


class LeftCharCommand(MovementCommand):
    def _move(self, state):
        state.move_left()


class RightCharCommand(MovementCommand):
    def _move(self, state):
        state.move_right()


class UpLineCommand(MovementCommand):
    def _move(self, state):
        state.move_up()


class DownLineCommand(MovementCommand):
    def _move(self, state):
        state.move_down()


class BeginningOfLineCommand(MovementCommand):
    def _move(self, state):
        state.move_home()


class EndOfLineCommand(MovementCommand):
    def _move(self, state):
        state.move_end()


class PageUpCommand(MovementCommand):
    def _move(self, state):
        state.page_up()


class PageDownCommand(MovementCommand):
    def _move(self, state):
        state.page_down()


class QuitCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.quit()


class CommandRegistry:
    """Registry for mapping key combinations to commands."""
    
    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], EditorCommand] = {}
        self._setup_default_commands()
    
    def _setup_default_commands(self):
        """Set up the default command mappings."""
        # Movement commands
        self.register((KeyType.SPECIAL, ARROW_LEFT), LeftCharCommand())
        self.register((KeyType.SPECIAL, ARROW_RIGHT), RightCharCommand())
        self.register((KeyType.SPECIAL, ARROW_UP), UpLineCommand())
        self.register((KeyType.SPECIAL, ARROW_DOWN), DownLineCommand())
        
        # Line movement
        self.register((KeyType.SPECIAL, HOME), BeginningOfLineCommand())
        self.register((KeyType.SPECIAL, END), EndOfLineCommand())
        
        # Paging
        self.register((KeyType.SPECIAL, PAGE_UP), PageUpCommand())
        self.register((KeyType.SPECIAL, PAGE_DOWN), PageDownCommand())
        
        # System commands
        self.register((KeyType.BYTE, chr(EditorConstants.QUIT_KEY)), QuitCommand())

    def register(self, key: Tuple[KeyType, str], command: EditorCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        """Get the command for a key combination."""
        return self._commands.get((key_type, value))

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command for the given key event.
        
        Returns:
            True if a command was bound to the key
        """
        command = self.get_command(key_event.key_type, key_event.value)
        if command is None:
            return False
        command.execute(editor, key_event)
        return True
