"""Keyboard input decoding from raw terminal bytes."""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

from .constants import EditorConstants
from .errors import InputReadError

logger = logging.getLogger(__name__)


class KeyType(Enum):
    """Types of key events."""
    BYTE = "byte"  # Verbatim input byte, printable or control
    SPECIAL = "special"  # Named key decoded from an escape sequence


@dataclass(frozen=True)
class KeyEvent:
    """Represents a decoded keypress."""
    key_type: KeyType
    value: str  # The character for BYTE events, the key name for SPECIAL ones
    raw: bytes = b""  # Bytes consumed from the input

    @classmethod
    def byte(cls, b: int) -> "KeyEvent":
        return cls(KeyType.BYTE, chr(b), bytes([b]))

    @classmethod
    def special(cls, name: str, raw: bytes = b"") -> "KeyEvent":
        return cls(KeyType.SPECIAL, name, raw)

    @property
    def code(self) -> Optional[int]:
        """Byte value for BYTE events, None for named keys."""
        if self.key_type == KeyType.BYTE:
            return ord(self.value)
        return None

    @property
    def is_ctrl(self) -> bool:
        """True for control bytes (Ctrl-<letter>, DEL and friends)."""
        code = self.code
        return code is not None and (code < 0x20 or code == 0x7f)

    @property
    def is_escape(self) -> bool:
        return self.key_type == KeyType.SPECIAL and self.value == 'escape'


# Named keys produced by the decoder
ARROW_UP = 'up'
ARROW_DOWN = 'down'
ARROW_LEFT = 'left'
ARROW_RIGHT = 'right'
PAGE_UP = 'page_up'
PAGE_DOWN = 'page_down'
HOME = 'home'
END = 'end'
DELETE = 'delete'
ESCAPE = 'escape'

# ESC [ <digit> ~
_TILDE_KEYS = {
    '1': HOME,
    '3': DELETE,
    '4': END,
    '5': PAGE_UP,
    '6': PAGE_DOWN,
    '7': HOME,
    '8': END,
}

# ESC [ <letter>
_CSI_KEYS = {
    'A': ARROW_UP,
    'B': ARROW_DOWN,
    'C': ARROW_RIGHT,
    'D': ARROW_LEFT,
    'H': HOME,
    'F': END,
}

# ESC O <letter>
_SS3_KEYS = {
    'H': HOME,
    'F': END,
}


class ByteReader(Protocol):
    def read(self, n: int) -> bytes:
        ...


class FileDescriptorReader:
    """Unbuffered blocking reads from a file descriptor."""
    
    def __init__(self, fd: int = 0):
        self.fd = fd
        
    def read(self, n: int) -> bytes:
        while True:
            try:
                return os.read(self.fd, n)
            except InterruptedError:
                # A signal arrived mid-read; try again
                continue


class KeyDecoder:
    """Turns raw input bytes into KeyEvents.
    
    Escape sequences are decoded into named keys. Anything the decoder does
    not recognise, including truncated sequences and read failures partway
    through a sequence, comes back as a bare Escape.
    """
    
    def __init__(self, reader: ByteReader):
        """Initialize with something exposing ``read(n) -> bytes``."""
        self.reader = reader
        
    def _read_byte(self) -> int:
        """Read exactly one byte or raise InputReadError."""
        try:
            data = self.reader.read(1)
        except OSError as e:
            raise InputReadError("read key", str(e)) from e
        if not data:
            raise InputReadError("read key", "end of input")
        return data[0]
    
    def _read_sequence_byte(self) -> Optional[str]:
        """Read one byte inside an escape sequence, None on any failure."""
        try:
            data = self.reader.read(1)
        except OSError as e:
            logger.debug(f"Read failed inside escape sequence: {e}")
            return None
        if not data:
            return None
        return chr(data[0])
    
    def read_key(self) -> KeyEvent:
        """Block until a key arrives and return it.
        
        Returns:
            Decoded KeyEvent
            
        Raises:
            InputReadError: The first byte of the key could not be read
        """
        c = self._read_byte()
        if c != EditorConstants.ESCAPE:
            return KeyEvent.byte(c)
        event = self._decode_escape()
        logger.debug(f"Decoded escape sequence {event.raw!r} as {event.value}")
        return event
    
    def _decode_escape(self) -> KeyEvent:
        seq = b"\x1b"
        
        first = self._read_sequence_byte()
        if first is None:
            return KeyEvent.special(ESCAPE, seq)
        seq += first.encode('latin-1')
        if first not in ('[', 'O'):
            return KeyEvent.special(ESCAPE, seq)
        
        second = self._read_sequence_byte()
        if second is None:
            return KeyEvent.special(ESCAPE, seq)
        seq += second.encode('latin-1')
        
        if first == 'O':
            return KeyEvent.special(_SS3_KEYS.get(second, ESCAPE), seq)
        
        if '0' <= second <= '9':
            third = self._read_sequence_byte()
            if third is None:
                return KeyEvent.special(ESCAPE, seq)
            seq += third.encode('latin-1')
            if third == '~':
                return KeyEvent.special(_TILDE_KEYS.get(second, ESCAPE), seq)
            return KeyEvent.special(ESCAPE, seq)
        
        return KeyEvent.special(_CSI_KEYS.get(second, ESCAPE), seq)
