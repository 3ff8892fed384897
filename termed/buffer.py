"""Frame accumulation so each screen update reaches the terminal in one write."""

import logging
from typing import BinaryIO

logger = logging.getLogger(__name__)


class OutputBuffer:
    """Append-only byte buffer for a single frame.
    
    Everything a frame draws is appended here and written with one call to
    ``flush``. After a flush the buffer is empty and ready for the next frame.
    """
    
    def __init__(self):
        self._chunks: list[bytes] = []
        self._length = 0
        
    def append(self, data: bytes) -> "OutputBuffer":
        """Add bytes to the pending frame."""
        self._chunks.append(bytes(data))
        self._length += len(data)
        return self
    
    def __len__(self) -> int:
        return self._length
    
    def getvalue(self) -> bytes:
        """Return the pending frame without consuming it."""
        return b"".join(self._chunks)
    
    def clear(self):
        self._chunks = []
        self._length = 0
        
    def flush(self, stream: BinaryIO) -> int:
        """Write the whole pending frame in a single call and reset.
        
        Args:
            stream: Binary output stream (usually ``sys.stdout.buffer``)
            
        Returns:
            Number of bytes handed to the stream
        """
        data = self.getvalue()
        self.clear()
        stream.write(data)
        stream.flush()
        logger.debug(f"Flushed frame of {len(data)} bytes")
        return len(data)
