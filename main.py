#!/usr/bin/env python3
"""termed - a minimal full-screen terminal editor.

Usage:
    python main.py [--no-banner] [--full-clear] [--no-cursor] [--debug]
    
Controls:
    Arrow keys: Move the cursor
    Home/End: Start/end of the row
    Page Up/Page Down: Top/bottom of the screen
    Ctrl-Q: Quit
"""

import sys
from termed.__main__ import main


if __name__ == "__main__":
    sys.exit(main())
