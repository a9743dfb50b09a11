#!/usr/bin/env python3
"""eep - a small modal text editor.

Usage:
    python main.py [--textual] [--log] [filename]

Keys (Normal mode):
    h j k l / arrows: Move cursor
    0 $ g G: Line start, line end, first line, last line
    i: Insert mode, Esc: back to Normal mode
    x: Delete character, d: Delete line
    :w [file], :q, :wq: Save and quit
"""

from eep.__main__ import main


if __name__ == "__main__":
    main()
