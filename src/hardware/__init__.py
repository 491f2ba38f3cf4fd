"""
Hardware Layer

Low-level terminal access only:

- Terminal surface (raw mode, ANSI cursor/screen output, size query)
- Keyboard input decoding (bytes -> KeyEvent)
"""
