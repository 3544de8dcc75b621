"""Non-blocking single-key reads from a terminal."""

from __future__ import annotations

import os
import sys
from typing import IO, Optional

try:
    import termios
except ImportError:  # pragma: no cover - platforms without termios
    termios = None  # type: ignore[assignment]


def read_key(stream: Optional[IO] = None) -> str:
    """Return one pending key press from stream, or "" if there is none.

    A terminal is switched to unbuffered, unechoed mode for the read and then
    restored. A stream that is a file descriptor but not a terminal yields "".
    A stream without a file descriptor is simply read one character at a time.
    """
    if stream is None:
        stream = sys.stdin
    try:
        fd = stream.fileno()
    except (AttributeError, OSError):
        return stream.read(1) or ""

    if termios is None:
        return ""
    try:
        old = termios.tcgetattr(fd)
    except termios.error:
        return ""

    raw = list(old)
    raw[3] &= ~(termios.ICANON | termios.ECHO)
    raw[6] = list(old[6])
    raw[6][termios.VMIN] = 0
    raw[6][termios.VTIME] = 0
    try:
        termios.tcsetattr(fd, termios.TCSANOW, raw)
    except termios.error:
        return ""
    try:
        data = os.read(fd, 1)
    except OSError:
        data = b""
    finally:
        try:
            termios.tcsetattr(fd, termios.TCSADRAIN, old)
        except termios.error:
            data = b""
    return data.decode("latin-1")