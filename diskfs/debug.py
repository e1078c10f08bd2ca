"""Selective debug messages controlled by a string of flag characters."""

from __future__ import annotations

import sys
from typing import TextIO

DBG_ALL = "+"
DBG_THREAD = "t"
DBG_SYNCH = "s"
DBG_INT = "i"
DBG_MACH = "m"
DBG_DISK = "d"
DBG_FILE = "f"
DBG_ADDR = "a"
DBG_NET = "n"
DBG_SYS = "u"


class Debug:
    """Decides which debug messages are shown.

    ``flags`` is a string of flag characters; ``"+"`` enables every flag and
    ``None`` disables them all.
    """

    def __init__(self, flags: str | None = None, stream: TextIO | None = None):
        self.flags = flags
        self._stream = stream

    def is_enabled(self, flag: str) -> bool:
        """Return True if messages for ``flag`` are to be printed."""
        if self.flags is None:
            return False
        return flag in self.flags or DBG_ALL in self.flags

    def message(self, flag: str, text: str) -> None:
        """Print ``text`` on its own line if ``flag`` is enabled."""
        if self.is_enabled(flag):
            stream = self._stream if self._stream is not None else sys.stderr
            print(text, file=stream)