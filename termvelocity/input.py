"""Keyboard state built from non-blocking terminal reads."""

from __future__ import annotations

import os
import select
import sys
from dataclasses import dataclass
from typing import Callable, Optional

KeyReader = Callable[[], Optional[str]]

_NOT_A_KEY = "\ufffd"


def read_stdin_char() -> Optional[str]:
    """Return one pending character from standard input without blocking.

    Returns None when nothing is waiting. Bytes outside ASCII come back as a
    character that is never treated as a key.
    """
    try:
        fd = sys.stdin.fileno()
        ready, _, _ = select.select([fd], [], [], 0)
        if not ready:
            return None
        data = os.read(fd, 1)
    except (AttributeError, OSError, ValueError):
        return None
    if not data:
        return None
    byte = data[0]
    return chr(byte) if byte < 0x80 else _NOT_A_KEY


@dataclass
class _KeyState:
    timeout: int = 0
    presses: int = 0


class Input:
    """Tracks which keys count as held, from a stream of typed characters.

    A terminal only reports key presses, so a key is considered held for a
    while after it was typed: ``TIME_FIRST`` milliseconds after a single
    press, ``TIME_REPEAT`` milliseconds once auto-repeat has started.
    """

    KEY_COUNT = 256
    TIME_FIRST = 100
    TIME_REPEAT = 25

    def __init__(self, read_char: Optional[KeyReader] = None) -> None:
        self._read_char: KeyReader = read_char or read_stdin_char
        self._held: dict[int, _KeyState] = {}
        self._previous: frozenset[int] = frozenset()

    def is_down(self, key: str) -> bool:
        """Return True while the key is pressed or held."""
        return ord(key) in self._held

    def is_first_down(self, key: str) -> bool:
        """Return True only on the update in which the key went down."""
        code = ord(key)
        return code in self._held and code not in self._previous

    def update(self, delta_time: int) -> None:
        """Age held keys by ``delta_time`` ms and take in newly typed keys."""
        self._previous = frozenset(self._held)

        for code, state in list(self._held.items()):
            state.timeout += delta_time
            limit = self.TIME_FIRST if state.presses == 1 else self.TIME_REPEAT
            if state.timeout >= limit:
                del self._held[code]

        while True:
            char = self._read_char()
            if not char or char == "\0":
                break
            code = ord(char[0])
            if not 0 <= code < self.KEY_COUNT:
                continue
            state = self._held.setdefault(code, _KeyState())
            state.timeout = 0
            state.presses += 1