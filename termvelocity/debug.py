"""Debug logging and a simple stopwatch."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional, Union

DEBUG_MODE = False
DEFAULT_LOG = "debug.log"

_NS_PER_MS = 1_000_000


def debug(msg: str, path: Union[str, Path] = DEFAULT_LOG) -> None:
    """Append a line to the debug log when debug mode is on."""
    if not DEBUG_MODE:
        return
    with open(path, "a", encoding="utf-8") as log:
        log.write(f"{msg}\n")


@dataclass
class Timer:
    """Stopwatch measuring whole milliseconds between tick and tock."""

    clock: Callable[[], int] = time.monotonic_ns
    _start: int = field(init=False, repr=False)
    _end: Optional[int] = field(init=False, default=None, repr=False)

    def __post_init__(self) -> None:
        self._start = self.clock()

    def tick(self) -> None:
        """Restart the measurement."""
        self._end = None
        self._start = self.clock()

    def tock(self) -> None:
        """Stop the measurement."""
        self._end = self.clock()

    def duration(self) -> int:
        """Return the measured time in milliseconds."""
        if self._end is None:
            raise RuntimeError("Timer.tock() has not been called")
        return (self._end - self._start) // _NS_PER_MS