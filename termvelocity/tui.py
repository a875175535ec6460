"""Terminal control: ANSI sequences, raw input mode and half-block output."""

from __future__ import annotations

import os
import random
import signal
import subprocess
import sys
from dataclasses import dataclass, field
from typing import Any, Optional

try:
    import termios
except ImportError:  # pragma: no cover - non-POSIX platforms
    termios = None  # type: ignore[assignment]

from termvelocity.screendata import ScreenData

ESC = "\033"
UPPER_HALF_BLOCK = "\u2580"
CLEAR_SCREEN = ESC + "[2J\033[H"
HOME = ESC + "[H"
ALTERNATE_SCREEN_BUFFER = ""
ALTERNATE_SCREEN_BUFFER_OFF = ""
HIDE_CURSOR = ESC + "[?25l"
SHOW_CURSOR = ESC + "[?25h"
RESET_COLORS = ESC + "[0m"

AUDIO_ENABLED = False
AUDIO_DIRECTORY = "audio"

_STDOUT_FD = 1
_original_termios: Optional[list[Any]] = None


def _stdin_fd() -> Optional[int]:
    try:
        return sys.stdin.fileno()
    except (AttributeError, OSError, ValueError):
        return None


def end_terminal_session() -> None:
    """Show the cursor again and restore the saved terminal attributes."""
    sys.stdout.write(SHOW_CURSOR + ALTERNATE_SCREEN_BUFFER_OFF)
    sys.stdout.flush()
    fd = _stdin_fd()
    if termios is not None and fd is not None and _original_termios is not None:
        try:
            termios.tcsetattr(fd, termios.TCSANOW, _original_termios)
        except termios.error:
            pass


def _end_terminal_session_hard(signum: int, frame: Any) -> None:
    end_terminal_session()
    sys.exit(0)


def start_terminal_session() -> None:
    """Clear the screen, hide the cursor and turn off echo and line buffering.

    Also installs a SIGINT handler that restores the terminal before exiting.
    """
    global _original_termios
    sys.stdout.write(CLEAR_SCREEN + ALTERNATE_SCREEN_BUFFER + HIDE_CURSOR)
    sys.stdout.flush()

    fd = _stdin_fd()
    if termios is not None and fd is not None:
        try:
            original = termios.tcgetattr(fd)
        except termios.error:
            original = None
        if original is not None:
            _original_termios = original
            raw = list(original)
            raw[3] = raw[3] & ~(termios.ICANON | termios.ECHO)
            termios.tcsetattr(fd, termios.TCSANOW, raw)

    signal.signal(signal.SIGINT, _end_terminal_session_hard)


def _audio_command(
    filename: str, random_range: int = -1, rng: Optional[random.Random] = None
) -> list[str]:
    name = filename
    if random_range > 0:
        chooser = rng if rng is not None else random
        name += str(chooser.randint(1, random_range))
    return ["aplay", "-q", f"{AUDIO_DIRECTORY}/{name}.wav"]


def play_audio(filename: str, random_range: int = -1) -> None:
    """Play ``audio/<filename>[n].wav`` in the background when audio is enabled.

    With a positive ``random_range``, a variant numbered 1..random_range is
    chosen at random.
    """
    if not AUDIO_ENABLED:
        return
    subprocess.Popen(
        _audio_command(filename, random_range),
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
    )


def _channels(color: int) -> tuple[int, int, int]:
    return (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF


def foreground_color(color: int) -> str:
    """Return the escape sequence setting a 24-bit foreground colour."""
    r, g, b = _channels(color)
    return f"{ESC}[38;2;{r};{g};{b}m"


def background_color(color: int) -> str:
    """Return the escape sequence setting a 24-bit background colour."""
    r, g, b = _channels(color)
    return f"{ESC}[48;2;{r};{g};{b}m"


def fast_print(text: str) -> None:
    """Write text straight to the standard output descriptor, unbuffered."""
    data = memoryview(text.encode("utf-8"))
    while data:
        written = os.write(_STDOUT_FD, data)
        data = data[written:]


@dataclass
class ConsoleScreen:
    """Shows a ScreenData in the terminal, two pixel rows per text line."""

    screen_data: ScreenData = field(default_factory=ScreenData)

    def render(self) -> str:
        """Return the full frame as text with colour escape sequences."""
        parts = [HOME]
        for top in range(0, ScreenData.HEIGHT, 2):
            for x in range(ScreenData.WIDTH):
                parts.append(foreground_color(self.screen_data.get_pixel(x, top)))
                parts.append(background_color(self.screen_data.get_pixel(x, top + 1)))
                parts.append(UPPER_HALF_BLOCK)
            parts.append(RESET_COLORS)
            parts.append("\n")
        return "".join(parts)

    def draw(self) -> None:
        """Write the current frame to the terminal."""
        fast_print(self.render())