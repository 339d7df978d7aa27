"""Pretty-print helpers for word boxes."""

from __future__ import annotations

import sys
import threading
from typing import TYPE_CHECKING, Optional, TextIO

from ..core.constants import SearchStatus

if TYPE_CHECKING:
    from ..core.models import WordBox
    from ..engine.generator import WordBoxResult


CLEAR_SCREEN = "\x1b[2J\x1b[H"
BOLD_CYAN = "\x1b[1;36m"
RESET = "\x1b[0m"

UNSOLVED_MESSAGES = {
    SearchStatus.EXHAUSTED: "No word box found.",
    SearchStatus.TIMED_OUT: "Search timed out before a word box was found.",
    SearchStatus.CANCELLED: "Search was cancelled before a word box was found.",
}


def format_box(box: WordBox) -> str:
    """Render ``row_dim`` lines of ``col_dim`` characters, ``_`` for blanks."""

    return str(box)


def print_result(result: WordBoxResult, *, stream: Optional[TextIO] = None) -> None:
    stream = stream or sys.stdout
    if result.box is None:
        print(UNSOLVED_MESSAGES.get(result.status, "No word box found."), file=stream)
        return
    print(format_box(result.box), file=stream)


class TerminalRenderer:
    """Clears the terminal and redraws the box on every search step.

    Pass an instance as the ``observer`` of a search. Rendering is purely
    cosmetic; leave it off for non-interactive runs and tests.
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream or sys.stdout
        self._lock = threading.Lock()

    def __call__(self, box: WordBox) -> None:
        with self._lock:
            self.stream.write(f"{CLEAR_SCREEN}{BOLD_CYAN}{format_box(box)}{RESET}\n")
            self.stream.flush()
