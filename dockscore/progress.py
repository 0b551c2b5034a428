"""A thread-safe text progress bar."""

from __future__ import annotations

import sys
import threading
from typing import TextIO

_SCALE = "0%   10   20   30   40   50   60   70   80   90   100%\n"
_BAR = "|----|----|----|----|----|----|----|----|----|----|\n"
_TICS = 50


class ParallelProgress:
    """Progress display that may be advanced from several threads.

    Until :meth:`init` is called, :meth:`increment` does nothing.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self._out: TextIO | None = None
        self._lock = threading.Lock()
        self._count = 0
        self._expected = 1
        self._tic = 0
        self._next_tic_count = 0

    def init(self, total: int) -> None:
        """Start a display expecting ``total`` increments."""
        if total < 0:
            raise ValueError(f"total must be non-negative, got {total}")
        with self._lock:
            out = self._stream if self._stream is not None else sys.stdout
            self._count = 0
            self._tic = 0
            self._next_tic_count = 0
            self._expected = total or 1
            out.write("\n" + _SCALE + _BAR)
            out.flush()
            self._out = out

    def increment(self) -> None:
        """Record one unit of progress."""
        if self._out is None:
            return
        with self._lock:
            self._count += 1
            if self._count >= self._next_tic_count:
                self._display_tic()

    def count(self) -> int:
        """Number of increments recorded since :meth:`init`."""
        return self._count

    def _display_tic(self) -> None:
        out = self._out
        assert out is not None
        tics_needed = int(self._count / self._expected * _TICS)
        while True:
            out.write("*")
            self._tic += 1
            if self._tic >= tics_needed:
                break
        out.flush()
        self._next_tic_count = int(self._tic / _TICS * self._expected)
        if self._count == self._expected:
            if self._tic < _TICS + 1:
                out.write("*")
            out.write("\n")
            out.flush()