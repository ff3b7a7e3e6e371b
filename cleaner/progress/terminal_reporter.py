import sys
import threading
from dataclasses import dataclass
from typing import TextIO

from cleaner.progress.base import BaseProgressReporter


@dataclass
class BatchState:
    """Counter and label of the batch currently on screen."""

    label: str
    length: int
    position: int = 0


class TerminalProgressReporter(BaseProgressReporter):
    """Renders messages and a single-line progress bar to a text stream.

    On a TTY the bar is redrawn in place; otherwise only messages and a
    final count line are written so piped output stays readable.
    """

    CLEAR_LINE = "\r\x1b[K"

    def __init__(
        self,
        stream: TextIO | None = None,
        *,
        width: int = 40,
        interactive: bool | None = None,
    ) -> None:
        self._stream = stream if stream is not None else sys.stdout
        self._width = width
        self._interactive = (
            interactive if interactive is not None else self._stream.isatty()
        )
        self._lock = threading.Lock()
        self._batch: BatchState | None = None

    @property
    def batch(self) -> BatchState | None:
        return self._batch

    def display(self, message: str) -> None:
        with self._lock:
            self._clear_batch()
            self._write(f"{message}\n")

    def begin_batch(self, label: str, length: int) -> None:
        with self._lock:
            self._clear_batch()
            self._batch = BatchState(label=label, length=max(0, length))
            self._render()

    def advance(self, label: str) -> None:
        with self._lock:
            if self._batch is None:
                return
            self._batch.label = label
            if self._batch.position < self._batch.length:
                self._batch.position += 1
            self._render()

    def _clear_batch(self) -> None:
        if self._batch is None:
            return
        if self._interactive:
            self._write(self.CLEAR_LINE)
        else:
            self._write(f"{self._batch.position}/{self._batch.length}\n")
        self._batch = None

    def _render(self) -> None:
        if not self._interactive or self._batch is None:
            return
        self._write(f"{self.CLEAR_LINE}{self._format_bar(self._batch)}")

    def _format_bar(self, batch: BatchState) -> str:
        if batch.length:
            filled = self._width * batch.position // batch.length
        else:
            filled = self._width
        if filled >= self._width:
            bar = "#" * self._width
        else:
            bar = "#" * filled + ">" + "-" * (self._width - filled - 1)
        return f"[{bar}] {batch.position}/{batch.length} {batch.label}"

    def _write(self, text: str) -> None:
        try:
            self._stream.write(text)
            self._stream.flush()
        except (OSError, ValueError):
            # Closed or broken stream: progress output is best effort.
            pass
