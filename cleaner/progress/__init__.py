from cleaner.progress.base import BaseProgressReporter
from cleaner.progress.terminal_reporter import TerminalProgressReporter

__all__ = ["BaseProgressReporter", "TerminalProgressReporter"]
