from abc import ABC, abstractmethod


class BaseProgressReporter(ABC):
    """Contract for user-facing progress output.

    Reporting is best effort: implementations never raise to the caller.
    """

    @abstractmethod
    def display(self, message: str) -> None:
        """Clear any active batch, then show message on its own line."""

    @abstractmethod
    def begin_batch(self, label: str, length: int) -> None:
        """Replace any active batch with a new one at 0/length."""

    @abstractmethod
    def advance(self, label: str) -> None:
        """Set the batch label and move the counter forward by one.

        Does nothing when no batch is active. Never moves past length.
        """
