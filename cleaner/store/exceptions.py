class JobStoreError(Exception):
    """Base exception for all job store errors."""


class ProjectNotFoundError(JobStoreError):
    """Raised when no project matches the searched name."""


class AmbiguousProjectError(JobStoreError):
    """Raised when more than one project matches the searched name."""


class TransportError(JobStoreError):
    """Raised when a request to the store cannot be completed.

    status_code is set when the store answered with a non-success status.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class InvalidPayloadError(TransportError):
    """Raised when the store answers with a body that cannot be parsed."""
