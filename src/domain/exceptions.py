"""
Domain exceptions - Semantic error types for name registration.

Only faults are raised: expected outcomes such as an unavailable name or
a rejected mutation are returned as result values (see ports.py).
"""


class NameServiceError(Exception):
    """Base class for name service domain errors."""

    pass


class RemoteCallError(NameServiceError):
    """A contract call, transaction or index query failed remotely."""

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(f"{operation} failed: {reason}")
        self.operation = operation
        self.reason = reason


class ResolverNotConfigured(NameServiceError):
    """The default resolver name has no resolver in the registry."""

    pass


class CommitmentMismatch(NameServiceError):
    """The controller derived a different commitment than the local one."""

    pass


class InvalidLabel(NameServiceError):
    """The name cannot be normalized to a valid ENS label."""

    pass
