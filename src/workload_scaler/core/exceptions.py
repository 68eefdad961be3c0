"""Workload resource exception classes."""

from typing import Optional


class WorkloadError(Exception):
    """Base exception for workload resource errors."""
    pass


class TransportError(WorkloadError):
    """Raised when a request to the API server fails.

    Covers network failures, authentication/authorization rejections and any
    error status reported by the API server. Never retried internally.
    """
    def __init__(self, operation: str, message: str, status: Optional[int] = None):
        self.operation = operation
        self.status = status
        msg = f"{operation} failed: {message}"
        if status is not None:
            msg += f" (status: {status})"
        super().__init__(msg)


class SpecFieldMissing(WorkloadError):
    """Raised when a required spec field is absent on the remote object."""
    def __init__(self, identity, field: str):
        self.identity = identity
        self.field = field
        super().__init__(f"{identity}: required field '{field}' is not set")


class AnnotationMalformed(WorkloadError):
    """Raised when the last-modified annotation is not a valid RFC3339 timestamp."""
    def __init__(self, identity, key: str, value: str):
        self.identity = identity
        self.key = key
        self.value = value
        super().__init__(f"{identity}: annotation {key}={value!r} is not an RFC3339 timestamp")


class SerializationError(WorkloadError):
    """Raised when an outgoing patch body cannot be encoded."""
    def __init__(self, message: str = "Failed to encode patch body"):
        super().__init__(message)
