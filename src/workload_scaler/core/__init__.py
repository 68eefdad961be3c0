"""
Core modules: API session, errors, logging and instrumentation
"""

from .exceptions import (
    WorkloadError,
    TransportError,
    SpecFieldMissing,
    AnnotationMalformed,
    SerializationError,
)
from .session import KubeSession, load_configuration

__all__ = [
    "WorkloadError",
    "TransportError",
    "SpecFieldMissing",
    "AnnotationMalformed",
    "SerializationError",
    "KubeSession",
    "load_configuration"
]
