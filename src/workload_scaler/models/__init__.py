"""
Models package for workload data structures
"""

from .workloads import (
    WorkloadKind,
    WorkloadIdentity,
    PodRecord,
    ScalePatch,
)

__all__ = [
    "WorkloadKind",
    "WorkloadIdentity",
    "PodRecord",
    "ScalePatch",
]
