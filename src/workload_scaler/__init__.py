"""
Uniform access to Kubernetes workloads for autoscaling control loops

Lists Deployments, StatefulSets and ReplicaSets, reads their replica counts,
last-scale timestamps and running pod IPs, and scales them.
"""

from .config import Settings, settings
from .core import (
    KubeSession,
    WorkloadError,
    TransportError,
    SpecFieldMissing,
    AnnotationMalformed,
    SerializationError,
)
from .models import WorkloadKind, WorkloadIdentity, PodRecord
from .kubernetes import (
    catalog_for,
    build_label_selector,
    PodIPResolver,
    WorkloadCatalog,
    WorkloadHandle,
    DeploymentCatalog,
    StatefulSetCatalog,
    ReplicaSetCatalog,
)

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "settings",
    "KubeSession",
    "WorkloadError",
    "TransportError",
    "SpecFieldMissing",
    "AnnotationMalformed",
    "SerializationError",
    "WorkloadKind",
    "WorkloadIdentity",
    "PodRecord",
    "catalog_for",
    "build_label_selector",
    "PodIPResolver",
    "WorkloadCatalog",
    "WorkloadHandle",
    "DeploymentCatalog",
    "StatefulSetCatalog",
    "ReplicaSetCatalog",
]
