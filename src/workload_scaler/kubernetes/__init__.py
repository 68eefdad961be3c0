"""
Kubernetes workload handles and catalogs, one pair per workload kind
"""

from typing import Dict, Mapping, Optional, Type, Union

from ..core.session import KubeSession
from ..models import WorkloadKind
from .base import WorkloadCatalog, WorkloadHandle
from .common import PodIPResolver, build_label_selector, get_running_pod_ips, parse_rfc3339
from .deployment import DeploymentCatalog, DeploymentHandle
from .replicaset import ReplicaSetCatalog, ReplicaSetHandle
from .statefulset import StatefulSetCatalog, StatefulSetHandle

CATALOGS: Dict[WorkloadKind, Type[WorkloadCatalog]] = {
    WorkloadKind.DEPLOYMENT: DeploymentCatalog,
    WorkloadKind.STATEFUL_SET: StatefulSetCatalog,
    WorkloadKind.REPLICA_SET: ReplicaSetCatalog,
}


def catalog_for(
    kind: Union[WorkloadKind, str],
    session: KubeSession,
    namespace: Optional[str] = None,
    match_labels: Optional[Mapping[str, str]] = None
) -> WorkloadCatalog:
    """
    Create the catalog for a workload kind

    Args:
        kind: WorkloadKind or its name, case-insensitive ("statefulset")
        session: Shared API session
        namespace: Default namespace for list()
        match_labels: Default label filter for list()

    Raises:
        ValueError: If the kind is unknown
    """
    return CATALOGS[WorkloadKind.parse(kind)](session, namespace=namespace, match_labels=match_labels)


__all__ = [
    "CATALOGS",
    "catalog_for",
    "WorkloadCatalog",
    "WorkloadHandle",
    "PodIPResolver",
    "build_label_selector",
    "get_running_pod_ips",
    "parse_rfc3339",
    "DeploymentCatalog",
    "DeploymentHandle",
    "ReplicaSetCatalog",
    "ReplicaSetHandle",
    "StatefulSetCatalog",
    "StatefulSetHandle",
]
