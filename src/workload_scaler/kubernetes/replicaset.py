#!/usr/bin/env python3
"""
Kubernetes ReplicaSet workload handle and catalog
"""

from typing import Any, Dict, Optional

from ..core.session import APPS_API
from ..models import WorkloadKind
from .base import WorkloadCatalog, WorkloadHandle


class ReplicaSetHandle(WorkloadHandle):
    """A single ReplicaSet object (usually owned by a Deployment)"""

    kind = WorkloadKind.REPLICA_SET

    async def _patch(self, body: Dict[str, Any], request_timeout: Optional[float] = None) -> Any:
        return await self.session.request(
            self.kind.value, "patch", APPS_API, "patch_namespaced_replica_set",
            self.name,
            self.namespace,
            body,
            request_timeout=request_timeout
        )


class ReplicaSetCatalog(WorkloadCatalog):
    """ReplicaSet objects in a namespace"""

    kind = WorkloadKind.REPLICA_SET
    handle_class = ReplicaSetHandle

    async def _list_page(
        self,
        namespace: str,
        label_selector: str,
        request_timeout: Optional[float] = None,
        **params
    ) -> Any:
        return await self.session.request(
            self.kind.value, "list", APPS_API, "list_namespaced_replica_set",
            namespace,
            label_selector=label_selector,
            request_timeout=request_timeout,
            **params
        )
