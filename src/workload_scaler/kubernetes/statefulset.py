#!/usr/bin/env python3
"""
Kubernetes StatefulSet workload handle and catalog
"""

from typing import Any, Dict, Optional

from ..core.session import APPS_API
from ..models import WorkloadKind
from .base import WorkloadCatalog, WorkloadHandle


class StatefulSetHandle(WorkloadHandle):
    """A single StatefulSet object.

    StatefulSet pods start in order, so pod_ips() often returns fewer
    addresses than replicas() while a scale-up is in progress.
    """

    kind = WorkloadKind.STATEFUL_SET

    async def _patch(self, body: Dict[str, Any], request_timeout: Optional[float] = None) -> Any:
        return await self.session.request(
            self.kind.value, "patch", APPS_API, "patch_namespaced_stateful_set",
            self.name,
            self.namespace,
            body,
            request_timeout=request_timeout
        )


class StatefulSetCatalog(WorkloadCatalog):
    """StatefulSet objects in a namespace"""

    kind = WorkloadKind.STATEFUL_SET
    handle_class = StatefulSetHandle

    async def _list_page(
        self,
        namespace: str,
        label_selector: str,
        request_timeout: Optional[float] = None,
        **params
    ) -> Any:
        return await self.session.request(
            self.kind.value, "list", APPS_API, "list_namespaced_stateful_set",
            namespace,
            label_selector=label_selector,
            request_timeout=request_timeout,
            **params
        )
