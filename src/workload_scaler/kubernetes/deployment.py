#!/usr/bin/env python3
"""
Kubernetes Deployment workload handle and catalog
"""

from typing import Any, Dict, Optional

from ..core.session import APPS_API
from ..models import WorkloadKind
from .base import WorkloadCatalog, WorkloadHandle


class DeploymentHandle(WorkloadHandle):
    """A single Deployment object"""

    kind = WorkloadKind.DEPLOYMENT

    async def _patch(self, body: Dict[str, Any], request_timeout: Optional[float] = None) -> Any:
        return await self.session.request(
            self.kind.value, "patch", APPS_API, "patch_namespaced_deployment",
            self.name,
            self.namespace,
            body,
            request_timeout=request_timeout
        )


class DeploymentCatalog(WorkloadCatalog):
    """Deployment objects in a namespace"""

    kind = WorkloadKind.DEPLOYMENT
    handle_class = DeploymentHandle

    async def _list_page(
        self,
        namespace: str,
        label_selector: str,
        request_timeout: Optional[float] = None,
        **params
    ) -> Any:
        return await self.session.request(
            self.kind.value, "list", APPS_API, "list_namespaced_deployment",
            namespace,
            label_selector=label_selector,
            request_timeout=request_timeout,
            **params
        )
