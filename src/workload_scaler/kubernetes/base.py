#!/usr/bin/env python3
"""
Kind-independent workload handle and catalog

A catalog lists the objects of one workload kind and wraps each in a handle.
Handles are detached snapshots: they hold the metadata and spec returned by the
list call and never refresh them. Subclasses only supply the kind-specific
list and patch calls.
"""

import abc
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type, Union

from ..core.exceptions import AnnotationMalformed, SpecFieldMissing
from ..core.logging_config import get_logger
from ..core.session import KubeSession
from ..models import PodRecord, ScalePatch, WorkloadIdentity, WorkloadKind
from .common import PodIPResolver, build_label_selector, parse_rfc3339, utc_now

logger = get_logger(__name__)


class WorkloadHandle(abc.ABC):
    """Snapshot of one workload object with read and scale operations"""

    kind: WorkloadKind

    def __init__(self, session: KubeSession, namespace: str, metadata: Any, spec: Any):
        """
        Initialize handle

        Args:
            session: Shared API session
            namespace: Namespace the object was listed from
            metadata: V1ObjectMeta of the object
            spec: Kind-specific spec (V1DeploymentSpec, V1StatefulSetSpec, ...)
        """
        self.session = session
        self.namespace = namespace
        self.metadata = metadata
        self.spec = spec
        self._identity = WorkloadIdentity(namespace=namespace, name=metadata.name)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self._identity}>"

    @abc.abstractmethod
    async def _patch(self, body: Dict[str, Any], request_timeout: Optional[float] = None) -> Any:
        """Send a patch for this object to the kind's endpoint"""

    def identity(self) -> WorkloadIdentity:
        return self._identity

    def namespace_and_name(self) -> Tuple[str, str]:
        return self._identity.as_tuple()

    @property
    def name(self) -> str:
        return self._identity.name

    @property
    def annotations(self) -> Dict[str, str]:
        return self.metadata.annotations or {}

    @property
    def labels(self) -> Dict[str, str]:
        return self.metadata.labels or {}

    @property
    def resource_version(self) -> Optional[str]:
        return self.metadata.resource_version

    async def replicas(self) -> int:
        """
        Declared replica count

        Raises:
            SpecFieldMissing: If spec.replicas is not set
        """
        replicas = getattr(self.spec, "replicas", None)
        if replicas is None:
            raise SpecFieldMissing(self._identity, "spec.replicas")
        return int(replicas)

    async def last_modified(self) -> Optional[datetime]:
        """
        Time of the last scale made through this library

        Returns:
            UTC datetime, or None if the object has never been scaled

        Raises:
            AnnotationMalformed: If the annotation is not an RFC3339 timestamp
        """
        key = self.session.annotation_key
        value = self.annotations.get(key)
        if value is None:
            return None

        try:
            return parse_rfc3339(value)
        except ValueError as e:
            logger.warning(f"{self.kind.value} {self._identity} has malformed {key}: {value!r}")
            raise AnnotationMalformed(self._identity, key, value) from e

    def pod_template_labels(self) -> Dict[str, str]:
        """
        Labels of the pod template

        Raises:
            SpecFieldMissing: If the template or its labels are missing
        """
        template = getattr(self.spec, "template", None)
        template_metadata = template.metadata if template is not None else None
        labels = template_metadata.labels if template_metadata is not None else None
        if labels is None:
            raise SpecFieldMissing(self._identity, "spec.template.metadata.labels")
        return labels

    async def pods(self, request_timeout: Optional[float] = None) -> List[PodRecord]:
        """All pods matching the template labels, whatever their phase"""
        labels = self.pod_template_labels()
        return await PodIPResolver(self.session).list_pods(
            self.namespace, labels, request_timeout=request_timeout
        )

    async def pod_ips(self, request_timeout: Optional[float] = None) -> List[str]:
        """
        IPs of the running pods belonging to this workload

        Raises:
            SpecFieldMissing: If the pod template has no labels
            TransportError: If the pod list request fails
        """
        labels = self.pod_template_labels()
        return await PodIPResolver(self.session).resolve(
            self.namespace, labels, request_timeout=request_timeout
        )

    async def scale(self, target_replicas: int, request_timeout: Optional[float] = None) -> None:
        """
        Set the replica count and stamp the last-modified annotation

        Both fields go out in one patch. Nothing is checked against the
        current count; concurrent scales of the same object are not
        serialized and the API server keeps whichever patch lands last.

        Args:
            target_replicas: New replica count
            request_timeout: Optional per-call timeout in seconds

        Raises:
            ValueError: If target_replicas is not a non-negative integer
            SerializationError: If the patch body cannot be encoded
            TransportError: If the patch request fails
        """
        if isinstance(target_replicas, bool) or not isinstance(target_replicas, int):
            raise ValueError(f"Replica count must be an integer, got {target_replicas!r}")
        if target_replicas < 0:
            raise ValueError(f"Replica count must not be negative, got {target_replicas}")

        patch = ScalePatch(
            annotation_key=self.session.annotation_key,
            replicas=target_replicas,
            timestamp=utc_now()
        )
        # Fail before the request if the body cannot be encoded
        patch.encode()

        logger.info(f"Scaling {self.kind.value} {self._identity} to {target_replicas} replicas")
        await self._patch(patch.to_body(), request_timeout=request_timeout)


class WorkloadCatalog(abc.ABC):
    """Lists the workload objects of one kind"""

    kind: WorkloadKind
    handle_class: Type[WorkloadHandle]

    def __init__(
        self,
        session: KubeSession,
        namespace: Optional[str] = None,
        match_labels: Optional[Mapping[str, str]] = None
    ):
        """
        Initialize catalog

        Args:
            session: Shared API session
            namespace: Default namespace for list(); falls back to settings
            match_labels: Default label filter for list()
        """
        self.session = session
        self.namespace = namespace
        self.label_selector = build_label_selector(match_labels)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} namespace={self.namespace} selector={self.label_selector!r}>"

    @abc.abstractmethod
    async def _list_page(
        self,
        namespace: str,
        label_selector: str,
        request_timeout: Optional[float] = None,
        **params
    ) -> Any:
        """Issue one list request against the kind's endpoint"""

    async def list(
        self,
        namespace: Optional[str] = None,
        label_selector: Union[str, Mapping[str, str], None] = None,
        request_timeout: Optional[float] = None,
        page_size: Optional[int] = None
    ) -> List[WorkloadHandle]:
        """
        List objects in a namespace matching a label selector

        Args:
            namespace: Namespace to list; defaults to the catalog's, then settings
            label_selector: Selector string or label map; defaults to the catalog's
            request_timeout: Optional per-request timeout in seconds
            page_size: Follow continue tokens in pages of this size; 0 issues one request

        Returns:
            One handle per object; empty when nothing matches

        Raises:
            TransportError: If a list request fails
        """
        namespace = namespace or self.namespace or self.session.default_namespace
        if label_selector is None:
            selector = self.label_selector
        elif isinstance(label_selector, str):
            selector = label_selector
        else:
            selector = build_label_selector(label_selector)
        if page_size is None:
            page_size = self.session.settings.workloads.list_page_size

        handles: List[WorkloadHandle] = []
        params: Dict[str, Any] = {}
        if page_size > 0:
            params["limit"] = page_size

        while True:
            result = await self._list_page(namespace, selector, request_timeout=request_timeout, **params)
            for item in result.items or []:
                handles.append(self.handle_class(
                    self.session,
                    item.metadata.namespace or namespace,
                    item.metadata,
                    item.spec
                ))

            continue_token = result.metadata._continue if result.metadata is not None else None
            if page_size <= 0 or not continue_token:
                break
            params["_continue"] = continue_token

        logger.debug(f"Listed {len(handles)} {self.kind.value} objects in {namespace} (selector={selector!r})")
        return handles
