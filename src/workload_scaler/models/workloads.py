#!/usr/bin/env python3
"""
Pydantic models for workload objects and the requests issued against them
"""

import json
from datetime import datetime
from enum import Enum
from typing import Any, Dict, NamedTuple, Optional, Tuple

from pydantic import BaseModel, Field

from ..core.exceptions import SerializationError


class WorkloadKind(str, Enum):
    """Workload kinds that can be inspected and scaled"""

    DEPLOYMENT = "Deployment"
    STATEFUL_SET = "StatefulSet"
    REPLICA_SET = "ReplicaSet"

    @classmethod
    def parse(cls, value) -> "WorkloadKind":
        """Accept a WorkloadKind or its name in any case"""
        if isinstance(value, cls):
            return value
        for kind in cls:
            if str(value).lower() == kind.value.lower():
                return kind
        raise ValueError(f"Unknown workload kind: {value}")


class WorkloadIdentity(NamedTuple):
    """Namespace and name of one workload object; unpacks as (namespace, name)"""
    namespace: str
    name: str

    def as_tuple(self) -> Tuple[str, str]:
        return tuple(self)

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}"


class PodRecord(BaseModel):
    """The parts of a pod needed to resolve workload IPs"""
    name: str = Field(..., description="Pod name")
    phase: Optional[str] = Field(None, description="Pending, Running, Succeeded, Failed or Unknown")
    ip: Optional[str] = Field(None, description="Pod IP, unset until the pod is networked")

    @classmethod
    def from_pod(cls, pod: Any) -> "PodRecord":
        """Build a record from a kubernetes V1Pod"""
        status = pod.status
        return cls(
            name=pod.metadata.name,
            phase=status.phase if status else None,
            ip=status.pod_ip if status else None
        )

    @property
    def is_running_with_ip(self) -> bool:
        return self.phase == "Running" and bool(self.ip)


class ScalePatch(BaseModel):
    """Patch setting the replica count and stamping the last-modified annotation"""
    annotation_key: str = Field(..., description="Reserved last-modified annotation key")
    replicas: int = Field(..., ge=0, description="Target replica count")
    timestamp: datetime = Field(..., description="Time of the scale, timezone aware")

    def to_body(self) -> Dict[str, Any]:
        return {
            "metadata": {
                "annotations": {
                    self.annotation_key: self.timestamp.isoformat()
                }
            },
            "spec": {
                "replicas": self.replicas
            }
        }

    def encode(self) -> str:
        """
        Encode the patch body as JSON

        Raises:
            SerializationError: If the body cannot be encoded
        """
        try:
            return json.dumps(self.to_body())
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Failed to encode scale patch: {e}") from e
