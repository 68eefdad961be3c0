#!/usr/bin/env python3
"""
Helpers shared by every workload kind: label selectors, timestamps and pod IPs
"""

import re
from datetime import datetime, timezone
from typing import Dict, List, Mapping, Optional

from ..core.logging_config import get_logger
from ..core.session import KubeSession, CORE_API
from ..models import PodRecord

logger = get_logger(__name__)

_RFC3339 = re.compile(
    r"(\d{4}-\d{2}-\d{2})[Tt ](\d{2}:\d{2}:\d{2})(?:\.(\d+))?([Zz]|[+-]\d{2}:\d{2})"
)


def build_label_selector(match_labels: Optional[Mapping[str, str]]) -> str:
    """
    Encode a label map as an equality-based selector string

    Keys are sorted so equal maps always produce the same selector. An empty
    map gives the empty string, which the API server treats as match-all.

    Args:
        match_labels: Label key/value pairs

    Returns:
        Selector in the form "k1=v1,k2=v2"
    """
    if not match_labels:
        return ""
    return ",".join(f"{key}={match_labels[key]}" for key in sorted(match_labels))


def parse_rfc3339(value: str) -> datetime:
    """
    Parse an RFC3339 timestamp into a UTC datetime

    Fractions finer than microseconds are truncated and a leap second (:60)
    is read as :59. A timestamp without an offset, or with surrounding
    whitespace, is rejected.

    Raises:
        ValueError: If the value is not RFC3339
    """
    match = _RFC3339.fullmatch(value) if isinstance(value, str) else None
    if not match:
        raise ValueError(f"Not an RFC3339 timestamp: {value!r}")

    date_part, time_part, fraction, offset = match.groups()
    if offset in ("Z", "z"):
        offset = "+00:00"
    fraction = f".{(fraction + '000000')[:6]}" if fraction else ""
    if time_part.endswith(":60"):
        time_part = time_part[:-2] + "59"

    return datetime.fromisoformat(f"{date_part}T{time_part}{fraction}{offset}").astimezone(timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PodIPResolver:
    """Resolves the IPs of running pods matching a label set"""

    def __init__(self, session: KubeSession):
        self.session = session

    async def list_pods(
        self,
        namespace: str,
        labels: Optional[Mapping[str, str]],
        request_timeout: Optional[float] = None
    ) -> List[PodRecord]:
        """List the pods in a namespace matching the labels"""
        label_selector = build_label_selector(labels)
        pods = await self.session.request(
            "Pod", "list", CORE_API, "list_namespaced_pod",
            namespace,
            label_selector=label_selector,
            request_timeout=request_timeout
        )
        return [PodRecord.from_pod(pod) for pod in pods.items]

    async def resolve(
        self,
        namespace: str,
        labels: Optional[Mapping[str, str]],
        request_timeout: Optional[float] = None
    ) -> List[str]:
        """
        Get IPs of running pods matching the labels

        Pods that are not Running, or are Running but not yet assigned an IP,
        are left out. Order is whatever the API server returned.

        Args:
            namespace: Namespace to search
            labels: Pod template labels of the workload
            request_timeout: Optional per-call timeout in seconds

        Returns:
            List of pod IPs

        Raises:
            TransportError: If the pod list request fails
        """
        records = await self.list_pods(namespace, labels, request_timeout=request_timeout)
        ips = [record.ip for record in records if record.is_running_with_ip]
        logger.debug(f"Resolved {len(ips)} running pod IPs out of {len(records)} pods in {namespace}")
        return ips


async def get_running_pod_ips(
    session: KubeSession,
    namespace: str,
    labels: Dict[str, str],
    request_timeout: Optional[float] = None
) -> List[str]:
    """Shortcut for PodIPResolver(session).resolve(...)"""
    return await PodIPResolver(session).resolve(namespace, labels, request_timeout=request_timeout)
