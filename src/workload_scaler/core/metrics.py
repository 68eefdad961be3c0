#!/usr/bin/env python3
"""
Prometheus instrumentation for Kubernetes API requests
"""

import time
from contextlib import contextmanager
from prometheus_client import Counter, Histogram

from ..config import settings

# Collectors register once per process, so the prefix is read from the global
# settings at import time (METRICS_NAMESPACE)
METRICS_NAMESPACE = settings.metrics.namespace

API_REQUESTS = Counter(
    'api_requests_total',
    'Total Kubernetes API requests issued',
    ['kind', 'verb', 'outcome'],
    namespace=METRICS_NAMESPACE
)
API_REQUEST_DURATION = Histogram(
    'api_request_duration_seconds',
    'Kubernetes API request latency',
    ['kind', 'verb'],
    namespace=METRICS_NAMESPACE
)
SCALE_OPERATIONS = Counter(
    'scale_operations_total',
    'Total scale patches issued',
    ['kind', 'outcome'],
    namespace=METRICS_NAMESPACE
)


@contextmanager
def track_request(kind: str, verb: str, enabled: bool = True):
    """
    Count and time one API request

    Args:
        kind: Resource kind the request targets (Deployment, Pod, ...)
        verb: API verb (list, patch)
        enabled: When False nothing is recorded
    """
    if not enabled:
        yield
        return

    start_time = time.time()
    outcome = "error"
    try:
        yield
        outcome = "success"
    finally:
        API_REQUESTS.labels(kind=kind, verb=verb, outcome=outcome).inc()
        API_REQUEST_DURATION.labels(kind=kind, verb=verb).observe(time.time() - start_time)
        if verb == "patch":
            SCALE_OPERATIONS.labels(kind=kind, outcome=outcome).inc()
