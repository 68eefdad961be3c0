"""Pytest configuration and fake Kubernetes API for workload tests."""

import copy
from typing import Dict, List, Optional
from unittest.mock import Mock, patch

import pytest
from kubernetes import client
from kubernetes.client.rest import ApiException

from workload_scaler.config import Settings, WorkloadSettings, MetricsSettings
from workload_scaler.core.session import KubeSession


ANNOTATION_BASE = "test.workload-scaler.io"
LAST_MODIFIED = f"{ANNOTATION_BASE}/last_modified"


def pytest_configure(config):
    """Configure pytest."""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test (requires a cluster)"
    )


def _matches(selector: Optional[str], labels: Optional[Dict[str, str]]) -> bool:
    if not selector:
        return True
    labels = labels or {}
    for term in selector.split(","):
        key, value = term.split("=", 1)
        if labels.get(key) != value:
            return False
    return True


def make_metadata(name: str, namespace: str = "prod", labels=None, annotations=None):
    return client.V1ObjectMeta(
        name=name,
        namespace=namespace,
        labels=labels if labels is not None else {"app": name},
        annotations=annotations,
        resource_version="1"
    )


def make_template(template_labels):
    metadata = client.V1ObjectMeta(labels=template_labels) if template_labels is not None else None
    return client.V1PodTemplateSpec(metadata=metadata)


def make_deployment(name, namespace="prod", replicas=3, labels=None, annotations=None,
                    template_labels="default"):
    if template_labels == "default":
        template_labels = {"app": name}
    return client.V1Deployment(
        metadata=make_metadata(name, namespace, labels, annotations),
        spec=client.V1DeploymentSpec(
            replicas=replicas,
            selector=client.V1LabelSelector(match_labels=template_labels),
            template=make_template(template_labels)
        )
    )


def make_statefulset(name, namespace="prod", replicas=3, labels=None, annotations=None,
                     template_labels="default"):
    if template_labels == "default":
        template_labels = {"app": name}
    return client.V1StatefulSet(
        metadata=make_metadata(name, namespace, labels, annotations),
        spec=client.V1StatefulSetSpec(
            replicas=replicas,
            service_name=name,
            selector=client.V1LabelSelector(match_labels=template_labels),
            template=make_template(template_labels)
        )
    )


def make_replicaset(name, namespace="prod", replicas=3, labels=None, annotations=None,
                    template_labels="default"):
    if template_labels == "default":
        template_labels = {"app": name}
    return client.V1ReplicaSet(
        metadata=make_metadata(name, namespace, labels, annotations),
        spec=client.V1ReplicaSetSpec(
            replicas=replicas,
            selector=client.V1LabelSelector(match_labels=template_labels),
            template=make_template(template_labels)
        )
    )


def make_pod(name, phase="Running", ip=None, labels=None, namespace="prod"):
    return client.V1Pod(
        metadata=client.V1ObjectMeta(name=name, namespace=namespace, labels=labels or {}),
        status=client.V1PodStatus(phase=phase, pod_ip=ip)
    )


class MockKubernetesClient:
    """Fake AppsV1Api/CoreV1Api backed by in-memory objects"""

    def __init__(self):
        self.objects: Dict[str, List] = {
            "deployment": [],
            "stateful_set": [],
            "replica_set": [],
        }
        self.pods: List = []
        self.calls: List = []
        self.fail_with: Optional[Exception] = None

    def add(self, kind: str, obj):
        self.objects[kind].append(obj)
        return obj

    def _check_failure(self):
        if self.fail_with is not None:
            raise self.fail_with

    def _list(self, kind, namespace, label_selector=None, limit=None, _continue=None, **kwargs):
        self.calls.append(("list", kind, namespace, label_selector,
                           {"limit": limit, "_continue": _continue, **kwargs}))
        self._check_failure()
        items = [
            obj for obj in self.objects[kind]
            if obj.metadata.namespace == namespace and _matches(label_selector, obj.metadata.labels)
        ]
        start = int(_continue) if _continue else 0
        end = start + limit if limit else len(items)
        next_token = str(end) if limit and end < len(items) else None
        return Mock(
            items=copy.deepcopy(items[start:end]),
            metadata=client.V1ListMeta(_continue=next_token)
        )

    def _patch(self, kind, name, namespace, body, **kwargs):
        self.calls.append(("patch", kind, namespace, name, body, kwargs))
        self._check_failure()
        for obj in self.objects[kind]:
            if obj.metadata.name == name and obj.metadata.namespace == namespace:
                annotations = dict(obj.metadata.annotations or {})
                annotations.update(body.get("metadata", {}).get("annotations", {}))
                obj.metadata.annotations = annotations
                if "replicas" in body.get("spec", {}):
                    obj.spec.replicas = body["spec"]["replicas"]
                return obj
        raise ApiException(status=404, reason="Not Found")

    def list_namespaced_deployment(self, namespace, **kwargs):
        return self._list("deployment", namespace, **kwargs)

    def list_namespaced_stateful_set(self, namespace, **kwargs):
        return self._list("stateful_set", namespace, **kwargs)

    def list_namespaced_replica_set(self, namespace, **kwargs):
        return self._list("replica_set", namespace, **kwargs)

    def patch_namespaced_deployment(self, name, namespace, body, **kwargs):
        return self._patch("deployment", name, namespace, body, **kwargs)

    def patch_namespaced_stateful_set(self, name, namespace, body, **kwargs):
        return self._patch("stateful_set", name, namespace, body, **kwargs)

    def patch_namespaced_replica_set(self, name, namespace, body, **kwargs):
        return self._patch("replica_set", name, namespace, body, **kwargs)

    def list_namespaced_pod(self, namespace, label_selector=None, **kwargs):
        self.calls.append(("list", "pod", namespace, label_selector, kwargs))
        self._check_failure()
        items = [
            pod for pod in self.pods
            if pod.metadata.namespace == namespace and _matches(label_selector, pod.metadata.labels)
        ]
        return client.V1PodList(items=items, metadata=client.V1ListMeta())


@pytest.fixture
def test_settings():
    """Settings with a test annotation base and metrics disabled"""
    return Settings(
        workloads=WorkloadSettings(
            annotation_base=ANNOTATION_BASE,
            default_namespace="prod",
            request_timeout=5.0,
            max_workers=2,
            list_page_size=0
        ),
        metrics=MetricsSettings(enabled=False)
    )


@pytest.fixture
def kube():
    """Fake Kubernetes API"""
    return MockKubernetesClient()


@pytest.fixture
def session(kube, test_settings):
    """Session whose API objects are all the fake client"""
    kube_session = KubeSession(client.Configuration(), settings=test_settings)
    with patch.object(kube_session, "_build_api", return_value=kube):
        yield kube_session
    kube_session.close()
