"""
Shared pytest fixtures for Pod Redeployer tests
"""

import io
from typing import Dict, List, Optional

import pytest
from kubernetes.client import V1ObjectMeta, V1Pod
from kubernetes.client.rest import ApiException

from pod_redeployer.config import Config
from pod_redeployer.reporter import StatusReporter
from pod_redeployer.retry import Backoff


def make_pod(namespace: str, name: str, annotations: Optional[Dict[str, str]] = None) -> V1Pod:
    return V1Pod(metadata=V1ObjectMeta(namespace=namespace, name=name, annotations=annotations))


def conflict() -> ApiException:
    return ApiException(status=409, reason="Conflict")


class FakeKubernetesClient:
    """
    In-memory stand-in for KubernetesClient.

    update_errors is a queue of exceptions raised by successive update_pod
    calls; once it is empty updates succeed and are stored.
    """

    def __init__(self, pods: List[V1Pod]):
        self.pods = {(p.metadata.namespace, p.metadata.name): p for p in pods}
        self.listed = list(pods)
        self.get_errors: Dict[tuple, Exception] = {}
        self.update_errors: List[Exception] = []
        self.get_calls: List[tuple] = []
        self.update_calls: List[V1Pod] = []

    def list_all_pods(self):
        return list(self.listed)

    def get_pod(self, namespace, name):
        self.get_calls.append((namespace, name))
        if (namespace, name) in self.get_errors:
            raise self.get_errors[(namespace, name)]
        stored = self.pods[(namespace, name)]
        annotations = dict(stored.metadata.annotations) if stored.metadata.annotations is not None else None
        return make_pod(namespace, name, annotations)

    def update_pod(self, pod):
        self.update_calls.append(pod)
        if self.update_errors:
            raise self.update_errors.pop(0)
        self.pods[(pod.metadata.namespace, pod.metadata.name)] = pod
        return pod


@pytest.fixture
def config():
    return Config(kubeconfig_path="/tmp/kubeconfig", backoff=Backoff(steps=5, duration=0.01, jitter=0.0))


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def reporter(output):
    return StatusReporter(stream=output)
