"""Shared builders for Kubernetes model objects."""

from __future__ import annotations

from typing import Optional

import pytest
from kubernetes import client


def make_pod(
    name: Optional[str] = "web-1",
    namespace: Optional[str] = "default",
    node: Optional[str] = None,
    labels: Optional[dict] = None,
    annotations: Optional[dict] = None,
    containers: Optional[dict] = None,
) -> client.V1Pod:
    """Build a V1Pod; ``containers`` maps container name to an env dict or list of V1EnvVar."""
    specs = []
    for container_name, env in (containers or {}).items():
        if isinstance(env, dict):
            env = [client.V1EnvVar(name=key, value=value) for key, value in env.items()]
        specs.append(client.V1Container(name=container_name, env=env or None))
    return client.V1Pod(
        metadata=client.V1ObjectMeta(
            name=name,
            namespace=namespace,
            labels=labels,
            annotations=annotations,
        ),
        spec=client.V1PodSpec(containers=specs, node_name=node),
    )


def make_node(
    name: Optional[str] = "node-1",
    ready: Optional[str] = "True",
    labels: Optional[dict] = None,
    annotations: Optional[dict] = None,
) -> client.V1Node:
    """Build a V1Node; ``ready=None`` leaves out the Ready condition."""
    conditions = [client.V1NodeCondition(type="MemoryPressure", status="False")]
    if ready is not None:
        conditions.append(client.V1NodeCondition(type="Ready", status=ready))
    return client.V1Node(
        metadata=client.V1ObjectMeta(name=name, labels=labels, annotations=annotations),
        status=client.V1NodeStatus(conditions=conditions),
    )


class FakeKubeClient:
    """In-memory stand-in for KubeClient recording its calls."""

    def __init__(self, pods=None, nodes=None):
        self.pods = pods or []
        self.nodes = nodes or []
        self.calls = []

    def is_accessible(self) -> bool:
        return True

    def list_pods(self, namespace, all_namespaces=False, node_name=None):
        self.calls.append(("list_pods", namespace, all_namespaces, node_name))
        return [
            pod for pod in self.pods
            if all_namespaces or pod.metadata.namespace == namespace
        ]

    def list_nodes(self):
        self.calls.append(("list_nodes",))
        return list(self.nodes)


@pytest.fixture
def fake_client() -> FakeKubeClient:
    return FakeKubeClient(
        pods=[
            make_pod("web-1", "default", node="node-1", labels={"app": "web"}),
            make_pod("web-2", "default", node="node-2", labels={"app": "web"}),
            make_pod("coredns", "kube-system", node="node-1"),
        ],
        nodes=[make_node("node-1"), make_node("node-2", ready="False")],
    )
