"""
Conversion of raw Kubernetes API objects into display records.

The raw objects are the ``V1Pod`` / ``V1Node`` models returned by the
``kubernetes`` client. Every nested field may be ``None``; required strings
default to ``""`` and optional values stay ``None``.
"""
import logging
from typing import Dict, Iterable, List, Optional

from kimspect.kube_types import Node, NodeStatus, Pod

logger = logging.getLogger(__name__)


def _describe_value_from(value_from) -> str:
    """Describe where an env var gets its value, the way kubectl describe does."""
    if value_from.secret_key_ref is not None:
        ref = value_from.secret_key_ref
        return f"<set to the key '{ref.key}' in secret '{ref.name}'>"
    if value_from.config_map_key_ref is not None:
        ref = value_from.config_map_key_ref
        return f"<set to the key '{ref.key}' of config map '{ref.name}'>"
    if value_from.field_ref is not None:
        return f"<set to the field '{value_from.field_ref.field_path}'>"
    if value_from.resource_field_ref is not None:
        return f"<set to the resource '{value_from.resource_field_ref.resource}'>"
    return ""


def container_env_vars(raw_pod) -> Dict[str, Dict[str, str]]:
    """
    Collect env vars per container of a pod.

    Args:
        raw_pod: V1Pod object

    Returns:
        Mapping of container name to env var name to value
    """
    spec = raw_pod.spec
    result: Dict[str, Dict[str, str]] = {}
    for container in (spec.containers if spec else None) or []:
        env: Dict[str, str] = {}
        for var in container.env or []:
            if var.value is not None:
                env[var.name] = var.value
            elif var.value_from is not None:
                env[var.name] = _describe_value_from(var.value_from)
            else:
                env[var.name] = ""
        result[container.name or ""] = env
    return result


def pod_from_raw(raw_pod) -> Pod:
    """Build a Pod record from a V1Pod."""
    metadata = raw_pod.metadata
    spec = raw_pod.spec
    return Pod(
        name=(metadata.name if metadata else None) or "",
        namespace=(metadata.namespace if metadata else None) or "",
        node=(spec.node_name if spec else None) or None,
        labels=(metadata.labels if metadata else None) or {},
        annotations=(metadata.annotations if metadata else None) or {},
        container_env_vars=container_env_vars(raw_pod),
    )


def node_status(raw_node) -> NodeStatus:
    """
    Derive the node status from its Ready condition.

    Returns Ready for status "True", NotReady for "False" and Unknown when the
    condition is missing or reported as anything else.
    """
    status = raw_node.status
    for condition in (status.conditions if status else None) or []:
        if condition.type != "Ready":
            continue
        if condition.status == "True":
            return NodeStatus.READY
        if condition.status == "False":
            return NodeStatus.NOT_READY
        return NodeStatus.UNKNOWN
    return NodeStatus.UNKNOWN


def node_from_raw(raw_node) -> Node:
    """Build a Node record from a V1Node."""
    metadata = raw_node.metadata
    return Node(
        name=(metadata.name if metadata else None) or "",
        status=node_status(raw_node),
        labels=(metadata.labels if metadata else None) or {},
        annotations=(metadata.annotations if metadata else None) or {},
    )


def extract_pods(
    raw_pods: Iterable,
    node_name: Optional[str] = None,
    pod_name: Optional[str] = None,
) -> List[Pod]:
    """
    Convert raw pods to records, keeping those matching every given filter.

    Args:
        raw_pods: V1Pod objects as returned by the provider
        node_name: Keep only pods scheduled on this node
        pod_name: Keep only pods with exactly this name

    Returns:
        List of Pod records in provider order
    """
    pods = []
    for raw_pod in raw_pods:
        pod = pod_from_raw(raw_pod)
        if node_name is not None and pod.node != node_name:
            continue
        if pod_name is not None and pod.name != pod_name:
            continue
        pods.append(pod)
    logger.debug(f"Extracted {len(pods)} pods (node={node_name}, pod={pod_name})")
    return pods


def extract_nodes(raw_nodes: Iterable, node_name: Optional[str] = None) -> List[Node]:
    """Convert raw nodes to records, optionally keeping a single node by name."""
    nodes = [node_from_raw(raw_node) for raw_node in raw_nodes]
    if node_name is not None:
        nodes = [node for node in nodes if node.name == node_name]
    logger.debug(f"Extracted {len(nodes)} nodes (node={node_name})")
    return nodes
