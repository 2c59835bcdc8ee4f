"""
Type definitions for Kubernetes display records.
"""
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


class NodeStatus(Enum):
    """Node status values derived from the Ready condition."""
    READY = "Ready"
    NOT_READY = "NotReady"
    UNKNOWN = "Unknown"


def frozen_mapping(values: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    """Return a read-only copy of ``values`` with keys in sorted order."""
    return MappingProxyType({key: values[key] for key in sorted(values or {})})


def _empty() -> Mapping[str, str]:
    return MappingProxyType({})


@dataclass(frozen=True)
class Pod:
    """Kubernetes Pod display record."""
    name: str
    namespace: str
    node: Optional[str] = None  # None until the pod is scheduled
    labels: Mapping[str, str] = field(default_factory=_empty)
    annotations: Mapping[str, str] = field(default_factory=_empty)
    container_env_vars: Mapping[str, Mapping[str, str]] = field(default_factory=_empty)

    def __post_init__(self):
        object.__setattr__(self, "labels", frozen_mapping(self.labels))
        object.__setattr__(self, "annotations", frozen_mapping(self.annotations))
        containers = self.container_env_vars or {}
        object.__setattr__(
            self,
            "container_env_vars",
            MappingProxyType({name: frozen_mapping(containers[name]) for name in sorted(containers)}),
        )


@dataclass(frozen=True)
class Node:
    """Kubernetes Node display record."""
    name: str
    status: NodeStatus = NodeStatus.UNKNOWN
    labels: Mapping[str, str] = field(default_factory=_empty)
    annotations: Mapping[str, str] = field(default_factory=_empty)

    def __post_init__(self):
        object.__setattr__(self, "labels", frozen_mapping(self.labels))
        object.__setattr__(self, "annotations", frozen_mapping(self.annotations))
