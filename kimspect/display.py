"""
Table rendering for pod and node records.

Tables are plain fixed-width text. Cells may span several lines; the
CONTAINERS and ENV VARS cells of a pod row are kept line-aligned so that the
Nth line of both cells always refers to the same container/env var pair.
"""
import logging
import sys
from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence, TextIO, Tuple

from tabulate import tabulate

from kimspect.errors import RenderError
from kimspect.filters import EnvVarsFilter
from kimspect.kube_types import Node, Pod

logger = logging.getLogger(__name__)

NONE = "<none>"
TABLE_FORMAT = "simple"


@dataclass(frozen=True)
class DisplayOptions:
    """Columns to render on top of the fixed ones."""
    show_labels: bool = False
    show_annotations: bool = False
    env_vars_filter: Optional[EnvVarsFilter] = None
    wide: bool = False
    # Set from all-namespaces mode by the orchestrator, pods only
    show_namespace: bool = False


def format_metadata(values: Mapping[str, str]) -> str:
    """Render labels or annotations as sorted ``key=value`` lines."""
    if not values:
        return NONE
    return "\n".join(f"{key}={values[key]}" for key in sorted(values))


def _container_blocks(
    container_env_vars: Mapping[str, Mapping[str, str]],
    env_vars_filter: EnvVarsFilter,
) -> List[Tuple[str, List[str]]]:
    """Env var lines of each matching container, a multi-line value giving several lines."""
    blocks = []
    for container in sorted(container_env_vars):
        if not env_vars_filter.matches(container):
            continue
        env = container_env_vars[container]
        lines: List[str] = []
        for key in sorted(env):
            # Split on every line boundary tabulate breaks cells on
            lines.extend(f"{key}={env[key]}".splitlines() or [""])
        blocks.append((container, lines or [NONE]))
    return blocks


def format_container_and_env_vars(
    container_env_vars: Mapping[str, Mapping[str, str]],
    env_vars_filter: EnvVarsFilter,
) -> Tuple[str, str]:
    """
    Build the CONTAINERS and ENV VARS cells of a pod row.

    Args:
        container_env_vars: Container name to env var mapping of the pod
        env_vars_filter: Filter applied to container names

    Returns:
        (containers, env_vars) cells, always with the same number of lines
    """
    blocks = _container_blocks(container_env_vars, env_vars_filter)
    if not blocks:
        return NONE, NONE

    container_lines: List[str] = []
    env_lines: List[str] = []
    for container, lines in blocks:
        container_lines.append(container)
        container_lines.extend([""] * (len(lines) - 1))
        env_lines.extend(lines)
    return "\n".join(container_lines), "\n".join(env_lines)


def pod_headers(options: DisplayOptions) -> List[str]:
    headers = []
    if options.show_namespace:
        headers.append("NAMESPACE")
    headers.append("POD")
    if options.env_vars_filter is not None:
        headers.extend(["CONTAINERS", "ENV VARS"])
    if options.show_labels:
        headers.append("LABELS")
    if options.show_annotations:
        headers.append("ANNOTATIONS")
    if options.wide:
        headers.append("NODE")
    return headers


def pod_row(pod: Pod, options: DisplayOptions) -> List[str]:
    row = []
    if options.show_namespace:
        row.append(pod.namespace)
    row.append(pod.name)
    if options.env_vars_filter is not None:
        row.extend(format_container_and_env_vars(pod.container_env_vars, options.env_vars_filter))
    if options.show_labels:
        row.append(format_metadata(pod.labels))
    if options.show_annotations:
        row.append(format_metadata(pod.annotations))
    if options.wide:
        row.append(pod.node if pod.node is not None else NONE)
    return row


def node_headers(options: DisplayOptions) -> List[str]:
    # Wide output has no extra node columns yet
    headers = ["NAME", "STATUS"]
    if options.show_labels:
        headers.append("LABELS")
    if options.show_annotations:
        headers.append("ANNOTATIONS")
    return headers


def node_row(node: Node, options: DisplayOptions) -> List[str]:
    row = [node.name, node.status.value]
    if options.show_labels:
        row.append(format_metadata(node.labels))
    if options.show_annotations:
        row.append(format_metadata(node.annotations))
    return row


def format_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    """
    Lay out rows under headers as a fixed-width text table.

    Raises:
        RenderError: If the table cannot be formatted
    """
    try:
        return tabulate(
            rows,
            headers=list(headers),
            tablefmt=TABLE_FORMAT,
            disable_numparse=True,
            stralign="left",
        )
    except (TypeError, ValueError, IndexError) as e:
        raise RenderError(f"failed to format {len(rows)} rows: {e}", operation="render") from e


def render_pods(
    pods: Sequence[Pod],
    options: DisplayOptions,
    log: Optional[logging.Logger] = None,
) -> Optional[str]:
    """
    Render pods as a table.

    Args:
        pods: Pod records to display
        options: Enabled columns
        log: Diagnostic sink, defaults to the module logger

    Returns:
        Table text, or None when there are no pods
    """
    log = log or logger
    if not pods:
        log.warning("No pods found matching criteria")
        return None
    log.debug(f"Rendering {len(pods)} pods with {options}")
    return format_table(pod_headers(options), [pod_row(pod, options) for pod in pods])


def render_nodes(
    nodes: Sequence[Node],
    options: DisplayOptions,
    log: Optional[logging.Logger] = None,
) -> Optional[str]:
    """Render nodes as a table, or return None when there are no nodes."""
    log = log or logger
    if not nodes:
        log.warning("No nodes found matching criteria")
        return None
    log.debug(f"Rendering {len(nodes)} nodes with {options}")
    return format_table(node_headers(options), [node_row(node, options) for node in nodes])


def _write(table: Optional[str], out: Optional[TextIO]) -> bool:
    if table is None:
        return False
    (out or sys.stdout).write(table + "\n")
    return True


def display_pods(
    pods: Sequence[Pod],
    options: DisplayOptions,
    out: Optional[TextIO] = None,
    log: Optional[logging.Logger] = None,
) -> bool:
    """
    Write the pods table to ``out`` (stdout by default).

    Returns:
        False if nothing matched and no table was written
    """
    return _write(render_pods(pods, options, log=log), out)


def display_nodes(
    nodes: Sequence[Node],
    options: DisplayOptions,
    out: Optional[TextIO] = None,
    log: Optional[logging.Logger] = None,
) -> bool:
    """Write the nodes table to ``out`` (stdout by default)."""
    return _write(render_nodes(nodes, options, log=log), out)
