"""
Query adapters tying the Kubernetes client, the extractors and the tables together.
"""
import logging
from dataclasses import replace
from typing import List, Optional, TextIO

from kimspect.display import DisplayOptions, display_nodes, display_pods
from kimspect.extractors import extract_nodes, extract_pods
from kimspect.kube_client import KubeClient
from kimspect.kube_types import Node, Pod

logger = logging.getLogger(__name__)


class KubeQueryAdapters:
    """Adapters running one pods or nodes query per call."""
    
    def __init__(self, kube_client: KubeClient, log: Optional[logging.Logger] = None):
        self.kube_client = kube_client
        self.log = log or logger
    
    def get_pods(
        self,
        namespace: str,
        all_namespaces: bool = False,
        node_name: Optional[str] = None,
        pod_name: Optional[str] = None,
    ) -> List[Pod]:
        """
        Fetch and filter pods.
        
        Args:
            namespace: Namespace to query, ignored with all_namespaces
            all_namespaces: Query every namespace
            node_name: Only keep pods scheduled on this node
            pod_name: Only keep pods with exactly this name
            
        Returns:
            List of Pod records
        """
        if pod_name and all_namespaces:
            self.log.warning(
                f"Looking up pod {pod_name!r} across all namespaces; "
                "pod names are only unique within a namespace"
            )
        self.log.debug(
            f"Querying pods: namespace={namespace}, all_namespaces={all_namespaces}, "
            f"node={node_name}, pod={pod_name}"
        )
        raw_pods = self.kube_client.list_pods(namespace, all_namespaces=all_namespaces, node_name=node_name)
        return extract_pods(raw_pods, node_name=node_name, pod_name=pod_name)
    
    def get_nodes(self, node_name: Optional[str] = None) -> List[Node]:
        """Fetch nodes, optionally keeping a single node by name."""
        self.log.debug(f"Querying nodes: node={node_name}")
        return extract_nodes(self.kube_client.list_nodes(), node_name=node_name)
    
    def show_pods(
        self,
        namespace: str,
        options: DisplayOptions,
        all_namespaces: bool = False,
        node_name: Optional[str] = None,
        pod_name: Optional[str] = None,
        out: Optional[TextIO] = None,
    ) -> bool:
        """
        Print the pods table.
        
        The NAMESPACE column is shown exactly when all namespaces are queried.
        
        Returns:
            False if no pod matched
        """
        pods = self.get_pods(namespace, all_namespaces=all_namespaces, node_name=node_name, pod_name=pod_name)
        options = replace(options, show_namespace=all_namespaces)
        return display_pods(pods, options, out=out, log=self.log)
    
    def show_nodes(
        self,
        options: DisplayOptions,
        node_name: Optional[str] = None,
        out: Optional[TextIO] = None,
    ) -> bool:
        """Print the nodes table; returns False if no node matched."""
        nodes = self.get_nodes(node_name=node_name)
        return display_nodes(nodes, options, out=out, log=self.log)
