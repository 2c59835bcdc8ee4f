"""
Kubernetes client used to read pods and nodes.
"""
import json
import logging
import os
from typing import List, Optional

import urllib3
from kubernetes import client, config
from kubernetes.client.rest import ApiException
from kubernetes.config.config_exception import ConfigException

from kimspect.errors import ApiError, ConfigError, ConnectivityError

logger = logging.getLogger(__name__)

DEFAULT_KUBECONFIG = os.path.join("~", ".kube", "config")

# Failures below the HTTP layer: refused connections, DNS, timeouts
TRANSPORT_ERRORS = (urllib3.exceptions.HTTPError, OSError)


def resolve_kubeconfig(path: Optional[str] = None) -> str:
    """
    Find the kubeconfig file to load.

    Args:
        path: Explicit path, takes precedence over the environment

    Returns:
        Path from the argument, the KUBECONFIG variable or ~/.kube/config

    Raises:
        ConfigError: If no kubeconfig file exists
    """
    if path:
        logger.debug(f"Using kubeconfig from argument: {path}")
        return os.path.expanduser(path)

    env_path = os.environ.get("KUBECONFIG")
    if env_path:
        logger.info("Using kubeconfig from KUBECONFIG environment variable")
        return env_path

    default_path = os.path.expanduser(DEFAULT_KUBECONFIG)
    if not os.path.exists(default_path):
        raise ConfigError(f"No kubeconfig found at {default_path}", operation="connect")
    logger.info("Using default kubeconfig location")
    return default_path


def api_error(e: ApiException, operation: str) -> ApiError:
    """Turn an ApiException into an ApiError keeping the upstream message and reason."""
    message = None
    if e.body:
        try:
            message = json.loads(e.body).get("message")
        except (ValueError, AttributeError):
            message = None
    reason = e.reason or f"HTTP {e.status}"
    return ApiError(f"{message} ({reason})" if message else reason, operation=operation)


class KubeClient:
    """Kubernetes client for listing pods and nodes."""
    
    def __init__(
        self,
        kubeconfig: Optional[str] = None,
        context: Optional[str] = None,
        in_cluster: bool = False,
        request_timeout: int = 30,
        check: bool = True,
    ):
        """
        Initialize Kubernetes client.
        
        Args:
            kubeconfig: Path to kubeconfig file (optional)
            context: Kubernetes context name (optional)
            in_cluster: Whether running inside cluster
            request_timeout: Timeout in seconds applied to every API call
            check: Verify the cluster is accessible before returning
        """
        self.request_timeout = request_timeout
        
        try:
            if in_cluster:
                config.load_incluster_config()
            else:
                config.load_kube_config(config_file=resolve_kubeconfig(kubeconfig), context=context)
        except ConfigException as e:
            logger.error(f"❌ Failed to load Kubernetes configuration: {e}")
            raise ConfigError(str(e), operation="connect") from e
        
        self.v1 = client.CoreV1Api()
        
        if check and not self.is_accessible():
            raise ConnectivityError("Kubernetes cluster is not accessible", operation="connect")
        logger.info("✅ Kubernetes client initialized")
    
    def is_accessible(self) -> bool:
        """
        Check if the Kubernetes cluster is accessible.
        
        Returns:
            True if the API server answered, False if it could not be reached
        
        Raises:
            ApiError: If the API server rejected the request
        """
        logger.debug("Checking cluster accessibility")
        try:
            self.v1.get_api_resources(_request_timeout=self.request_timeout)
        except ApiException as e:
            logger.error("Kubernetes API error occurred")
            raise api_error(e, "connect") from e
        except TRANSPORT_ERRORS as e:
            logger.error(f"Failed to connect to Kubernetes cluster: {e}")
            return False
        logger.debug("Successfully connected to cluster")
        return True
    
    def list_pods(
        self,
        namespace: str,
        all_namespaces: bool = False,
        node_name: Optional[str] = None,
    ) -> List[client.V1Pod]:
        """
        List pods in a namespace or across the cluster.
        
        Args:
            namespace: Namespace to query, ignored with all_namespaces
            all_namespaces: Query every namespace
            node_name: Only return pods scheduled on this node
            
        Returns:
            List of V1Pod objects
        """
        kwargs = {"_request_timeout": self.request_timeout}
        if node_name is not None:
            kwargs["field_selector"] = f"spec.nodeName={node_name}"
        
        try:
            if all_namespaces:
                pods = self.v1.list_pod_for_all_namespaces(**kwargs)
            else:
                pods = self.v1.list_namespaced_pod(namespace=namespace, **kwargs)
        except ApiException as e:
            logger.error(f"Failed to list pods: {e.reason}")
            raise api_error(e, "list-pods") from e
        except TRANSPORT_ERRORS as e:
            logger.error(f"Failed to list pods: {e}")
            raise ConnectivityError(f"Failed to connect to Kubernetes cluster: {e}", operation="list-pods") from e
        
        scope = "all namespaces" if all_namespaces else f"namespace {namespace}"
        logger.info(f"Retrieved {len(pods.items)} pods from {scope}")
        return list(pods.items)
    
    def list_nodes(self) -> List[client.V1Node]:
        """
        List all nodes of the cluster.
        
        Returns:
            List of V1Node objects
        """
        try:
            nodes = self.v1.list_node(_request_timeout=self.request_timeout)
        except ApiException as e:
            logger.error(f"Failed to list nodes: {e.reason}")
            raise api_error(e, "list-nodes") from e
        except TRANSPORT_ERRORS as e:
            logger.error(f"Failed to list nodes: {e}")
            raise ConnectivityError(f"Failed to connect to Kubernetes cluster: {e}", operation="list-nodes") from e
        
        logger.info(f"Retrieved {len(nodes.items)} nodes")
        return list(nodes.items)
