"""
kimspect - inspect pods and nodes of a Kubernetes cluster as text tables.
"""
__version__ = "0.3.0"
