"""
Command line interface.

    kimspect get pods [-n NAMESPACE | -A] [-N NODE] [-p POD] [-o wide] [--env-vars PATTERN]
    kimspect get nodes [--node NODE] [--labels] [--annotations]
"""
import logging

import click

from kimspect import __version__
from kimspect.adapters import KubeQueryAdapters
from kimspect.config import settings
from kimspect.display import DisplayOptions
from kimspect.errors import InvalidPattern, KimspectError
from kimspect.filters import EnvVarsFilter
from kimspect.kube_client import KubeClient
from kimspect.logging_setup import LOG_FORMATS, configure_logging

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("normal", "wide")


class EnvVarsFilterType(click.ParamType):
    """Container name regex, inverted with a leading '!'."""
    name = "pattern"

    def convert(self, value, param, ctx):
        if isinstance(value, EnvVarsFilter):
            return value
        try:
            return EnvVarsFilter.parse(value)
        except InvalidPattern as e:
            self.fail(e.message, param, ctx)


ENV_VARS_FILTER = EnvVarsFilterType()


def _non_empty(ctx, param, value):
    if value is not None and not value.strip():
        raise click.BadParameter("must not be empty", ctx=ctx, param=param)
    return value


def _adapters(ctx: click.Context) -> KubeQueryAdapters:
    obj = ctx.obj
    kube_client = KubeClient(
        kubeconfig=obj["kubeconfig"],
        context=obj["context"],
        in_cluster=settings.K8S_IN_CLUSTER,
        request_timeout=settings.REQUEST_TIMEOUT_SECS,
    )
    return KubeQueryAdapters(kube_client)


@click.group()
@click.option("-v", "--verbose", count=True, help="Increase log verbosity (-v info, -vv debug).")
@click.option(
    "--log-format",
    type=click.Choice(LOG_FORMATS),
    default=settings.LOG_FORMAT,
    show_default=True,
    help="Format of log lines written to stderr.",
)
@click.option("--kubeconfig", default=settings.KUBECONFIG, help="Path to kubeconfig file (default: ~/.kube/config).")
@click.option("--context", "kube_context", default=settings.K8S_CONTEXT, help="Kubernetes context to use.")
@click.version_option(__version__, prog_name="kimspect")
@click.pass_context
def cli(ctx, verbose, log_format, kubeconfig, kube_context):
    """Inspect pods and nodes of a Kubernetes cluster."""
    configure_logging(verbose, log_format, settings.LOG_LEVEL)
    ctx.ensure_object(dict)
    ctx.obj.update(kubeconfig=kubeconfig, context=kube_context)


@cli.group()
def get():
    """Get information about Kubernetes resources."""


@get.command()
@click.option("-n", "--namespace", default=None, help=f"Namespace to query (default: {settings.K8S_NAMESPACE}).")
@click.option("-N", "--node", "node_name", default=None, callback=_non_empty, help="Filter pods by node name.")
@click.option("-p", "--pod", "pod_name", default=None, help="Filter pods by pod name.")
@click.option("-A", "--all-namespaces", is_flag=True, help="Query pods across all namespaces.")
@click.option("-o", "--output", type=click.Choice(OUTPUT_FORMATS), default="normal", show_default=True,
              help="Output format; wide adds the NODE column.")
@click.option("--labels", is_flag=True, help="Show pod labels.")
@click.option("--annotations", is_flag=True, help="Show pod annotations.")
@click.option("--env-vars", "env_vars_filter", type=ENV_VARS_FILTER, default=None,
              help="Show env vars of containers whose name matches PATTERN ('!' prefix inverts).")
@click.pass_context
def pods(ctx, namespace, node_name, pod_name, all_namespaces, output, labels, annotations, env_vars_filter):
    """List pods."""
    if namespace is not None and all_namespaces:
        raise click.UsageError("--namespace cannot be used with --all-namespaces")

    options = DisplayOptions(
        show_labels=labels,
        show_annotations=annotations,
        env_vars_filter=env_vars_filter,
        wide=output == "wide",
    )
    logger.debug(f"get pods: namespace={namespace}, node={node_name}, pod={pod_name}, "
                 f"all_namespaces={all_namespaces}, options={options}")
    try:
        _adapters(ctx).show_pods(
            namespace or settings.K8S_NAMESPACE,
            options,
            all_namespaces=all_namespaces,
            node_name=node_name,
            pod_name=pod_name,
        )
    except KimspectError as e:
        raise click.ClickException(str(e)) from e


@get.command()
@click.option("-N", "--node", "node_name", default=None, callback=_non_empty, help="Show only the node with this name.")
@click.option("-o", "--output", type=click.Choice(OUTPUT_FORMATS), default="normal", show_default=True,
              help="Output format.")
@click.option("--labels", is_flag=True, help="Show node labels.")
@click.option("--annotations", is_flag=True, help="Show node annotations.")
@click.pass_context
def nodes(ctx, node_name, output, labels, annotations):
    """List nodes."""
    options = DisplayOptions(show_labels=labels, show_annotations=annotations, wide=output == "wide")
    logger.debug(f"get nodes: node={node_name}, options={options}")
    try:
        _adapters(ctx).show_nodes(options, node_name=node_name)
    except KimspectError as e:
        raise click.ClickException(str(e)) from e


def main():
    cli(obj={})
