"""Command-line entry point: dv-update-project."""

import sys
from typing import Any

import click
from rich.console import Console
from rich.markup import escape

from dvops import __version__
from dvops.config import load_config
from dvops.core.context import DvOpsContext, resolve_color
from dvops.core.exceptions import (
    ConfigError,
    DvOpsError,
    MissingArgumentError,
    UnknownArgumentError,
)
from dvops.core.output import OutputFormat
from dvops.core.suggestions import format_suggestions, suggest_names
from dvops.project.models import UpdateRequest
from dvops.project.pipeline import ProjectUpdater

CONTEXT_SETTINGS = {
    "help_option_names": ["-h", "--help"],
    "max_content_width": 120,
    "ignore_unknown_options": True,
    "allow_extra_args": True,
}

NEXT_STEPS = (
    "1. Review the generated files in projects/\n"
    "2. Commit the changes to your Git repository\n"
    "3. Apply the resources to your ArgoCD instance"
)


class OutputFormatType(click.ParamType):
    """Custom Click parameter type for output format."""

    name = "format"

    def convert(
        self,
        value: Any,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> OutputFormat:
        if isinstance(value, OutputFormat):
            return value
        try:
            return OutputFormat(value.lower())
        except ValueError:
            self.fail(
                f"Invalid format '{value}'. Choose from: table, json, yaml, raw",
                param,
                ctx,
            )


OUTPUT_FORMAT = OutputFormatType()


def print_version(ctx: click.Context, param: click.Parameter, value: bool) -> None:
    """Print version and exit."""
    if not value or ctx.resilient_parsing:
        return
    Console().print(f"dv-update-project version {__version__}")
    ctx.exit()


def known_flags(command: click.Command) -> list[str]:
    """All long and short option names accepted by a command."""
    flags: list[str] = []
    for param in command.params:
        if isinstance(param, click.Option):
            flags.extend(param.opts)
            flags.extend(param.secondary_opts)
    flags.extend(CONTEXT_SETTINGS["help_option_names"])
    return flags


def unknown_argument(ctx: click.Context, argument: str) -> UnknownArgumentError:
    flag = argument.split("=", 1)[0]
    hint = format_suggestions(suggest_names(flag, known_flags(ctx.command))) or None
    return UnknownArgumentError(argument, hint=hint)


def fail(ctx: click.Context, dv_ctx: DvOpsContext | None, error: DvOpsError, show_help: bool = False) -> None:
    """Report an error (and optionally the help text) and exit with status 1."""
    if dv_ctx is not None:
        dv_ctx.output.print_error(str(error))
        if error.hint:
            dv_ctx.output.print_hint(error.hint)
    else:
        console = Console(stderr=True, soft_wrap=True)
        console.print(f"[red]Error:[/red] {escape(str(error))}")
        if error.hint:
            console.print(error.hint)
    if show_help:
        click.echo()
        click.echo(ctx.get_help())
    ctx.exit(1)


def list_projects(dv_ctx: DvOpsContext) -> None:
    """Print the projects registered in Argo CD."""
    dv_ctx.output.print_info("Listing ArgoCD projects...")
    records = dv_ctx.argocd.list_projects()
    rows = [r.to_dict() for r in records]
    dv_ctx.output.print_data(
        rows,
        headers=list(rows[0]) if rows else None,
        title="Available ArgoCD Projects",
    )
    dv_ctx.output.print_success("ArgoCD projects listed successfully")


def list_clusters(dv_ctx: DvOpsContext) -> None:
    """Print the clusters registered in Argo CD."""
    dv_ctx.output.print_info("Listing ArgoCD clusters...")
    records = dv_ctx.argocd.list_clusters()
    rows = [r.to_dict() for r in records]
    dv_ctx.output.print_data(
        rows,
        headers=list(rows[0]) if rows else None,
        title="Available ArgoCD Clusters",
    )
    dv_ctx.output.print_success("ArgoCD clusters listed successfully")


@click.command(context_settings=CONTEXT_SETTINGS)
@click.option("--project-name", metavar="NAME", help="Name of the Argo CD project (e.g., sandbox)")
@click.option("--cluster-name", metavar="NAME", help="Name of the target cluster (e.g., sandbox)")
@click.option("--debug", is_flag=True, help="Enable debug mode (shows detailed operations)")
@click.option(
    "--list-argocd-projects",
    "show_projects",
    is_flag=True,
    help="List all available Argo CD projects",
)
@click.option(
    "--list-argocd-clusters",
    "show_clusters",
    is_flag=True,
    help="List all available Argo CD clusters",
)
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    metavar="FILE",
    envvar="DVOPS_CONFIG",
    help="Path to config file",
)
@click.option(
    "-p",
    "--profile",
    metavar="NAME",
    envvar="DVOPS_PROFILE",
    help="Configuration profile to use",
)
@click.option(
    "--root",
    type=click.Path(file_okay=False),
    envvar="DVOPS_ROOT",
    help="dv-ops repository root (default: current directory)",
)
@click.option(
    "--timeout",
    type=click.IntRange(min=1),
    envvar="DVOPS_ARGOCD_TIMEOUT",
    help="Timeout in seconds for each argocd command",
)
@click.option(
    "-o",
    "--output",
    "output_format",
    type=OUTPUT_FORMAT,
    metavar="FORMAT",
    help="Listing format: table, json, yaml, raw",
)
@click.option("-q", "--quiet", is_flag=True, help="Suppress non-essential output")
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.option(
    "--version",
    is_flag=True,
    callback=print_version,
    expose_value=False,
    is_eager=True,
    help="Show version and exit",
)
@click.pass_context
def cli(
    ctx: click.Context,
    project_name: str | None,
    cluster_name: str | None,
    debug: bool,
    show_projects: bool,
    show_clusters: bool,
    config_file: str | None,
    profile: str | None,
    root: str | None,
    timeout: int | None,
    output_format: OutputFormat | None,
    quiet: bool,
    no_color: bool,
) -> None:
    """Create or update an Argo CD project file from the project template.

    Validates that the project and cluster exist in Argo CD, removes any
    existing projects/<project-name>.yaml and regenerates it from
    addons/templates/project-template.yaml.

    \b
    Examples:
        dv-update-project --project-name=sandbox --cluster-name=sandbox
        dv-update-project --project-name=webapp --cluster-name=staging --debug
        dv-update-project --list-argocd-projects
        dv-update-project --list-argocd-clusters
    """
    if ctx.args:
        fail(ctx, None, unknown_argument(ctx, ctx.args[0]), show_help=True)

    if not any([project_name, cluster_name, show_projects, show_clusters]):
        click.echo(ctx.get_help())
        ctx.exit(0)

    try:
        config = load_config(config_file)
        dv_ctx = DvOpsContext(
            config=config,
            profile=profile,
            output_format=output_format,
            debug=debug,
            quiet=quiet,
            color=resolve_color(config.global_settings.color, no_color),
            root=root,
            timeout=timeout,
        )
    except ConfigError as e:
        fail(ctx, None, e)
        return

    dv_ctx.logger.debug(
        "Parsed arguments",
        project=project_name,
        cluster=cluster_name,
        profile=dv_ctx.profile_name,
    )

    try:
        if show_projects or show_clusters:
            dv_ctx.argocd.ensure_available()
            if show_projects:
                list_projects(dv_ctx)
            if show_clusters:
                list_clusters(dv_ctx)
            return

        request = UpdateRequest(
            project_name=project_name or "",
            cluster_name=cluster_name or "",
        )
        result = ProjectUpdater(dv_ctx.argocd, dv_ctx.paths, dv_ctx.output).run(request)
    except MissingArgumentError as e:
        fail(ctx, dv_ctx, e, show_help=True)
    except DvOpsError as e:
        fail(ctx, dv_ctx, e)

    dv_ctx.logger.debug("Update finished", **result.to_dict())
    dv_ctx.output.print_success(
        f"ArgoCD project '{result.project_name}' created successfully for cluster '{result.cluster.name}'!"
    )
    dv_ctx.output.print_panel(NEXT_STEPS, title="Next steps")


def main() -> None:
    """Main entry point."""
    try:
        cli()
    except DvOpsError as e:
        console = Console(stderr=True)
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        console = Console(stderr=True)
        console.print("\n[yellow]Interrupted[/yellow]")
        sys.exit(130)


if __name__ == "__main__":
    main()
