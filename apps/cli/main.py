"""CLI application for DepAdd."""

import json

import typer
from rich.console import Console
from rich.table import Table

from depadd.add import prepare_add, unstable_options_enabled
from depadd.config import load_settings
from depadd.errors import AddError
from depadd.log_config import configure_logging
from depadd.models import AddOptions, DepOp
from depadd.options import find_conflict

console = Console()


def format_source(dep: DepOp) -> str:
    """Describe where a dependency comes from."""
    if dep.git:
        for kind in ("branch", "tag", "rev"):
            value = getattr(dep, kind)
            if value:
                return f"git {dep.git} ({kind} {value})"
        return f"git {dep.git}"
    if dep.registry:
        return f"registry {dep.registry}"
    return "default"


def format_tristate(value: bool | None) -> str:
    if value is None:
        return "-"
    return "yes" if value else "no"


def format_table_output(options: AddOptions) -> Table:
    """Format the request set as a rich table."""
    table = Table(title=f"Dependencies for {options.spec}")
    table.add_column("Dependency", overflow="fold")
    table.add_column("Rename")
    table.add_column("Features", overflow="fold")
    table.add_column("Default features")
    table.add_column("Optional")
    table.add_column("Source", overflow="fold")

    for dep in options.dependencies:
        table.add_row(
            dep.crate_spec,
            dep.rename or "-",
            ", ".join(dep.features) if dep.features else "-",
            format_tristate(dep.default_features),
            format_tristate(dep.optional),
            format_source(dep),
        )

    return table


def format_section_line(options: AddOptions) -> str:
    line = f"Section: {options.section.kind.value}-dependencies"
    if options.section.target:
        line += f" for target {options.section.target}"
    return line


def format_json_output(options: AddOptions) -> str:
    """Format JSON output."""
    return json.dumps(options.to_dict(), indent=2)


app = typer.Typer(
    name="depadd",
    help="DepAdd - Build validated add-dependency requests for a manifest",
    add_completion=False,
)


@app.command(
    epilog="Examples: depadd regex --build -p app | depadd trycmd --dev -p app | "
    "depadd serde +derive serde_json -p app -Z unstable-options",
)
def add(
    crates: list[str] = typer.Argument(
        ...,
        metavar="<DEP>[@<VERSION>] [+<FEATURE>,...]",
        help="Reference to a package to add as a dependency: <name>, <name>@<version-req> or <path>. "
        "Follow it with +<FEATURE> to enable features for it.",
    ),
    no_default_features: bool = typer.Option(False, "--no-default-features", help="Disable the default features"),
    default_features: bool = typer.Option(False, "--default-features", help="Re-enable the default features"),
    features: list[str] | None = typer.Option(
        None, "--features", "-F", help="Space or comma separated list of features to add"
    ),
    optional: bool = typer.Option(False, "--optional", help="Mark the dependency as optional"),
    no_optional: bool = typer.Option(False, "--no-optional", help="Mark the dependency as required"),
    rename: str | None = typer.Option(None, "--rename", "-r", help="Rename the dependency"),
    registry: str | None = typer.Option(None, "--registry", help="Package registry for this dependency"),
    manifest_path: str | None = typer.Option(None, "--manifest-path", help="Path to the manifest to edit"),
    package: list[str] | None = typer.Option(None, "--package", "-p", help="Package to modify"),
    offline: bool = typer.Option(False, "--offline", help="Run without accessing the network"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Do not print status messages"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Don't actually write the manifest"),
    dev: bool = typer.Option(False, "--dev", "-D", help="Add as development dependency"),
    build: bool = typer.Option(False, "--build", "-B", help="Add as build dependency"),
    target: str | None = typer.Option(None, "--target", help="Add as dependency to the given target platform"),
    git: str | None = typer.Option(None, "--git", help="Git repository location (unstable)"),
    branch: str | None = typer.Option(None, "--branch", help="Git branch to download the crate from"),
    tag: str | None = typer.Option(None, "--tag", help="Git tag to download the crate from"),
    rev: str | None = typer.Option(None, "--rev", help="Git reference to download the crate from"),
    unstable: list[str] | None = typer.Option(None, "-Z", help="Unstable flags, e.g. unstable-options"),
    format_type: str = typer.Option("text", "--format", help="Output format: text or json"),
) -> None:
    """Add dependencies to a manifest."""

    conflict = find_conflict(
        default_features=default_features,
        no_default_features=no_default_features,
        optional=optional,
        no_optional=no_optional,
        dev=dev,
        build=build,
        registry=registry,
        git=git,
        branch=branch,
        tag=tag,
        rev=rev,
    )
    if conflict:
        raise typer.BadParameter(conflict)
    if format_type not in ("text", "json"):
        raise typer.BadParameter(f"Unknown format: {format_type}", param_hint="'--format'")

    try:
        settings = load_settings()
        configure_logging(settings.log_level)

        packages = list(package) if package else []
        if not packages and settings.package:
            packages = [settings.package]

        options = prepare_add(
            list(crates),
            packages,
            features=list(features) if features else None,
            default_features_flag=default_features,
            no_default_features_flag=no_default_features,
            optional_flag=optional,
            no_optional_flag=no_optional,
            rename=rename,
            registry=registry,
            git=git,
            branch=branch,
            tag=tag,
            rev=rev,
            dev=dev,
            build=build,
            target=target,
            unstable_options=unstable_options_enabled(unstable, settings.unstable_options),
            dry_run=dry_run,
            manifest_path=manifest_path,
            offline=offline,
            quiet=quiet,
        )

        if format_type == "json":
            console.print(format_json_output(options), markup=False, highlight=False, soft_wrap=True)
        else:
            if not quiet:
                count = len(options.dependencies)
                noun = "dependency" if count == 1 else "dependencies"
                console.print(f"Adding {count} {noun} to {options.spec}")
            console.print(format_table_output(options))
            console.print(format_section_line(options))
            if dry_run and not quiet:
                console.print("warning: aborting add due to dry run", style="yellow")

    except typer.Exit:
        raise
    except (AddError, RuntimeError) as e:
        console.print(f"Error: {e}", style="red", markup=False)
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
