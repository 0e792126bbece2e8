"""Assemble the full request set for one ``add`` invocation."""

import logging

from .errors import ConflictError
from .models import AddOptions
from .options import default_features, find_conflict, optional
from .parse_add import collect_features, parse_dependencies, parse_section
from .select import select_package

logger = logging.getLogger(__name__)

UNSTABLE_OPTIONS_FLAG = "unstable-options"


def unstable_options_enabled(z_flags: list[str] | None, from_env: bool = False) -> bool:
    """Check whether ``-Z unstable-options`` (or its env override) is in effect."""
    return from_env or UNSTABLE_OPTIONS_FLAG in (z_flags or [])


def prepare_add(
    crates: list[str],
    packages: list[str],
    *,
    features: list[str] | None = None,
    default_features_flag: bool = False,
    no_default_features_flag: bool = False,
    optional_flag: bool = False,
    no_optional_flag: bool = False,
    rename: str | None = None,
    registry: str | None = None,
    git: str | None = None,
    branch: str | None = None,
    tag: str | None = None,
    rev: str | None = None,
    dev: bool = False,
    build: bool = False,
    target: str | None = None,
    unstable_options: bool = False,
    dry_run: bool = False,
    manifest_path: str | None = None,
    offline: bool = False,
    quiet: bool = False,
) -> AddOptions:
    """Validate raw ``add`` input and bundle it for the manifest editor.

    Mutually exclusive options are rejected first. The section is parsed
    next, then the package is selected, and only then are the dependency
    tokens turned into requests. Any failure raises an ``AddError`` and
    nothing is returned.
    """
    conflict = find_conflict(
        default_features=default_features_flag,
        no_default_features=no_default_features_flag,
        optional=optional_flag,
        no_optional=no_optional_flag,
        dev=dev,
        build=build,
        registry=registry,
        git=git,
        branch=branch,
        tag=tag,
        rev=rev,
    )
    if conflict:
        raise ConflictError(conflict)

    section = parse_section(dev=dev, build=build, target=target)
    spec = select_package(packages)

    dependencies = parse_dependencies(
        crates,
        rename=rename,
        registry=registry,
        git=git,
        branch=branch,
        tag=tag,
        rev=rev,
        features=collect_features(features),
        default_features=default_features(default_features_flag, no_default_features_flag),
        optional=optional(optional_flag, no_optional_flag),
        unstable_options=unstable_options,
    )
    logger.debug("Prepared %d request(s) for %s", len(dependencies), spec)

    return AddOptions(
        spec=spec,
        dependencies=dependencies,
        section=section,
        dry_run=dry_run,
        manifest_path=manifest_path,
        offline=offline,
        quiet=quiet,
    )
