"""Build dependency requests from ``add`` command-line tokens."""

import logging
from collections.abc import Iterable, Iterator

from .errors import AmbiguityError, GatingError, SequencingError, ShapeError
from .models import DepKind, DepOp, DepTable

logger = logging.getLogger(__name__)

FEATURE_PREFIX = "+"


def parse_feature(value: str) -> Iterator[str]:
    """Split a feature list on whitespace and commas.

    Empty fragments are dropped and the user's ordering is kept, so
    ``"a,b c"`` yields ``a``, ``b``, ``c``.
    """
    for chunk in value.split():
        for name in chunk.split(","):
            if name:
                yield name


def collect_features(values: Iterable[str] | None) -> list[str] | None:
    """Flatten every ``--features`` occurrence into one de-duplicated list.

    Returns None when the option was never given. An option given only with
    empty values still returns an empty list.
    """
    if values is None:
        return None
    features: list[str] = []
    for value in values:
        for name in parse_feature(value):
            if name not in features:
                features.append(name)
    return features


def is_feature_token(token: str) -> bool:
    return token.startswith(FEATURE_PREFIX)


def parse_dependencies(
    crates: list[str],
    *,
    rename: str | None = None,
    registry: str | None = None,
    git: str | None = None,
    branch: str | None = None,
    tag: str | None = None,
    rev: str | None = None,
    features: list[str] | None = None,
    default_features: bool | None = None,
    optional: bool | None = None,
    unstable_options: bool = False,
) -> list[DepOp]:
    """Turn the ordered crate tokens into dependency requests.

    Args:
        crates: Tokens as typed. ``+feat`` tokens attach features to the
            request built from the token before them.
        features: Shared feature list applied to every crate token.
        unstable_options: Whether ``-Z unstable-options`` is in effect.

    Raises:
        AmbiguityError: A single-dependency modifier was used with several crates.
        GatingError: Unstable syntax was used without unstable options.
        SequencingError: A ``+feat`` token came before any crate.
    """
    crate_count = sum(1 for token in crates if not is_feature_token(token))

    if crate_count > 1 and git is not None:
        raise AmbiguityError("cannot specify multiple crates with path or git or vers")
    if git is not None and not unstable_options:
        raise GatingError("`--git` is unstable and requires `-Z unstable-options`")
    if crate_count > 1 and rename is not None:
        raise AmbiguityError("cannot specify multiple crates with rename")
    if crate_count > 1 and features is not None:
        raise AmbiguityError("cannot specify multiple crates with features")

    deps: list[DepOp] = []
    for token in crates:
        if is_feature_token(token):
            if not unstable_options:
                raise GatingError("`+<feature>` is unstable and requires `-Z unstable-options`")
            if not deps:
                raise SequencingError("`+<feature>` must be preceded by a pkgid")

            prior = deps[-1]
            prior.add_features(parse_feature(token[len(FEATURE_PREFIX):]))
            logger.debug("Attached features %s to %s", prior.features, prior.crate_spec)
        else:
            dep = DepOp(
                crate_spec=token,
                rename=rename,
                features=list(features) if features is not None else None,
                default_features=default_features,
                optional=optional,
                registry=registry,
                git=git,
                branch=branch,
                tag=tag,
                rev=rev,
            )
            deps.append(dep)
            logger.debug("Built request for %s", token)

    return deps


def parse_section(dev: bool = False, build: bool = False, target: str | None = None) -> DepTable:
    """Pick the dependency table shared by every request.

    ``dev`` wins over ``build``; with neither the normal table is used.
    """
    if dev:
        kind = DepKind.DEVELOPMENT
    elif build:
        kind = DepKind.BUILD
    else:
        kind = DepKind.NORMAL

    table = DepTable().set_kind(kind)

    if target is not None:
        if not target:
            raise ShapeError("Target specification may not be empty")
        table = table.set_target(target)

    logger.debug("Using %s dependency table (target=%s)", table.kind.value, table.target)
    return table
