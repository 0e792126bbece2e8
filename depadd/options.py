"""Collapse enable/disable flag pairs into tri-state values."""


def resolve_bool_arg(yes: bool, no: bool) -> bool | None:
    """Turn an ``--x`` / ``--no-x`` pair into True, False or None.

    None means the flag was not given and the existing manifest value
    should be left untouched. Both flags at once must be rejected by the
    argument parser before this is called.
    """
    if yes and not no:
        return True
    if no and not yes:
        return False
    if not yes and not no:
        return None
    raise AssertionError("conflicting flags should be rejected by the CLI")


def default_features(enable: bool, disable: bool) -> bool | None:
    """Resolve ``--default-features`` / ``--no-default-features``."""
    return resolve_bool_arg(enable, disable)


def optional(enable: bool, disable: bool) -> bool | None:
    """Resolve ``--optional`` / ``--no-optional``."""
    return resolve_bool_arg(enable, disable)


def find_conflict(
    *,
    default_features: bool = False,
    no_default_features: bool = False,
    optional: bool = False,
    no_optional: bool = False,
    dev: bool = False,
    build: bool = False,
    registry: str | None = None,
    git: str | None = None,
    branch: str | None = None,
    tag: str | None = None,
    rev: str | None = None,
) -> str | None:
    """Return a message for the first pair of mutually exclusive options, if any."""
    if default_features and no_default_features:
        return "'--default-features' cannot be used with '--no-default-features'"
    if optional and no_optional:
        return "'--optional' cannot be used with '--no-optional'"
    if dev and build:
        return "'--dev' cannot be used with '--build'"
    if dev and (optional or no_optional):
        flag = "--optional" if optional else "--no-optional"
        return f"'{flag}' cannot be used with '--dev'"
    if registry is not None and git is not None:
        return "'--registry' cannot be used with '--git'"

    refs = [name for name, value in (("branch", branch), ("tag", tag), ("rev", rev)) if value is not None]
    if len(refs) > 1:
        return f"'--{refs[0]}' cannot be used with '--{refs[1]}'"
    if refs and git is None:
        return f"'--{refs[0]}' requires '--git'"
    return None
