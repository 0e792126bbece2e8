"""Errors raised while building dependency requests."""


class AddError(Exception):
    """Base class for every user-facing ``add`` validation failure."""


class SelectionError(AddError):
    """No package, or more than one, was selected for modification."""


class AmbiguityError(AddError):
    """A single-dependency modifier was combined with several crates."""


class GatingError(AddError):
    """Unstable syntax was used without ``-Z unstable-options``."""


class SequencingError(AddError):
    """A ``+<feature>`` token appeared before any crate."""


class ShapeError(AddError):
    """An option value has an invalid shape, e.g. an empty target."""


class ConflictError(AddError):
    """Mutually exclusive options were given together."""
