"""Package selection for the ``add`` command."""

from .errors import SelectionError


def select_package(packages: list[str]) -> str:
    """Return the single package to modify.

    Raises:
        SelectionError: If no package or more than one package was selected.
    """
    if not packages:
        raise SelectionError("no packages selected.  Please specify one with `-p <PKGID>`")
    if len(packages) > 1:
        raise SelectionError(
            f"{len(packages)} packages selected.  Please specify one with `-p <PKGID>`"
        )
    return packages[0]
