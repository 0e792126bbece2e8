"""Core data models for DepAdd."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum


class DepKind(Enum):
    """Dependency table a request is added to."""

    NORMAL = "normal"
    DEVELOPMENT = "dev"
    BUILD = "build"


@dataclass
class DepTable:
    """Section every request of one invocation is written to."""

    kind: DepKind = DepKind.NORMAL
    target: str | None = None  # platform triple or cfg() expression

    def set_kind(self, kind: DepKind) -> "DepTable":
        self.kind = kind
        return self

    def set_target(self, target: str) -> "DepTable":
        self.target = target
        return self

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "target": self.target}


@dataclass
class DepOp:
    """A single dependency to add or modify in a manifest."""

    crate_spec: str  # name, name@version-req or path; left to the resolver
    rename: str | None = None
    features: list[str] | None = None
    default_features: bool | None = None
    optional: bool | None = None
    registry: str | None = None
    git: str | None = None
    branch: str | None = None
    tag: str | None = None
    rev: str | None = None

    def add_features(self, names: Iterable[str]) -> None:
        """Merge feature names, keeping first-seen order and dropping duplicates."""
        if self.features is None:
            self.features = []
        for name in names:
            if name and name not in self.features:
                self.features.append(name)

    def to_dict(self) -> dict:
        return {
            "crate_spec": self.crate_spec,
            "rename": self.rename,
            "features": list(self.features) if self.features is not None else None,
            "default_features": self.default_features,
            "optional": self.optional,
            "registry": self.registry,
            "git": self.git,
            "branch": self.branch,
            "tag": self.tag,
            "rev": self.rev,
        }


@dataclass
class AddOptions:
    """Everything the manifest editor needs to apply one ``add`` invocation."""

    spec: str  # selected package
    dependencies: list[DepOp]
    section: DepTable = field(default_factory=DepTable)
    dry_run: bool = False
    manifest_path: str | None = None
    offline: bool = False
    quiet: bool = False

    def to_dict(self) -> dict:
        return {
            "package": self.spec,
            "manifest_path": self.manifest_path,
            "dry_run": self.dry_run,
            "offline": self.offline,
            "section": self.section.to_dict(),
            "dependencies": [dep.to_dict() for dep in self.dependencies],
        }
