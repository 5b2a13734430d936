"""Data models for the extraction engine."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Union


class SkipReason(str, Enum):
    """Why a declared dependency is not looked up upstream."""

    GIT_DEPENDENCY = "git-dependency"
    PATH_DEPENDENCY = "path-dependency"
    UNSPECIFIED_VERSION = "unspecified-version"


@dataclass(frozen=True, kw_only=True)
class RegistryDependency:
    """A dependency pinned to a version published on a package registry."""

    package_name: str
    datasource: str
    current_value: str
    group_name: str | None = None
    registry_urls: tuple[str, ...] = ()
    commit_message_topic: str | None = None
    line_number: int | None = None


@dataclass(frozen=True, kw_only=True)
class GitDependency:
    """A dependency pinned to a tag and/or commit of a git repository.

    ``dep_name`` is the name used in the manifest; ``package_name`` is what the
    datasource is queried with (``account/repo`` or the raw git URL).
    """

    dep_name: str
    package_name: str
    datasource: str
    current_value: str | None = None
    current_digest: str | None = None
    group_name: str | None = None
    line_number: int | None = None


@dataclass(frozen=True, kw_only=True)
class SkippedDependency:
    """A declared dependency that cannot be resolved to a discrete version."""

    package_name: str
    skip_reason: SkipReason
    group_name: str | None = None
    line_number: int | None = None


PackageDependency = Union[RegistryDependency, GitDependency, SkippedDependency]

_KINDS: dict[type, str] = {
    RegistryDependency: "registry",
    GitDependency: "git",
    SkippedDependency: "skipped",
}


@dataclass(frozen=True)
class ExtractionResult:
    """Everything extracted from one manifest file."""

    deps: tuple[PackageDependency, ...]
    lock_files: tuple[str, ...] | None = None


@dataclass(frozen=True)
class ScannedFile:
    """A manifest found during a repository scan, with its extraction result."""

    manager: str
    package_file: str
    result: ExtractionResult


def to_dict(dep: PackageDependency) -> dict[str, Any]:
    """Render a dependency as a JSON-ready dict tagged with its ``kind``."""
    data = asdict(dep)
    if isinstance(dep, SkippedDependency):
        data["skip_reason"] = dep.skip_reason.value
    if isinstance(dep, RegistryDependency):
        data["registry_urls"] = list(dep.registry_urls)
    return {"kind": _KINDS[type(dep)], **data}
