"""Parser for CocoaPods Podfile files.

A Podfile is Ruby, but we never evaluate or fully parse it. Each line is run
through a fixed list of independent patterns (pod name, version, git, tag,
path, source) whose named groups are merged into one field mapping, and that
mapping is then classified into a dependency shape.

``source`` lines accumulate into the registry list for the rest of the file.
A registry only applies to pods declared on or after its own line.
"""

from __future__ import annotations

import re
from pathlib import Path

import structlog

from depscan.extractor import datasources
from depscan.extractor.models import (
    ExtractionResult,
    GitDependency,
    PackageDependency,
    RegistryDependency,
    SkippedDependency,
    SkipReason,
)
from depscan.extractor.registry import register_parser

log = structlog.get_logger("depscan.extractor")

LOCK_FILE_NAME = "Podfile.lock"

_NEWLINE_RE = re.compile(r"\r?\n")

# Everything from an unescaped "#" to end of line
_COMMENT_RE = re.compile(r"(?<!\\)#.*$")

# Order matters: later matches overwrite earlier ones for the same field.
_LINE_RULES: tuple[re.Pattern[str], ...] = (
    # pod 'Name' / pod 'Name/Subspec'
    re.compile(r"""^\s*pod\s+(['"])(?P<spec>[^'"/]+)(/(?P<subspec>[^'"]+))?(['"])"""),
    # pod 'Name', '1.2.3'  (version must be the last argument)
    re.compile(
        r"""^\s*pod\s+(['"])[^'"]+(['"])\s*,\s*(['"])(?P<current_value>[^'"]+)(['"])\s*$"""
    ),
    re.compile(r""",\s*:git\s*=>\s*(['"])(?P<git>[^'"]+)(['"])"""),
    re.compile(r""",\s*:tag\s*=>\s*(['"])(?P<tag>[^'"]+)(['"])"""),
    re.compile(r""",\s*:path\s*=>\s*(['"])(?P<path>[^'"]+)(['"])"""),
    re.compile(r"""^\s*source\s*(['"])(?P<source>[^'"]+)(['"])"""),
)

# github.com/acct/repo, git@gitlab.com:acct/repo.git, ...
_PLATFORM_RE = re.compile(
    r"[@/](?P<platform>github|gitlab)\.com[:/](?P<account>[^/]+)/(?P<repo>[^/]+)"
)

_PLATFORM_DATASOURCES = {
    "github": datasources.GITHUB_TAGS,
    "gitlab": datasources.GITLAB_TAGS,
}


# ── line classifier ──────────────────────────────────────────────────────


def parse_line(line: str) -> dict[str, str]:
    """Merge the named groups of every matching rule into one field mapping.

    ``spec``/``subspec`` are folded into ``package_name`` (``spec/subspec``)
    and ``group_name`` (``spec``) and never returned themselves.
    """
    fields: dict[str, str] = {}
    if not line:
        return fields

    code = _COMMENT_RE.sub("", line)
    for rule in _LINE_RULES:
        m = rule.search(code)
        if m:
            fields.update({k: v for k, v in m.groupdict().items() if v is not None})

    spec = fields.pop("spec", None)
    subspec = fields.pop("subspec", None)
    if spec:
        fields["package_name"] = f"{spec}/{subspec}" if subspec else spec
        fields["group_name"] = spec

    return fields


# ── shape resolver ───────────────────────────────────────────────────────


def classify_git_url(git_url: str) -> tuple[str, str]:
    """Return the ``(datasource, package_name)`` to list tags of *git_url* with.

    GitHub and GitLab URLs map to their tag services with ``account/repo``;
    anything else goes to plain git tags keyed by the URL itself.
    """
    m = _PLATFORM_RE.search(git_url)
    if m:
        repo = m.group("repo")
        if repo.endswith(".git"):
            repo = repo[:-4]
        return _PLATFORM_DATASOURCES[m.group("platform")], f"{m.group('account')}/{repo}"
    return datasources.GIT_TAGS, git_url


def resolve_line(
    fields: dict[str, str],
    registry_urls: list[str],
    line_number: int | None = None,
) -> PackageDependency | None:
    """Turn one line's fields into a dependency, or None if it declares no pod.

    A ``source`` field is appended to *registry_urls* first, so a pod on the
    same line already sees it. Registry-pinned pods get a snapshot of the
    list as it stands.
    """
    source = fields.get("source")
    if source:
        registry_urls.append(source.rstrip("/"))

    package_name = fields.get("package_name")
    if not package_name:
        return None
    group_name = fields.get("group_name")

    if "current_value" in fields:
        return RegistryDependency(
            package_name=package_name,
            group_name=group_name,
            datasource=datasources.POD,
            current_value=fields["current_value"],
            registry_urls=tuple(registry_urls),
            line_number=line_number,
        )

    if "git" in fields:
        if "tag" not in fields:
            return SkippedDependency(
                package_name=package_name,
                group_name=group_name,
                skip_reason=SkipReason.GIT_DEPENDENCY,
                line_number=line_number,
            )
        datasource, lookup_name = classify_git_url(fields["git"])
        return GitDependency(
            dep_name=package_name,
            package_name=lookup_name,
            group_name=group_name,
            datasource=datasource,
            current_value=fields["tag"],
            line_number=line_number,
        )

    if "path" in fields:
        return SkippedDependency(
            package_name=package_name,
            group_name=group_name,
            skip_reason=SkipReason.PATH_DEPENDENCY,
            line_number=line_number,
        )

    return SkippedDependency(
        package_name=package_name,
        group_name=group_name,
        skip_reason=SkipReason.UNSPECIFIED_VERSION,
        line_number=line_number,
    )


# ── manifest walker ──────────────────────────────────────────────────────


def sibling_lock_file(file_path: str) -> str:
    return str(Path(file_path).parent / LOCK_FILE_NAME)


def _local_path_exists(path: str) -> bool:
    try:
        return Path(path).is_file()
    except OSError as exc:
        log.debug("cocoapods.lock_file_check_failed", path=path, error=str(exc))
        return False


class CocoaPodsParser:
    manager = "cocoapods"
    file_patterns = ["**/Podfile"]
    enabled = True

    def extract(self, content: str, file_path: str) -> ExtractionResult | None:
        log.debug("cocoapods.extract", package_file=file_path)
        deps: list[PackageDependency] = []
        registry_urls: list[str] = []
        recognized = False

        for line_number, line in enumerate(_NEWLINE_RE.split(content)):
            fields = parse_line(line)
            if not fields:
                continue
            recognized = True

            dep = resolve_line(fields, registry_urls, line_number)
            if dep is not None:
                deps.append(dep)

        if not recognized:
            return None

        lock_file = sibling_lock_file(file_path)
        lock_files = (lock_file,) if _local_path_exists(lock_file) else None
        return ExtractionResult(deps=tuple(deps), lock_files=lock_files)


register_parser(CocoaPodsParser())
