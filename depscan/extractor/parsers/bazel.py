"""Parser for Bazel git_repository rules in WORKSPACE and .bzl files.

Only string keyword arguments are read; calls built from variables or
macros are skipped. A rule must pin a tag or a commit, and only GitHub
remotes produce a dependency (looked up via GitHub releases).
"""

from __future__ import annotations

import re
from typing import Literal

import structlog
from pydantic import BaseModel, ValidationError, model_validator

from depscan.extractor import datasources
from depscan.extractor.models import ExtractionResult, GitDependency
from depscan.extractor.registry import register_parser

log = structlog.get_logger("depscan.extractor")

_reported_remotes: set[str] = set()

# git_repository( ... ) / _git_repository( ... ) without nested parentheses
_RULE_RE = re.compile(
    r"(?<![\w.])(?P<rule>_?git_repository)\s*\((?P<body>[^()]*)\)",
)

_KWARG_RE = re.compile(r"""(?P<key>\w+)\s*=\s*(['"])(?P<value>[^'"]*)\2""")

# "#" to end of line, unless inside a string literal
_COMMENT_RE = re.compile(r"""^((?:[^#'"\n]|"[^"\n]*"|'[^'\n]*')*)#.*$""", re.MULTILINE)

# https://github.com/org/repo, git@github.com:org/repo.git,
# ssh://git@github.com/org/repo, git://github.com/org/repo
_GITHUB_REMOTE_RE = re.compile(
    r"^(?:(?:git\+)?(?:ssh|git|https?)://)?(?:[\w.-]+@)?(?:www\.)?github\.com[:/]"
    r"(?P<owner>[^/]+)/(?P<repo>[^/#?]+?)(?:\.git)?(?:[/#?].*)?$"
)


class GitTarget(BaseModel):
    rule: Literal["git_repository", "_git_repository"]
    name: str
    remote: str
    tag: str | None = None
    commit: str | None = None

    @model_validator(mode="after")
    def require_pin(self) -> GitTarget:
        if not (self.tag or self.commit):
            raise ValueError("git_repository needs a tag or a commit")
        return self


def github_package_name(remote: str) -> str | None:
    """Return ``owner/repo`` for a GitHub remote in any common URL form."""
    if not remote.startswith("https://") and remote not in _reported_remotes:
        _reported_remotes.add(remote)
        log.info("bazel.non_https_remote", url=remote)

    m = _GITHUB_REMOTE_RE.match(remote)
    if not m:
        return None
    return f"{m.group('owner')}/{m.group('repo')}"


def _to_dependency(target: GitTarget, line_number: int) -> GitDependency | None:
    package_name = github_package_name(target.remote)
    if package_name is None:
        return None
    return GitDependency(
        dep_name=target.name,
        package_name=package_name,
        datasource=datasources.GITHUB_RELEASES,
        current_value=target.tag,
        current_digest=target.commit,
        line_number=line_number,
    )


class BazelGitParser:
    manager = "bazel"
    file_patterns = ["**/WORKSPACE", "**/WORKSPACE.bazel", "**/*.bzl"]
    enabled = True

    def extract(self, content: str, file_path: str) -> ExtractionResult | None:
        deps: list[GitDependency] = []

        # Newlines are kept, so offsets still map to the original lines
        code = _COMMENT_RE.sub(r"\1", content)
        for m in _RULE_RE.finditer(code):
            kwargs = {
                kw.group("key"): kw.group("value")
                for kw in _KWARG_RE.finditer(m.group("body"))
            }
            try:
                target = GitTarget(rule=m.group("rule"), **kwargs)
            except (ValidationError, TypeError) as exc:
                log.debug(
                    "bazel.invalid_target",
                    package_file=file_path,
                    rule=m.group("rule"),
                    error=str(exc),
                )
                continue

            line_number = code.count("\n", 0, m.start("rule"))
            dep = _to_dependency(target, line_number)
            if dep is not None:
                deps.append(dep)

        if not deps:
            return None
        return ExtractionResult(deps=tuple(deps))


register_parser(BazelGitParser())
