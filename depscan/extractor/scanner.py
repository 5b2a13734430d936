"""Run extractors over single files or a whole local repository."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import structlog

# Ensure parsers are registered before any scan runs.
import depscan.extractor.parsers  # noqa: F401
from depscan.extractor.models import ExtractionResult, ScannedFile
from depscan.extractor.registry import ManifestParser, discover_manifests, get_parser

log = structlog.get_logger("depscan.extractor")


def extract_package_file(
    parser: ManifestParser, content: str, file_path: str
) -> ExtractionResult | None:
    """Run one extractor, turning any failure into ``None``.

    A single unreadable or unexpected file must never stop a batch, so
    errors are logged and the file is treated as having no declarations.
    """
    if "\x00" in content:
        log.warning("extractor.binary_content", manager=parser.manager, package_file=file_path)
        return None
    try:
        return parser.extract(content, file_path)
    except Exception:
        log.warning(
            "extractor.failed",
            manager=parser.manager,
            package_file=file_path,
            exc_info=True,
        )
        return None


def extract(manager: str, content: str, file_path: str) -> ExtractionResult | None:
    """Extract dependencies from *content* with the parser named *manager*.

    Raises ``UnknownManagerError`` if no such parser is registered.
    """
    return extract_package_file(get_parser(manager), content, file_path)


def _relative(path: str, root: Path) -> str:
    try:
        return str(Path(path).relative_to(root))
    except ValueError:
        return path


def scan(repo_path: Path, managers: list[str] | None = None) -> list[ScannedFile]:
    """Scan a local repo directory for dependencies."""
    results: list[ScannedFile] = []
    for parser, file_path in discover_manifests(repo_path, managers):
        try:
            content = file_path.read_text(encoding="utf-8", errors="replace")
        except OSError:
            log.warning(
                "scanner.read_failed",
                manager=parser.manager,
                package_file=str(file_path),
                exc_info=True,
            )
            continue
        result = extract_package_file(parser, content, str(file_path))
        if result is None:
            continue

        # Report paths relative to repo root
        if result.lock_files:
            result = replace(
                result,
                lock_files=tuple(_relative(p, repo_path) for p in result.lock_files),
            )
        results.append(
            ScannedFile(
                manager=parser.manager,
                package_file=_relative(str(file_path), repo_path),
                result=result,
            )
        )
        log.debug(
            "scanner.extracted",
            manager=parser.manager,
            package_file=str(file_path),
            dep_count=len(result.deps),
        )
    return results
