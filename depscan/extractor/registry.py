"""Parser registry — discover manifest files and match them to parsers."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from depscan.exceptions import UnknownManagerError
from depscan.extractor.models import ExtractionResult


@runtime_checkable
class ManifestParser(Protocol):
    """Interface that every manifest parser must satisfy.

    ``extract`` returns ``None`` when the file holds nothing recognizable, so
    the caller can skip it entirely.
    """

    manager: str
    file_patterns: list[str]
    enabled: bool

    def extract(self, content: str, file_path: str) -> ExtractionResult | None: ...


PARSER_REGISTRY: dict[str, ManifestParser] = {}


def register_parser(parser: ManifestParser) -> None:
    """Register a parser instance by its manager name."""
    PARSER_REGISTRY[parser.manager] = parser


def get_parser(name: str) -> ManifestParser:
    """Look up a registered parser, raising UnknownManagerError if missing."""
    try:
        return PARSER_REGISTRY[name]
    except KeyError:
        raise UnknownManagerError(name, sorted(PARSER_REGISTRY)) from None


def select_parsers(managers: list[str] | None = None) -> list[ManifestParser]:
    """Return the parsers taking part in a scan.

    With no explicit selection only enabled parsers are used; an explicit
    list picks exactly those parsers, disabled ones included.
    """
    if managers is None:
        return [p for p in PARSER_REGISTRY.values() if p.enabled]
    return [get_parser(name) for name in managers]


def discover_manifests(
    repo_path: Path, managers: list[str] | None = None
) -> list[tuple[ManifestParser, Path]]:
    """Walk the repo and match manifest files to registered parsers.

    Returns a list of (parser, matched_file) pairs.
    """
    matches: list[tuple[ManifestParser, Path]] = []
    for parser in select_parsers(managers):
        seen: set[Path] = set()
        for pattern in parser.file_patterns:
            for hit in sorted(repo_path.glob(pattern)):
                if hit.is_file() and hit not in seen:
                    seen.add(hit)
                    matches.append((parser, hit))
    return matches
