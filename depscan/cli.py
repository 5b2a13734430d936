"""CLI entry point: depscan.

Subcommands:
    depscan scan /path/to/repo                    # scan with all enabled managers
    depscan scan . -m cocoapods -m conan --json   # restrict managers, JSON output
    depscan extract ios/Podfile -m cocoapods      # run one extractor on one file
    depscan managers                              # list registered managers
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from depscan.core.logging import setup_logging
from depscan.exceptions import UnknownManagerError
from depscan.extractor.models import (
    ExtractionResult,
    GitDependency,
    PackageDependency,
    ScannedFile,
    SkippedDependency,
    to_dict,
)
from depscan.extractor.registry import PARSER_REGISTRY
from depscan.extractor.scanner import extract, scan


def _split_managers(values: tuple[str, ...]) -> list[str] | None:
    """Flatten repeated and comma-separated --manager values."""
    names = [name.strip() for value in values for name in value.split(",") if name.strip()]
    return names or None


def _file_to_dict(scanned: ScannedFile) -> dict:
    lock_files = scanned.result.lock_files
    return {
        "manager": scanned.manager,
        "package_file": scanned.package_file,
        "lock_files": list(lock_files) if lock_files else None,
        "deps": [to_dict(d) for d in scanned.result.deps],
    }


def _describe(dep: PackageDependency) -> str:
    if isinstance(dep, SkippedDependency):
        return f"{dep.package_name}  (skipped: {dep.skip_reason.value})"
    if isinstance(dep, GitDependency):
        pin = dep.current_value or dep.current_digest or ""
        return f"{dep.dep_name} {pin}  [{dep.datasource}: {dep.package_name}]"
    return f"{dep.package_name} {dep.current_value}  [{dep.datasource}]"


def _print_files(files: list[ScannedFile], as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps([_file_to_dict(f) for f in files], indent=2))
        return

    if not files:
        click.echo("No dependencies found.")
        return

    total = sum(len(f.result.deps) for f in files)
    click.echo(f"Found {total} dependencies in {len(files)} manifest(s)\n")

    for scanned in files:
        click.echo(f"  {scanned.package_file}  ({scanned.manager})")
        for dep in scanned.result.deps:
            click.echo(f"    {_describe(dep)}")
        for lock_file in scanned.result.lock_files or ():
            click.echo(f"    lock file: {lock_file}")
        click.echo()


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(verbose: bool) -> None:
    """depscan: extract dependency declarations from manifest files."""
    setup_logging("DEBUG" if verbose else None)


@main.command("scan")
@click.argument("target", type=click.Path(path_type=Path))
@click.option(
    "-m",
    "--manager",
    "managers",
    multiple=True,
    envvar="DEPSCAN_MANAGERS",
    help="Manager to run (repeatable or comma separated; default: all enabled)",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def scan_cmd(target: Path, managers: tuple[str, ...], as_json: bool) -> None:
    """Scan a local directory for manifest files."""
    repo = target.resolve()
    if not repo.is_dir():
        click.echo(f"Error: {repo} is not a directory", err=True)
        sys.exit(1)

    try:
        files = scan(repo, _split_managers(managers))
    except UnknownManagerError as exc:
        raise click.BadParameter(str(exc), param_hint="--manager") from exc
    _print_files(files, as_json)


@main.command("extract")
@click.argument("manifest", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-m", "--manager", required=True, help="Manager to extract with")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def extract_cmd(manifest: Path, manager: str, as_json: bool) -> None:
    """Extract dependencies from a single manifest file."""
    content = manifest.read_text(encoding="utf-8", errors="replace")
    try:
        result: ExtractionResult | None = extract(manager, content, str(manifest))
    except UnknownManagerError as exc:
        raise click.BadParameter(str(exc), param_hint="--manager") from exc

    files = [] if result is None else [ScannedFile(manager, str(manifest), result)]
    _print_files(files, as_json)


@main.command("managers")
def managers_cmd() -> None:
    """List registered managers and the files they match."""
    for name in sorted(PARSER_REGISTRY):
        parser = PARSER_REGISTRY[name]
        state = "" if parser.enabled else "  (disabled by default)"
        click.echo(f"{name}: {', '.join(parser.file_patterns)}{state}")


if __name__ == "__main__":
    main()
