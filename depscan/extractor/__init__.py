"""Extraction engine — pull dependency declarations out of manifest files."""

from depscan.extractor.models import (
    ExtractionResult,
    GitDependency,
    PackageDependency,
    RegistryDependency,
    ScannedFile,
    SkippedDependency,
    SkipReason,
)
from depscan.extractor.scanner import extract, extract_package_file, scan

__all__ = [
    "ExtractionResult",
    "GitDependency",
    "PackageDependency",
    "RegistryDependency",
    "ScannedFile",
    "SkipReason",
    "SkippedDependency",
    "extract",
    "extract_package_file",
    "scan",
]
