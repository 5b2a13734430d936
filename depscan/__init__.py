"""depscan — extract dependency declarations from manifest files."""

from depscan.extractor import ExtractionResult, extract, scan

__all__ = ["ExtractionResult", "extract", "scan"]
