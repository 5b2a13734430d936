"""Parser for .ruby-version files."""

from __future__ import annotations

import structlog

from depscan.extractor import datasources
from depscan.extractor.models import ExtractionResult, RegistryDependency
from depscan.extractor.registry import register_parser

log = structlog.get_logger("depscan.extractor")


class RubyVersionParser:
    manager = "ruby-version"
    file_patterns = ["**/.ruby-version"]
    enabled = True

    def extract(self, content: str, file_path: str) -> ExtractionResult | None:
        log.debug("ruby_version.extract", package_file=file_path)
        version = content.strip()
        if not version:
            return None

        dep = RegistryDependency(
            package_name="ruby",
            datasource=datasources.RUBY_VERSION,
            current_value=version,
        )
        return ExtractionResult(deps=(dep,))


register_parser(RubyVersionParser())
