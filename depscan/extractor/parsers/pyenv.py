"""Parser for pyenv .python-version files."""

from __future__ import annotations

from depscan.extractor import datasources
from depscan.extractor.models import ExtractionResult, RegistryDependency
from depscan.extractor.registry import register_parser


class PyenvParser:
    manager = "pyenv"
    file_patterns = ["**/.python-version"]
    enabled = True

    def extract(self, content: str, file_path: str) -> ExtractionResult | None:
        version = content.strip()
        if not version:
            return None

        # Versions are looked up against the official python image tags.
        dep = RegistryDependency(
            package_name="python",
            commit_message_topic="Python",
            datasource=datasources.DOCKER,
            current_value=version,
        )
        return ExtractionResult(deps=(dep,))


register_parser(PyenvParser())
