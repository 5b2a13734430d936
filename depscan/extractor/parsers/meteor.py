"""Parser for Meteor package.js files — only the Npm.depends({...}) block."""

from __future__ import annotations

import re

import structlog

from depscan.extractor import datasources
from depscan.extractor.models import ExtractionResult, RegistryDependency
from depscan.extractor.registry import register_parser

log = structlog.get_logger("depscan.extractor")

_NPM_DEPENDS_RE = re.compile(r"\nNpm\.depends\(\{([\s\S]*?)\}\);")

# Whitespace, literal "\n" / "\t" escapes and quotes
_NOISE_RE = re.compile(r"""(\s|\\n|\\t|'|")""")


class MeteorParser:
    manager = "meteor"
    file_patterns = ["**/package.js"]
    enabled = True

    def extract(self, content: str, file_path: str) -> ExtractionResult | None:
        m = _NPM_DEPENDS_RE.search(content)
        if not m:
            return None

        deps: list[RegistryDependency] = []
        body = _NOISE_RE.sub("", m.group(1))
        for entry in body.split(","):
            entry = entry.strip()
            if not entry:
                continue

            name, _, version = entry.partition(":")
            if not (name and version):
                log.warning(
                    "meteor.incomplete_entry", package_file=file_path, entry=entry
                )
                continue

            deps.append(
                RegistryDependency(
                    package_name=name,
                    datasource=datasources.NPM,
                    current_value=version,
                )
            )

        if not deps:
            return None
        return ExtractionResult(deps=tuple(deps))


register_parser(MeteorParser())
