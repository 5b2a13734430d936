"""Parser for Conan conanfile.txt files (C/C++).

Disabled by default; runs only when the ``conan`` manager is selected
explicitly.
"""

from __future__ import annotations

import re

from depscan.extractor import datasources
from depscan.extractor.models import ExtractionResult, RegistryDependency
from depscan.extractor.registry import register_parser

_NEWLINE_RE = re.compile(r"\r?\n")

# Matches: name/version[@user/channel]
_CONAN_REF_RE = re.compile(
    r"^(?P<name>[A-Za-z0-9_][A-Za-z0-9_.\-+]*)/(?P<version>[^@\s]+)(?:@(?P<channel>\S+))?$"
)

_REQUIRE_SECTIONS = frozenset({"requires", "build_requires", "tool_requires"})


class ConanParser:
    manager = "conan"
    file_patterns = ["**/conanfile.txt"]
    enabled = False

    def extract(self, content: str, file_path: str) -> ExtractionResult | None:
        deps: list[RegistryDependency] = []
        section: str | None = None
        seen_section = False

        for line_number, raw_line in enumerate(_NEWLINE_RE.split(content)):
            line = raw_line.split("#", 1)[0].strip()
            if not line:
                continue

            if line.startswith("[") and line.endswith("]"):
                name = line[1:-1].strip().lower()
                section = name if name in _REQUIRE_SECTIONS else None
                seen_section = seen_section or section is not None
                continue

            if section is None:
                continue

            m = _CONAN_REF_RE.match(line)
            if not m:
                continue

            name = m.group("name")
            channel = m.group("channel")
            deps.append(
                RegistryDependency(
                    package_name=f"{name}@{channel}" if channel else name,
                    group_name=section,
                    datasource=datasources.CONAN,
                    current_value=m.group("version"),
                    line_number=line_number,
                )
            )

        if not seen_section:
            return None
        return ExtractionResult(deps=tuple(deps))


register_parser(ConanParser())
