"""Manifest parsers — auto-registered on import."""

from depscan.extractor.parsers import (
    bazel,  # noqa: F401
    cocoapods,  # noqa: F401
    conan,  # noqa: F401
    meteor,  # noqa: F401
    pyenv,  # noqa: F401
    ruby_version,  # noqa: F401
)
