"""Custom exceptions for depscan."""


class DepscanError(Exception):
    """Base exception for all depscan errors."""


class UnknownManagerError(DepscanError):
    """Raised when a manager name does not match any registered parser."""

    def __init__(self, name: str, known: list[str]):
        self.name = name
        self.known = known
        super().__init__(f"Unknown manager '{name}'. Known managers: {', '.join(known)}")
