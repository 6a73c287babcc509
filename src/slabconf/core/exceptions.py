"""slabconf exception hierarchy."""

from __future__ import annotations


class SlabConfigError(Exception):
    """Base exception for all slabconf errors."""


class ConfigSourceError(SlabConfigError):
    """The dispatch table could not be read from (or written to) its source."""


class ConfigParseError(SlabConfigError):
    """The dispatch table is not valid TOML."""

    def __init__(self, message: str, line: int | None = None, col: int | None = None) -> None:
        self.line = line
        self.col = col
        super().__init__(message)


class ConfigValidationError(SlabConfigError):
    """The dispatch table violates the profile/command schema."""

    def __init__(self, issues: list[str]) -> None:
        self.issues = list(issues)
        summary = "; ".join(self.issues)
        super().__init__(f"{len(self.issues)} validation issue(s): {summary}")


class UnknownCommandError(SlabConfigError, KeyError):
    """No command with this name is declared."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown command: {name!r}")

    def __str__(self) -> str:
        return self.args[0]


class UnknownProfileError(SlabConfigError, KeyError):
    """No profile with this name is declared."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown profile: {name!r}")

    def __str__(self) -> str:
        return self.args[0]


class AwsVerificationError(SlabConfigError):
    """EC2 lookup failed for a reason other than a missing resource."""
