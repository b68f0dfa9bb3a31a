# This file is dual licensed under the terms of the Apache License, Version
# 2.0, and the BSD License. See the LICENSE file in the root of this repository
# for complete details.

from __future__ import annotations

__all__ = [
    "InvalidConstraints",
    "InvalidRange",
    "InvalidVersion",
    "UniversError",
    "UnsupportedEcosystem",
]


class UniversError(ValueError):
    """Base class for every error raised while parsing or evaluating versions.

    ``source`` holds the offending input. When ``span`` is given, it is the
    inclusive ``(start, end)`` index pair of the offending substring within
    ``source`` and the rendered message points at it with a caret marker.
    """

    def __init__(
        self,
        message: str,
        *,
        source: str | None = None,
        span: tuple[int, int] | None = None,
    ) -> None:
        self.message = message
        self.source = source
        self.span = span

        super().__init__(message)

    def __str__(self) -> str:
        if self.source is None or self.span is None:
            return self.message
        marker = " " * self.span[0] + "^" * (self.span[1] - self.span[0] + 1)
        return "\n    ".join([self.message, self.source, marker])


class InvalidVersion(UniversError):
    """
    The version string does not follow the grammar of its ecosystem.

    >>> parse_version("maven", "invalid-version")
    Traceback (most recent call last):
        ...
    univers.errors.InvalidVersion: Invalid maven version: 'invalid-version'
    """


class InvalidRange(UniversError):
    """
    A VERS string or native range could not be parsed.

    >>> contains("vers:maven/~1.0.0", "1.0.0")
    Traceback (most recent call last):
        ...
    univers.errors.InvalidRange: Unknown operator in constraint '~1.0.0'
        vers:maven/~1.0.0
                   ^^^^^^
    """


class UnsupportedEcosystem(UniversError):
    """No comparator is registered for the requested ecosystem."""

    def __init__(self, ecosystem: str, *, source: str | None = None) -> None:
        self.ecosystem = ecosystem
        super().__init__(f"Unsupported ecosystem: {ecosystem!r}", source=source)


class InvalidConstraints(UniversError):
    """
    The constraints parse, but cannot be combined into a range: an empty
    constraint list, or a ``*`` wildcard mixed with other constraints.
    """
