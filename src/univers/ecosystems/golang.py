# This file is dual licensed under the terms of the Apache License, Version
# 2.0, and the BSD License. See the LICENSE file in the root of this repository
# for complete details.
"""
Go module versions.

Module versions are semantic versions with a ``v`` prefix. Pseudo-versions
name an untagged commit and sort as pre-releases of the version after their
base, ordered by commit time::

    >>> GoVersion("v0.0.0-20170915032832-14c0d48ead0c") < GoVersion("v0.0.1")
    True
"""

from __future__ import annotations

import datetime
import re
from typing import Callable

from ..base import BaseVersionRange, Ecosystem
from ..errors import InvalidRange, InvalidVersion
from ._semver import SemverVersion

__all__ = ["ECOSYSTEM", "GoVersion", "GoVersionRange"]

# vX.0.0-yyyymmddhhmmss-abcdefabcdef
# vX.Y.Z-pre.0.yyyymmddhhmmss-abcdefabcdef
# vX.Y.(Z+1)-0.yyyymmddhhmmss-abcdefabcdef
_pseudo_regex = re.compile(
    r"""
    (?:^|[.-])
    (?:0\.)?
    (?P<timestamp>[0-9]{14})
    -
    (?P<revision>[0-9a-f]{12})
    $
    """,
    re.VERBOSE,
)


class GoVersion(SemverVersion):
    """A Go module version; the leading ``v`` may be omitted."""

    __slots__ = ()

    ecosystem = "golang"

    @property
    def is_pseudo(self) -> bool:
        """Whether this is a pseudo-version naming an untagged commit."""
        return self._pseudo_match() is not None

    @property
    def timestamp(self) -> datetime.datetime | None:
        """The UTC commit time encoded in a pseudo-version."""
        match = self._pseudo_match()
        if match is None:
            return None
        return datetime.datetime.strptime(
            match.group("timestamp"), "%Y%m%d%H%M%S"
        ).replace(tzinfo=datetime.timezone.utc)

    @property
    def revision(self) -> str | None:
        """The abbreviated commit hash encoded in a pseudo-version."""
        match = self._pseudo_match()
        return match.group("revision") if match else None

    def _pseudo_match(self) -> re.Match[str] | None:
        if self.prerelease is None:
            return None
        return _pseudo_regex.search(self.prerelease)

    def __str__(self) -> str:
        if self._original.startswith("v"):
            return self._original
        return f"v{self._original}"


_constraint_regex = re.compile(r"^(?P<operator>>=|<=|!=|>|<|=)?\s*(?P<version>\S+)$")

# Glue an operator to its version so that ">= v1.2.0" reads as one comparator.
_operator_space_regex = re.compile(r"(>=|<=|!=|>|<|=)\s+")

_separator_regex = re.compile(r"[\s,]+")

_OPERATORS = {
    "=": "equal",
    "!=": "not_equal",
    "<": "less_than",
    "<=": "less_than_equal",
    ">": "greater_than",
    ">=": "greater_than_equal",
}


class GoVersionRange(BaseVersionRange[GoVersion]):
    """
    Comparators separated by commas or whitespace, all of which must match,
    such as ``>=v1.2.0, <v2.0.0``. A bare version matches only itself.
    """

    version_class = GoVersion

    def __init__(self, spec: str) -> None:
        super().__init__(spec)

        constraints = []
        text = _operator_space_regex.sub(r"\1", self._spec)
        for item in _separator_regex.split(text):
            match = _constraint_regex.search(item)
            if not match:
                raise InvalidRange(
                    f"Invalid Go version constraint: {item!r}", source=self._spec
                )
            try:
                version = GoVersion(match.group("version"))
            except InvalidVersion as e:
                raise InvalidRange(
                    f"Invalid version {match.group('version')!r} in Go range",
                    source=self._spec,
                ) from e
            constraints.append((match.group("operator") or "=", version))
        self._constraints = tuple(constraints)

    def _get_operator(self, op: str) -> Callable[[GoVersion, GoVersion], bool]:
        return getattr(self, f"_compare_{_OPERATORS[op]}")

    def _compare_equal(self, prospective: GoVersion, spec: GoVersion) -> bool:
        return prospective == spec

    def _compare_not_equal(self, prospective: GoVersion, spec: GoVersion) -> bool:
        return prospective != spec

    def _compare_less_than(self, prospective: GoVersion, spec: GoVersion) -> bool:
        return prospective < spec

    def _compare_less_than_equal(
        self, prospective: GoVersion, spec: GoVersion
    ) -> bool:
        return prospective <= spec

    def _compare_greater_than(self, prospective: GoVersion, spec: GoVersion) -> bool:
        return prospective > spec

    def _compare_greater_than_equal(
        self, prospective: GoVersion, spec: GoVersion
    ) -> bool:
        return prospective >= spec

    def _contains(self, version: GoVersion) -> bool:
        return all(
            self._get_operator(op)(version, spec) for op, spec in self._constraints
        )


ECOSYSTEM = Ecosystem("golang", GoVersion, GoVersionRange)
