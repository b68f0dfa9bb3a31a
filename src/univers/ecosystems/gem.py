# This file is dual licensed under the terms of the Apache License, Version
# 2.0, and the BSD License. See the LICENSE file in the root of this repository
# for complete details.
"""
RubyGems versions and requirements.

A version is a series of numeric and alphabetic segments; any alphabetic
segment makes it a prerelease. The pessimistic operator ``~>`` allows the
last given segment to grow::

    >>> "2.9.1" in GemRequirement("~> 2.2")
    True
    >>> "3.0" in GemRequirement("~> 2.2")
    False
"""

from __future__ import annotations

import itertools
import re
from typing import Callable, List, Tuple, Union

from ..base import BaseVersion, BaseVersionRange, Ecosystem
from ..errors import InvalidRange, InvalidVersion

__all__ = ["ECOSYSTEM", "GemRequirement", "GemVersion"]

Segment = Union[int, str]

VERSION_PATTERN = r"[0-9]+(?:\.[0-9a-zA-Z]+)*(?:-[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?"

_segment_regex = re.compile(r"[0-9]+|[a-z]+", re.IGNORECASE)


def _parse_segments(version: str) -> tuple[Segment, ...]:
    """
    Takes a string like "1.0.b1" and turns it into (1, 0, "b", 1). A dash
    starts a pre-release, so "1.0-b1" is (1, 0, "pre", "b", 1).
    """
    return tuple(
        int(part) if part.isdigit() else part
        for part in _segment_regex.findall(version.replace("-", ".pre."))
    )


def _canonical(segments: tuple[Segment, ...]) -> tuple[Segment, ...]:
    # Trailing zeros are dropped from the release part and from the
    # pre-release part separately, so "1.0.a.0" is (1, "a").
    split = next(
        (i for i, s in enumerate(segments) if isinstance(s, str)), len(segments)
    )
    release, prerelease = list(segments[:split]), list(segments[split:])

    def _strip(parts: List[Segment]) -> List[Segment]:
        return list(
            reversed(list(itertools.dropwhile(lambda s: s == 0, reversed(parts))))
        )

    return tuple(_strip(release) + _strip(prerelease))


def _compare_segments(left: Segment, right: Segment) -> int:
    if isinstance(left, int) and isinstance(right, int):
        return (left > right) - (left < right)
    # A string segment is a pre-release marker and sorts before any number.
    if isinstance(left, str) and isinstance(right, int):
        return -1
    if isinstance(left, int) and isinstance(right, str):
        return 1
    return (left > right) - (left < right)  # type: ignore[operator]


class GemVersion(BaseVersion):
    """A RubyGems version such as ``1.2.3``, ``2.0.0.rc1`` or ``1.0-beta``."""

    __slots__ = ("_segments",)

    ecosystem = "gem"

    _regex = re.compile(rf"^\s*(?:{VERSION_PATTERN})\s*$")

    def __init__(self, version: str) -> None:
        super().__init__(version)

        if not self._regex.search(self._original):
            raise InvalidVersion(
                f"Invalid gem version: {self._original!r}", source=version
            )

        self._segments = _parse_segments(self._original)
        self._key = _canonical(self._segments)

    @property
    def segments(self) -> tuple[Segment, ...]:
        return self._segments

    @property
    def canonical_segments(self) -> tuple[Segment, ...]:
        return self._key  # type: ignore[no-any-return]

    @property
    def is_prerelease(self) -> bool:
        return any(isinstance(s, str) for s in self._segments)

    def release(self) -> GemVersion:
        """
        The release for this version, made of its leading numeric segments
        (e.g. 1.2.0.a -> 1.2.0). A release is its own release.
        """
        if not self.is_prerelease:
            return self
        return GemVersion(".".join(map(str, self._numeric_prefix())) or "0")

    def bump(self) -> GemVersion:
        """
        The version whose next to last numeric segment is one greater
        (e.g. 5.3.1 -> 5.4). Used as the ceiling of ``~>``.
        """
        numeric = self._numeric_prefix()
        if len(numeric) > 1:
            numeric.pop()
        numeric[-1] += 1
        return GemVersion(".".join(map(str, numeric)))

    def _numeric_prefix(self) -> list[int]:
        return [
            s
            for s in itertools.takewhile(lambda s: isinstance(s, int), self._segments)
            if isinstance(s, int)
        ]

    def _cmp(self, other: BaseVersion) -> int:
        assert isinstance(other, GemVersion)
        left: Tuple[Segment, ...] = self._key
        right: Tuple[Segment, ...] = other._key
        if left == right:
            return 0
        for index in range(max(len(left), len(right))):
            result = _compare_segments(
                left[index] if index < len(left) else 0,
                right[index] if index < len(right) else 0,
            )
            if result:
                return result
        return 0


_requirement_regex = re.compile(
    rf"""
    ^
    \s*
    (?P<operator>~>|>=|<=|!=|=|>|<)?
    \s*
    (?P<version>{VERSION_PATTERN})
    \s*
    $
    """,
    re.VERBOSE,
)

_OPERATORS = {
    "=": "equal",
    "!=": "not_equal",
    ">": "greater_than",
    "<": "less_than",
    ">=": "greater_than_equal",
    "<=": "less_than_equal",
    "~>": "pessimistic",
}


class GemRequirement(BaseVersionRange[GemVersion]):
    """
    A comma separated list of RubyGems requirements, all of which must match,
    such as ``~> 1.2, >= 1.2.3``. A requirement without an operator is an
    exact match.
    """

    version_class = GemVersion

    def __init__(self, spec: str) -> None:
        super().__init__(spec)

        requirements = []
        for item in self._spec.split(","):
            match = _requirement_regex.search(item)
            if not match:
                raise InvalidRange(
                    f"Invalid gem requirement: {item.strip()!r}", source=self._spec
                )
            requirements.append(
                (match.group("operator") or "=", GemVersion(match.group("version")))
            )
        self._requirements = tuple(requirements)

    def _get_operator(self, op: str) -> Callable[[GemVersion, GemVersion], bool]:
        return getattr(self, f"_compare_{_OPERATORS[op]}")  # type: ignore[no-any-return]

    def _compare_equal(self, prospective: GemVersion, spec: GemVersion) -> bool:
        return prospective == spec

    def _compare_not_equal(self, prospective: GemVersion, spec: GemVersion) -> bool:
        return prospective != spec

    def _compare_greater_than(self, prospective: GemVersion, spec: GemVersion) -> bool:
        return prospective > spec

    def _compare_less_than(self, prospective: GemVersion, spec: GemVersion) -> bool:
        return prospective < spec

    def _compare_greater_than_equal(
        self, prospective: GemVersion, spec: GemVersion
    ) -> bool:
        return prospective >= spec

    def _compare_less_than_equal(
        self, prospective: GemVersion, spec: GemVersion
    ) -> bool:
        return prospective <= spec

    def _compare_pessimistic(self, prospective: GemVersion, spec: GemVersion) -> bool:
        return prospective >= spec and prospective.release() < spec.bump()

    def _contains(self, version: GemVersion) -> bool:
        return all(
            self._get_operator(op)(version, spec) for op, spec in self._requirements
        )


ECOSYSTEM = Ecosystem("gem", GemVersion, GemRequirement)
