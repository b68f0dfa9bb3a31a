# This file is dual licensed under the terms of the Apache License, Version
# 2.0, and the BSD License. See the LICENSE file in the root of this repository
# for complete details.
"""
Maven versions and version ranges.

Versions are split into numbers and qualifiers and compared position by
position::

    >>> MavenVersion("1.0-alpha1") < MavenVersion("1.0-rc") < MavenVersion("1.0")
    True
    >>> MavenVersion("1.0.0-ga") == MavenVersion("1")
    True
"""

from __future__ import annotations

import dataclasses
import re
from typing import Union

from .._intervals import Interval
from ..base import BaseVersion, BaseVersionRange, Ecosystem
from ..errors import InvalidRange, InvalidVersion

__all__ = ["ECOSYSTEM", "MavenVersion", "MavenVersionRange", "Number", "Qualifier"]


@dataclasses.dataclass(frozen=True)
class Number:
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclasses.dataclass(frozen=True)
class Qualifier:
    value: str

    def __str__(self) -> str:
        return self.value


Token = Union[Number, Qualifier]

_SHORTCUTS = {
    "a": "alpha",
    "b": "beta",
    "m": "milestone",
    "cr": "rc",
    "ga": "",
    "final": "",
    "release": "",
}

# Qualifiers ranked below zero lose to any number, the others beat every number.
_QUALIFIER_ORDER = {
    "alpha": -5,
    "beta": -4,
    "milestone": -3,
    "rc": -2,
    "snapshot": -1,
    "": 1,
    "sp": 2,
}

_KNOWN_QUALIFIERS = (
    "alpha",
    "beta",
    "milestone",
    "rc",
    "snapshot",
    "ga",
    "final",
    "release",
    "sp",
)

_token_regex = re.compile(r"[0-9]+|[^0-9.\-]+")
_split_regex = re.compile(r"[.\-]")

_NULL = Number(0)


def _tokenize(version: str) -> tuple[Token, ...]:
    """
    Takes a string like "1.0alpha1-GA" and turns it into
    (Number(1), Number(0), Qualifier("alpha"), Number(1)).
    """
    tokens: list[Token] = []
    for part in _split_regex.split(version.split("+", 1)[0]):
        for item in _token_regex.findall(part):
            if item.isdigit():
                tokens.append(Number(int(item)))
            else:
                lowered = item.lower()
                tokens.append(Qualifier(_SHORTCUTS.get(lowered, lowered)))

    while tokens and tokens[-1] in (_NULL, Qualifier("")):
        tokens.pop()
    return tuple(tokens)


def _is_valid(version: str) -> bool:
    if any(c.isdigit() for c in version):
        return True
    lowered = version.lower()
    if lowered in ("a", "b", "m"):
        return True
    return any(qualifier in lowered for qualifier in _KNOWN_QUALIFIERS)


def _token_key(token: Token) -> tuple[int, int, str]:
    # Ranks: prerelease qualifiers < numbers < release < sp < unknown qualifiers.
    if isinstance(token, Number):
        return (0, token.value, "")
    order = _QUALIFIER_ORDER.get(token.value)
    if order is None:
        return (3, 0, token.value)
    if order < 0:
        return (-1, order, "")
    return (order, 0, "")


class MavenVersion(BaseVersion):
    """
    A Maven artifact version.

    Build metadata after a ``+`` is kept for display and ignored for ordering.
    """

    __slots__ = ("_tokens",)

    ecosystem = "maven"

    def __init__(self, version: str) -> None:
        super().__init__(version)
        if not _is_valid(self._original):
            raise InvalidVersion(
                f"Invalid maven version: {self._original!r}", source=version
            )
        self._tokens = _tokenize(self._original)
        self._key = self._tokens

    @property
    def tokens(self) -> tuple[Token, ...]:
        """The normalized tokens, with trailing zeros and release markers removed."""
        return self._tokens

    @property
    def is_prerelease(self) -> bool:
        return any(
            isinstance(t, Qualifier) and _QUALIFIER_ORDER.get(t.value, 0) < 0
            for t in self._tokens
        )

    def _cmp(self, other: BaseVersion) -> int:
        assert isinstance(other, MavenVersion)
        length = max(len(self._tokens), len(other._tokens))
        for index in range(length):
            left = self._tokens[index] if index < len(self._tokens) else _NULL
            right = other._tokens[index] if index < len(other._tokens) else _NULL
            left_key, right_key = _token_key(left), _token_key(right)
            if left_key != right_key:
                return -1 if left_key < right_key else 1
        return 0


_bracket_regex = re.compile(
    r"""
    (?P<open>[\[(])
    \s*
    (?P<lower>[^,\[\]()]*?)
    \s*
    (?:(?P<comma>,)\s*(?P<upper>[^,\[\]()]*?)\s*)?
    (?P<close>[\])])
    """,
    re.VERBOSE,
)

_separator_regex = re.compile(r"\s*,\s*")


class MavenVersionRange(BaseVersionRange[MavenVersion]):
    """
    A Maven version range.

    ``[1.0,2.0)`` is a half-open interval, ``[1.0]`` pins a single version
    and an empty end is unbounded. Several bracket groups separated by commas
    form a union, such as ``(,1.0],[1.2,)``. A bare version only matches
    itself.
    """

    version_class = MavenVersion

    def __init__(self, spec: str) -> None:
        super().__init__(spec)
        self._intervals = self._parse(self._spec)

    @property
    def intervals(self) -> tuple[Interval, ...]:
        return self._intervals

    def _parse(self, spec: str) -> tuple[Interval, ...]:
        if not any(c in spec for c in "[]()"):
            return (Interval.exact(self._parse_bound(spec, 0)),)

        intervals = []
        position = 0
        while position < len(spec):
            match = _bracket_regex.match(spec, position)
            if match is None:
                raise InvalidRange(
                    f"Malformed bracket range: {spec!r}",
                    source=spec,
                    span=(position, len(spec) - 1),
                )
            intervals.append(self._build_interval(match))
            position = match.end()
            separator = _separator_regex.match(spec, position)
            if separator is not None and separator.end() < len(spec):
                position = separator.end()
            elif position < len(spec):
                raise InvalidRange(
                    f"Unexpected text after bracket range: {spec[position:]!r}",
                    source=spec,
                    span=(position, len(spec) - 1),
                )
        return tuple(intervals)

    def _parse_bound(self, text: str, offset: int) -> MavenVersion:
        try:
            return MavenVersion(text)
        except InvalidVersion as e:
            raise InvalidRange(
                f"Invalid version {text!r} in range",
                source=self._spec,
                span=(offset, offset + max(len(text) - 1, 0)),
            ) from e

    def _build_interval(self, match: re.Match[str]) -> Interval:
        lower_text = match.group("lower")
        upper_text = match.group("upper") or ""

        if not match.group("comma"):
            if not lower_text:
                raise InvalidRange(
                    "Empty version in exact range",
                    source=self._spec,
                    span=(match.start(), match.end() - 1),
                )
            if match.group("open") != "[" or match.group("close") != "]":
                raise InvalidRange(
                    f"Exact range must use square brackets: {match.group(0)!r}",
                    source=self._spec,
                    span=(match.start(), match.end() - 1),
                )
            return Interval.exact(self._parse_bound(lower_text, match.start("lower")))

        if not lower_text and not upper_text:
            raise InvalidRange(
                "Range has neither a lower nor an upper bound",
                source=self._spec,
                span=(match.start(), match.end() - 1),
            )
        lower = (
            self._parse_bound(lower_text, match.start("lower")) if lower_text else None
        )
        upper = (
            self._parse_bound(upper_text, match.start("upper")) if upper_text else None
        )
        return Interval.bounded(
            lower,
            upper,
            lower_inclusive=match.group("open") == "[",
            upper_inclusive=match.group("close") == "]",
        )

    def _contains(self, version: MavenVersion) -> bool:
        return any(interval.contains(version) for interval in self._intervals)


ECOSYSTEM = Ecosystem("maven", MavenVersion, MavenVersionRange)
