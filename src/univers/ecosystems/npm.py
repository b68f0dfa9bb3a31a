# This file is dual licensed under the terms of the Apache License, Version
# 2.0, and the BSD License. See the LICENSE file in the root of this repository
# for complete details.
"""
npm versions and node-semver ranges.

Caret, tilde, hyphen and x-ranges are expanded into plain comparators when
the range is parsed::

    >>> str(NpmVersionRange("^0.2.3"))
    '^0.2.3'
    >>> NpmVersionRange("^0.2.3").comparators
    (('>=0.2.3', '<0.3.0-0'),)
"""

from __future__ import annotations

import logging
import operator
import re
from typing import Callable, NamedTuple, Tuple

from ..base import BaseVersionRange, Ecosystem
from ..errors import InvalidRange, InvalidVersion
from ._semver import SemverVersion

__all__ = ["ECOSYSTEM", "NpmVersion", "NpmVersionRange"]

logger = logging.getLogger(__name__)


class NpmVersion(SemverVersion):
    """
    A version published to the npm registry.

    Build metadata is preserved by :func:`str` and ignored for ordering.
    """

    __slots__ = ()

    ecosystem = "npm"


class _Partial(NamedTuple):
    major: int | None
    minor: int | None
    patch: int | None
    prerelease: str | None
    build: str | None


_partial_regex = re.compile(
    r"""
    ^
    v?
    (?P<major>0|[1-9][0-9]*|[xX*])
    (?:
        \.(?P<minor>0|[1-9][0-9]*|[xX*])
        (?:
            \.(?P<patch>0|[1-9][0-9]*|[xX*])
            (?:-(?P<prerelease>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?
            (?:\+(?P<build>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?
        )?
    )?
    $
    """,
    re.VERBOSE,
)

_comparator_regex = re.compile(r"^(?P<operator>\^|~>?|>=|<=|>|<|=)?(?P<version>.*)$")

# Glue an operator to its version so that ">= 1.2.3" reads as one comparator.
_operator_space_regex = re.compile(r"(\^|~>?|>=|<=|>|<|=)\s+")

_hyphen_regex = re.compile(r"^(?P<lower>\S+)\s+-\s+(?P<upper>\S+)$")

_OPERATORS: dict[str, Callable[[int, int], bool]] = {
    "=": operator.eq,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}


def _number(text: str | None) -> int | None:
    if text is None or text in ("x", "X", "*"):
        return None
    return int(text)


def _parse_partial(text: str) -> _Partial:
    match = _partial_regex.search(text)
    if not match:
        raise InvalidVersion(f"Invalid npm version: {text!r}", source=text)
    major = _number(match.group("major"))
    minor = _number(match.group("minor")) if major is not None else None
    patch = _number(match.group("patch")) if minor is not None else None
    return _Partial(
        major,
        minor,
        patch,
        match.group("prerelease") if patch is not None else None,
        match.group("build") if patch is not None else None,
    )


def _version(
    major: int, minor: int, patch: int, prerelease: str | None = None
) -> NpmVersion:
    text = f"{major}.{minor}.{patch}"
    if prerelease:
        text += f"-{prerelease}"
    return NpmVersion(text)


Comparator = Tuple[str, NpmVersion]


class NpmVersionRange(BaseVersionRange[NpmVersion]):
    """
    A node-semver range such as ``^1.2.3 || >=2.5.0 <3``.

    Comparator sets joined by ``||`` are alternatives and the comparators of
    a set must all match. A prerelease version only matches a set that has a
    comparator with a prerelease on the same ``major.minor.patch``.
    """

    version_class = NpmVersion

    def __init__(self, spec: str) -> None:
        super().__init__(spec)

        sets = []
        for alternative in self._spec.split("||"):
            try:
                sets.append(tuple(self._parse_set(alternative.strip())))
            except InvalidVersion as e:
                start = self._spec.find(alternative.strip())
                raise InvalidRange(
                    f"Invalid npm range {alternative.strip()!r}",
                    source=self._spec,
                    span=(start, start + max(len(alternative.strip()) - 1, 0)),
                ) from e
        self._sets = tuple(sets)
        logger.debug("Expanded npm range %r to %s", self._spec, self.comparators)

    @property
    def comparators(self) -> tuple[tuple[str, ...], ...]:
        """The expanded comparator sets, rendered as text."""
        return tuple(
            tuple(f"{op}{version}" for op, version in comparator_set)
            for comparator_set in self._sets
        )

    def _parse_set(self, text: str) -> list[Comparator]:
        if text in ("", "*", "x", "X"):
            return [(">=", _version(0, 0, 0))]

        hyphen = _hyphen_regex.search(text)
        if hyphen:
            return self._expand_hyphen(
                _parse_partial(hyphen.group("lower")),
                _parse_partial(hyphen.group("upper")),
            )

        comparators: list[Comparator] = []
        for item in _operator_space_regex.sub(r"\1", text).split():
            match = _comparator_regex.search(item)
            assert match is not None
            comparators.extend(
                self._expand(match.group("operator") or "", match.group("version"))
            )
        return comparators

    def _expand_hyphen(self, lower: _Partial, upper: _Partial) -> list[Comparator]:
        comparators = []
        if lower.major is not None:
            comparators.append((">=", self._floor(lower)))

        if upper.major is None:
            pass
        elif upper.minor is None:
            comparators.append(("<", _version(upper.major + 1, 0, 0, "0")))
        elif upper.patch is None:
            comparators.append(("<", _version(upper.major, upper.minor + 1, 0, "0")))
        else:
            comparators.append(("<=", self._floor(upper)))

        return comparators or [(">=", _version(0, 0, 0))]

    @staticmethod
    def _floor(partial: _Partial) -> NpmVersion:
        return _version(
            partial.major or 0,
            partial.minor or 0,
            partial.patch or 0,
            partial.prerelease,
        )

    def _expand(self, op: str, text: str) -> list[Comparator]:
        partial = _parse_partial(text)
        if op == "^":
            return self._expand_caret(partial)
        if op in ("~", "~>"):
            return self._expand_tilde(partial)
        return self._expand_primitive(op or "=", partial)

    def _expand_caret(self, p: _Partial) -> list[Comparator]:
        if p.major is None:
            return [(">=", _version(0, 0, 0))]
        lower = (">=", self._floor(p))
        if p.minor is None:
            return [lower, ("<", _version(p.major + 1, 0, 0, "0"))]
        if p.major != 0:
            return [lower, ("<", _version(p.major + 1, 0, 0, "0"))]
        if p.patch is None or p.minor != 0:
            return [lower, ("<", _version(0, p.minor + 1, 0, "0"))]
        return [lower, ("<", _version(0, 0, p.patch + 1, "0"))]

    def _expand_tilde(self, p: _Partial) -> list[Comparator]:
        if p.major is None:
            return [(">=", _version(0, 0, 0))]
        lower = (">=", self._floor(p))
        if p.minor is None:
            return [lower, ("<", _version(p.major + 1, 0, 0, "0"))]
        return [lower, ("<", _version(p.major, p.minor + 1, 0, "0"))]

    def _expand_primitive(self, op: str, p: _Partial) -> list[Comparator]:
        if p.patch is not None:
            return [(op, self._floor(p))]

        if p.major is None:
            # Everything is below or above "*", nothing is strictly so.
            if op in ("<", ">"):
                return [("<", _version(0, 0, 0, "0"))]
            return [(">=", _version(0, 0, 0))]

        if p.minor is None:
            next_floor = _version(p.major + 1, 0, 0, "0")
        else:
            next_floor = _version(p.major, p.minor + 1, 0, "0")

        if op == "=":
            return [(">=", self._floor(p)), ("<", next_floor)]
        if op == ">":
            return [(">=", _version(*next_floor.release))]
        if op == ">=":
            return [(">=", self._floor(p))]
        if op == "<":
            return [("<", _version(*self._floor(p).release, "0"))]
        # "<="
        return [("<", next_floor)]

    def _test_set(
        self, comparator_set: tuple[Comparator, ...], version: NpmVersion
    ) -> bool:
        if not all(
            _OPERATORS[op](version.compare(bound), 0) for op, bound in comparator_set
        ):
            return False

        if not version.is_prerelease:
            return True

        return any(
            bound.is_prerelease and bound.release == version.release
            for _, bound in comparator_set
        )

    def _contains(self, version: NpmVersion) -> bool:
        return any(self._test_set(s, version) for s in self._sets)


ECOSYSTEM = Ecosystem("npm", NpmVersion, NpmVersionRange)
