# This file is dual licensed under the terms of the Apache License, Version
# 2.0, and the BSD License. See the LICENSE file in the root of this repository
# for complete details.
"""
.. testsetup::

    from univers.vers import parse_vers

Ecosystem independent version ranges written as
``vers:<ecosystem>/<constraint>|<constraint>|...``.

.. doctest::

    >>> vers = parse_vers("vers:maven/>=1.0.0|<=3.0.0|!=2.0.0")
    >>> vers.contains("1.9.0"), vers.contains("2.0.0")
    (True, False)
    >>> [str(i) for i in vers.intervals]
    ['!=2.0.0', '[1.0.0,3.0.0]']
"""

from __future__ import annotations

import dataclasses
import logging
import re

from . import _intervals
from ._intervals import Interval
from .base import BaseVersion, Ecosystem
from .ecosystems import get_ecosystem
from .errors import (
    InvalidConstraints,
    InvalidRange,
    InvalidVersion,
    UnsupportedEcosystem,
)

__all__ = ["Constraint", "VersRange", "parse_vers"]

logger = logging.getLogger(__name__)

WILDCARD = "*"

_scheme_regex = re.compile(
    r"^vers:(?P<ecosystem>[^/]*)/(?P<constraints>.*)$", re.DOTALL
)

_control_regex = re.compile(r"[\x00-\x1f\x7f]")

# Two character operators come first so that ">=" is never read as ">".
_constraint_regex = re.compile(
    r"""
    ^
    (?P<operator>>=|<=|!=|<|>|=)
    \s*
    (?P<version>.*)
    $
    """,
    re.VERBOSE | re.DOTALL,
)


@dataclasses.dataclass(frozen=True)
class Constraint:
    """
    One ``|`` separated member of a VERS range.

    ``version`` is the literal parsed with the range's ecosystem, or ``None``
    for the ``*`` wildcard.
    """

    operator: str
    literal: str
    version: BaseVersion | None = None

    def __str__(self) -> str:
        if self.operator == WILDCARD:
            return WILDCARD
        return f"{self.operator}{self.literal}"


class VersRange:
    """
    A parsed VERS range, bound to the ecosystem that orders its versions.

    The constraints are normalized into :attr:`intervals` once, so a single
    instance can answer any number of :meth:`contains` calls.
    """

    def __init__(
        self, ecosystem: Ecosystem, constraints: tuple[Constraint, ...]
    ) -> None:
        self._ecosystem = ecosystem
        self._constraints = constraints
        self._is_wildcard = any(c.operator == WILDCARD for c in constraints)

        if self._is_wildcard:
            if len(constraints) != 1:
                raise InvalidConstraints(
                    "The '*' wildcard cannot be combined with other constraints",
                    source=str(self),
                )
            self._intervals: tuple[Interval, ...] = ()
        else:
            if not constraints:
                raise InvalidConstraints("A VERS range needs at least one constraint")
            self._intervals = _intervals.normalize(constraints)

    def __repr__(self) -> str:
        return f"<VersRange({str(self)!r})>"

    def __str__(self) -> str:
        constraints = "|".join(str(c) for c in self._constraints)
        return f"vers:{self._ecosystem.name}/{constraints}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VersRange):
            return NotImplemented
        return str(self) == str(other)

    def __hash__(self) -> int:
        return hash(str(self))

    def __contains__(self, item: str | BaseVersion) -> bool:
        return self.contains(item)

    @property
    def ecosystem(self) -> Ecosystem:
        return self._ecosystem

    @property
    def constraints(self) -> tuple[Constraint, ...]:
        return self._constraints

    @property
    def intervals(self) -> tuple[Interval, ...]:
        """The normalized intervals; empty for the ``*`` wildcard."""
        return self._intervals

    @property
    def is_wildcard(self) -> bool:
        return self._is_wildcard

    @property
    def includes_prereleases(self) -> bool:
        """Whether any constraint names a prerelease version."""
        return any(
            c.version is not None and self._ecosystem.is_prerelease(c.version)
            for c in self._constraints
        )

    def contains(self, item: str | BaseVersion) -> bool:
        """
        Return whether *item* is inside this range.

        A version string is parsed with the range's ecosystem first, and a
        version that cannot be parsed raises :class:`InvalidVersion`.
        """
        if self._is_wildcard:
            return True

        if isinstance(item, BaseVersion):
            if not isinstance(item, self._ecosystem.version_class):
                raise TypeError(
                    f"Cannot test {item!r} against a {self._ecosystem.name} range"
                )
            version = item
        else:
            version = self._ecosystem.parse_version(item)

        if (
            self._ecosystem.implicit_prerelease_exclusion
            and self._ecosystem.is_prerelease(version)
            and not self.includes_prereleases
        ):
            logger.debug(
                "%s is a prerelease and %s names none, excluding it", version, self
            )
            return False

        return _intervals.contains(self._intervals, version)


def _span(start: int, text: str) -> tuple[int, int]:
    return (start, start + max(len(text) - 1, 0))


def _parse_constraint(
    ecosystem: Ecosystem, segment: str, start: int, source: str
) -> Constraint:
    if segment == WILDCARD:
        return Constraint(WILDCARD, WILDCARD)

    match = _constraint_regex.search(segment)
    if not match:
        raise InvalidRange(
            f"Unknown operator in constraint {segment!r}",
            source=source,
            span=_span(start, segment),
        )

    operator, literal = match.group("operator"), match.group("version")
    if not literal:
        raise InvalidRange(
            f"Missing version after {operator!r}",
            source=source,
            span=_span(start, segment),
        )
    if literal[0] in "<>=!" or any(c.isspace() for c in literal):
        raise InvalidRange(
            f"Malformed version {literal!r} in constraint",
            source=source,
            span=_span(start + match.start("version"), literal),
        )

    try:
        version = ecosystem.parse_version(literal)
    except InvalidVersion as e:
        raise InvalidRange(
            f"Invalid {ecosystem.name} version {literal!r} in constraint",
            source=source,
            span=_span(start + match.start("version"), literal),
        ) from e

    return Constraint(operator, literal, version)


def parse_vers(text: str) -> VersRange:
    """
    Parse a ``vers:`` string into a :class:`VersRange`.

    Malformed text raises :class:`~univers.errors.InvalidRange`, an unknown
    ecosystem raises :class:`~univers.errors.UnsupportedEcosystem` and a
    constraint list that is empty or mixes ``*`` with other constraints raises
    :class:`~univers.errors.InvalidConstraints`.
    """
    if not isinstance(text, str):
        raise InvalidRange(f"Expected a VERS string, got {type(text).__name__}")

    control = _control_regex.search(text)
    if control:
        raise InvalidRange(
            "Control character in VERS string",
            source=text.encode("unicode_escape").decode(),
        )

    source = text.strip()
    match = _scheme_regex.search(source)
    if not match:
        if not source.startswith("vers:"):
            raise InvalidRange(
                "VERS string must start with 'vers:'", source=source, span=(0, 0)
            )
        raise InvalidRange(
            "VERS string must have the form vers:<ecosystem>/<constraints>",
            source=source,
            span=_span(5, source[5:]),
        )

    name = match.group("ecosystem")
    if not name:
        raise InvalidRange("Missing ecosystem name", source=source, span=(5, 5))
    try:
        ecosystem = get_ecosystem(name)
    except UnsupportedEcosystem:
        raise UnsupportedEcosystem(name, source=source) from None

    constraints = []
    offset = match.start("constraints")
    for segment in match.group("constraints").split("|"):
        stripped = segment.strip()
        if stripped:
            start = offset + (len(segment) - len(segment.lstrip()))
            constraints.append(_parse_constraint(ecosystem, stripped, start, source))
        offset += len(segment) + 1

    vers = VersRange(ecosystem, tuple(constraints))
    logger.debug("Parsed %r into %d constraint(s)", source, len(constraints))
    return vers
