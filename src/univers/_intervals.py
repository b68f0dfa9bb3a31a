# This file is dual licensed under the terms of the Apache License, Version
# 2.0, and the BSD License. See the LICENSE file in the root of this repository
# for complete details.

from __future__ import annotations

import dataclasses
import enum
import functools
import itertools
import logging
from typing import TYPE_CHECKING, Iterable, Sequence

from .errors import InvalidConstraints

if TYPE_CHECKING:
    from .base import BaseVersion
    from .vers import Constraint

logger = logging.getLogger(__name__)


class IntervalKind(str, enum.Enum):
    EXACT = "exact"
    BOUNDED = "bounded"
    EXCLUDE = "exclude"


@dataclasses.dataclass(frozen=True)
class Interval:
    """
    A contiguous set of versions.

    An absent ``lower`` or ``upper`` end is unbounded. Exact and exclude
    intervals hold the same version at both ends, inclusively.
    """

    kind: IntervalKind
    lower: BaseVersion | None = None
    upper: BaseVersion | None = None
    lower_inclusive: bool = False
    upper_inclusive: bool = False

    @classmethod
    def exact(cls, version: BaseVersion) -> Interval:
        return cls(IntervalKind.EXACT, version, version, True, True)

    @classmethod
    def exclude(cls, version: BaseVersion) -> Interval:
        return cls(IntervalKind.EXCLUDE, version, version, True, True)

    @classmethod
    def bounded(
        cls,
        lower: BaseVersion | None = None,
        upper: BaseVersion | None = None,
        *,
        lower_inclusive: bool = False,
        upper_inclusive: bool = False,
    ) -> Interval:
        return cls(
            IntervalKind.BOUNDED,
            lower,
            upper,
            lower_inclusive and lower is not None,
            upper_inclusive and upper is not None,
        )

    def __str__(self) -> str:
        if self.kind is IntervalKind.EXACT:
            return f"={self.lower}"
        if self.kind is IntervalKind.EXCLUDE:
            return f"!={self.lower}"
        left = "[" if self.lower_inclusive else "("
        right = "]" if self.upper_inclusive else ")"
        lower = "" if self.lower is None else str(self.lower)
        upper = "" if self.upper is None else str(self.upper)
        return f"{left}{lower},{upper}{right}"

    def contains(self, version: BaseVersion) -> bool:
        if self.lower is not None:
            cmp = version.compare(self.lower)
            if cmp < 0 or (cmp == 0 and not self.lower_inclusive):
                return False
        if self.upper is not None:
            cmp = version.compare(self.upper)
            if cmp > 0 or (cmp == 0 and not self.upper_inclusive):
                return False
        return True


@dataclasses.dataclass(frozen=True)
class _Bound:
    version: BaseVersion
    is_lower: bool
    inclusive: bool

    @classmethod
    def from_constraint(cls, constraint: Constraint) -> _Bound:
        return cls(
            constraint.version,  # type: ignore[arg-type]
            is_lower=constraint.operator in (">", ">="),
            inclusive=constraint.operator in (">=", "<="),
        )


def _sort_bounds(bounds: Iterable[_Bound]) -> list[_Bound]:
    # sorted() is stable, so bounds at equal versions keep their input order.
    return sorted(
        bounds,
        key=functools.cmp_to_key(lambda a, b: a.version.compare(b.version)),
    )


def _drop_redundant(bounds: Sequence[_Bound]) -> list[_Bound]:
    """
    Remove the bounds that cannot change the result.

    At a single version, an exclusive bound replaces an inclusive bound of the
    same direction and duplicates are dropped. Afterwards every run of
    consecutive same-direction bounds shrinks to its most restrictive member:
    the highest lower bound or the lowest upper bound.
    """
    deduplicated: list[_Bound] = []
    for _, group in itertools.groupby(
        bounds, key=functools.cmp_to_key(lambda a, b: a.version.compare(b.version))
    ):
        positions: dict[bool, int] = {}
        for bound in group:
            position = positions.get(bound.is_lower)
            if position is None:
                positions[bound.is_lower] = len(deduplicated)
                deduplicated.append(bound)
            elif deduplicated[position].inclusive and not bound.inclusive:
                deduplicated[position] = bound

    collapsed: list[_Bound] = []
    for is_lower, run in itertools.groupby(deduplicated, key=lambda b: b.is_lower):
        members = list(run)
        collapsed.append(members[-1] if is_lower else members[0])
    return collapsed


def _pair(bounds: Sequence[_Bound]) -> list[Interval]:
    """
    Fuse alternating bounds two at a time.

    A pair may come in either order. When the upper bound sorts first the
    fused interval is empty, and a trailing bound stays one-sided.
    """
    intervals = []
    for index in range(0, len(bounds), 2):
        pair = bounds[index : index + 2]
        lower = next((b for b in pair if b.is_lower), None)
        upper = next((b for b in pair if not b.is_lower), None)
        intervals.append(_interval_from(lower, upper))
    return intervals


def _interval_from(lower: _Bound | None, upper: _Bound | None) -> Interval:
    return Interval.bounded(
        lower.version if lower else None,
        upper.version if upper else None,
        lower_inclusive=lower.inclusive if lower else False,
        upper_inclusive=upper.inclusive if upper else False,
    )


def normalize(constraints: Iterable[Constraint]) -> tuple[Interval, ...]:
    """
    Turn an unordered list of constraints into the intervals they describe.

    Equality constraints become exact intervals and inequality constraints
    become exclude intervals. The remaining bounds are sorted by version,
    stripped of redundant members and fused two at a time into bounded
    intervals. The described set is the union of the exact and bounded
    intervals minus every exclude interval.
    """
    intervals: list[Interval] = []
    bounds: list[_Bound] = []
    for constraint in constraints:
        if constraint.operator == "=":
            intervals.append(Interval.exact(constraint.version))  # type: ignore[arg-type]
        elif constraint.operator == "!=":
            intervals.append(Interval.exclude(constraint.version))  # type: ignore[arg-type]
        elif constraint.operator == "*":
            raise InvalidConstraints("The '*' wildcard has no interval form")
        else:
            bounds.append(_Bound.from_constraint(constraint))

    effective = _drop_redundant(_sort_bounds(bounds))
    if len(effective) != len(bounds):
        logger.debug(
            "Dropped %d redundant bound(s) of %d",
            len(bounds) - len(effective),
            len(bounds),
        )
    intervals.extend(_pair(effective))

    logger.debug("Normalized constraints to %s", ", ".join(map(str, intervals)))
    return tuple(intervals)


def contains(intervals: Sequence[Interval], version: BaseVersion) -> bool:
    """Return whether *version* is inside the set described by *intervals*."""
    included = []
    for interval in intervals:
        if interval.kind is IntervalKind.EXCLUDE:
            if interval.contains(version):
                return False
        else:
            included.append(interval)

    if not included:
        return True
    return any(interval.contains(version) for interval in included)
