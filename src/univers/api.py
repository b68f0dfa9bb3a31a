# This file is dual licensed under the terms of the Apache License, Version
# 2.0, and the BSD License. See the LICENSE file in the root of this repository
# for complete details.
"""
.. testsetup::

    from univers.api import compare, contains, parse_range, parse_version

The string level entry points. Every operation takes an ecosystem name and
version or range text, and raises a :class:`~univers.errors.UniversError`
subclass for input it cannot make sense of.

.. doctest::

    >>> compare("pypi", "1.0", "1.0.0")
    0
    >>> contains("vers:npm/>=1.0.0|<2.0.0", "1.4.2")
    True
    >>> contains("^1.2.0", "2.0.0", ecosystem="npm")
    False
"""

from __future__ import annotations

import logging
from typing import Any, Union

from .base import BaseVersion, BaseVersionRange
from .ecosystems import get_ecosystem
from .errors import InvalidRange
from .vers import VersRange, parse_vers

__all__ = ["compare", "contains", "parse_range", "parse_version"]

logger = logging.getLogger(__name__)

AnyRange = Union[VersRange, BaseVersionRange[Any]]


def parse_version(ecosystem: str, text: str) -> BaseVersion:
    """
    Parse *text* with the grammar of *ecosystem*.

    >>> parse_version("maven", "1.0-RC1")
    <MavenVersion('1.0-RC1')>
    """
    return get_ecosystem(ecosystem).parse_version(text)


def compare(ecosystem: str, a: str | BaseVersion, b: str | BaseVersion) -> int:
    """Return -1, 0 or 1 as *a* sorts before, equal to or after *b*."""
    routed = get_ecosystem(ecosystem)
    left = a if isinstance(a, BaseVersion) else routed.parse_version(a)
    right = b if isinstance(b, BaseVersion) else routed.parse_version(b)
    return routed.compare(left, right)


def _is_vers(spec: str) -> bool:
    return spec.lstrip().startswith("vers:")


def parse_range(spec: str, ecosystem: str | None = None) -> AnyRange:
    """
    Parse a VERS string, or a native range of *ecosystem*.

    A VERS string names its own ecosystem; when *ecosystem* is given as well
    the two must agree. A native range cannot be parsed without one.
    """
    if not isinstance(spec, str):
        raise InvalidRange(f"Expected a range string, got {type(spec).__name__}")

    if _is_vers(spec):
        vers = parse_vers(spec)
        if ecosystem is not None and vers.ecosystem.name != ecosystem:
            raise InvalidRange(
                f"VERS range is for {vers.ecosystem.name!r}, not {ecosystem!r}",
                source=spec,
            )
        return vers

    if ecosystem is None:
        raise InvalidRange(
            "A native range needs an ecosystem; use a 'vers:' string otherwise",
            source=spec,
        )
    logger.debug("Parsing %r as a native %s range", spec, ecosystem)
    return get_ecosystem(ecosystem).parse_range(spec)


def contains(
    spec: str | AnyRange,
    version: str | BaseVersion,
    ecosystem: str | None = None,
) -> bool:
    """
    Return whether *version* is inside the range *spec*.

    Both sides are parsed first, so malformed input raises instead of
    returning ``False``. A parsed range keeps its own ecosystem, and an
    *ecosystem* naming a different one raises
    :class:`~univers.errors.InvalidRange`.
    """
    if isinstance(spec, (VersRange, BaseVersionRange)):
        if isinstance(spec, VersRange):
            name = spec.ecosystem.name
        else:
            name = spec.version_class.ecosystem
        if ecosystem is not None and name != ecosystem:
            raise InvalidRange(
                f"Range is for {name!r}, not {ecosystem!r}", source=str(spec)
            )
        parsed = spec
    else:
        parsed = parse_range(spec, ecosystem)
    return parsed.contains(version)
