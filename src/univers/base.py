# This file is dual licensed under the terms of the Apache License, Version
# 2.0, and the BSD License. See the LICENSE file in the root of this repository
# for complete details.
"""
.. testsetup::

    from univers.ecosystems import get_ecosystem

The capability classes shared by every ecosystem.

A :class:`BaseVersion` is an immutable, totally ordered value produced by a
successful parse. A :class:`BaseVersionRange` answers membership questions
for versions of its own ecosystem. An :class:`Ecosystem` ties both together
under a routing name:

.. doctest::

    >>> maven = get_ecosystem("maven")
    >>> maven.compare(maven.parse_version("1.0"), maven.parse_version("1.0.0-ga"))
    0
"""

from __future__ import annotations

import abc
import dataclasses
from typing import Any, Callable, ClassVar, Generic, TypeVar

from .errors import InvalidRange, InvalidVersion, UniversError

__all__ = ["BaseVersion", "BaseVersionRange", "Ecosystem"]

VersionT = TypeVar("VersionT", bound="BaseVersion")


def _clean_input(text: object, kind: str, error: type[UniversError]) -> str:
    """Reject non-strings and blank text, and trim surrounding whitespace."""
    if not isinstance(text, str):
        raise error(f"Expected a {kind} string, got {type(text).__name__}")
    stripped = text.strip()
    if not stripped:
        raise error(f"Empty {kind} string", source=text)
    return stripped


class BaseVersion(abc.ABC):
    """
    A parsed version of one ecosystem.

    Subclasses set :attr:`ecosystem` and populate ``_key`` so that two
    versions are equal exactly when their keys are equal. Ordering is taken
    from ``_key`` as well unless the subclass overrides :meth:`_cmp`.
    """

    __slots__ = ("_key", "_original")

    ecosystem: ClassVar[str]

    _key: Any
    _original: str

    def __init__(self, version: str) -> None:
        self._original = _clean_input(version, "version", InvalidVersion)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}({str(self)!r})>"

    def __str__(self) -> str:
        return self._original

    @property
    def original(self) -> str:
        """The trimmed text this version was parsed from."""
        return self._original

    @property
    @abc.abstractmethod
    def is_prerelease(self) -> bool:
        """Whether this version carries a prerelease or development marker."""

    def _cmp(self, other: BaseVersion) -> int:
        return (self._key > other._key) - (self._key < other._key)

    def compare(self, other: BaseVersion) -> int:
        """Return -1, 0 or 1 as this version is lower than, equal to or higher than *other*."""
        if not isinstance(other, self.__class__):
            raise TypeError(
                f"Cannot compare {self.ecosystem} version with {other!r}"
            )
        return self._cmp(other)

    def __hash__(self) -> int:
        return hash(self._key)

    def __lt__(self, other: object) -> bool:
        return self._compare(other, lambda c: c < 0)

    def __le__(self, other: object) -> bool:
        return self._compare(other, lambda c: c <= 0)

    def __eq__(self, other: object) -> bool:
        return self._compare(other, lambda c: c == 0)

    def __ge__(self, other: object) -> bool:
        return self._compare(other, lambda c: c >= 0)

    def __gt__(self, other: object) -> bool:
        return self._compare(other, lambda c: c > 0)

    def __ne__(self, other: object) -> bool:
        return self._compare(other, lambda c: c != 0)

    def _compare(self, other: object, method: Callable[[int], bool]) -> Any:
        if not isinstance(other, self.__class__):
            return NotImplemented

        return method(self._cmp(other))


class BaseVersionRange(abc.ABC, Generic[VersionT]):
    """
    A native range expression of one ecosystem.

    Membership can be tested with either a parsed version or a version
    string, which is parsed with :attr:`version_class` first::

        "1.5" in MavenVersionRange("[1.0,2.0)")
    """

    version_class: ClassVar[type[BaseVersion]]

    def __init__(self, spec: str) -> None:
        self._spec = _clean_input(spec, "range", InvalidRange)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}({str(self)!r})>"

    def __str__(self) -> str:
        return self._spec

    def __hash__(self) -> int:
        return hash(str(self))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, str):
            try:
                other = self.__class__(other)
            except UniversError:
                return NotImplemented
        elif not isinstance(other, self.__class__):
            return NotImplemented

        return str(self) == str(other)

    def __contains__(self, item: str | BaseVersion) -> bool:
        return self.contains(item)

    def _coerce_version(self, item: str | BaseVersion) -> VersionT:
        if isinstance(item, self.version_class):
            return item  # type: ignore[return-value]
        if isinstance(item, BaseVersion):
            raise TypeError(
                f"Cannot test {item!r} against a {self.version_class.ecosystem} range"
            )
        return self.version_class(item)  # type: ignore[return-value]

    def contains(self, item: str | BaseVersion) -> bool:
        """Return whether *item* satisfies this range."""
        return self._contains(self._coerce_version(item))

    @abc.abstractmethod
    def _contains(self, version: VersionT) -> bool:
        """Membership test for an already parsed version."""


@dataclasses.dataclass(frozen=True)
class Ecosystem:
    """
    A routed packaging ecosystem.

    ``implicit_prerelease_exclusion`` marks ecosystems whose ranges leave out
    prerelease versions unless the range itself names a prerelease.
    """

    name: str
    version_class: type[BaseVersion]
    range_class: type[BaseVersionRange[Any]]
    implicit_prerelease_exclusion: bool = False

    def parse_version(self, text: str) -> BaseVersion:
        return self.version_class(text)

    def parse_range(self, text: str) -> BaseVersionRange[Any]:
        return self.range_class(text)

    def compare(self, a: BaseVersion, b: BaseVersion) -> int:
        return a.compare(b)

    def render(self, version: BaseVersion) -> str:
        return str(version)

    def is_prerelease(self, version: BaseVersion) -> bool:
        return version.is_prerelease
