# This file is dual licensed under the terms of the Apache License, Version
# 2.0, and the BSD License. See the LICENSE file in the root of this repository
# for complete details.

from __future__ import annotations

import re
from typing import ClassVar, NamedTuple, Tuple, Union

from .._structures import Infinity, InfinityType
from ..base import BaseVersion
from ..errors import InvalidVersion

PrereleaseKey = Union[InfinityType, Tuple[Tuple[int, int, str], ...]]

SEMVER_PATTERN = r"""
    v?
    (?P<major>0|[1-9][0-9]*)
    \.
    (?P<minor>0|[1-9][0-9]*)
    \.
    (?P<patch>0|[1-9][0-9]*)
    (?:-(?P<prerelease>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?   # pre-release
    (?:\+(?P<build>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?       # build metadata
"""


class _Semver(NamedTuple):
    major: int
    minor: int
    patch: int
    prerelease: tuple[str, ...]
    build: tuple[str, ...]


def _prerelease_key(prerelease: tuple[str, ...]) -> PrereleaseKey:
    # A version without a pre-release sorts after all of its pre-releases.
    if not prerelease:
        return Infinity
    # Numeric identifiers sort numerically and before alphanumeric ones, and a
    # shorter identifier list sorts first when it is a prefix of the other.
    return tuple(
        (0, int(part), "") if part.isdigit() else (1, 0, part) for part in prerelease
    )


class SemverVersion(BaseVersion):
    """A Semantic Versioning 2.0.0 version, with an optional leading ``v``."""

    __slots__ = ("_version",)

    _regex: ClassVar[re.Pattern[str]] = re.compile(
        r"^" + SEMVER_PATTERN + r"$", re.VERBOSE
    )

    def __init__(self, version: str) -> None:
        super().__init__(version)

        match = self._regex.search(self._original)
        if not match:
            raise InvalidVersion(
                f"Invalid {self.ecosystem} version: {self._original!r}",
                source=version,
            )

        prerelease = match.group("prerelease")
        build = match.group("build")
        self._version = _Semver(
            major=int(match.group("major")),
            minor=int(match.group("minor")),
            patch=int(match.group("patch")),
            prerelease=tuple(prerelease.split(".")) if prerelease else (),
            build=tuple(build.split(".")) if build else (),
        )
        self._key = (
            self._version.major,
            self._version.minor,
            self._version.patch,
            _prerelease_key(self._version.prerelease),
        )

    @property
    def major(self) -> int:
        return self._version.major

    @property
    def minor(self) -> int:
        return self._version.minor

    @property
    def patch(self) -> int:
        return self._version.patch

    @property
    def prerelease(self) -> str | None:
        return ".".join(self._version.prerelease) or None

    @property
    def build(self) -> str | None:
        return ".".join(self._version.build) or None

    @property
    def release(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    @property
    def is_prerelease(self) -> bool:
        return bool(self._version.prerelease)
