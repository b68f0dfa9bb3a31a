# This file is dual licensed under the terms of the Apache License, Version
# 2.0, and the BSD License. See the LICENSE file in the root of this repository
# for complete details.
"""
.. testsetup::

    from univers.ecosystems.pypi import PyPIVersion, PyPISpecifierSet

PEP 440 versions and specifier sets.

.. doctest::

    >>> PyPIVersion("1.0.0-RC1")
    <PyPIVersion('1.0.0rc1')>
    >>> "1.5b1" in PyPISpecifierSet(">=1.0,<2")
    False
"""

from __future__ import annotations

import itertools
import re
from typing import Callable, NamedTuple, SupportsInt, Tuple, Union

from .._structures import (
    Infinity,
    InfinityType,
    NegativeInfinity,
    NegativeInfinityType,
)
from ..base import BaseVersion, BaseVersionRange, Ecosystem
from ..errors import InvalidRange, InvalidVersion

__all__ = ["ECOSYSTEM", "VERSION_PATTERN", "PyPISpecifierSet", "PyPIVersion"]

LocalType = Tuple[Union[int, str], ...]

CmpPrePostDevType = Union[InfinityType, NegativeInfinityType, Tuple[str, int]]
CmpKey = Tuple[
    int,
    Tuple[int, ...],
    CmpPrePostDevType,
    CmpPrePostDevType,
    CmpPrePostDevType,
]


class _Version(NamedTuple):
    epoch: int
    release: tuple[int, ...]
    dev: tuple[str, int] | None
    pre: tuple[str, int] | None
    post: tuple[str, int] | None
    local: LocalType | None


VERSION_PATTERN = r"""
    v?
    (?:
        (?:(?P<epoch>[0-9]+)!)?                           # epoch
        (?P<release>[0-9]+(?:\.[0-9]+)*)                  # release segment
        (?P<pre>                                          # pre-release
            [-_\.]?
            (?P<pre_l>alpha|a|beta|b|preview|pre|c|rc)
            [-_\.]?
            (?P<pre_n>[0-9]+)?
        )?
        (?P<post>                                         # post release
            (?:-(?P<post_n1>[0-9]+))
            |
            (?:
                [-_\.]?
                (?P<post_l>post|rev|r)
                [-_\.]?
                (?P<post_n2>[0-9]+)?
            )
        )?
        (?P<dev>                                          # dev release
            [-_\.]?
            (?P<dev_l>dev)
            [-_\.]?
            (?P<dev_n>[0-9]+)?
        )?
    )
    (?:\+(?P<local>[a-z0-9]+(?:[-_\.][a-z0-9]+)*))?       # local version
"""


class PyPIVersion(BaseVersion):
    """
    A PEP 440 version.

    The local version label is shown by :func:`str` but takes no part in
    ordering or equality, so ``1.0+ubuntu1`` equals ``1.0``.
    """

    __slots__ = ("_version",)

    ecosystem = "pypi"

    _regex = re.compile(
        r"^\s*" + VERSION_PATTERN + r"\s*$", re.VERBOSE | re.IGNORECASE
    )

    def __init__(self, version: str) -> None:
        super().__init__(version)

        match = self._regex.search(self._original)
        if not match:
            raise InvalidVersion(
                f"Invalid pypi version: {self._original!r}", source=version
            )

        self._version = _Version(
            epoch=int(match.group("epoch")) if match.group("epoch") else 0,
            release=tuple(int(i) for i in match.group("release").split(".")),
            pre=_parse_letter_version(match.group("pre_l"), match.group("pre_n")),
            post=_parse_letter_version(
                match.group("post_l"), match.group("post_n1") or match.group("post_n2")
            ),
            dev=_parse_letter_version(match.group("dev_l"), match.group("dev_n")),
            local=_parse_local_version(match.group("local")),
        )

        self._key = _cmpkey(
            self._version.epoch,
            self._version.release,
            self._version.pre,
            self._version.post,
            self._version.dev,
        )

    def __str__(self) -> str:
        """A string representation of the version that can be round-tripped.

        >>> str(PyPIVersion("1.0a5"))
        '1.0a5'
        """
        version = self.public

        if self.local is not None:
            version += f"+{self.local}"

        return version

    @property
    def epoch(self) -> int:
        return self._version.epoch

    @property
    def release(self) -> tuple[int, ...]:
        return self._version.release

    @property
    def pre(self) -> tuple[str, int] | None:
        return self._version.pre

    @property
    def post(self) -> int | None:
        return self._version.post[1] if self._version.post else None

    @property
    def dev(self) -> int | None:
        return self._version.dev[1] if self._version.dev else None

    @property
    def local(self) -> str | None:
        if self._version.local:
            return ".".join(str(x) for x in self._version.local)
        else:
            return None

    @property
    def public(self) -> str:
        """The public portion of the version, without the local label."""
        parts = []

        if self.epoch != 0:
            parts.append(f"{self.epoch}!")

        parts.append(".".join(str(x) for x in self.release))

        if self.pre is not None:
            parts.append("".join(str(x) for x in self.pre))

        if self.post is not None:
            parts.append(f".post{self.post}")

        if self.dev is not None:
            parts.append(f".dev{self.dev}")

        return "".join(parts)

    @property
    def base_version(self) -> str:
        parts = []

        if self.epoch != 0:
            parts.append(f"{self.epoch}!")

        parts.append(".".join(str(x) for x in self.release))

        return "".join(parts)

    @property
    def is_prerelease(self) -> bool:
        return self.dev is not None or self.pre is not None

    @property
    def is_postrelease(self) -> bool:
        return self.post is not None


def _parse_letter_version(
    letter: str | None, number: str | bytes | SupportsInt | None
) -> tuple[str, int] | None:
    if letter:
        # "1.0a" means "1.0a0"
        if number is None:
            number = 0

        letter = letter.lower()
        if letter == "alpha":
            letter = "a"
        elif letter == "beta":
            letter = "b"
        elif letter in ["c", "pre", "preview"]:
            letter = "rc"
        elif letter in ["rev", "r"]:
            letter = "post"

        return letter, int(number)

    assert not letter
    if number:
        # A bare number is the implicit post release of "1.0-1"
        letter = "post"

        return letter, int(number)

    return None


_local_version_separators = re.compile(r"[\._-]")


def _parse_local_version(local: str | None) -> LocalType | None:
    """
    Takes a string like abc.1.twelve and turns it into ("abc", 1, "twelve").
    """
    if local is not None:
        return tuple(
            part.lower() if not part.isdigit() else int(part)
            for part in _local_version_separators.split(local)
        )
    return None


def _cmpkey(
    epoch: int,
    release: tuple[int, ...],
    pre: tuple[str, int] | None,
    post: tuple[str, int] | None,
    dev: tuple[str, int] | None,
) -> CmpKey:
    # Trailing zeros do not count: 1.0 == 1.0.0
    _release = tuple(
        reversed(list(itertools.dropwhile(lambda x: x == 0, reversed(release))))
    )

    # A bare dev release (1.0.dev0) sorts before every pre-release of 1.0.
    if pre is None and post is None and dev is not None:
        _pre: CmpPrePostDevType = NegativeInfinity
    elif pre is None:
        _pre = Infinity
    else:
        _pre = pre

    if post is None:
        _post: CmpPrePostDevType = NegativeInfinity
    else:
        _post = post

    if dev is None:
        _dev: CmpPrePostDevType = Infinity
    else:
        _dev = dev

    return epoch, _release, _pre, _post, _dev


class PyPISpecifierSet(BaseVersionRange[PyPIVersion]):
    """
    A comma separated set of PEP 440 specifiers, all of which must match.

    Prereleases are left out unless one of the specifiers names a
    prerelease, following the installer convention.
    """

    version_class = PyPIVersion

    _specifier_regex = re.compile(
        r"""
        ^
        \s*
        (?P<operator>(===|~=|==|!=|<=|>=|<|>))
        \s*
        (?P<version>[^\s,]+)
        \s*
        $
        """,
        re.VERBOSE | re.IGNORECASE,
    )

    _operators = {
        "~=": "compatible",
        "==": "equal",
        "!=": "not_equal",
        "<=": "less_than_equal",
        ">=": "greater_than_equal",
        "<": "less_than",
        ">": "greater_than",
        "===": "arbitrary",
    }

    def __init__(self, spec: str) -> None:
        super().__init__(spec)

        specs = []
        offset = 0
        for item in self._spec.split(","):
            start = offset
            offset += len(item) + 1
            match = self._specifier_regex.search(item)
            if not match:
                raise InvalidRange(
                    f"Invalid specifier: {item.strip()!r}",
                    source=self._spec,
                    span=(start, max(start, offset - 2)),
                )
            operator, version = match.group("operator"), match.group("version")
            self._validate(operator, version, start, offset - 2)
            specs.append((operator, version))

        self._specs = tuple(specs)

    def _validate(self, operator: str, version: str, start: int, end: int) -> None:
        if operator == "===":
            return

        text = version
        if version.endswith(".*"):
            if operator not in ("==", "!="):
                raise InvalidRange(
                    f"Prefix match is only allowed with == and !=: {version!r}",
                    source=self._spec,
                    span=(start, end),
                )
            text = version[:-2]

        try:
            parsed = PyPIVersion(text)
        except InvalidVersion as e:
            raise InvalidRange(
                f"Invalid version {version!r} in specifier",
                source=self._spec,
                span=(start, end),
            ) from e

        if operator == "~=" and len(parsed.release) < 2:
            raise InvalidRange(
                f"Compatible release clause needs two release segments: {version!r}",
                source=self._spec,
                span=(start, end),
            )
        if parsed.local is not None and operator not in ("==", "!="):
            raise InvalidRange(
                f"Local versions are only allowed with == and !=: {version!r}",
                source=self._spec,
                span=(start, end),
            )

    @property
    def prereleases(self) -> bool:
        """Whether any specifier opts in to prerelease versions."""
        for operator, version in self._specs:
            if operator == "===":
                continue
            if version.endswith(".*"):
                version = version[:-2]
            if PyPIVersion(version).is_prerelease:
                return True
        return False

    def _get_operator(self, op: str) -> Callable[[PyPIVersion, str], bool]:
        return getattr(self, f"_compare_{self._operators[op]}")  # type: ignore[no-any-return]

    def _compare_compatible(self, prospective: PyPIVersion, spec: str) -> bool:
        # ~=2.2 is >=2.2,==2.*
        prefix = ".".join(
            list(
                itertools.takewhile(
                    _is_not_suffix,
                    _version_split(str(PyPIVersion(spec).public)),
                )
            )[:-1]
        )

        prefix += ".*"

        return self._get_operator(">=")(prospective, spec) and self._get_operator(
            "=="
        )(prospective, prefix)

    def _compare_equal(self, prospective: PyPIVersion, spec: str) -> bool:
        if spec.endswith(".*"):
            # Release and pre-release are split as if joined by a dot.
            split_spec = _version_split(str(PyPIVersion(spec[:-2]).public))
            split_prospective = _version_split(prospective.public)

            # Compare only as many segments as the prefix has, zero padded.
            shortened_prospective = split_prospective[: len(split_spec)]
            padded_spec, padded_prospective = _pad_version(
                split_spec, shortened_prospective
            )

            return padded_prospective == padded_spec

        spec_version = PyPIVersion(spec)

        # A specifier without a local label ignores the local label of the version.
        if spec_version.local is None:
            return prospective == spec_version
        return prospective == spec_version and prospective.local == spec_version.local

    def _compare_not_equal(self, prospective: PyPIVersion, spec: str) -> bool:
        return not self._compare_equal(prospective, spec)

    def _compare_less_than_equal(self, prospective: PyPIVersion, spec: str) -> bool:
        return prospective <= PyPIVersion(spec)

    def _compare_greater_than_equal(self, prospective: PyPIVersion, spec: str) -> bool:
        return prospective >= PyPIVersion(spec)

    def _compare_less_than(self, prospective: PyPIVersion, spec_str: str) -> bool:
        spec = PyPIVersion(spec_str)

        if not prospective < spec:
            return False

        # <3.1 rejects 3.1.dev0 but accepts 3.0.dev0.
        if (
            not spec.is_prerelease
            and prospective.is_prerelease
            and PyPIVersion(prospective.base_version) == PyPIVersion(spec.base_version)
        ):
            return False

        return True

    def _compare_greater_than(self, prospective: PyPIVersion, spec_str: str) -> bool:
        spec = PyPIVersion(spec_str)

        if not prospective > spec:
            return False

        # >3.1 rejects 3.1.post0 but accepts 3.2.post0.
        if (
            not spec.is_postrelease
            and prospective.is_postrelease
            and PyPIVersion(prospective.base_version) == PyPIVersion(spec.base_version)
        ):
            return False

        return True

    def _compare_arbitrary(self, prospective: PyPIVersion, spec: str) -> bool:
        return str(prospective).lower() == str(spec).lower()

    def _contains(self, version: PyPIVersion) -> bool:
        if version.is_prerelease and not self.prereleases:
            return False

        return all(
            self._get_operator(operator)(version, spec) for operator, spec in self._specs
        )


_prefix_regex = re.compile(r"^([0-9]+)((?:a|b|c|rc)[0-9]+)$")


def _is_not_suffix(segment: str) -> bool:
    return not any(
        segment.startswith(prefix) for prefix in ("dev", "a", "b", "rc", "post")
    )


def _version_split(version: str) -> list[str]:
    """Split version into components, with an implicit dot before a pre-release.

    >>> _version_split("1.0rc1")
    ['1', '0', 'rc1']
    """
    result: list[str] = []
    for item in version.split("."):
        match = _prefix_regex.search(item)
        if match:
            result.extend(match.groups())
        else:
            result.append(item)
    return result


def _pad_version(left: list[str], right: list[str]) -> tuple[list[str], list[str]]:
    left_split, right_split = [], []

    left_split.append(list(itertools.takewhile(lambda x: x.isdigit(), left)))
    right_split.append(list(itertools.takewhile(lambda x: x.isdigit(), right)))

    left_split.append(left[len(left_split[0]) :])
    right_split.append(right[len(right_split[0]) :])

    left_split.insert(1, ["0"] * max(0, len(right_split[0]) - len(left_split[0])))
    right_split.insert(1, ["0"] * max(0, len(left_split[0]) - len(right_split[0])))

    return (
        list(itertools.chain.from_iterable(left_split)),
        list(itertools.chain.from_iterable(right_split)),
    )


ECOSYSTEM = Ecosystem(
    "pypi", PyPIVersion, PyPISpecifierSet, implicit_prerelease_exclusion=True
)
