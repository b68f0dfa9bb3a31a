# This file is dual licensed under the terms of the Apache License, Version
# 2.0, and the BSD License. See the LICENSE file in the root of this repository
# for complete details.

from __future__ import annotations

import itertools
import operator
from typing import Callable

import pretend
import pytest

from univers.ecosystems.pypi import PyPISpecifierSet, PyPIVersion
from univers.errors import InvalidRange, InvalidVersion

# This list must be in the correct sorting order
VERSIONS = [
    # Implicit epoch of 0
    "1.0.dev456",
    "1.0a1",
    "1.0a2.dev456",
    "1.0a12.dev456",
    "1.0a12",
    "1.0b1.dev456",
    "1.0b2",
    "1.0b2.post345.dev456",
    "1.0b2.post345",
    "1.0b2-346",
    "1.0c1.dev456",
    "1.0c1",
    "1.0rc2",
    "1.0c3",
    "1.0",
    "1.0.post456.dev34",
    "1.0.post456",
    "1.1.dev1",
    "1.2",
    # Explicit epoch of 1
    "1!1.0.dev456",
    "1!1.0a1",
    "1!1.0a2.dev456",
    "1!1.0a12.dev456",
    "1!1.0a12",
    "1!1.0b1.dev456",
    "1!1.0b2",
    "1!1.0b2.post345.dev456",
    "1!1.0b2.post345",
    "1!1.0b2-346",
    "1!1.0c1.dev456",
    "1!1.0c1",
    "1!1.0rc2",
    "1!1.0c3",
    "1!1.0",
    "1!1.0.post456.dev34",
    "1!1.0.post456",
    "1!1.1.dev1",
    "1!1.2",
]


class TestPyPIVersion:
    @pytest.mark.parametrize("version", VERSIONS)
    def test_valid_versions(self, version: str) -> None:
        PyPIVersion(version)

    @pytest.mark.parametrize(
        "version",
        [
            # Non sensical versions should be invalid
            "french toast",
            # Versions with invalid local versions
            "1.0+a+",
            "1.0++",
            "1.0+_foobar",
            "1.0+foo&asd",
            "1.0+1+1",
            "",
        ],
    )
    def test_invalid_versions(self, version: str) -> None:
        with pytest.raises(InvalidVersion):
            PyPIVersion(version)

    @pytest.mark.parametrize(
        ("version", "normalized"),
        [
            # Various development release incarnations
            ("1.0dev", "1.0.dev0"),
            ("1.0-dev1", "1.0.dev1"),
            ("1.0.DEV", "1.0.dev0"),
            # Various alpha incarnations
            ("1.0a", "1.0a0"),
            ("1.0-a1", "1.0a1"),
            ("1.0.alpha1", "1.0a1"),
            ("1.0ALPHA", "1.0a0"),
            # Various beta incarnations
            ("1.0-beta1", "1.0b1"),
            ("1.0BETA", "1.0b0"),
            # Various release candidate incarnations
            ("1.0c", "1.0rc0"),
            ("1.0-c1", "1.0rc1"),
            ("1.0pre1", "1.0rc1"),
            ("1.0preview", "1.0rc0"),
            # Various post release incarnations
            ("1.0-1", "1.0.post1"),
            ("1.0post", "1.0.post0"),
            ("1.0-r4", "1.0.post4"),
            ("1.0.rev", "1.0.post0"),
            # Local version case insensitivity and separators
            ("1.0+AbC", "1.0+abc"),
            ("1.0+ubuntu-1", "1.0+ubuntu.1"),
            # Leading v and surrounding whitespace
            ("v1.0", "1.0"),
            ("  1.0  ", "1.0"),
            ("1.0.0-RC1", "1.0.0rc1"),
            # Epochs
            ("1!1.0", "1!1.0"),
            ("0!1.0", "1.0"),
        ],
    )
    def test_normalized_versions(self, version: str, normalized: str) -> None:
        assert str(PyPIVersion(version)) == normalized
        assert repr(PyPIVersion(version)) == f"<PyPIVersion({normalized!r})>"

    def test_version_rc_and_c_equals(self) -> None:
        assert PyPIVersion("1.0rc1") == PyPIVersion("1.0c1")

    @pytest.mark.parametrize(
        ("version", "public", "base_version", "local"),
        [
            ("1.0", "1.0", "1.0", None),
            ("1.0rc1+deadbeef", "1.0rc1", "1.0", "deadbeef"),
            ("1!2.0.post1+ubuntu.1", "1!2.0.post1", "1!2.0", "ubuntu.1"),
        ],
    )
    def test_version_parts(
        self, version: str, public: str, base_version: str, local: str | None
    ) -> None:
        parsed = PyPIVersion(version)

        assert parsed.public == public
        assert parsed.base_version == base_version
        assert parsed.local == local

    @pytest.mark.parametrize(
        ("version", "fields"),
        [
            ("1.2.3", (0, (1, 2, 3), None, None, None)),
            ("2!1.0a2.post3.dev4", (2, (1, 0), ("a", 2), 3, 4)),
        ],
    )
    def test_version_fields(self, version: str, fields: tuple[object, ...]) -> None:
        parsed = PyPIVersion(version)

        assert (
            parsed.epoch,
            parsed.release,
            parsed.pre,
            parsed.post,
            parsed.dev,
        ) == fields

    def test_local_is_ignored_for_comparison(self) -> None:
        assert PyPIVersion("1.0+abc") == PyPIVersion("1.0+xyz")
        assert PyPIVersion("1.0+abc") == PyPIVersion("1.0")
        assert hash(PyPIVersion("1.0+abc")) == hash(PyPIVersion("1.0"))
        assert str(PyPIVersion("1.0+abc")) == "1.0+abc"

    @pytest.mark.parametrize(
        ("version", "expected"),
        [
            ("1.0.dev0", True),
            ("1.0.dev1", True),
            ("1.0a1.dev1", True),
            ("1.0b1.dev1", True),
            ("1.0c1.dev1", True),
            ("1.0rc1.dev1", True),
            ("1.0a1", True),
            ("1.0b1", True),
            ("1.0c1", True),
            ("1.0rc1", True),
            ("1.0a1.post1.dev1", True),
            ("1.0", False),
            ("1.0+dev", False),
            ("1.0.post1", False),
            ("1.0.post1.dev1", True),
        ],
    )
    def test_version_is_prerelease(self, version: str, expected: bool) -> None:
        assert PyPIVersion(version).is_prerelease is expected

    @pytest.mark.parametrize(
        ("left", "right", "op"),
        # Below we'll generate every possible combination of VERSIONS that
        # should be True for the given operator
        list(itertools.chain.from_iterable(
            # Verify that the less than (<) operator works correctly
            [
                [(x, y, operator.lt) for y in VERSIONS[i + 1 :]]
                for i, x in enumerate(VERSIONS)
            ]
            # Verify that the less than equal (<=) operator works correctly
            + [
                [(x, y, operator.le) for y in VERSIONS[i:]]
                for i, x in enumerate(VERSIONS)
            ]
            # Verify that the equal (==) operator works correctly
            + [[(x, x, operator.eq) for x in VERSIONS]]
            # Verify that the not equal (!=) operator works correctly
            + [
                [(x, y, operator.ne) for j, y in enumerate(VERSIONS) if i != j]
                for i, x in enumerate(VERSIONS)
            ]
            # Verify that the greater than equal (>=) operator works correctly
            + [
                [(x, y, operator.ge) for y in VERSIONS[: i + 1]]
                for i, x in enumerate(VERSIONS)
            ]
            # Verify that the greater than (>) operator works correctly
            + [
                [(x, y, operator.gt) for y in VERSIONS[:i]]
                for i, x in enumerate(VERSIONS)
            ]
        )),
    )
    def test_comparison_true(
        self, left: str, right: str, op: Callable[[object, object], bool]
    ) -> None:
        assert op(PyPIVersion(left), PyPIVersion(right))

    @pytest.mark.parametrize(
        ("left", "right", "op"),
        # Below we'll generate every possible combination of VERSIONS that
        # should be False for the given operator
        list(itertools.chain.from_iterable(
            [
                [(x, y, operator.lt) for y in VERSIONS[: i + 1]]
                for i, x in enumerate(VERSIONS)
            ]
            + [
                [(x, y, operator.le) for y in VERSIONS[:i]]
                for i, x in enumerate(VERSIONS)
            ]
            + [
                [(x, y, operator.eq) for j, y in enumerate(VERSIONS) if i != j]
                for i, x in enumerate(VERSIONS)
            ]
            + [[(x, x, operator.ne) for x in VERSIONS]]
            + [
                [(x, y, operator.ge) for y in VERSIONS[i + 1 :]]
                for i, x in enumerate(VERSIONS)
            ]
            + [
                [(x, y, operator.gt) for y in VERSIONS[i:]]
                for i, x in enumerate(VERSIONS)
            ]
        )),
    )
    def test_comparison_false(
        self, left: str, right: str, op: Callable[[object, object], bool]
    ) -> None:
        assert not op(PyPIVersion(left), PyPIVersion(right))

    @pytest.mark.parametrize(("op", "expected"), [("eq", False), ("ne", True)])
    def test_compare_other(self, op: str, expected: bool) -> None:
        other = pretend.stub(**{f"__{op}__": lambda other: NotImplemented})

        assert getattr(operator, op)(PyPIVersion("1"), other) is expected


class TestPyPISpecifierSet:
    @pytest.mark.parametrize(
        "specifier",
        [
            "~=2.0",
            "==2.1.*",
            "==2.1.0.3",
            "!=2.2.*",
            "!=2.2.0.5",
            "<=5",
            ">=7.9a1",
            "<1.0.dev1",
            ">2.0.post1",
            "===lolwat",
            "==1.0+local",
            ">=1.0, <2.0",
            "  >= 1.0 ,!= 1.5  ",
        ],
    )
    def test_specifiers_valid(self, specifier: str) -> None:
        PyPISpecifierSet(specifier)

    @pytest.mark.parametrize(
        "specifier",
        [
            # Operator-less specifier
            "2.0",
            # Invalid operator
            "=>2.0",
            # Version-less specifier
            "==",
            # Prefix matching only with == and !=
            "~=1.0.*",
            ">=1.0.*",
            "<1.0.*",
            # Local versions only with == and !=
            "~=1.0+5",
            ">=1.0+deadbeef",
            "<1.0+abc123",
            # Compatible release needs two release segments
            "~=1",
            "~=1!2",
            # Not a version
            "==not-a-version",
            # Empty members
            ">=1.0,,<2.0",
            "",
        ],
    )
    def test_specifiers_invalid(self, specifier: str) -> None:
        with pytest.raises(InvalidRange):
            PyPISpecifierSet(specifier)

    def test_invalid_version_is_chained(self) -> None:
        with pytest.raises(InvalidRange) as excinfo:
            PyPISpecifierSet(">=1.0,<bogus")

        assert isinstance(excinfo.value.__cause__, InvalidVersion)
        assert excinfo.value.span == (6, 11)

    @pytest.mark.parametrize(
        ("version", "spec"),
        [
            ("2.0a1", ">=1.0a1,<2"),
            ("2a1", ">=1.0a1,<2.0"),
            ("2.0.0.dev1", "<2.0"),
            ("2.0.post1", ">2"),
            ("2.post1", ">2.0.0"),
            ("1!2.0.post1", ">1!2"),
        ],
    )
    def test_exclusive_bounds_ignore_release_spelling(
        self, version: str, spec: str
    ) -> None:
        assert version not in PyPISpecifierSet(spec)

    @pytest.mark.parametrize(
        ("version", "spec", "expected"),
        [
            (v, s, True)
            for v, s in [
                # Test the equality operation
                ("2.0", "==2"),
                ("2.0", "==2.0"),
                ("2.0", "==2.0.0"),
                ("2.0+deadbeef", "==2"),
                ("2.0+deadbeef", "==2.0+deadbeef"),
                # Test the equality operation with a prefix
                ("2", "==2.*"),
                ("2.0", "==2.*"),
                ("2.0.0", "==2.*"),
                ("2.0.post1", "==2.0.post1.*"),
                ("2.1+local.version", "==2.1.*"),
                # Test the in-equality operation
                ("2.1", "!=2"),
                ("2.1", "!=2.0"),
                ("2.0.1", "!=2"),
                ("2.0.1", "!=2.0"),
                ("2.0.1", "!=2.0.0"),
                ("2.0", "!=2.0+deadbeef"),
                # Test the in-equality operation with a prefix
                ("2.0", "!=3.*"),
                ("2.1", "!=2.0.*"),
                # Test the greater than equal operation
                ("2.0", ">=2"),
                ("2.0", ">=2.0"),
                ("2.0", ">=2.0.0"),
                ("2.0.post1", ">=2"),
                ("3", ">=2"),
                # Test the less than equal operation
                ("2.0", "<=2"),
                ("2.0", "<=2.0"),
                ("2.0", "<=2.0.0"),
                ("1", "<=2"),
                # Test the greater than operation
                ("3", ">2"),
                ("2.1", ">2.0"),
                ("2.0.1", ">2"),
                ("2.1.post1", ">2"),
                ("2.1+local.version", ">2"),
                # Test the less than operation
                ("1", "<2"),
                ("2.0", "<2.1"),
                ("2.0a1", "<2.1,>=2.0a1"),
                # Test the compatibility operation
                ("1", "~=1.0"),
                ("1.0.1", "~=1.0"),
                ("1.1", "~=1.0"),
                ("1.9999999", "~=1.0"),
                ("1.1", "~=1.0a1"),
                ("2022.01.01", "~=2022.01.01"),
                # Test that epochs are handled sanely
                ("2!1.0", "~=2!1.0"),
                ("2!1.0", "==2!1.*"),
                ("2!1.0", "==2!1.0"),
                ("2!1.0", "!=1.0"),
                ("1.0", "!=2!1.0"),
                ("1.0", "<=2!0.1"),
                ("2!1.0", ">=2.0"),
                ("1.0", "<2!0.1"),
                ("2!1.0", ">2.0"),
                # Test some normalization rules
                ("2.0.5", ">2.0dev"),
                # Combined specifiers
                ("1.5", ">=1.0,<2"),
                ("1.9rc1", ">=1.0rc1,<2.0"),
            ]
        ]
        + [
            (v, s, False)
            for v, s in [
                # Test the equality operation
                ("2.1", "==2"),
                ("2.1", "==2.0"),
                ("2.1", "==2.0.0"),
                ("2.0", "==2.0+deadbeef"),
                ("2.0+cafebabe", "==2.0+deadbeef"),
                # Test the equality operation with a prefix
                ("2.0", "==3.*"),
                ("2.1", "==2.0.*"),
                # Test the in-equality operation
                ("2.0", "!=2"),
                ("2.0", "!=2.0"),
                ("2.0", "!=2.0.0"),
                ("2.0+deadbeef", "!=2"),
                ("2.0+deadbeef", "!=2.0+deadbeef"),
                # Test the in-equality operation with a prefix
                ("2.0", "!=2.*"),
                ("2.0", "!=2.0.*"),
                # Test the greater than equal operation
                ("2.0.dev1", ">=2"),
                ("2.0a1", ">=2"),
                ("1", ">=2"),
                # Test the less than equal operation
                ("2.0.dev1", "<=2"),
                ("2.0rc1", "<=2"),
                ("2.0.post1", "<=2"),
                ("3", "<=2"),
                # Prereleases are excluded unless a specifier names one
                ("2a1", "==2.*"),
                ("2.0.dev0", "<2.1"),
                # Test the greater than operation
                ("1", ">2"),
                ("2.0.dev1", ">2"),
                ("2.0a1", ">2"),
                ("2.0", ">2"),
                ("2.0.post1", ">2"),
                ("2.0.post1.dev1", ">2"),
                # Test the less than operation
                ("2.0.dev1", "<2"),
                ("2.0a1", "<2"),
                ("2.0", "<2"),
                ("2.post1", "<2"),
                ("3", "<2"),
                # Test the compatibility operation
                ("2.0", "~=1.0"),
                ("1.1.0", "~=1.0.0"),
                ("1.1.post1", "~=1.0.0"),
                # Test that epochs are handled sanely
                ("1.0", "~=2!1.0"),
                ("2!1.0", "~=1.0"),
                ("2!1.0", "==1.0"),
                ("1.0", "==2!1.0"),
                ("2!1.0", "==1.*"),
                ("1.0", "==2!1.*"),
                ("2!1.0", "!=2!1.0"),
                # Combined specifiers
                ("1.5b1", ">=1.0,<2"),
                ("2.0rc1", ">=1.0rc1,<2.0"),
                ("2.5", ">=1.0,<2"),
            ]
        ],
    )
    def test_specifiers(self, version: str, spec: str, expected: bool) -> None:
        specifiers = PyPISpecifierSet(spec)

        if expected:
            # Test that the plain string form works
            assert version in specifiers

            # Test that the version instance form works
            assert PyPIVersion(version) in specifiers
        else:
            # Test that the plain string form works
            assert version not in specifiers

            # Test that the version instance form works
            assert PyPIVersion(version) not in specifiers

    @pytest.mark.parametrize(
        ("version", "spec", "expected"),
        [
            ("1.0", "===1.0", True),
            ("1.0.0", "===1.0", False),
            ("1.0.0", "===1.0.0,==1.*", True),
            ("1.0.0", "===1.0,==1.*", False),
        ],
    )
    def test_specifiers_identity(self, version: str, spec: str, expected: bool) -> None:
        assert PyPISpecifierSet(spec).contains(version) is expected

    @pytest.mark.parametrize(
        ("spec", "expected"),
        [
            (">=1.0", False),
            (">=1.0a1", True),
            ("<2.0.dev1", True),
            ("==1.0rc1.*", True),
            (">=1.0,<2.0b1", True),
            ("===1.0a1", False),
            ("~=1.0.post1", False),
        ],
    )
    def test_prereleases(self, spec: str, expected: bool) -> None:
        assert PyPISpecifierSet(spec).prereleases is expected

    def test_str_and_equality(self) -> None:
        specifiers = PyPISpecifierSet(" >=1.0,<2 ")

        assert str(specifiers) == ">=1.0,<2"
        assert repr(specifiers) == "<PyPISpecifierSet('>=1.0,<2')>"
        assert specifiers == ">=1.0,<2"
        assert specifiers == PyPISpecifierSet(">=1.0,<2")
        assert specifiers != PyPISpecifierSet("<2,>=1.0")
