from __future__ import annotations

import itertools

from univers.ecosystems import get_ecosystem
from univers.errors import InvalidVersion

from . import add_attributes

SAMPLES = {
    "maven": [
        "1.0",
        "1.0.0-ga",
        "1.0-alpha-1",
        "1.0-SNAPSHOT",
        "2.3.4-sp1",
        "10.0.1.RELEASE",
        "1.0-rc1-SNAPSHOT",
        "not..a version",
    ],
    "npm": ["1.2.3", "1.2.3-beta.4", "10.20.30+build.1", "v1.0.0", "1.0"],
    "pypi": ["1.0", "1!2.0.post1.dev3", "1.0rc1", "2.0.0+ubuntu.1", "french toast"],
    "golang": ["v1.2.3", "v0.0.0-20170915032832-14c0d48ead0c", "v2.0.0+incompatible"],
    "gem": ["1.0.0", "2.0.0.rc1", "1.0.a.1", "3"],
}


class TimeVersionParsingSuite:
    params = sorted(SAMPLES)
    param_names = ["ecosystem"]

    def setup(self, name: str) -> None:
        self.ecosystem = get_ecosystem(name)
        self.versions = SAMPLES[name] * 100

    def time_constructor(self, name: str) -> None:  # noqa: ARG002
        for v in self.versions:
            try:
                self.ecosystem.parse_version(v)
            except InvalidVersion:  # noqa: PERF203
                pass


class TimeVersionSuite:
    params = sorted(SAMPLES)
    param_names = ["ecosystem"]

    def setup(self, name: str) -> None:
        self.ecosystem = get_ecosystem(name)
        self.versions = []
        for v in SAMPLES[name]:
            try:
                self.versions.append(self.ecosystem.parse_version(v))
            except InvalidVersion:  # noqa: PERF203
                pass

    @add_attributes(pretty_name="Version sort")
    def time_sort(self, name: str) -> None:  # noqa: ARG002
        sorted(self.versions * 50)

    @add_attributes(pretty_name="Version compare")
    def time_compare(self, name: str) -> None:  # noqa: ARG002
        for left, right in itertools.product(self.versions, repeat=2):
            self.ecosystem.compare(left, right)

    def time_str(self, name: str) -> None:  # noqa: ARG002
        for version in self.versions:
            self.ecosystem.render(version)
