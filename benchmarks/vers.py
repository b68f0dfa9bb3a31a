from __future__ import annotations

from univers import api
from univers.vers import parse_vers

from . import add_attributes

RANGES = [
    "vers:maven/>=1.0.0|<=3.0.0|!=2.0.0",
    "vers:maven/>=1.0.0|>=2.0.0|<=3.0.0|<4.0.0|>5.0.0",
    "vers:npm/>=1.2.3|<2.0.0-0",
    "vers:pypi/>=1.0|<2.0|!=1.5.0rc1",
    "vers:golang/>=v1.0.0|<v2.0.0",
    "vers:gem/=1.0|=1.1|=1.2",
    "vers:pypi/*",
]

PROBES = {
    "maven": ["0.9", "1.5.0", "2.0.0", "3.1-SNAPSHOT"],
    "npm": ["1.2.2", "1.5.0-beta.1", "2.0.0"],
    "pypi": ["0.9", "1.5.0rc1", "1.5.0", "2.0.post1"],
    "golang": ["v0.9.0", "v1.5.0", "v2.0.0+incompatible"],
    "gem": ["1.0", "1.1.a", "1.3"],
}

NATIVE = [
    ("[1.0,2.0),[3.0,)", "maven"),
    ("^1.2.3 || ~2.4.0", "npm"),
    ("~=2.2,!=2.3.1", "pypi"),
    ("~> 2.2, != 2.5", "gem"),
]


class TimeVersSuite:
    def setup(self) -> None:
        self.ranges = [parse_vers(r) for r in RANGES]

    @add_attributes(pretty_name="VERS parse and normalize")
    def time_parse(self) -> None:
        for r in RANGES * 20:
            parse_vers(r)

    @add_attributes(pretty_name="VersRange contains")
    def time_contains(self) -> None:
        for vers in self.ranges:
            for version in PROBES[vers.ecosystem.name]:
                vers.contains(version)


class TimeNativeRangeSuite:
    @add_attributes(pretty_name="Native range contains")
    def time_contains(self) -> None:
        for spec, ecosystem in NATIVE * 20:
            api.contains(spec, "2.4.1", ecosystem=ecosystem)
