# This file is dual licensed under the terms of the Apache License, Version
# 2.0, and the BSD License. See the LICENSE file in the root of this repository
# for complete details.

__title__ = "univers"
__summary__ = "Version parsing, comparison and VERS range containment for many ecosystems"
__uri__ = "https://github.com/univers-project/univers"

__version__ = "25.1.dev0"

__author__ = "Univers developers"
__email__ = "univers-dev@googlegroups.com"

__license__ = "BSD-2-Clause or Apache-2.0"
__copyright__ = f"2025 {__author__}"

from .api import compare, contains, parse_range, parse_version  # noqa: E402
from .errors import (  # noqa: E402
    InvalidConstraints,
    InvalidRange,
    InvalidVersion,
    UniversError,
    UnsupportedEcosystem,
)

__all__ = [
    "InvalidConstraints",
    "InvalidRange",
    "InvalidVersion",
    "UniversError",
    "UnsupportedEcosystem",
    "compare",
    "contains",
    "parse_range",
    "parse_version",
]
