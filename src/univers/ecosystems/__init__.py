# This file is dual licensed under the terms of the Apache License, Version
# 2.0, and the BSD License. See the LICENSE file in the root of this repository
# for complete details.
"""
The routing table from ecosystem names, as used in VERS strings, to their
:class:`~univers.base.Ecosystem`.
"""

from __future__ import annotations

import types
from typing import Mapping

from ..base import Ecosystem
from ..errors import UnsupportedEcosystem
from . import gem, golang, maven, npm, pypi

__all__ = ["ECOSYSTEMS", "get_ecosystem"]

ECOSYSTEMS: Mapping[str, Ecosystem] = types.MappingProxyType(
    {
        module.ECOSYSTEM.name: module.ECOSYSTEM
        for module in (gem, golang, maven, npm, pypi)
    }
)


def get_ecosystem(name: str) -> Ecosystem:
    """
    Look up a routed ecosystem by its exact, lowercase name.

    >>> get_ecosystem("pypi").name
    'pypi'
    """
    try:
        return ECOSYSTEMS[name]
    except KeyError:
        raise UnsupportedEcosystem(name) from None
