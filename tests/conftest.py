from __future__ import annotations

import sysconfig

from univers.ecosystems import ECOSYSTEMS


def pytest_report_header() -> str:
    lines = [
        f"sysconfig platform: {sysconfig.get_platform()}",
        f"routed ecosystems: {', '.join(sorted(ECOSYSTEMS))}",
    ]
    if sysconfig.get_config_var("Py_GIL_DISABLED"):
        lines.append("free-threaded Python build")
    return "\n".join(lines)
