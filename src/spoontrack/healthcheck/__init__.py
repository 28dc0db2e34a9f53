"""部署巡检工具。"""

from .probe import CheckResult, CheckStatus, HealthProbe
from .report import build_junit_xml, write_junit_report

__all__ = [
    "CheckResult",
    "CheckStatus",
    "HealthProbe",
    "build_junit_xml",
    "write_junit_report",
]
