"""JUnit 格式的巡检报告。"""

from __future__ import annotations

import datetime as dt
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Sequence, Union

if TYPE_CHECKING:
    from spoontrack.healthcheck.probe import CheckResult


def build_junit_xml(
    results: Sequence["CheckResult"], timestamp: Optional[dt.datetime] = None
) -> ET.Element:
    failures = [r for r in results if r.status.value == "FAIL"]
    suite = ET.Element(
        "testsuite",
        {
            "name": "HealthCheck",
            "tests": str(len(results)),
            "failures": str(len(failures)),
            "timestamp": (timestamp or dt.datetime.now()).isoformat(),
        },
    )
    for result in results:
        case = ET.SubElement(suite, "testcase", {"name": result.test, "classname": "HealthCheck"})
        if result.status.value == "FAIL":
            failure = ET.SubElement(case, "failure", {"message": result.details})
            failure.text = result.details
    return suite


def write_junit_report(results: Sequence["CheckResult"], path: Union[str, Path]) -> Path:
    report_path = Path(path)
    report_path.parent.mkdir(parents=True, exist_ok=True)
    tree = ET.ElementTree(build_junit_xml(results))
    ET.indent(tree)
    tree.write(report_path, encoding="UTF-8", xml_declaration=True)
    return report_path
