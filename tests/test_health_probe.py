import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Callable

import httpx

from spoontrack.config import HealthCheckConfig
from spoontrack.healthcheck import CheckStatus, HealthProbe

PAGE = """
<html><head><title>Spoon Tracker</title>
<link rel="stylesheet" href="/static/styles/main.css"></head>
<body><main class="main-content">
<section class="spoon-counter"><div id="spoonCount"></div><div id="spoonVisual"></div></section>
<section class="stats"><span id="totalSpent"></span><span id="activitiesDone"></span>
<span id="energyLevel"></span></section>
<script src="/static/scripts/app.js"></script>
</main></body></html>
"""


def _config(tmp_path: Path) -> HealthCheckConfig:
    return HealthCheckConfig(base_url="http://deploy.test/", report_path=str(tmp_path / "health.xml"))


def _client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def _statuses(probe: HealthProbe) -> dict:
    return {result.test: result.status for result in probe.results}


def test_probe_passes_on_complete_page(tmp_path: Path) -> None:
    probe = HealthProbe(_config(tmp_path), client=_client(lambda request: httpx.Response(200, text=PAGE)))

    assert probe.run() is True
    assert probe.failures == 0
    assert probe.warnings == 0
    assert probe.passed == len(probe.results) == 8


def test_probe_fails_on_bad_status(tmp_path: Path) -> None:
    probe = HealthProbe(_config(tmp_path), client=_client(lambda request: httpx.Response(503, text=PAGE)))

    assert probe.run(write_report=False) is False
    assert _statuses(probe)["HTTP Response"] is CheckStatus.FAIL
    assert probe.results[0].details == "Status: 503"


def test_missing_resources_only_warn(tmp_path: Path) -> None:
    page = PAGE.replace("/static/styles/main.css", "/other.css").replace("/static/scripts/app.js", "/x.js")
    probe = HealthProbe(_config(tmp_path), client=_client(lambda request: httpx.Response(200, text=page)))

    assert probe.run(write_report=False) is True
    assert _statuses(probe)["Resource: CSS"] is CheckStatus.WARN
    assert _statuses(probe)["Resource: JavaScript"] is CheckStatus.WARN


def test_element_ratio_threshold(tmp_path: Path) -> None:
    one_missing = PAGE.replace('id="energyLevel"', "")
    two_missing = one_missing.replace('id="totalSpent"', "")

    passing = HealthProbe(_config(tmp_path), client=_client(lambda r: httpx.Response(200, text=one_missing)))
    failing = HealthProbe(_config(tmp_path), client=_client(lambda r: httpx.Response(200, text=two_missing)))

    assert passing.run(write_report=False) is True
    assert failing.run(write_report=False) is False
    assert failing.results[-1].details == "Only 3/5 elements found"


def test_connection_error_fails_every_check(tmp_path: Path) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    probe = HealthProbe(_config(tmp_path), client=_client(handler))

    assert probe.run(write_report=False) is False
    assert [r.test for r in probe.results] == [
        "HTTP Response",
        "Content Check",
        "Resources Check",
        "JavaScript Check",
    ]
    assert all(r.status is CheckStatus.FAIL for r in probe.results)
    assert probe.results[0].details == "connection refused"


def test_timeout_is_reported(tmp_path: Path) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    probe = HealthProbe(_config(tmp_path), client=_client(handler))

    assert probe.run(write_report=False) is False
    assert probe.results[0].details == "Timeout after 10s"


def test_junit_report_written(tmp_path: Path) -> None:
    page = PAGE.replace("Spoon Tracker", "Something else")
    config = _config(tmp_path)
    probe = HealthProbe(config, client=_client(lambda request: httpx.Response(200, text=page)))

    assert probe.run() is False

    suite = ET.parse(config.report_path).getroot()
    assert suite.tag == "testsuite"
    assert suite.get("name") == "HealthCheck"
    assert suite.get("tests") == "8"
    assert suite.get("failures") == "1"
    failed = [case for case in suite.iter("testcase") if case.find("failure") is not None]
    assert [case.get("name") for case in failed] == ["Content: Title"]
    assert all(case.get("classname") == "HealthCheck" for case in suite.iter("testcase"))


def test_injected_client_keeps_its_own_timeout(tmp_path: Path) -> None:
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.extensions["timeout"])
        return httpx.Response(200, text=PAGE)

    client = httpx.Client(transport=httpx.MockTransport(handler), timeout=3.0)
    probe = HealthProbe(_config(tmp_path), client=client)

    assert probe.run(write_report=False) is True
    assert seen == [{"connect": 3.0, "read": 3.0, "write": 3.0, "pool": 3.0}]
