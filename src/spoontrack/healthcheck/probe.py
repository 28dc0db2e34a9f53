"""部署实例的 HTTP 健康巡检。"""

from __future__ import annotations

import datetime as dt
import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

import httpx

from spoontrack.config import HealthCheckConfig
from spoontrack.healthcheck.report import write_junit_report

logger = logging.getLogger(__name__)


class CheckStatus(str, Enum):
    PASS = "PASS"
    FAIL = "FAIL"
    WARN = "WARN"


@dataclass
class CheckResult:
    """单项检查结果。"""

    test: str
    status: CheckStatus
    details: str = ""
    timestamp: dt.datetime = field(default_factory=dt.datetime.now)


class HealthProbe:
    """抓取首页并检查状态码、关键内容、静态资源引用与页面元素。

    只发起一次请求，各项检查共用同一份响应内容。
    """

    def __init__(self, config: HealthCheckConfig, client: Optional[httpx.Client] = None) -> None:
        self._config = config
        self._client = client
        self.results: List[CheckResult] = []

    @property
    def base_url(self) -> str:
        return self._config.base_url

    def run(self, write_report: bool = True) -> bool:
        """执行全部检查，没有 FAIL 时返回 True。"""

        logger.info("开始健康检查: %s", self.base_url)
        self.results = []

        body = self._check_http_response()
        if body is None:
            for name in ("Content Check", "Resources Check", "JavaScript Check"):
                self.add_result(name, CheckStatus.FAIL, "Request failed")
        else:
            self._check_content(body)
            self._check_resources(body)
            self._check_elements(body)

        self._summarize()
        if write_report:
            path = write_junit_report(self.results, self._config.report_path)
            logger.info("JUnit 结果已写入 %s", path)
        return self.failures == 0

    @property
    def passed(self) -> int:
        return self._count(CheckStatus.PASS)

    @property
    def failures(self) -> int:
        return self._count(CheckStatus.FAIL)

    @property
    def warnings(self) -> int:
        return self._count(CheckStatus.WARN)

    def add_result(self, test: str, status: CheckStatus, details: str = "") -> None:
        self.results.append(CheckResult(test=test, status=status, details=details))

    def _check_http_response(self) -> Optional[str]:
        try:
            response = self._get()
        except httpx.TimeoutException:
            self.add_result(
                "HTTP Response",
                CheckStatus.FAIL,
                f"Timeout after {self._config.timeout_seconds:g}s",
            )
            return None
        except httpx.HTTPError as exc:
            self.add_result("HTTP Response", CheckStatus.FAIL, str(exc) or type(exc).__name__)
            return None

        if response.status_code == 200:
            self.add_result("HTTP Response", CheckStatus.PASS, f"Status: {response.status_code}")
        else:
            self.add_result("HTTP Response", CheckStatus.FAIL, f"Status: {response.status_code}")
        return response.text

    def _check_content(self, body: str) -> None:
        for name, pattern in self._config.content_checks.items():
            if re.search(pattern, body, re.IGNORECASE):
                self.add_result(f"Content: {name}", CheckStatus.PASS)
            else:
                self.add_result(f"Content: {name}", CheckStatus.FAIL, f"Pattern not found: {pattern}")

    def _check_resources(self, body: str) -> None:
        for name, pattern in self._config.resource_checks.items():
            if re.search(pattern, body, re.IGNORECASE):
                self.add_result(f"Resource: {name}", CheckStatus.PASS)
            else:
                self.add_result(f"Resource: {name}", CheckStatus.WARN, "Not referenced")

    def _check_elements(self, body: str) -> None:
        element_ids = self._config.element_ids
        found = sum(1 for element_id in element_ids if f'id="{element_id}"' in body)
        total = len(element_ids)
        if found >= total * self._config.element_ratio:
            self.add_result("JavaScript Elements", CheckStatus.PASS, f"{found}/{total} elements found")
        else:
            self.add_result(
                "JavaScript Elements", CheckStatus.FAIL, f"Only {found}/{total} elements found"
            )

    def _summarize(self) -> None:
        logger.info(
            "健康检查汇总: 通过=%s, 失败=%s, 警告=%s, 总计=%s",
            self.passed,
            self.failures,
            self.warnings,
            len(self.results),
        )
        for result in self.results:
            if result.status is CheckStatus.FAIL:
                logger.error("失败: %s: %s", result.test, result.details)
            elif result.status is CheckStatus.WARN:
                logger.warning("警告: %s: %s", result.test, result.details)

    def _get(self) -> httpx.Response:
        if self._client is not None:
            return self._client.get(self.base_url)
        with httpx.Client(timeout=self._config.timeout_seconds) as client:
            return client.get(self.base_url)

    def _count(self, status: CheckStatus) -> int:
        return sum(1 for result in self.results if result.status is status)
