#!/usr/bin/env python3
"""部署后健康检查。

用法: python scripts/health_check.py <URL> [--report PATH] [--timeout SECONDS]
未提供 URL 时读取 HEALTH_CHECK_URL 环境变量。
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Optional, Sequence

from spoontrack.config import AppConfig
from spoontrack.healthcheck import HealthProbe


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="检查已部署的 Spoon Tracker 页面")
    parser.add_argument("url", nargs="?", help="待检查的基础 URL")
    parser.add_argument("--report", help="JUnit XML 输出路径")
    parser.add_argument("--timeout", type=float, help="请求超时（秒）")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO, format="[%(asctime)s][%(levelname)s] %(name)s: %(message)s")
    args = build_parser().parse_args(argv)

    url = args.url or os.environ.get("HEALTH_CHECK_URL")
    if not url:
        print("Usage: python scripts/health_check.py <URL>", file=sys.stderr)
        print("   or set HEALTH_CHECK_URL environment variable", file=sys.stderr)
        return 1

    update: dict[str, object] = {"base_url": url}
    if args.report:
        update["report_path"] = args.report
    if args.timeout:
        update["timeout_seconds"] = args.timeout

    config = AppConfig.load().health_check.model_copy(update=update)
    return 0 if HealthProbe(config).run() else 1


if __name__ == "__main__":
    sys.exit(main())
