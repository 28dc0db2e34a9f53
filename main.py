"""本地启动入口。"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

# 确保 src 加入路径
PROJECT_ROOT = Path(__file__).resolve().parent
SRC_DIR = PROJECT_ROOT / "src"
if SRC_DIR.exists() and str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from scripts.dev_server import main as run_dev_server
from spoontrack.config import AppConfig


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(asctime)s][%(levelname)s] %(name)s: %(message)s")

    config = AppConfig.load()
    logger = logging.getLogger(__name__)
    logger.info("Spoon Tracker 启动: http://%s:%s", config.host, config.port)
    if config.build_id:
        logger.info("构建: %s", config.build_id)
    logger.info("环境: %s", config.environment)

    asyncio.run(run_dev_server(config))


if __name__ == "__main__":
    main()
