"""Loguru setup shared by the service and the scripts."""
import sys
from pathlib import Path

from loguru import logger

_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logger(level: str = "INFO", log_dir: str | Path | None = None) -> None:
    """
    配置 loguru：控制台输出，指定目录时额外写入按大小轮转的日志文件
    Args:
        level: 日志级别
        log_dir: 日志目录，为空时只输出到 stderr
    """
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
               "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=level,
    )

    if log_dir:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        logger.add(
            path / "dict_filter_{time:YYYY-MM-DD}.log",
            rotation="100 MB",
            retention="10 days",
            compression="zip",
            format=_FORMAT,
            level=level,
            enqueue=True,
        )
