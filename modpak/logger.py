"""
日志模块

使用 loguru 输出命令行日志，可选同时写入日志文件。
"""

import os
import sys
from typing import Optional

from loguru import logger


CONSOLE_FORMAT = "<level>{level: <8}</level> | {message}"
DEBUG_FORMAT = (
    "{time:HH:mm:ss} | <level>{level: <8}</level> | "
    "<cyan>{name}:{line}</cyan> | {message}"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} | {message}"


def setup_logger(
    level: Optional[str] = None,
    sink=None,
    log_file: Optional[str] = None,
    colorize: bool = True,
) -> None:
    """
    设置日志记录器

    Args:
        level: 日志级别 (DEBUG, INFO, WARNING, ERROR)，为空时读取 MODPAK_DEBUG
        sink: 控制台输出目标，默认为当前的 sys.stdout
        log_file: 日志文件路径，文件中始终记录 DEBUG 级别
        colorize: 是否启用颜色
    """
    if level is None:
        level = "DEBUG" if os.environ.get("MODPAK_DEBUG", "0") == "1" else "INFO"
    debug = level == "DEBUG"

    logger.remove()
    logger.add(
        sink=sink or sys.stdout,
        format=DEBUG_FORMAT if debug else CONSOLE_FORMAT,
        level=level,
        colorize=colorize,
        backtrace=debug,
        diagnose=debug,
    )

    if log_file:
        logger.add(
            log_file,
            format=FILE_FORMAT,
            level="DEBUG",
            encoding="utf-8",
            mode="a",
        )

    if debug:
        logger.debug("DEBUG 模式已启用")


__all__ = ["logger", "setup_logger"]
