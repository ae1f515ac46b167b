"""统一日志系统

所有模块的日志器都挂在包级日志器 "rentalnav" 之下，由它统一持有
Rich 处理器（输出到 stderr，保证 CLI 的 JSON 输出只占用 stdout）。
"""

from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler


ROOT_LOGGER_NAME = "rentalnav"

# 日志控制台（stderr）
console = Console(stderr=True)

# 日志级别映射
LOG_LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def get_log_level(level_str: str | None = None) -> int:
    """解析日志级别，未指定时读取环境变量 LOG_LEVEL"""
    level_str = (level_str or os.getenv("LOG_LEVEL", "INFO")).upper()
    return LOG_LEVEL_MAP.get(level_str, logging.INFO)


def _root_logger() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if root.handlers:
        return root

    log_level = get_log_level()
    root.setLevel(log_level)

    rich_handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        rich_tracebacks=True,
        tracebacks_show_locals=os.getenv("LOG_SHOW_LOCALS", "false").lower() == "true",
        markup=False,  # URL 中的 [..] 不能被当作 Rich 标记
    )
    rich_handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    root.addHandler(rich_handler)

    # 不交给 Python 根日志器，避免宿主程序重复输出
    root.propagate = False
    return root


def get_logger(name: str) -> logging.Logger:
    """获取日志器

    Args:
        name: 日志器名称，通常使用 __name__；不在 rentalnav 命名空间下的
            名称会被挂到 rentalnav 之下

    Example:
        >>> from rentalnav.common.logger import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("[NAV] 当前第 3 页")
    """
    root = _root_logger()
    if name == ROOT_LOGGER_NAME:
        return root
    if not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def set_log_level(level: str | int) -> None:
    """调整包级日志级别（CLI 的 --log-level）"""
    if isinstance(level, str):
        level = get_log_level(level)
    _root_logger().setLevel(level)


def setup_file_logging(log_file: str, level: int = logging.DEBUG) -> logging.Handler:
    """为包级日志器追加文件输出

    文件中总是记录完整的调试信息，与控制台级别无关。

    Returns:
        新增的文件处理器，调用方可自行移除
    """
    root = _root_logger()
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(level)
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(file_handler)

    # 控制台处理器保持原有级别，由根日志器放行调试信息
    for handler in root.handlers:
        if isinstance(handler, RichHandler) and handler.level == logging.NOTSET:
            handler.setLevel(root.level)
    root.setLevel(min(root.level, level))
    return file_handler


def get_navigation_logger() -> logging.Logger:
    """获取翻页导航模块日志器"""
    return get_logger("rentalnav.navigation")


def get_extractor_logger() -> logging.Logger:
    """获取字段提取模块日志器"""
    return get_logger("rentalnav.extractor")
