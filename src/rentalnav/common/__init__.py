"""Common模块 - 公共工具和基础设施

该模块提供：
- 全局配置管理
- 文档模型（lxml）
- 类型定义
- 日志系统
- 异常类
- 常量定义
- 输入验证
"""

from .config import config, Config
from .document import Document, HtmlDocument, normalize_text
from .logger import get_logger, console
from .exceptions import (
    RentalNavError,
    DocumentError,
    DocumentLoadError,
    ValidationError,
    URLValidationError,
    KeyMapValidationError,
    ConfigError,
    ConfigValidationError,
)
from .types import (
    ExtractedListing,
    KeyEvent,
    NavigationOutcome,
    NavigationStatus,
    PageLocator,
)

__all__ = [
    # 配置
    "config",
    "Config",
    # 文档
    "Document",
    "HtmlDocument",
    "normalize_text",
    # 日志
    "get_logger",
    "console",
    # 异常
    "RentalNavError",
    "DocumentError",
    "DocumentLoadError",
    "ValidationError",
    "URLValidationError",
    "KeyMapValidationError",
    "ConfigError",
    "ConfigValidationError",
    # 类型
    "ExtractedListing",
    "KeyEvent",
    "NavigationOutcome",
    "NavigationStatus",
    "PageLocator",
]
