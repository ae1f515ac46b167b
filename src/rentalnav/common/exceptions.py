"""自定义异常类

核心的翻页与提取逻辑从不抛出异常（无法解析的输入一律降级为默认值或 None），
以下异常只出现在边界层：加载 HTML、校验 CLI 输入、校验配置。
"""

from __future__ import annotations


class RentalNavError(Exception):
    """rentalnav 基础异常类

    所有自定义异常的基类。
    """
    pass


class DocumentError(RentalNavError):
    """文档模型相关错误的基类"""
    pass


class DocumentLoadError(DocumentError):
    """HTML 文档加载失败

    当 HTML 内容为空或无法被 lxml 解析时抛出。
    """
    def __init__(self, source: str, message: str = "文档加载失败"):
        super().__init__(f"{message}: {source}")
        self.source = source


class ValidationError(RentalNavError):
    """验证失败错误"""
    pass


class URLValidationError(ValidationError):
    """URL 验证失败"""
    def __init__(self, url: str, reason: str = "格式无效"):
        super().__init__(f"URL 验证失败: {url}, 原因: {reason}")
        self.url = url
        self.reason = reason


class KeyMapValidationError(ValidationError):
    """快捷键映射验证失败"""
    def __init__(self, key_map: dict, reason: str):
        super().__init__(f"快捷键映射无效: {key_map}, 原因: {reason}")
        self.key_map = key_map
        self.reason = reason


class ConfigError(RentalNavError):
    """配置相关错误"""
    pass


class ConfigValidationError(ConfigError):
    """配置验证失败"""
    pass
