"""输入验证工具

提供 URL、快捷键映射、配置数值等输入的验证功能。
"""

from __future__ import annotations

from urllib.parse import urlparse

from .constants import MAX_URL_LENGTH, VALID_URL_SCHEMES
from .exceptions import ConfigValidationError, KeyMapValidationError, URLValidationError


def validate_url(url: str, allow_empty: bool = False) -> str:
    """验证并清理 URL

    Args:
        url: 待验证的 URL 字符串
        allow_empty: 是否允许空 URL

    Returns:
        清理后的 URL

    Raises:
        URLValidationError: 当 URL 格式无效时
    """
    url = url.strip() if url else ""

    if not url:
        if allow_empty:
            return ""
        raise URLValidationError("", "URL 不能为空")

    if len(url) > MAX_URL_LENGTH:
        raise URLValidationError(url, f"URL 长度超过 {MAX_URL_LENGTH} 字符")

    try:
        result = urlparse(url)
    except ValueError as e:
        raise URLValidationError(url, f"URL 解析失败: {e}")

    if not result.scheme:
        raise URLValidationError(url, "缺少协议 (http/https)")

    if result.scheme.lower() not in VALID_URL_SCHEMES:
        raise URLValidationError(url, f"不支持的协议: {result.scheme}")

    if not result.netloc:
        raise URLValidationError(url, "缺少域名")

    return url


def validate_key_map(
    key_map: dict[str, str] | None,
    defaults: dict[str, str],
) -> dict[str, str]:
    """验证并规范化快捷键映射

    缺失的键使用默认值补齐，所有按键统一转为小写。

    Args:
        key_map: 用户提供的映射，如 {"prev": "a", "next": "d"}
        defaults: 默认映射

    Returns:
        规范化后的映射

    Raises:
        KeyMapValidationError: 包含未知键、按键为空或上一页/下一页冲突时
    """
    key_map = key_map or {}
    unknown = set(key_map) - {"prev", "next"}
    if unknown:
        raise KeyMapValidationError(key_map, f"未知的动作: {sorted(unknown)}")

    normalized = {
        "prev": (key_map.get("prev") or defaults["prev"]).strip().lower(),
        "next": (key_map.get("next") or defaults["next"]).strip().lower(),
    }
    if not normalized["prev"] or not normalized["next"]:
        raise KeyMapValidationError(key_map, "按键不能为空")
    if normalized["prev"] == normalized["next"]:
        raise KeyMapValidationError(key_map, "上一页与下一页不能使用同一个按键")
    return normalized


def validate_positive_integer(
    value: int,
    name: str,
    min_value: int = 1,
    max_value: int | None = None,
) -> int:
    """验证正整数配置项

    Raises:
        ConfigValidationError: 当值不是整数或超出范围时
    """
    if not isinstance(value, int) or isinstance(value, bool):
        raise ConfigValidationError(f"{name} 必须是整数，当前值: {value!r}")

    if value < min_value:
        raise ConfigValidationError(f"{name} 不能小于 {min_value}，当前值: {value}")

    if max_value is not None and value > max_value:
        raise ConfigValidationError(f"{name} 不能大于 {max_value}，当前值: {value}")

    return value
