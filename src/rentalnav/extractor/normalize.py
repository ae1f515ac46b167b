"""文本规范化与数值解析

把 "1.200 €"、"72,5 m²"、"2 Zi." 这类德语格式的文本转换为浮点数。
"""

from __future__ import annotations

import re

from ..common.constants import (
    PLAUSIBILITY_RANGES,
    STANDALONE_MAX_LENGTH,
    STANDALONE_MAX_PUNCTUATION,
)

# 单位：欧元符号、平方米、房间
_UNIT_RE = re.compile(r"\s*(?:€|m²|qm|Zi\.?)\s*")
_PUNCTUATION_RE = re.compile(r"[.,!?;]")
_NON_NUMERIC_RE = re.compile(r"[^0-9.]")


def normalize_number(text: str | None) -> float | None:
    """去掉单位与千分位后解析为浮点数

    Example:
        >>> normalize_number("1.200 €")
        1200.0
        >>> normalize_number("72,5 m²")
        72.5

    Returns:
        解析结果；无法解析或为空时返回 None（而不是 0）
    """
    if not text:
        return None
    cleaned = _UNIT_RE.sub("", text)
    cleaned = cleaned.replace(".", "")  # 千分位
    cleaned = cleaned.replace(",", ".", 1)  # 小数逗号
    cleaned = _NON_NUMERIC_RE.sub("", cleaned).strip()
    if not cleaned:
        return None
    try:
        return float(cleaned)
    except ValueError:
        return None


def plausible(value: float | None, kind: str) -> bool:
    """粗略的合理性检查，过滤明显不现实的值"""
    if value is None or kind not in PLAUSIBILITY_RANGES:
        return False
    low, high, inclusive = PLAUSIBILITY_RANGES[kind]
    if inclusive:
        return low <= value <= high
    return low < value < high


def count_punctuation(text: str) -> int:
    return len(_PUNCTUATION_RE.findall(text or ""))


def looks_like_standalone(text: str | None) -> bool:
    """文本是否像独立的标签（"72 m²"、"800 €"），而不是描述正文的一部分"""
    if not text:
        return False
    return (
        len(text) < STANDALONE_MAX_LENGTH
        and count_punctuation(text) <= STANDALONE_MAX_PUNCTUATION
    )
