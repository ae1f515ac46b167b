"""配置管理"""

from __future__ import annotations

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from .constants import (
    DEFAULT_CATEGORY_SEGMENT,
    DEFAULT_CONFIDENCE_THRESHOLD,
    DEFAULT_NEXT_KEY,
    DEFAULT_NEXT_TOKENS,
    DEFAULT_PAGE_CAP,
    DEFAULT_PAGE_TOKENS,
    DEFAULT_PREV_KEY,
    DEFAULT_PREV_LABEL_TOKENS,
    DEFAULT_PREV_TITLE_TOKENS,
    PROCESSED_ATTRIBUTE,
)
from .exceptions import ConfigValidationError
from .validators import validate_positive_integer

# 加载 .env 文件
load_dotenv()


def _env_list(name: str, default: tuple[str, ...]) -> list[str]:
    raw = os.getenv(name)
    if not raw:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


class PaginationConfig(BaseModel):
    """翻页配置"""

    # 服务端硬性页数上限（kleinanzeigen 最多 50 页）
    page_cap: int = Field(default_factory=lambda: int(os.getenv("PAGE_CAP", str(DEFAULT_PAGE_CAP))))
    # URL 中无法解析分类段时使用的默认值
    default_category: str = Field(
        default_factory=lambda: os.getenv("DEFAULT_CATEGORY", DEFAULT_CATEGORY_SEGMENT)
    )
    # 页码段前缀，第一个用于插入
    page_tokens: list[str] = Field(
        default_factory=lambda: _env_list("PAGE_TOKENS", DEFAULT_PAGE_TOKENS)
    )
    # "下一页" 关键词（aria-label / title / 文本）
    next_tokens: list[str] = Field(
        default_factory=lambda: _env_list("NEXT_TOKENS", DEFAULT_NEXT_TOKENS)
    )
    # "上一页" 关键词：aria-label 与 title 分别匹配
    prev_label_tokens: list[str] = Field(
        default_factory=lambda: _env_list("PREV_LABEL_TOKENS", DEFAULT_PREV_LABEL_TOKENS)
    )
    prev_title_tokens: list[str] = Field(
        default_factory=lambda: _env_list("PREV_TITLE_TOKENS", DEFAULT_PREV_TITLE_TOKENS)
    )

    @field_validator("page_cap")
    @classmethod
    def _check_page_cap(cls, value: int) -> int:
        return validate_positive_integer(value, "page_cap")

    @field_validator("page_tokens")
    @classmethod
    def _check_page_tokens(cls, value: list[str]) -> list[str]:
        if not value:
            raise ConfigValidationError("page_tokens 不能为空")
        return value


class HotkeyConfig(BaseModel):
    """快捷键配置"""

    prev: str = Field(default_factory=lambda: os.getenv("HOTKEY_PREV", DEFAULT_PREV_KEY))
    next: str = Field(default_factory=lambda: os.getenv("HOTKEY_NEXT", DEFAULT_NEXT_KEY))

    def as_key_map(self) -> dict[str, str]:
        return {"prev": self.prev, "next": self.next}


class ExtractorConfig(BaseModel):
    """字段提取器配置"""

    # 幂等标记属性名
    marker_attribute: str = Field(
        default_factory=lambda: os.getenv("MARKER_ATTRIBUTE", PROCESSED_ATTRIBUTE)
    )
    # 是否在提取后写入幂等标记
    mark_processed: bool = Field(
        default_factory=lambda: os.getenv("MARK_PROCESSED", "true").lower() == "true"
    )
    # 三项置信信号中至少需要满足的数量
    confidence_threshold: int = Field(
        default_factory=lambda: int(
            os.getenv("CONFIDENCE_THRESHOLD", str(DEFAULT_CONFIDENCE_THRESHOLD))
        )
    )

    @field_validator("confidence_threshold")
    @classmethod
    def _check_threshold(cls, value: int) -> int:
        # 共三项信号
        return validate_positive_integer(value, "confidence_threshold", max_value=3)


class Config(BaseModel):
    """全局配置"""

    pagination: PaginationConfig = Field(default_factory=PaginationConfig)
    hotkeys: HotkeyConfig = Field(default_factory=HotkeyConfig)
    extractor: ExtractorConfig = Field(default_factory=ExtractorConfig)

    @classmethod
    def load(cls) -> "Config":
        """加载配置"""
        return cls()


# 全局配置实例
config = Config.load()
