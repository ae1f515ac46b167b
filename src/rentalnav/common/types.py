"""核心数据类型定义"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, Field


# ============================================================================
# 翻页状态
# ============================================================================


class PageLocator(BaseModel):
    """从当前 URL 推导出的页面定位信息（只读，每次查询重新计算）"""

    page_number: int = Field(default=1, ge=1, description="当前页码（>= 1）")
    category_segment: str = Field(..., description="分类段，如 c203 / c203l1234")


class NavigationStatus(BaseModel):
    """翻页状态快照

    DOM 随时可能变化，调用方每次需要时应重新获取，不要缓存。
    """

    current_page: int = Field(..., ge=1, description="当前页码")
    at_start: bool = Field(..., description="是否已在第一页")
    at_end: bool = Field(..., description="是否已到最后一页")
    next_url: str | None = Field(default=None, description="下一页 URL（被阻止时为空）")
    prev_url: str | None = Field(default=None, description="上一页 URL（被阻止时为空）")


class NavigationOutcome(str, Enum):
    """一次导航请求的结果"""

    NAVIGATED = "navigated"
    NOT_NAVIGATED = "not_navigated"
    BLOCKED_AT_END = "blocked_at_end"
    IGNORED = "ignored"


@dataclass(frozen=True)
class KeyEvent:
    """宿主环境传入的按键事件"""

    key: str
    target_tag: str = ""  # 事件目标元素的标签名
    is_composing: bool = False  # 输入法组合输入中
    is_content_editable: bool = False


# ============================================================================
# 房源字段
# ============================================================================


class ExtractedListing(BaseModel):
    """单条房源的提取结果，每个字段都可能缺失"""

    price: float | None = Field(default=None, description="月租（欧元）")
    area: float | None = Field(default=None, description="面积（m²）")
    rooms: float | None = Field(default=None, description="房间数")
    postal_code: str | None = Field(default=None, description="邮编（5 位）")
    city: str | None = Field(default=None, description="城市")
    id: str | None = Field(default=None, description="data-adid")

    @property
    def price_per_sqm(self) -> float | None:
        """每平米租金"""
        if self.price is None or not self.area:
            return None
        return round(self.price / self.area, 2)
