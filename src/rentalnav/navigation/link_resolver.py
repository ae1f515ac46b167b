"""分页链接解析 - 按层级兜底查找"下一页"/"上一页"

每个方向是一条有序的策略链，第一个定位到元素的层级胜出，后续层级不再查询：

1. 分页控件上的真实链接（href）
2. 同一控件上的 data-url（JS 驱动、非 <a> 的控件）
3. aria-label / title 中包含本地化关键词的任意元素
4. 仅"下一页"：带 pagination-not-linked 的占位元素（下一页存在但没有可用链接）
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable
from urllib.parse import urljoin

from ..common.config import PaginationConfig, config
from ..common.constants import NEXT_CLASS, NOT_LINKED_CLASS, PREV_CLASS
from ..common.document import Document, class_xpath
from ..common.logger import get_logger

logger = get_logger(__name__)

Locator = Callable[[Document], Any]


@dataclass(frozen=True)
class LinkTier:
    """策略链中的一个层级"""

    name: str
    locate: Locator  # 返回命中的元素或 None


@dataclass(frozen=True)
class LinkMatch:
    """某个层级的命中结果；url 可能为空（只有控件、没有链接）"""

    tier: str
    element: Any
    url: str | None


def _contains_token(value: str | None, tokens: list[str]) -> bool:
    if not value:
        return False
    value = value.casefold()
    return any(token.casefold() in value for token in tokens)


def _by_xpath(expr: str) -> Locator:
    return lambda document: document.first(expr)


def _by_attribute_tokens(rules: list[tuple[str, list[str]]]) -> Locator:
    """按文档顺序查找第一个属性值包含关键词的元素（大小写不敏感）"""
    attrs = sorted({name for name, _ in rules})
    expr = "//*[" + " or ".join(f"@{name}" for name in attrs) + "]"

    def locate(document: Document) -> Any:
        for element in document.xpath(expr):
            for name, tokens in rules:
                if _contains_token(document.attr(element, name), tokens):
                    return element
        return None

    return locate


def _not_linked_next(tokens: list[str]) -> Locator:
    def locate(document: Document) -> Any:
        for element in document.xpath(f"//*[{class_xpath(NOT_LINKED_CLASS)}]"):
            if (
                document.has_class(element, NEXT_CLASS)
                or _contains_token(document.attr(element, "title"), tokens)
                or _contains_token(document.text(element), tokens)
            ):
                return element
        return None

    return locate


class LinkResolver:
    """分页链接解析器"""

    def __init__(self, document: Document, settings: PaginationConfig | None = None):
        self.document = document
        self.settings = settings or config.pagination
        self.next_tiers = self._build_next_tiers()
        self.prev_tiers = self._build_prev_tiers()

    def _build_next_tiers(self) -> list[LinkTier]:
        tokens = self.settings.next_tokens
        return [
            LinkTier("href", _by_xpath(f"//*[{class_xpath(NEXT_CLASS)}][@href]")),
            LinkTier("data-url", _by_xpath(f"//*[{class_xpath(NEXT_CLASS)}][@data-url]")),
            LinkTier("aria-title", _by_attribute_tokens([("aria-label", tokens), ("title", tokens)])),
            LinkTier("not-linked", _not_linked_next(tokens)),
        ]

    def _build_prev_tiers(self) -> list[LinkTier]:
        return [
            LinkTier("href", _by_xpath(f"//*[{class_xpath(PREV_CLASS)}][@href]")),
            LinkTier("data-url", _by_xpath(f"//*[{class_xpath(PREV_CLASS)}][@data-url]")),
            LinkTier(
                "aria-title",
                _by_attribute_tokens([
                    ("aria-label", self.settings.prev_label_tokens),
                    ("title", self.settings.prev_title_tokens),
                ]),
            ),
        ]

    # ------------------------------------------------------------------
    # URL 工具
    # ------------------------------------------------------------------

    def to_absolute(self, maybe_relative: str | None) -> str | None:
        """相对地址 → 绝对地址（以当前页面为基准）"""
        if not maybe_relative or not maybe_relative.strip():
            return None
        try:
            return urljoin(self.document.url or "", maybe_relative.strip())
        except ValueError:
            return None

    def href_like(self, element: Any) -> str | None:
        """读取 href，退而求其次读取 data-url"""
        return self.document.attr(element, "href") or self.document.attr(element, "data-url")

    # ------------------------------------------------------------------
    # 策略链
    # ------------------------------------------------------------------

    def _resolve(self, tiers: list[LinkTier], direction: str) -> LinkMatch | None:
        for tier in tiers:
            element = tier.locate(self.document)
            if element is None:
                continue
            url = self.to_absolute(self.href_like(element))
            logger.debug(f"[Link] {direction} 命中层级 {tier.name}: {url}")
            return LinkMatch(tier=tier.name, element=element, url=url)
        return None

    def match_next(self) -> LinkMatch | None:
        return self._resolve(self.next_tiers, "next")

    def match_prev(self) -> LinkMatch | None:
        return self._resolve(self.prev_tiers, "prev")

    def find_next(self) -> str | None:
        """DOM 中最好的"下一页" URL"""
        match = self.match_next()
        return match.url if match else None

    def find_prev(self) -> str | None:
        """DOM 中最好的"上一页" URL"""
        match = self.match_prev()
        return match.url if match else None

    def has_next_affordance(self) -> bool:
        """DOM 是否以任何形式表示存在下一页（与能否拿到 URL 无关）"""
        return self.match_next() is not None

    def has_prev_affordance(self) -> bool:
        return self.match_prev() is not None
