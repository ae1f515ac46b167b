"""翻页状态 - 组合 DOM 信号、页数上限与 URL 自检判断首页/末页"""

from __future__ import annotations

from ..common.config import PaginationConfig, config
from ..common.document import Document
from ..common.logger import get_navigation_logger
from ..common.types import NavigationStatus
from .link_resolver import LinkResolver
from .url_model import PageURLModel

logger = get_navigation_logger()


class NavigationState:
    """所有判断都基于当前文档实时计算，页面可能随时变化，不做缓存"""

    def __init__(
        self,
        document: Document,
        settings: PaginationConfig | None = None,
        url_model: PageURLModel | None = None,
        resolver: LinkResolver | None = None,
    ):
        self.document = document
        self.settings = settings or config.pagination
        self.url_model = url_model or PageURLModel(document, self.settings)
        self.resolver = resolver or LinkResolver(document, self.settings)

    @property
    def current_url(self) -> str:
        return self.url_model.current_url

    def current_page_number(self) -> int:
        return self.url_model.current_page_number()

    def is_at_global_ceiling(self) -> bool:
        """是否达到服务端的硬性页数上限"""
        return self.current_page_number() >= self.settings.page_cap

    def is_at_start(self) -> bool:
        """是否在第一页

        第一页常常没有页码段；DOM 中没有"上一页"控件时同样视为开头。
        """
        return self.current_page_number() <= 1 or not self.resolver.has_prev_affordance()

    def is_at_end(self) -> bool:
        """是否已到末页（任一条件成立即可，按开销从低到高判断）

        - DOM 中没有任何形式的"下一页"
        - 达到页数上限
        - 自检：下一页的 URL 与当前 URL 相同，说明服务端不再前进
        """
        if not self.resolver.has_next_affordance():
            return True
        if self.is_at_global_ceiling():
            return True

        intended = self.url_model.compose_url(self.current_page_number() + 1)
        if self.url_model.urls_equivalent(intended, self.current_url):
            logger.debug(f"[NAV] 下一页 URL 与当前相同，视为末页: {intended}")
            return True

        return False

    def _is_progress(self, url: str | None) -> bool:
        return bool(url) and not self.url_model.urls_equivalent(url, self.current_url)

    def resolve_next_url(self) -> str | None:
        """下一页 URL（DOM → URL 推算）；无法前进时返回 None"""
        match = self.resolver.match_next()
        if match and match.url:
            if self._is_progress(match.url):
                return match.url
            logger.debug(f"[NAV] DOM 下一页指向当前页面，已阻止: {match.url}")
            return None

        next_url = self.url_model.compose_url(self.current_page_number() + 1)
        if not self._is_progress(next_url):
            return None
        return next_url

    def resolve_prev_url(self) -> str | None:
        """上一页 URL（DOM → URL 推算）；无法后退时返回 None"""
        match = self.resolver.match_prev()
        if match and match.url:
            if self._is_progress(match.url):
                return match.url
            logger.debug(f"[NAV] DOM 上一页指向当前页面，已阻止: {match.url}")
            return None

        page = self.current_page_number()
        target = max(1, page - 1)
        prev_url = self.url_model.compose_url(target)

        # 第一页可能没有页码段：目标仍是当前页时，改用去掉页码段的地址
        if target == 1 and (page <= 1 or not self._is_progress(prev_url)):
            prev_url = self.url_model.strip_page_segment()

        if not self._is_progress(prev_url):
            return None
        return prev_url

    def status(self) -> NavigationStatus:
        """当前翻页状态快照"""
        return NavigationStatus(
            current_page=self.current_page_number(),
            at_start=self.is_at_start(),
            at_end=self.is_at_end(),
            next_url=self.resolve_next_url(),
            prev_url=self.resolve_prev_url(),
        )
