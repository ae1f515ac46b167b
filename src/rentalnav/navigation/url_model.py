"""URL 模型 - 从当前地址推导页码/分类段，并构造目标页 URL"""

from __future__ import annotations

import re
from urllib.parse import urljoin, urlsplit, urlunsplit

from ..common.config import PaginationConfig, config
from ..common.constants import CATEGORY_SEGMENT_PATTERN
from ..common.document import Document
from ..common.logger import get_logger
from ..common.types import PageLocator

logger = get_logger(__name__)

_MULTI_SLASH_RE = re.compile(r"/{2,}")


def collapse_slashes(path: str) -> str:
    """避免路径中出现重复斜杠"""
    return _MULTI_SLASH_RE.sub("/", path)


def normalize_path(path: str) -> str:
    """用于比较的路径形式：折叠斜杠、消解 . 与 ..、去掉末尾斜杠"""
    segments: list[str] = []
    for segment in collapse_slashes(path).split("/"):
        if segment == ".":
            continue
        if segment == "..":
            if len(segments) > 1:
                segments.pop()
            continue
        segments.append(segment)
    return "/".join(segments).rstrip("/")


class PageURLModel:
    """页码与分类段都从 document.url 实时计算，不做缓存

    kleinanzeigen 的列表页形如 /s-wohnung-mieten/seite:3/c203l1234，
    第一页通常没有页码段。
    """

    def __init__(self, document: Document, settings: PaginationConfig | None = None):
        self.document = document
        self.settings = settings or config.pagination
        tokens = "|".join(re.escape(t) for t in self.settings.page_tokens)
        self._page_re = re.compile(rf"/({tokens}):(\d+)\b", re.IGNORECASE)
        self._category_re = re.compile(rf"/({CATEGORY_SEGMENT_PATTERN})\b", re.IGNORECASE)

    @property
    def current_url(self) -> str:
        return self.document.url or ""

    def _current_path(self) -> str:
        try:
            return urlsplit(self.current_url).path
        except ValueError:
            return ""

    def current_page_number(self) -> int:
        """当前页码；没有页码段视为第 1 页"""
        match = self._page_re.search(self._current_path())
        if not match:
            return 1
        return max(1, int(match.group(2)))

    def category_segment(self) -> str:
        """分类段（如 c203l1234），无法解析时返回配置的默认值"""
        match = self._category_re.search(self._current_path())
        if match:
            return match.group(1)
        return self.settings.default_category

    def locator(self) -> PageLocator:
        return PageLocator(
            page_number=self.current_page_number(),
            category_segment=self.category_segment(),
        )

    def compose_url(self, target_page: int) -> str:
        """构造指定页码的 URL

        - 已有页码段：直接替换
        - 没有页码段：插入到分类段之前
        - 路径中找不到分类段：追加到路径末尾
        query 与 fragment 原样保留。
        """
        target_page = max(1, int(target_page))
        try:
            parts = urlsplit(self.current_url)
        except ValueError:
            logger.debug(f"[URL] 当前地址无法解析，保持不变: {self.current_url}")
            return self.current_url

        path = collapse_slashes(parts.path)

        if self._page_re.search(path):
            path = self._page_re.sub(
                lambda m: f"/{m.group(1)}:{target_page}", path, count=1
            )
        else:
            token = self.settings.page_tokens[0]
            # 只在路径中真实存在的分类段前插入，默认分类段不参与定位
            category = self._category_re.search(path)
            if category:
                index = category.start()
                path = f"{path[:index]}/{token}:{target_page}{path[index:]}"
            else:
                path = collapse_slashes(f"{path.rstrip('/')}/{token}:{target_page}")

        return urlunsplit((parts.scheme, parts.netloc, path, parts.query, parts.fragment))

    def strip_page_segment(self, url: str | None = None) -> str:
        """去掉页码段后的 URL（第一页的规范形式）"""
        url = self.current_url if url is None else url
        try:
            parts = urlsplit(url)
        except ValueError:
            return url
        path = collapse_slashes(self._page_re.sub("", parts.path, count=1)) or "/"
        return urlunsplit((parts.scheme, parts.netloc, path, parts.query, parts.fragment))

    def urls_equivalent(self, a: str | None, b: str | None) -> bool:
        """两个 URL 是否指向同一页面

        以当前地址为基准解析后比较路径（忽略末尾斜杠）、query 与 fragment；
        任一方无法解析时退化为严格字符串比较。
        """
        if not a or not b:
            return False
        try:
            left = urlsplit(urljoin(self.current_url, a))
            right = urlsplit(urljoin(self.current_url, b))
        except ValueError:
            return a == b
        return (
            normalize_path(left.path) == normalize_path(right.path)
            and left.query == right.query
            and left.fragment == right.fragment
        )
