"""文档模型

翻页引擎与字段提取器共享的页面抽象：可按 XPath 查询的元素树，
加上当前页面地址。核心逻辑只读文档，唯一的写操作是提取器的幂等标记属性。
"""

from __future__ import annotations

import abc
import re
from pathlib import Path
from typing import Any

from lxml import etree
from lxml import html as lxml_html

from .exceptions import DocumentLoadError
from .logger import get_logger

logger = get_logger(__name__)

# NBSP 及各类 Unicode 空白/零宽字符
_UNICODE_SPACE_RE = re.compile("[\u00a0\u2000-\u200d\u202f\u205f\u3000]")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_text(text: str | None) -> str:
    """折叠空白并把特殊空格替换为普通空格"""
    if not text:
        return ""
    text = _UNICODE_SPACE_RE.sub(" ", text)
    return _WHITESPACE_RE.sub(" ", text).strip()


def class_xpath(cls: str) -> str:
    """生成按 class 精确匹配的 XPath 谓词（等价于 CSS 的 .cls）"""
    return f"contains(concat(' ', normalize-space(@class), ' '), ' {cls} ')"


class Document(abc.ABC):
    """宿主页面提供的文档能力"""

    def __init__(self, url: str):
        self.url = url

    @abc.abstractmethod
    def xpath(self, expr: str, root: Any = None) -> list[Any]:
        """按文档顺序返回匹配的元素；root 为空时在整个文档中查询"""

    @abc.abstractmethod
    def text(self, element: Any) -> str:
        """元素的规范化文本内容"""

    @abc.abstractmethod
    def attr(self, element: Any, name: str) -> str | None:
        """读取属性"""

    @abc.abstractmethod
    def set_attr(self, element: Any, name: str, value: str) -> None:
        """写入属性"""

    @abc.abstractmethod
    def tag(self, element: Any) -> str:
        """小写标签名"""

    def first(self, expr: str, root: Any = None) -> Any | None:
        """返回第一个匹配元素"""
        found = self.xpath(expr, root)
        return found[0] if found else None

    def has_class(self, element: Any, cls: str) -> bool:
        return cls in (self.attr(element, "class") or "").split()


class HtmlDocument(Document):
    """基于 lxml.html 的文档实现"""

    def __init__(self, tree: Any, url: str):
        super().__init__(url)
        self.tree = tree

    @classmethod
    def from_html(cls, html_content: str, url: str) -> "HtmlDocument":
        """解析 HTML 字符串

        Raises:
            DocumentLoadError: 内容为空或无法解析时
        """
        if not html_content or not html_content.strip():
            raise DocumentLoadError(url, "HTML 内容为空")

        try:
            tree = lxml_html.fromstring(html_content)
        except (etree.ParserError, etree.XMLSyntaxError, ValueError):
            # 如果解析失败，尝试作为片段解析
            try:
                tree = lxml_html.fragment_fromstring(html_content, create_parent="div")
            except (etree.ParserError, etree.XMLSyntaxError, ValueError) as e:
                raise DocumentLoadError(url, f"HTML 解析失败: {e}") from e

        return cls(tree, url)

    @classmethod
    def from_file(cls, path: str | Path, url: str) -> "HtmlDocument":
        """读取本地保存的 HTML 文件"""
        path = Path(path)
        try:
            content = path.read_text(encoding="utf-8")
        except OSError as e:
            raise DocumentLoadError(str(path), f"文件读取失败: {e}") from e
        return cls.from_html(content, url)

    def xpath(self, expr: str, root: Any = None) -> list[Any]:
        node = self.tree if root is None else root
        try:
            result = node.xpath(expr)
        except etree.XPathError as e:
            logger.debug(f"[Document] XPath 无效: {expr} ({e})")
            return []
        if not isinstance(result, list):
            return []
        return [item for item in result if isinstance(item, etree._Element)]

    def text(self, element: Any) -> str:
        if element is None:
            return ""
        return normalize_text(element.text_content())

    def attr(self, element: Any, name: str) -> str | None:
        if element is None:
            return None
        return element.get(name)

    def set_attr(self, element: Any, name: str, value: str) -> None:
        element.set(name, value)

    def tag(self, element: Any) -> str:
        tag = getattr(element, "tag", "")
        return tag.lower() if isinstance(tag, str) else ""
