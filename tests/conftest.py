"""pytest 全局配置和 fixtures

提供测试所需的 HTML 片段、文档工厂与导航回调。
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# 添加项目路径
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from rentalnav.common.document import HtmlDocument  # noqa: E402


BASE_URL = "https://www.kleinanzeigen.de/s-wohnung-mieten"


# ============================================================================
# HTML 片段
# ============================================================================

PAGINATION_FULL = """
<html><body>
  <div class="pagination">
    <a class="pagination-prev" href="/s-wohnung-mieten/seite:2/c203">Zurück</a>
    <span class="pagination-current">3</span>
    <a class="pagination-next" href="/s-wohnung-mieten/seite:4/c203">Nächste</a>
  </div>
</body></html>
"""

PAGINATION_NONE = """
<html><body>
  <div class="pagination"><span class="pagination-current">1</span></div>
</body></html>
"""

PAGINATION_NEXT_NOT_LINKED = """
<html><body>
  <div class="pagination">
    <a class="pagination-prev" href="/s-wohnung-mieten/page:2/c203">Zurück</a>
    <span class="pagination-not-linked pagination-next"></span>
  </div>
</body></html>
"""

PAGINATION_NEXT_ONLY = """
<html><body>
  <div class="pagination">
    <span class="pagination-current">1</span>
    <a class="pagination-next" href="/s-wohnung-mieten/seite:2/c203">Nächste</a>
  </div>
</body></html>
"""

AD_ITEM = """
<html><body>
<article class="aditem" data-adid="3091889498">
  <div class="aditem-main">
    <div class="aditem-main--top">
      <span class="aditem-main--top--left">26409 Wittmund (12 km)</span>
    </div>
    <div class="aditem-main--middle">
      <h2><a href="/s-anzeige/wohnung/3091889498">Helle 2-Zimmer-Wohnung</a></h2>
      <p class="aditem-main--middle--description">Schöne Wohnung mit Balkon, ruhig gelegen, Nähe Zentrum.</p>
      <p class="aditem-main--middle--price-shipping--price">800 €</p>
    </div>
    <div class="aditem-main--bottom">
      <span class="simpletag">72,2 m²</span>
      <span class="simpletag">2 Zi.</span>
    </div>
  </div>
</article>
</body></html>
"""


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def base_url():
    return BASE_URL


@pytest.fixture
def html_snippets():
    """常用的分页/房源 HTML 片段"""
    return {
        "full": PAGINATION_FULL,
        "none": PAGINATION_NONE,
        "next_not_linked": PAGINATION_NEXT_NOT_LINKED,
        "next_only": PAGINATION_NEXT_ONLY,
        "ad": AD_ITEM,
    }


@pytest.fixture
def make_document():
    """文档工厂：make_document(html, url)"""

    def _make(html: str, url: str = f"{BASE_URL}/c203") -> HtmlDocument:
        return HtmlDocument.from_html(html, url)

    return _make


@pytest.fixture
def ad_document(make_document):
    """包含单个房源条目的文档"""
    return make_document(AD_ITEM)


@pytest.fixture
def navigations():
    """记录导航目标的回调"""
    visited: list[str] = []
    return visited


class FakeKeySource:
    """模拟宿主的按键事件源"""

    def __init__(self):
        self.listeners = []
        self.add_calls = 0
        self.remove_calls = 0

    def add_listener(self, listener):
        self.add_calls += 1
        self.listeners.append(listener)

    def remove_listener(self, listener):
        self.remove_calls += 1
        self.listeners.remove(listener)

    def dispatch(self, event):
        return [listener(event) for listener in list(self.listeners)]


@pytest.fixture
def key_source():
    return FakeKeySource()
