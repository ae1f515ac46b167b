"""URL 模型单元测试"""

import pytest

from rentalnav.common.config import PaginationConfig
from rentalnav.navigation.url_model import PageURLModel, normalize_path


BASE = "https://www.kleinanzeigen.de/s-wohnung-mieten"


@pytest.fixture
def model_for(make_document):
    """按 URL 构造 URL 模型"""

    def _make(url: str) -> PageURLModel:
        return PageURLModel(make_document("<html><body></body></html>", url))

    return _make


class TestCurrentPageNumber:
    """页码解析测试"""

    def test_numbered_page(self, model_for):
        """测试带页码段的 URL"""
        assert model_for(f"{BASE}/seite:3/c203").current_page_number() == 3

    def test_unnumbered_first_page(self, model_for):
        """测试第一页没有页码段"""
        assert model_for(f"{BASE}/c203").current_page_number() == 1

    def test_page_token(self, model_for):
        """测试 page: 形式的页码段"""
        assert model_for(f"{BASE}/page:7/c203").current_page_number() == 7

    def test_page_zero_clamped(self, model_for):
        """测试页码不小于 1"""
        assert model_for(f"{BASE}/seite:0/c203").current_page_number() == 1

    def test_page_segment_in_query_ignored(self, model_for):
        """测试 query 中的页码不被当作页码段"""
        assert model_for(f"{BASE}/c203?ref=/seite:9").current_page_number() == 1

    def test_malformed_url(self, model_for):
        """测试无法解析的 URL 视为第 1 页"""
        assert model_for("http://[::1/seite:4/c203").current_page_number() == 1


class TestCategorySegment:
    """分类段解析测试"""

    def test_category_with_suffix(self, model_for):
        """测试带地区后缀的分类段"""
        assert model_for(f"{BASE}/seite:3/c203l1234").category_segment() == "c203l1234"

    def test_category_fallback(self, model_for):
        """测试无法解析时使用默认分类段"""
        assert model_for("https://www.kleinanzeigen.de/s-haus-mieten/berlin").category_segment() == "c203"

    def test_custom_default(self, make_document):
        """测试配置的默认分类段"""
        settings = PaginationConfig(default_category="c208")
        model = PageURLModel(make_document("<p></p>", "https://example.com/list"), settings)
        assert model.category_segment() == "c208"

    def test_locator(self, model_for):
        """测试定位信息"""
        locator = model_for(f"{BASE}/seite:5/c203l3331").locator()
        assert locator.page_number == 5
        assert locator.category_segment == "c203l3331"


class TestComposeUrl:
    """目标 URL 构造测试"""

    def test_replace_existing_segment(self, model_for):
        """测试替换已有页码段"""
        model = model_for(f"{BASE}/seite:3/c203l1234")
        assert model.compose_url(4) == f"{BASE}/seite:4/c203l1234"

    def test_keeps_page_token(self, model_for):
        """测试保留原有的页码段前缀"""
        model = model_for(f"{BASE}/page:3/c203")
        assert model.compose_url(4) == f"{BASE}/page:4/c203"

    def test_insert_before_category(self, model_for):
        """测试在分类段之前插入页码段"""
        model = model_for(f"{BASE}/c203")
        assert model.compose_url(2) == f"{BASE}/seite:2/c203"

    def test_query_and_fragment_preserved(self, model_for):
        """测试保留 query 与 fragment"""
        model = model_for(f"{BASE}/c203?sortingField=PRICE_AMOUNT#results")
        assert model.compose_url(2) == f"{BASE}/seite:2/c203?sortingField=PRICE_AMOUNT#results"

    def test_append_when_category_missing(self, model_for):
        """测试路径中没有分类段时追加到末尾"""
        model = model_for("https://www.kleinanzeigen.de/s-haus-mieten/berlin/")
        composed = model.compose_url(2)
        assert composed == "https://www.kleinanzeigen.de/s-haus-mieten/berlin/seite:2"
        assert "c203" not in composed

    def test_double_slashes_collapsed(self, model_for):
        """测试折叠重复斜杠"""
        model = model_for(f"{BASE}//seite:3//c203")
        assert model.compose_url(4) == f"{BASE}/seite:4/c203"

    @pytest.mark.parametrize("start", [f"{BASE}/c203", f"{BASE}/seite:7/c203"])
    def test_compose_then_parse(self, make_document, start):
        """测试构造的 URL 解析回请求的页码（1-50）"""
        for page in range(1, 51):
            composed = PageURLModel(make_document("<p></p>", start)).compose_url(page)
            assert PageURLModel(make_document("<p></p>", composed)).current_page_number() == page

    def test_strip_page_segment(self, model_for):
        """测试去掉页码段"""
        model = model_for(f"{BASE}/seite:3/c203?x=1")
        assert model.strip_page_segment() == f"{BASE}/c203?x=1"


class TestUrlsEquivalent:
    """URL 等价比较测试"""

    @pytest.mark.parametrize(
        "url",
        [
            f"{BASE}/seite:2/c203",
            f"{BASE}/seite:2/c203/",
            f"{BASE}/c203?a=1#top",
            "/s-wohnung-mieten/c203",
            "http://[::1/seite:2",
        ],
    )
    def test_reflexive(self, model_for, url):
        """测试任意 URL 与自身等价"""
        assert model_for(f"{BASE}/c203").urls_equivalent(url, url)

    def test_trailing_slash_ignored(self, model_for):
        """测试忽略末尾斜杠"""
        model = model_for(f"{BASE}/c203")
        assert model.urls_equivalent(f"{BASE}/seite:2/c203", f"{BASE}/seite:2/c203/")

    def test_relative_resolved_against_current(self, model_for):
        """测试相对地址以当前地址为基准解析"""
        model = model_for(f"{BASE}/c203")
        assert model.urls_equivalent("/s-wohnung-mieten/seite:2/c203", f"{BASE}/seite:2/c203")

    def test_equivalent_path_forms(self, model_for):
        """测试重复斜杠与 . 段"""
        model = model_for(f"{BASE}/c203")
        assert model.urls_equivalent(f"{BASE}//seite:2/./c203", f"{BASE}/seite:2/c203")

    def test_query_differs(self, model_for):
        """测试 query 不同"""
        model = model_for(f"{BASE}/c203")
        assert not model.urls_equivalent(f"{BASE}/c203?a=1", f"{BASE}/c203?a=2")

    def test_fragment_differs(self, model_for):
        """测试 fragment 不同"""
        model = model_for(f"{BASE}/c203")
        assert not model.urls_equivalent(f"{BASE}/c203#a", f"{BASE}/c203#b")

    def test_empty_never_equal(self, model_for):
        """测试空 URL"""
        model = model_for(f"{BASE}/c203")
        assert not model.urls_equivalent(None, f"{BASE}/c203")
        assert not model.urls_equivalent("", "")

    def test_malformed_falls_back_to_string_equality(self, model_for):
        """测试无法解析时退化为字符串比较"""
        model = model_for(f"{BASE}/c203")
        assert not model.urls_equivalent("http://[::1/seite:2", "http://[::1/seite:3")


class TestNormalizePath:
    """路径规范化测试"""

    def test_dot_segments(self):
        assert normalize_path("/a/b/../c/./d/") == "/a/c/d"

    def test_root(self):
        assert normalize_path("/") == ""
