"""验证工具单元测试"""

import pytest
from rentalnav.common.validators import (
    validate_url,
    validate_key_map,
    validate_positive_integer,
)
from rentalnav.common.exceptions import (
    ConfigValidationError,
    KeyMapValidationError,
    URLValidationError,
    ValidationError,
)


DEFAULT_KEYS = {"prev": "a", "next": "d"}


class TestValidateUrl:
    """URL 验证测试"""

    def test_valid_https_url(self):
        """测试有效的 HTTPS URL"""
        url = validate_url("https://www.kleinanzeigen.de/s-wohnung-mieten/c203")
        assert url == "https://www.kleinanzeigen.de/s-wohnung-mieten/c203"

    def test_url_with_whitespace(self):
        """测试 URL 前后有空白"""
        assert validate_url("  https://example.com  ") == "https://example.com"

    def test_empty_url_raises_error(self):
        """测试空 URL 抛出异常"""
        with pytest.raises(URLValidationError) as exc_info:
            validate_url("")
        assert "URL 不能为空" in str(exc_info.value)

    def test_empty_url_allowed(self):
        """测试允许空 URL"""
        assert validate_url("", allow_empty=True) == ""

    def test_missing_scheme_raises_error(self):
        """测试缺少协议抛出异常"""
        with pytest.raises(URLValidationError) as exc_info:
            validate_url("www.kleinanzeigen.de/s-wohnung-mieten")
        assert "缺少协议" in str(exc_info.value)

    def test_invalid_scheme_raises_error(self):
        """测试无效协议抛出异常"""
        with pytest.raises(URLValidationError) as exc_info:
            validate_url("ftp://example.com")
        assert "不支持的协议" in str(exc_info.value)

    def test_missing_domain_raises_error(self):
        """测试缺少域名抛出异常"""
        with pytest.raises(URLValidationError) as exc_info:
            validate_url("https:///path")
        assert "缺少域名" in str(exc_info.value)

    def test_url_too_long_raises_error(self):
        """测试 URL 过长抛出异常"""
        with pytest.raises(URLValidationError) as exc_info:
            validate_url("https://example.com/" + "a" * 3000)
        assert "长度超过" in str(exc_info.value)

    def test_is_validation_error(self):
        """测试异常属于验证错误"""
        with pytest.raises(ValidationError):
            validate_url("")


class TestValidateKeyMap:
    """快捷键映射验证测试"""

    def test_defaults(self):
        """测试空映射使用默认值"""
        assert validate_key_map(None, DEFAULT_KEYS) == {"prev": "a", "next": "d"}

    def test_lowercased(self):
        """测试按键统一转为小写"""
        assert validate_key_map({"prev": "J", "next": " L "}, DEFAULT_KEYS) == {"prev": "j", "next": "l"}

    def test_partial(self):
        """测试部分覆盖"""
        assert validate_key_map({"prev": "q"}, DEFAULT_KEYS) == {"prev": "q", "next": "d"}

    def test_unknown_action(self):
        """测试未知动作"""
        with pytest.raises(KeyMapValidationError) as exc_info:
            validate_key_map({"up": "w"}, DEFAULT_KEYS)
        assert "未知的动作" in str(exc_info.value)

    def test_conflict(self):
        """测试上一页与下一页冲突"""
        with pytest.raises(KeyMapValidationError) as exc_info:
            validate_key_map({"next": "A"}, DEFAULT_KEYS)
        assert exc_info.value.reason == "上一页与下一页不能使用同一个按键"

    def test_blank_key(self):
        """测试按键为空白"""
        with pytest.raises(KeyMapValidationError):
            validate_key_map({"prev": "   "}, DEFAULT_KEYS)


class TestValidatePositiveInteger:
    """正整数验证测试"""

    def test_valid(self):
        assert validate_positive_integer(50, "page_cap") == 50

    def test_below_min(self):
        """测试小于最小值"""
        with pytest.raises(ConfigValidationError) as exc_info:
            validate_positive_integer(0, "page_cap")
        assert "不能小于 1" in str(exc_info.value)

    def test_above_max(self):
        """测试大于最大值"""
        with pytest.raises(ConfigValidationError):
            validate_positive_integer(4, "confidence_threshold", max_value=3)

    @pytest.mark.parametrize("value", ["5", 2.5, True, None])
    def test_not_integer(self, value):
        """测试非整数"""
        with pytest.raises(ConfigValidationError):
            validate_positive_integer(value, "page_cap")
