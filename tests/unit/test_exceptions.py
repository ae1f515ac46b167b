"""异常类单元测试"""

import pytest
from rentalnav.common.exceptions import (
    RentalNavError,
    DocumentError,
    DocumentLoadError,
    ValidationError,
    URLValidationError,
    KeyMapValidationError,
    ConfigError,
    ConfigValidationError,
)


class TestExceptionHierarchy:
    """异常类层次结构测试"""

    def test_base_exception(self):
        """测试基础异常"""
        with pytest.raises(RentalNavError):
            raise RentalNavError("基础错误")

    def test_document_error_inheritance(self):
        """测试文档错误继承关系"""
        error = DocumentLoadError("page.html", "HTML 内容为空")
        assert isinstance(error, DocumentError)
        assert isinstance(error, RentalNavError)
        assert error.source == "page.html"
        assert "HTML 内容为空" in str(error)

    def test_url_validation_error(self):
        """测试 URL 验证错误"""
        error = URLValidationError("ftp://x", "不支持的协议")
        assert isinstance(error, ValidationError)
        assert error.url == "ftp://x"
        assert error.reason == "不支持的协议"

    def test_key_map_validation_error(self):
        """测试快捷键映射验证错误"""
        error = KeyMapValidationError({"prev": "d", "next": "d"}, "冲突")
        assert isinstance(error, ValidationError)
        assert isinstance(error, RentalNavError)
        assert error.key_map == {"prev": "d", "next": "d"}

    def test_config_error_inheritance(self):
        """测试配置错误继承关系"""
        error = ConfigValidationError("page_cap 不能小于 1")
        assert isinstance(error, ConfigError)
        assert isinstance(error, RentalNavError)


class TestExceptionCatching:
    """异常捕获测试"""

    def test_catch_all_with_base(self):
        """测试用基类捕获所有自定义异常"""
        exceptions = [
            DocumentLoadError("x"),
            URLValidationError(""),
            KeyMapValidationError({}, "x"),
            ConfigValidationError("x"),
        ]
        for exc in exceptions:
            with pytest.raises(RentalNavError):
                raise exc
