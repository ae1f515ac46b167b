"""常量定义

kleinanzeigen.de 的页面结构相关常量（选择器、URL 片段、合理性区间）。
"""

from __future__ import annotations

# ============================================================================
# 翻页相关
# ============================================================================

# 服务端对搜索结果的硬性页数上限
DEFAULT_PAGE_CAP = 50

# 租房分类的默认分类段（仅在 URL 中无法解析时使用）
DEFAULT_CATEGORY_SEGMENT = "c203"

# 页码段的前缀，第一个用于插入新的页码段
DEFAULT_PAGE_TOKENS = ("seite", "page")

# 分类段：3-5 位数字，可带字母数字后缀（如 c203l1234）
CATEGORY_SEGMENT_PATTERN = r"c\d{3,5}[a-z0-9-]*"

# "下一页"/"上一页" 的本地化关键词（大小写不敏感）
DEFAULT_NEXT_TOKENS = ("nächste",)
DEFAULT_PREV_LABEL_TOKENS = ("vorherige",)
DEFAULT_PREV_TITLE_TOKENS = ("zurück", "vorherige")

# 分页控件 class
NEXT_CLASS = "pagination-next"
PREV_CLASS = "pagination-prev"
NOT_LINKED_CLASS = "pagination-not-linked"

# ============================================================================
# 快捷键
# ============================================================================

DEFAULT_PREV_KEY = "a"
DEFAULT_NEXT_KEY = "d"

# 焦点位于这些元素上时不处理快捷键
TEXT_INPUT_TAGS = frozenset({"input", "textarea"})

# ============================================================================
# 字段提取相关
# ============================================================================

# 幂等标记属性
PROCESSED_ATTRIBUTE = "data-rental-analyzer-enhanced"

# 房源条目
AD_ITEM_XPATH = "//article[@data-adid]"
AD_ID_ATTRIBUTE = "data-adid"

# 合理性区间 (下限, 上限, 是否包含边界)
PLAUSIBILITY_RANGES: dict[str, tuple[float, float, bool]] = {
    "area": (5, 1000, False),
    "price": (50, 20000, False),
    "rooms": (1, 12, True),
}

# 置信度门槛：三项信号中至少满足两项
DEFAULT_CONFIDENCE_THRESHOLD = 2

# 独立标签判定
STANDALONE_MAX_LENGTH = 25
STANDALONE_MAX_PUNCTUATION = 1
SHORT_TEXT_MAX_LENGTH = 20

# ============================================================================
# 输入验证
# ============================================================================

MAX_URL_LENGTH = 2048
VALID_URL_SCHEMES = frozenset({"http", "https"})
