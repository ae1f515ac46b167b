"""翻页导航模块"""

from .controller import KeySource, NavigationController, Navigator
from .link_resolver import LinkMatch, LinkResolver, LinkTier
from .state import NavigationState
from .url_model import PageURLModel

__all__ = [
    "KeySource",
    "LinkMatch",
    "LinkResolver",
    "LinkTier",
    "NavigationController",
    "NavigationState",
    "Navigator",
    "PageURLModel",
]
