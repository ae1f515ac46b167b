"""rentalnav - kleinanzeigen 租房列表页的翻页导航与字段提取"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

__version__ = "0.1.0"

if TYPE_CHECKING:
    from .extractor import ListingExtractor as ListingExtractor
    from .navigation import NavigationController as NavigationController
    from .navigation import NavigationState as NavigationState

__all__ = [
    "__version__",
    "ListingExtractor",
    "NavigationController",
    "NavigationState",
]


def __getattr__(name: str) -> Any:
    """Lazy exports to keep `import rentalnav` cheap."""
    if name == "ListingExtractor":
        from .extractor import ListingExtractor

        return ListingExtractor
    if name in {"NavigationController", "NavigationState"}:
        from .navigation import NavigationController, NavigationState

        return NavigationController if name == "NavigationController" else NavigationState
    raise AttributeError(f"module 'rentalnav' has no attribute '{name}'")
