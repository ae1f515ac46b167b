"""导航控制器 - 快捷键与导航执行

快捷键状态（启用标记、按键映射）由控制器实例持有，由构造它的宿主层负责
enable/disable 生命周期，不使用模块级全局状态。
"""

from __future__ import annotations

from typing import Callable, Protocol

from ..common.config import HotkeyConfig, config
from ..common.constants import DEFAULT_NEXT_KEY, DEFAULT_PREV_KEY, TEXT_INPUT_TAGS
from ..common.logger import get_navigation_logger
from ..common.types import KeyEvent, NavigationOutcome, NavigationStatus
from ..common.exceptions import KeyMapValidationError
from ..common.validators import validate_key_map
from .state import NavigationState

logger = get_navigation_logger()

Navigator = Callable[[str], None]
KeyListener = Callable[[KeyEvent], NavigationOutcome]


class KeySource(Protocol):
    """宿主环境的按键事件源"""

    def add_listener(self, listener: KeyListener) -> None: ...

    def remove_listener(self, listener: KeyListener) -> None: ...


class NavigationController:
    """A/D 翻页控制器

    Args:
        state: 翻页状态
        navigator: 同标签页打开 URL 的回调（导航是终止动作，无返回值）
        key_source: 可选的按键事件源；为空时由宿主直接调用 handle_key
        hotkeys: 默认按键映射
    """

    def __init__(
        self,
        state: NavigationState,
        navigator: Navigator,
        key_source: KeySource | None = None,
        hotkeys: HotkeyConfig | None = None,
    ):
        self.state = state
        self.navigator = navigator
        self.key_source = key_source
        self._default_keys = self._resolve_keys(
            (hotkeys or config.hotkeys).as_key_map(),
            {"prev": DEFAULT_PREV_KEY, "next": DEFAULT_NEXT_KEY},
            fallback={"prev": DEFAULT_PREV_KEY, "next": DEFAULT_NEXT_KEY},
        )
        self.keys = dict(self._default_keys)
        self.enabled = False
        self._bound = False

    # ------------------------------------------------------------------
    # 生命周期
    # ------------------------------------------------------------------

    def enable_shortcuts(self, key_map: dict[str, str] | None = None) -> None:
        """启用快捷键；重复调用只会更新按键映射"""
        if key_map is not None:
            self.keys = self._resolve_keys(key_map, self._default_keys, fallback=self.keys)

        if self.enabled:
            return

        if self.key_source is not None and not self._bound:
            self.key_source.add_listener(self.handle_key)
            self._bound = True
        self.enabled = True
        logger.info(f'[NAV] 快捷键翻页已启用 (prev="{self.keys["prev"]}", next="{self.keys["next"]}")')

    @staticmethod
    def _resolve_keys(
        key_map: dict[str, str] | None,
        defaults: dict[str, str],
        fallback: dict[str, str],
    ) -> dict[str, str]:
        """按键映射无效时不中断，记录警告并沿用 fallback"""
        try:
            return validate_key_map(key_map, defaults)
        except KeyMapValidationError as e:
            logger.warning(
                f'[NAV] {e}，沿用按键映射 (prev="{fallback["prev"]}", next="{fallback["next"]}")'
            )
            return dict(fallback)

    def disable_shortcuts(self) -> None:
        """停用快捷键；未启用时调用也是安全的"""
        if not self.enabled:
            return
        if self.key_source is not None and self._bound:
            self.key_source.remove_listener(self.handle_key)
            self._bound = False
        self.enabled = False
        logger.info("[NAV] 快捷键翻页已停用")

    # ------------------------------------------------------------------
    # 按键处理
    # ------------------------------------------------------------------

    def _is_text_input(self, event: KeyEvent) -> bool:
        return event.is_content_editable or (event.target_tag or "").lower() in TEXT_INPUT_TAGS

    def handle_key(self, event: KeyEvent) -> NavigationOutcome:
        """处理一次按键

        输入框中的按键和输入法组合中的按键一律忽略。
        """
        if not self.enabled:
            return NavigationOutcome.IGNORED
        if self._is_text_input(event) or event.is_composing:
            return NavigationOutcome.IGNORED

        key = (event.key or "").lower()
        if key == self.keys["prev"]:
            outcome = self.go_prev()
            if outcome is not NavigationOutcome.NAVIGATED:
                logger.info("[NAV] 已在开头或没有可用的上一页链接")
            return outcome

        if key == self.keys["next"]:
            if self.state.is_at_end():
                logger.info("[NAV] 已到末页，下一页被阻止")
                return NavigationOutcome.BLOCKED_AT_END
            outcome = self.go_next()
            if outcome is not NavigationOutcome.NAVIGATED:
                logger.info("[NAV] 无法前进，下一页被阻止")
            return outcome

        return NavigationOutcome.IGNORED

    # ------------------------------------------------------------------
    # 导航
    # ------------------------------------------------------------------

    def navigate(self, url: str | None) -> NavigationOutcome:
        """在当前标签页打开 url；url 为空或与当前地址相同时不做任何事"""
        if not url:
            return NavigationOutcome.NOT_NAVIGATED
        if self.state.url_model.urls_equivalent(url, self.state.current_url):
            return NavigationOutcome.NOT_NAVIGATED
        logger.debug(f"[NAV] 跳转: {url}")
        self.navigator(url)
        return NavigationOutcome.NAVIGATED

    def go_next(self) -> NavigationOutcome:
        return self.navigate(self.state.resolve_next_url())

    def go_prev(self) -> NavigationOutcome:
        return self.navigate(self.state.resolve_prev_url())

    def get_status(self) -> NavigationStatus:
        return self.state.status()
