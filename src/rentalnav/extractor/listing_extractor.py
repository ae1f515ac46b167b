"""房源字段提取器

针对单个房源条目（article[data-adid]）提取价格、面积、房间数、邮编与城市。
每个字段独立执行：按顺序尝试主选择器 → 文本扫描兜底（只看最内层匹配） → 数值解析 → 合理性区间 → 置信度门槛，
任何一步不满足都报告为缺失，不做低置信度的猜测。
"""

from __future__ import annotations

import hashlib
import json
import re
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..common.config import ExtractorConfig, config
from ..common.constants import AD_ID_ATTRIBUTE, AD_ITEM_XPATH, STANDALONE_MAX_LENGTH
from ..common.document import Document, class_xpath
from ..common.logger import get_extractor_logger
from ..common.types import ExtractedListing
from .normalize import looks_like_standalone, normalize_number, plausible
from .scoring import ConfidenceSignals, FieldCandidate

logger = get_extractor_logger()

# 可能承载字段文本的后代元素
CANDIDATE_XPATH = ".//span | .//p"

_SIMPLETAG_XPATH = f".//*[{class_xpath('aditem-main--bottom')}]//span[{class_xpath('simpletag')}]"

# 带 "Wohnfläche"/"Quadratmeter" 标签的短文本：最内层的标签元素，以及它的父元素
_AREA_LABEL = "contains(., 'Wohnfläche') or contains(., 'Wohnflaeche') or contains(., 'Quadratmeter')"
_SHORT_TEXT = f"string-length(normalize-space(.)) < {STANDALONE_MAX_LENGTH}"
_AREA_LABEL_XPATH = f".//*[{_AREA_LABEL}][not(*[{_AREA_LABEL}])][{_SHORT_TEXT}]"
_AREA_LABEL_PARENT_XPATH = f".//*[{_AREA_LABEL}][not(*[{_AREA_LABEL}])]/parent::*[{_SHORT_TEXT}]"

_LOCATION_RE = re.compile(r"\b(\d{5})\b\s+([^\W\d_](?:[^\W\d_]|[ .\-])+)")


@dataclass(frozen=True)
class FieldRule:
    """单个字段的提取规则"""

    kind: str  # price / area / rooms，同时是合理性区间的键
    primary_xpaths: tuple[str, ...]  # 高置信度的主选择器，按顺序尝试（相对于房源条目）
    pattern: re.Pattern  # 数值 + 单位
    primary_token: re.Pattern | None = None  # 主选择器命中元素必须包含的单位或标签


FIELD_RULES: tuple[FieldRule, ...] = (
    FieldRule(
        kind="price",
        primary_xpaths=(
            f".//*[{class_xpath('aditem-main--middle--price-shipping--price')}]",
            ".//*[contains(@aria-label, 'Preis')]",
            ".//*[@data-testid='ad-price']",
            f".//*[{class_xpath('ad-price')}]",
            f".//*[{class_xpath('price-block__price')}]",
        ),
        pattern=re.compile(r"[\d.,]+\s*€(?!\w)"),
    ),
    FieldRule(
        kind="area",
        primary_xpaths=(
            _SIMPLETAG_XPATH,
            ".//*[@data-testid='ad-living-space']",
            f".//*[{class_xpath('details-list__item')}]",
            _AREA_LABEL_XPATH,
            _AREA_LABEL_PARENT_XPATH,
        ),
        pattern=re.compile(r"[\d.,]+\s*(?:m²|qm)"),
        primary_token=re.compile(r"m²|qm|Wohnfl(?:ä|ae)che|Quadratmeter", re.IGNORECASE),
    ),
    FieldRule(
        kind="rooms",
        primary_xpaths=(_SIMPLETAG_XPATH,),
        pattern=re.compile(r"[\d.,]+\s*Zi"),
        primary_token=re.compile(r"Zi"),
    ),
)


class ListingExtractor:
    """房源字段提取器

    提取完成后会在条目元素上写入幂等标记（文本指纹 + 结果），
    同一个未变化的元素再次提取时直接返回标记中的结果。
    """

    def __init__(
        self,
        document: Document,
        settings: ExtractorConfig | None = None,
        rules: tuple[FieldRule, ...] = FIELD_RULES,
    ):
        self.document = document
        self.settings = settings or config.extractor
        self.rules = {rule.kind: rule for rule in rules}

    # ------------------------------------------------------------------
    # 公开接口
    # ------------------------------------------------------------------

    def extract_from_ad(self, ad: Any) -> ExtractedListing | None:
        """提取单个房源条目；ad 为空时返回 None"""
        if ad is None:
            return None

        fingerprint = self._fingerprint(ad)
        cached = self._read_marker(ad, fingerprint)
        if cached is not None:
            return cached

        listing = self._extract_fields(ad)
        if self.settings.mark_processed:
            self._write_marker(ad, fingerprint, listing)
        return listing

    def extract_page(self) -> list[ExtractedListing]:
        """提取页面中所有房源条目"""
        results = []
        for ad in self.document.xpath(AD_ITEM_XPATH):
            listing = self.extract_from_ad(ad)
            if listing is not None:
                results.append(listing)
        logger.debug(f"[Extract] 共提取 {len(results)} 条房源")
        return results

    # ------------------------------------------------------------------
    # 字段提取
    # ------------------------------------------------------------------

    def _extract_fields(self, ad: Any) -> ExtractedListing:
        candidates = [(el, self.document.text(el)) for el in self.document.xpath(CANDIDATE_XPATH, ad)]
        postal_code, city = self._extract_location([text for _, text in candidates])
        return ExtractedListing(
            price=self._extract_value(ad, self.rules["price"], candidates),
            area=self._extract_value(ad, self.rules["area"], candidates),
            rooms=self._extract_value(ad, self.rules["rooms"], candidates),
            postal_code=postal_code,
            city=city,
            id=self.document.attr(ad, AD_ID_ATTRIBUTE) or None,
        )

    def _primary_text(self, ad: Any, rule: FieldRule) -> str:
        """按顺序尝试主选择器，跳过不含单位或解析不出数值的元素"""
        for xpath in rule.primary_xpaths:
            for element in self.document.xpath(xpath, ad):
                text = self.document.text(element)
                if rule.primary_token is not None and not rule.primary_token.search(text):
                    continue
                if normalize_number(text) is None:
                    continue
                return text
        return ""

    def _secondary_text(self, rule: FieldRule, candidates: list[tuple[Any, str]]) -> str:
        """扫描后代文本，只看最内层的匹配，优先选择像独立标签的短文本

        外层包装元素的文本会把多个字段拼在一起（"800 € 72 m²"），
        后代中还有匹配时跳过该元素。
        """
        leaves = [
            text
            for element, text in candidates
            if rule.pattern.search(text) and not self._has_matching_descendant(element, rule)
        ]
        for text in leaves:
            if looks_like_standalone(text):
                return text
        return leaves[0] if leaves else ""

    def _has_matching_descendant(self, element: Any, rule: FieldRule) -> bool:
        return any(
            rule.pattern.search(self.document.text(child))
            for child in self.document.xpath(CANDIDATE_XPATH, element)
        )

    def _extract_value(self, ad: Any, rule: FieldRule, candidates: list[tuple[Any, str]]) -> float | None:
        text = self._primary_text(ad, rule) or self._secondary_text(rule, candidates)
        if not text:
            return None

        candidate = FieldCandidate.from_text(text)
        if candidate.parsed_value is None:
            logger.debug(f"[Extract] {rule.kind} 无法解析: {text!r}")
            return None

        if not plausible(candidate.parsed_value, rule.kind):
            logger.debug(f"[Extract] {rule.kind} 超出合理区间: {candidate.parsed_value}")
            return None

        signals = ConfidenceSignals.evaluate(candidate.raw_text, candidate.parsed_value, rule.kind)
        if not signals.passes(self.settings.confidence_threshold):
            logger.debug(f"[Extract] {rule.kind} 置信度不足 ({signals.score}): {text!r}")
            return None

        return candidate.parsed_value

    @staticmethod
    def _extract_location(candidates: list[str]) -> tuple[str | None, str | None]:
        """邮编 + 城市：第一个匹配即采用"""
        for text in candidates:
            match = _LOCATION_RE.search(text)
            if match:
                return match.group(1), match.group(2).strip()
        return None, None

    # ------------------------------------------------------------------
    # 幂等标记
    # ------------------------------------------------------------------

    def _fingerprint(self, ad: Any) -> str:
        raw = f"{self.document.attr(ad, AD_ID_ATTRIBUTE) or ''}|{self.document.text(ad)}"
        return hashlib.sha1(raw.encode("utf-8")).hexdigest()

    def _read_marker(self, ad: Any, fingerprint: str) -> ExtractedListing | None:
        raw = self.document.attr(ad, self.settings.marker_attribute)
        if not raw:
            return None
        try:
            payload = json.loads(raw)
            if payload.get("fp") != fingerprint:
                logger.debug("[Extract] 条目内容已变化，重新提取")
                return None
            return ExtractedListing.model_validate(payload["listing"])
        except (json.JSONDecodeError, AttributeError, KeyError, PydanticValidationError):
            logger.debug(f"[Extract] 幂等标记无法读取，重新提取: {raw[:80]!r}")
            return None

    def _write_marker(self, ad: Any, fingerprint: str, listing: ExtractedListing) -> None:
        payload = {"fp": fingerprint, "listing": listing.model_dump()}
        self.document.set_attr(
            ad, self.settings.marker_attribute, json.dumps(payload, ensure_ascii=False)
        )


def extract_from_ad(document: Document, ad: Any) -> ExtractedListing | None:
    """便捷函数：使用全局配置提取单个房源条目"""
    return ListingExtractor(document).extract_from_ad(ad)
