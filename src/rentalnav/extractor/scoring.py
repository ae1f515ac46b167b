"""置信度门槛

三项相互独立的信号，至少满足其中两项才接受一个字段值：
文本像独立标签、数值在合理区间内、文本足够短。
"""

from __future__ import annotations

from dataclasses import dataclass

from ..common.constants import DEFAULT_CONFIDENCE_THRESHOLD, SHORT_TEXT_MAX_LENGTH
from .normalize import looks_like_standalone, normalize_number, plausible


@dataclass(frozen=True)
class FieldCandidate:
    """评分过程中的临时候选值"""

    raw_text: str
    parsed_value: float | None

    @classmethod
    def from_text(cls, text: str) -> "FieldCandidate":
        return cls(raw_text=text, parsed_value=normalize_number(text))


@dataclass(frozen=True)
class ConfidenceSignals:
    standalone: bool
    plausible: bool
    short: bool

    @classmethod
    def evaluate(cls, text: str, value: float | None, kind: str) -> "ConfidenceSignals":
        return cls(
            standalone=looks_like_standalone(text),
            plausible=plausible(value, kind),
            short=len(text or "") < SHORT_TEXT_MAX_LENGTH,
        )

    @property
    def score(self) -> int:
        return int(self.standalone) + int(self.plausible) + int(self.short)

    def passes(self, threshold: int = DEFAULT_CONFIDENCE_THRESHOLD) -> bool:
        return self.score >= threshold


def score_value(
    text: str,
    value: float | None,
    kind: str,
    threshold: int = DEFAULT_CONFIDENCE_THRESHOLD,
) -> bool:
    """是否接受该值（至少满足 threshold 项信号）"""
    return ConfidenceSignals.evaluate(text, value, kind).passes(threshold)
