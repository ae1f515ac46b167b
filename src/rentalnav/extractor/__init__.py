"""房源字段提取模块"""

from .listing_extractor import FIELD_RULES, FieldRule, ListingExtractor, extract_from_ad
from .normalize import looks_like_standalone, normalize_number, plausible
from .scoring import ConfidenceSignals, FieldCandidate, score_value

__all__ = [
    "ConfidenceSignals",
    "FIELD_RULES",
    "FieldCandidate",
    "FieldRule",
    "ListingExtractor",
    "extract_from_ad",
    "looks_like_standalone",
    "normalize_number",
    "plausible",
    "score_value",
]
