"""Supported language catalog.

Built once at import and never mutated. Shared read-only by detection
normalization, translation prompts, and the health probe payload.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping


class LanguageCode(str, Enum):
    EN = "en"
    ES = "es"
    FR = "fr"
    DE = "de"
    IT = "it"
    PT = "pt"
    RU = "ru"
    JA = "ja"
    KO = "ko"
    ZH = "zh"
    AR = "ar"
    HI = "hi"


PIVOT_LANGUAGE = LanguageCode.EN

LANGUAGES: Mapping[str, str] = MappingProxyType(
    {
        LanguageCode.EN.value: "English",
        LanguageCode.ES.value: "Spanish",
        LanguageCode.FR.value: "French",
        LanguageCode.DE.value: "German",
        LanguageCode.IT.value: "Italian",
        LanguageCode.PT.value: "Portuguese",
        LanguageCode.RU.value: "Russian",
        LanguageCode.JA.value: "Japanese",
        LanguageCode.KO.value: "Korean",
        LanguageCode.ZH.value: "Chinese",
        LanguageCode.AR.value: "Arabic",
        LanguageCode.HI.value: "Hindi",
    }
)


def coerce_language(code: str | None) -> LanguageCode:
    """Map a raw code onto the catalog. Unknown or missing codes become the pivot."""
    if code is None:
        return PIVOT_LANGUAGE
    if isinstance(code, LanguageCode):
        return code
    cleaned = str(code).strip().lower()
    if cleaned in LANGUAGES:
        return LanguageCode(cleaned)
    return PIVOT_LANGUAGE


def display_name(code: str) -> str:
    """Human-readable name used inside prompts."""
    return LANGUAGES[coerce_language(code).value]
