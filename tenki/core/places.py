"""Location query classification and place-name normalization.

Free-text searches are classified once and then normalized separately for
each provider: the global provider wants an English place name, the regional
provider wants one of its own city ids.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


logger = logging.getLogger(__name__)


# postal code -> Japanese place name
POSTAL_CODE_TABLE: Mapping[str, str] = MappingProxyType(
    {
        "6128483": "京都",  # Kyoto, Fushimi-ku Yokooji
        "1000001": "東京",  # Tokyo, Chiyoda-ku
        "5300001": "大阪",  # Osaka, Kita-ku
        "2310023": "横浜",  # Yokohama, Naka-ku
    }
)

# Japanese place name -> English name understood by the global provider
CITY_NAME_TABLE: Mapping[str, str] = MappingProxyType(
    {
        "東京": "Tokyo",
        "横浜": "Yokohama",
        "大阪": "Osaka",
        "名古屋": "Nagoya",
        "札幌": "Sapporo",
        "福岡": "Fukuoka",
        "京都": "Kyoto",
        "神戸": "Kobe",
        "広島": "Hiroshima",
        "仙台": "Sendai",
        "千葉": "Chiba",
        "さいたま": "Saitama",
        "埼玉": "Saitama",
        "川崎": "Kawasaki",
        "北海道": "Hokkaido",
        "沖縄": "Okinawa",
        "那覇": "Naha",
        "新潟": "Niigata",
        "浜松": "Hamamatsu",
        "熊本": "Kumamoto",
        "静岡": "Shizuoka",
        "岡山": "Okayama",
        "鹿児島": "Kagoshima",
        "つくば": "Tsukuba",
        "金沢": "Kanazawa",
        "長崎": "Nagasaki",
        "宮崎": "Miyazaki",
        "松山": "Matsuyama",
        "京都市": "Kyoto",
        "大阪市": "Osaka",
        "東京都": "Tokyo",
        "京都府": "Kyoto",
        "大阪府": "Osaka",
        # Yao is served by the Osaka forecast
        "大阪府八尾市": "大阪",
    }
)

# place name -> city id accepted by the regional (Kujira) provider
REGIONAL_CITY_ID_TABLE: Mapping[str, str] = MappingProxyType(
    {
        "札幌": "札幌",
        "仙台": "仙台",
        "東京": "東京",
        "新潟": "新潟",
        "金沢": "金沢",
        "名古屋": "名古屋",
        "大阪": "大阪",
        "広島": "広島",
        "高知": "高知",
        "福岡": "福岡",
        "鹿児島": "鹿児島",
        "那覇": "那覇",
        "横浜": "東京",
        "大阪府": "大阪",
        "東京都": "東京",
    }
)

_POSTAL_CODE_RE = re.compile(r"[0-9]{7}|[0-9]{3}-[0-9]{4}")
_JAPANESE_SCRIPT_RE = re.compile(
    "["
    "\u3005-\u3007"  # iteration mark, closing mark, ideographic zero
    "\u3040-\u309f"  # hiragana
    "\u30a0-\u30ff"  # katakana
    "\u31f0-\u31ff"  # katakana phonetic extensions
    "\u3400-\u4dbf"  # CJK extension A
    "\u4e00-\u9fff"  # CJK unified ideographs
    "\uf900-\ufaff"  # CJK compatibility ideographs
    "\uff66-\uff9f"  # half-width katakana
    "\U00020000-\U0002fa1f"
    "]"
)


@dataclass(frozen=True)
class QueryClass:
    is_postal_code: bool
    is_japanese_domain: bool


def is_postal_code(query: str) -> bool:
    return _POSTAL_CODE_RE.fullmatch(query) is not None


def classify(query: str) -> QueryClass:
    postal = is_postal_code(query)
    japanese = postal or query in CITY_NAME_TABLE or _JAPANESE_SCRIPT_RE.search(query) is not None
    return QueryClass(is_postal_code=postal, is_japanese_domain=japanese)


def postal_code_digits(query: str) -> str:
    return query.replace("-", "")


def normalize_for_global_provider(query: str) -> str:
    """Map ``query`` to the place name sent to the global provider.

    Postal codes resolve through the postal table and then the English city
    table. Unknown postal codes come back as their bare digits; callers must
    not send those upstream.
    """
    if is_postal_code(query):
        digits = postal_code_digits(query)
        japanese_name = POSTAL_CODE_TABLE.get(digits)
        if japanese_name is None:
            logger.info("Unknown postal code %s", digits)
            return digits
        english_name = CITY_NAME_TABLE.get(japanese_name)
        if english_name is None:
            logger.info("No English name for %s, using it as is", japanese_name)
            return japanese_name
        logger.info("Postal code %s resolved to %s", digits, english_name)
        return english_name

    english_name = CITY_NAME_TABLE.get(query)
    if english_name is not None:
        logger.info("Place name %s translated to %s", query, english_name)
        return english_name
    return query


def normalize_for_regional_provider(query: str) -> str:
    """Return the regional city id for ``query``, or ``""`` when not covered."""
    if is_postal_code(query):
        place = POSTAL_CODE_TABLE.get(postal_code_digits(query))
        if place is not None and place in REGIONAL_CITY_ID_TABLE:
            return REGIONAL_CITY_ID_TABLE[place]

    direct = REGIONAL_CITY_ID_TABLE.get(query)
    if direct is not None:
        return direct

    mapped = CITY_NAME_TABLE.get(query)
    if mapped is not None and mapped in REGIONAL_CITY_ID_TABLE:
        return REGIONAL_CITY_ID_TABLE[mapped]
    return ""


__all__ = [
    "CITY_NAME_TABLE",
    "POSTAL_CODE_TABLE",
    "REGIONAL_CITY_ID_TABLE",
    "QueryClass",
    "classify",
    "is_postal_code",
    "normalize_for_global_provider",
    "normalize_for_regional_provider",
    "postal_code_digits",
]
