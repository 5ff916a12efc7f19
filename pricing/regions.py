"""
pricing/regions.py - 지역명 정규화
───────────────────────────────────
'강남구', 'Gangnam', ' 강남 ' → '강남'

요율표 등록과 조회 양쪽에서 같은 규칙을 써야 매칭됩니다.
"""
from __future__ import annotations

from typing import Iterable, List

ADMIN_SUFFIXES = ("구", "시", "군", "동", "면", "읍", "리")

ENGLISH_REGIONS = {
    "gangnam": "강남",
    "suwon": "수원",
    "incheon": "인천",
    "busan": "부산",
    "daegu": "대구",
    "gwangju": "광주",
    "daejeon": "대전",
    "ulsan": "울산",
    "sejong": "세종",
    "gyeonggi": "경기",
    "jeju": "제주",
}


def normalize_region(text: str) -> str:
    if text is None:
        return ""
    cleaned = str(text).strip()
    if not cleaned:
        return ""

    english = ENGLISH_REGIONS.get(cleaned.lower())
    if english:
        return english

    # 접미사는 하나만 제거
    for suffix in ADMIN_SUFFIXES:
        if cleaned.endswith(suffix) and len(cleaned) > len(suffix):
            return cleaned[: -len(suffix)]
    return cleaned


def unique_regions(texts: Iterable[str]) -> List[str]:
    """정규화 + 빈값 제거 + 중복 제거 (입력 순서 유지)."""
    seen: List[str] = []
    for text in texts:
        region = normalize_region(text)
        if region and region not in seen:
            seen.append(region)
    return seen
