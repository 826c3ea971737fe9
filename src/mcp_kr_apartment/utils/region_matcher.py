"""
주소/지역명 → 법정동 코드 매칭
"""

import re
from dataclasses import dataclass
from typing import List, Optional

from mcp_kr_apartment.utils.region_codes import RegionEntry, entries

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class ResolvedRegion:
    code: str
    matched_name: str


def normalize_region_text(text: str) -> str:
    """공백을 모두 제거하고 대소문자를 통일합니다."""
    return _WHITESPACE.sub("", text or "").casefold()


def match_region(address: str) -> Optional[ResolvedRegion]:
    """
    입력 문자열에 지역명이 포함되어 있으면 해당 지역을 반환합니다.

    테이블 순서대로 검사하여 처음 일치한 항목을 사용합니다.
    ('서초구' 와 '서울특별시 서초구 반포동' 은 모두 서초구로 매칭)
    """
    normalized = normalize_region_text(address)
    if not normalized:
        return None
    for entry in entries():
        if normalize_region_text(entry.name) in normalized:
            return ResolvedRegion(code=entry.code, matched_name=entry.name)
    return None


def supported_region_examples(limit: int = 10) -> List[str]:
    return [entry.name for entry in entries()[:limit]]


def search_regions(query: str) -> List[RegionEntry]:
    """
    지역명 일부로 후보 목록을 찾습니다.
    입력이 지역명을 포함하거나 지역명이 입력을 포함하면 후보로 봅니다.
    """
    normalized = normalize_region_text(query)
    if not normalized:
        return []
    result = []
    for entry in entries():
        name = normalize_region_text(entry.name)
        if normalized in name or name in normalized:
            result.append(entry)
    return result


def build_no_match_message(address: str, limit: int = 10) -> str:
    examples = supported_region_examples(limit)
    remaining = len(entries()) - len(examples)
    lines = [
        f"'{address}'에 해당하는 지역을 찾을 수 없습니다.",
        f"지원 지역 예시: {', '.join(examples)}" + (f" 외 {remaining}개" if remaining > 0 else ""),
        "시/군/구 이름을 포함하여 다시 입력해 주세요. (예: '서초구', '경기도 성남시 분당구 정자동')",
    ]
    return "\n".join(lines)
