"""
샘플(대체) 거래 데이터

API 키가 없거나 API 호출이 실패했을 때 예시용 거래 두 건을 만듭니다.
응답 텍스트에는 항상 샘플 데이터임을 표시합니다.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from mcp_kr_apartment.utils.formatter import filter_by_name, normalize_record, period_label, render_listing


class FallbackReason(Enum):
    NO_API_KEY = "no_api_key"
    API_FAILURE = "api_failure"


FALLBACK_NOTICES = {
    FallbackReason.NO_API_KEY: "⚠️ 실거래가 API 키(PUBLIC_DATA_API_KEY)가 설정되지 않아 샘플 데이터를 표시합니다.",
    FallbackReason.API_FAILURE: "⚠️ 실거래가 API 호출에 실패하여 샘플 데이터를 표시합니다.",
}

# (이름 접미사, 거래금액, 전용면적, 층, 거래일, 건축년도)
_TEMPLATES = (
    ("", "85,000", "84.99", "12", "15", "2015"),
    (" 2단지", "62,500", "59.97", "7", "22", "2009"),
)


def generate_placeholder_items(
    region_label: str,
    year_month: str,
    apartment_name: Optional[str] = None,
) -> List[Dict[str, Any]]:
    base_name = apartment_name or f"{region_label} 샘플아파트"
    return [
        {
            "아파트": f"{base_name}{suffix}",
            "거래금액": amount,
            "전용면적": area,
            "층": floor,
            "년": year_month[:4],
            "월": year_month[4:],
            "일": day,
            "건축년도": build_year,
        }
        for suffix, amount, area, floor, day, build_year in _TEMPLATES
    ]


def render_fallback(
    region_label: str,
    year_month: str,
    reason: FallbackReason,
    apartment_name: Optional[str] = None,
    limit: int = 10,
) -> str:
    items = filter_by_name(generate_placeholder_items(region_label, year_month, apartment_name), apartment_name)
    records = [normalize_record(item) for item in items[:limit]]
    title = "\n".join([
        FALLBACK_NOTICES[reason],
        f"📍 {region_label} {period_label(year_month)} 아파트 매매 실거래가 [샘플 데이터] (총 {len(items)}건)",
    ])
    if reason is FallbackReason.API_FAILURE:
        title += "\n잠시 후 다시 시도하거나 API 키와 조회 조건을 확인해 주세요."
    return render_listing(records, title, len(items))
