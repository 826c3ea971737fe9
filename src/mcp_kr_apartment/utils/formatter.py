"""
실거래가 응답 정규화 및 텍스트 포맷팅

API 응답의 items.item 은 거래가 한 건이면 dict, 여러 건이면 list 로 옵니다.
extract_items 에서 항상 list 로 바꾼 뒤 이후 단계는 list 만 다룹니다.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence

MISSING = "정보없음"
PRICE_UNIT = "만원"

# (한글 필드명, 영문 필드명) - 구 API 는 한글, 신 API 는 영문 태그를 사용
FIELD_NAMES = {
    "name": ("아파트", "aptNm"),
    "amount": ("거래금액", "dealAmount"),
    "area": ("전용면적", "excluUseAr"),
    "floor": ("층", "floor"),
    "year": ("년", "dealYear"),
    "month": ("월", "dealMonth"),
    "day": ("일", "dealDay"),
    "build_year": ("건축년도", "buildYear"),
}


@dataclass(frozen=True)
class TransactionRecord:
    name: str
    price_text: str
    area_sqm: str
    floor: str
    deal_year: str
    deal_month: str
    deal_day: str
    build_year: str

    @property
    def deal_date(self) -> Dict[str, str]:
        return {"year": self.deal_year, "month": self.deal_month, "day": self.deal_day}


def field_value(item: Dict[str, Any], key: str) -> Optional[str]:
    for name in FIELD_NAMES[key]:
        value = item.get(name)
        if value is None:
            continue
        text = str(value).strip()
        if text:
            return text
    return None


def extract_items(payload: Optional[Dict[str, Any]]) -> Optional[List[Dict[str, Any]]]:
    """
    응답에서 거래 목록을 꺼냅니다.

    body 나 items 가 없으면 None (데이터 없음).
    item 이 dict 한 건이면 [item], list 면 그대로 반환합니다.
    """
    if not isinstance(payload, dict):
        return None
    response = payload.get("response", payload)
    body = response.get("body") if isinstance(response, dict) else None
    if not isinstance(body, dict):
        return None
    items = body.get("items")
    if not isinstance(items, dict):
        return None
    item = items.get("item")
    if isinstance(item, dict):
        return [item]
    if isinstance(item, list):
        return [i for i in item if isinstance(i, dict)]
    return None


def parse_deal_amount(text: Any) -> Optional[int]:
    """'85,000' → 85000 (단위: 만원). 변환할 수 없으면 None."""
    if text is None:
        return None
    try:
        return int(str(text).replace(",", "").strip())
    except ValueError:
        return None


def format_price(text: Optional[str]) -> str:
    if text is None:
        return MISSING
    amount = parse_deal_amount(text)
    if amount is None:
        return text
    return f"{amount:,}{PRICE_UNIT}"


def filter_by_name(items: Iterable[Dict[str, Any]], apartment_name: Optional[str]) -> List[Dict[str, Any]]:
    """아파트명에 apartment_name 이 포함된 거래만 남깁니다. (대소문자 구분)"""
    items = list(items)
    if not apartment_name:
        return items
    return [item for item in items if apartment_name in (field_value(item, "name") or "")]


def normalize_record(item: Dict[str, Any]) -> TransactionRecord:
    return TransactionRecord(
        name=field_value(item, "name") or MISSING,
        price_text=format_price(field_value(item, "amount")),
        area_sqm=field_value(item, "area") or MISSING,
        floor=field_value(item, "floor") or MISSING,
        deal_year=field_value(item, "year") or MISSING,
        deal_month=field_value(item, "month") or MISSING,
        deal_day=field_value(item, "day") or MISSING,
        build_year=field_value(item, "build_year") or MISSING,
    )


def _with_unit(value: str, unit: str) -> str:
    return value if value == MISSING else f"{value}{unit}"


def render_record(index: int, record: TransactionRecord) -> str:
    deal_date = " ".join([
        _with_unit(record.deal_year, "년"),
        _with_unit(record.deal_month, "월"),
        _with_unit(record.deal_day, "일"),
    ])
    return "\n".join([
        f"{index}. {record.name}",
        f"   거래금액: {record.price_text}",
        f"   전용면적: {_with_unit(record.area_sqm, '㎡')}",
        f"   층: {_with_unit(record.floor, '층')}",
        f"   거래일: {deal_date}",
        f"   건축년도: {_with_unit(record.build_year, '년')}",
    ])


def render_listing(records: Sequence[TransactionRecord], title: str, total: int) -> str:
    """
    번호가 붙은 거래 목록을 만듭니다.
    total 이 표시한 건수보다 많으면 일부만 표시했다는 안내를 붙입니다.
    """
    blocks = [title]
    blocks.extend(render_record(i, record) for i, record in enumerate(records, start=1))
    if total > len(records):
        blocks.append(f"※ 전체 {total}건 중 처음 {len(records)}건만 표시합니다.")
    return "\n\n".join(blocks)


def period_label(year_month: str) -> str:
    return f"{year_month[:4]}년 {year_month[4:]}월"


def format_trade_response(
    payload: Optional[Dict[str, Any]],
    region_label: str,
    year_month: str,
    apartment_name: Optional[str] = None,
    limit: int = 10,
) -> str:
    """
    API 응답을 사람이 읽을 수 있는 거래 목록 텍스트로 바꿉니다.

    - 데이터 없음 / 이름 필터 결과 없음 메시지를 구분합니다.
    - limit 건까지만 표시합니다.
    """
    period = period_label(year_month)
    items = extract_items(payload)
    if not items:
        return f"{region_label} {period} 아파트 매매 실거래 데이터가 없습니다."

    filtered = filter_by_name(items, apartment_name)
    if not filtered:
        return (
            f"{region_label} {period} 거래 중 '{apartment_name}'이(가) 포함된 거래가 없습니다. "
            f"(전체 {len(items)}건)"
        )

    records = [normalize_record(item) for item in filtered[:limit]]
    title = f"📍 {region_label} {period} 아파트 매매 실거래가 (총 {len(filtered)}건)"
    if apartment_name:
        title += f"\n검색 아파트: {apartment_name}"
    return render_listing(records, title, len(filtered))
