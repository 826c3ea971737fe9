"""
법정동 코드(시군구 5자리) 테이블

국토교통부 실거래가 API의 LAWD_CD 파라미터에 사용하는 코드입니다.
서울특별시와 경기도의 시/군/구를 다룹니다.

주소 매칭은 테이블 순서대로 처음 일치한 항목을 사용하므로,
다른 이름을 포함하는 구체적인 이름(예: '수원시 장안구')을
포함되는 이름('수원시')보다 먼저 둡니다.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class RegionEntry:
    name: str
    code: str


_REGION_TABLE: Tuple[Tuple[str, str], ...] = (
    # ── 서울특별시 ──
    ("종로구", "11110"),
    ("중구", "11140"),
    ("용산구", "11170"),
    ("성동구", "11200"),
    ("광진구", "11215"),
    ("동대문구", "11230"),
    ("중랑구", "11260"),
    ("성북구", "11290"),
    ("강북구", "11305"),
    ("도봉구", "11320"),
    ("노원구", "11350"),
    ("은평구", "11380"),
    ("서대문구", "11410"),
    ("마포구", "11440"),
    ("양천구", "11470"),
    ("강서구", "11500"),
    ("구로구", "11530"),
    ("금천구", "11545"),
    ("영등포구", "11560"),
    ("동작구", "11590"),
    ("관악구", "11620"),
    ("서초구", "11650"),
    ("강남구", "11680"),
    ("송파구", "11710"),
    ("강동구", "11740"),
    # ── 경기도 (구가 있는 시) ──
    ("수원시 장안구", "41111"),
    ("수원시 권선구", "41113"),
    ("수원시 팔달구", "41115"),
    ("수원시 영통구", "41117"),
    ("성남시 수정구", "41131"),
    ("성남시 중원구", "41133"),
    ("성남시 분당구", "41135"),
    ("안양시 만안구", "41171"),
    ("안양시 동안구", "41173"),
    ("안산시 상록구", "41271"),
    ("안산시 단원구", "41273"),
    ("고양시 덕양구", "41281"),
    ("고양시 일산동구", "41285"),
    ("고양시 일산서구", "41287"),
    ("용인시 처인구", "41461"),
    ("용인시 기흥구", "41463"),
    ("용인시 수지구", "41465"),
    # ── 경기도 (시/군) ──
    ("의정부시", "41150"),
    ("부천시", "41190"),
    ("광명시", "41210"),
    ("평택시", "41220"),
    ("동두천시", "41250"),
    ("과천시", "41290"),
    ("구리시", "41310"),
    ("남양주시", "41360"),
    ("오산시", "41370"),
    ("시흥시", "41390"),
    ("군포시", "41410"),
    ("의왕시", "41430"),
    ("하남시", "41450"),
    ("파주시", "41480"),
    ("이천시", "41500"),
    ("안성시", "41550"),
    ("김포시", "41570"),
    ("화성시", "41590"),
    ("광주시", "41610"),
    ("양주시", "41630"),
    ("포천시", "41650"),
    ("여주시", "41670"),
    ("연천군", "41800"),
    ("가평군", "41820"),
    ("양평군", "41830"),
    # ── 경기도 구 단독 표기 ──
    ("장안구", "41111"),
    ("권선구", "41113"),
    ("팔달구", "41115"),
    ("영통구", "41117"),
    ("수정구", "41131"),
    ("중원구", "41133"),
    ("분당구", "41135"),
    ("만안구", "41171"),
    ("동안구", "41173"),
    ("상록구", "41271"),
    ("단원구", "41273"),
    ("덕양구", "41281"),
    ("일산동구", "41285"),
    ("일산서구", "41287"),
    ("처인구", "41461"),
    ("기흥구", "41463"),
    ("수지구", "41465"),
)

REGION_ENTRIES: Tuple[RegionEntry, ...] = tuple(RegionEntry(name, code) for name, code in _REGION_TABLE)
REGION_CODES: Dict[str, str] = {entry.name: entry.code for entry in REGION_ENTRIES}


def lookup(name: str) -> Optional[str]:
    """지역명과 정확히 일치하는 법정동 코드를 반환합니다. 없으면 None."""
    return REGION_CODES.get(name)


def entries() -> Tuple[RegionEntry, ...]:
    """테이블 정의 순서 그대로의 지역 목록"""
    return REGION_ENTRIES
