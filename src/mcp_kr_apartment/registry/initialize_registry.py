"""
레지스트리 초기화
"""

from mcp_kr_apartment.registry.tool_registry import ToolRegistry


def initialize_registry() -> ToolRegistry:
    registry = ToolRegistry()

    registry.register_tool(
        name="get_apartment_trades",
        korean_name="아파트 매매 실거래가 조회",
        description="""
주소 또는 지역명으로 아파트 매매 실거래가를 조회합니다.
주소에 포함된 시/군/구 이름으로 법정동 코드를 찾아 국토교통부 실거래가 API를 호출합니다.

Arguments:
- address_or_region (str, required): 주소 또는 지역명 (예: '서초구', '경기도 성남시 분당구 정자동')
- apartment_name (str, optional): 아파트명 일부. 이름에 포함된 거래만 표시합니다.
- year (str, optional): 거래년도 4자리 (기본: 현재 년도)
- month (str, optional): 거래월 2자리 (기본: 현재 월)

Returns: 거래 목록 텍스트 (아파트명, 거래금액, 전용면적, 층, 거래일, 건축년도).
API 키가 없거나 API 호출이 실패하면 샘플 데이터임을 표시하고 예시 데이터를 반환합니다.
""",
        parameters={
            "type": "object",
            "properties": {
                "address_or_region": {"type": "string", "description": "주소 또는 지역명"},
                "apartment_name": {"type": "string", "description": "아파트명 (선택)"},
                "year": {"type": "string", "description": "거래년도 (YYYY)"},
                "month": {"type": "string", "description": "거래월 (MM)"}
            },
            "required": ["address_or_region"]
        },
        linked_tools=["search_region_codes", "get_apartment_price_trend"]
    )

    registry.register_tool(
        name="search_region_codes",
        korean_name="지원 지역/법정동 코드 검색",
        description="""
지역명 일부로 조회 가능한 지역과 법정동 코드(5자리)를 검색합니다.
검색 결과가 많으면 미리보기(10건)만 반환합니다.

Arguments:
- region_name (str, required): 구/시/군 이름의 일부 (예: '분당', '수원시')
""",
        parameters={
            "type": "object",
            "properties": {
                "region_name": {"type": "string", "description": "지역명 일부"}
            },
            "required": ["region_name"]
        },
        linked_tools=["get_apartment_trades"]
    )

    registry.register_tool(
        name="get_apartment_price_trend",
        korean_name="아파트 매매가 추이",
        description="""
최근 N개월 동안의 월별 아파트 매매 거래건수와 평균/최고/최저 거래금액,
첫 달 대비 마지막 달 평균 거래금액 변화를 계산합니다. (예측은 하지 않습니다)

Arguments:
- address_or_region (str, required): 주소 또는 지역명
- months (int, optional): 조회 개월 수 (1~12, 기본 6)
- apartment_name (str, optional): 아파트명 일부
- year (str, optional): 마지막 조회 년도 (기본: 현재 년도)
- month (str, optional): 마지막 조회 월 (기본: 현재 월)

API 키가 필요합니다. 샘플 데이터로 통계를 만들지 않습니다.
""",
        parameters={
            "type": "object",
            "properties": {
                "address_or_region": {"type": "string", "description": "주소 또는 지역명"},
                "months": {"type": "integer", "description": "조회 개월 수"},
                "apartment_name": {"type": "string", "description": "아파트명 (선택)"},
                "year": {"type": "string", "description": "마지막 조회 년도 (YYYY)"},
                "month": {"type": "string", "description": "마지막 조회 월 (MM)"}
            },
            "required": ["address_or_region"]
        },
        linked_tools=["get_apartment_trades"]
    )

    return registry
