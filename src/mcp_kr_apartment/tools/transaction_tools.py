"""
아파트 매매 실거래가 조회 도구

예시 사용법:

from mcp_kr_apartment.server import ctx
from mcp_kr_apartment.tools.transaction_tools import handle_apartment_trades

print(handle_apartment_trades(ctx, "서울특별시 서초구 반포동", apartment_name="래미안", year="2025", month="06"))
"""

import json
import logging
from enum import Enum
from typing import Annotated, Optional

from mcp.types import TextContent
from pydantic import Field

from mcp_kr_apartment.server import mcp, tool_registry, RealEstateContext
from mcp_kr_apartment.apis.apt_trade import build_trade_query, fetch_apt_trades
from mcp_kr_apartment.utils.ctx_helper import with_context
from mcp_kr_apartment.utils.fallback import FallbackReason, render_fallback
from mcp_kr_apartment.utils.formatter import format_trade_response
from mcp_kr_apartment.utils.region_matcher import build_no_match_message, match_region, search_regions

logger = logging.getLogger(__name__)

REGION_PREVIEW_SIZE = 10


class TradeOutcome(Enum):
    NO_API_KEY = "no_api_key"
    SUCCESS = "success"
    API_FAILURE = "api_failure"


def handle_apartment_trades(
    context: RealEstateContext,
    address_or_region: str,
    apartment_name: Optional[str] = None,
    year: Optional[str] = None,
    month: Optional[str] = None,
    limit: Optional[int] = None,
) -> str:
    """
    주소 → 법정동 코드 → 실거래가 조회 → 목록 텍스트.

    API 키 없음 / 조회 성공 / API 실패 세 가지 경우를 구분합니다.
    조회에 성공했지만 거래가 없으면 샘플 데이터 대신 '데이터 없음'을 그대로 알립니다.
    """
    limit = limit or context.display_limit
    region = match_region(address_or_region)
    if region is None:
        logger.info(f"지역 매칭 실패: {address_or_region!r}")
        return build_no_match_message(address_or_region)

    query = build_trade_query(region.code, year, month)
    client = context.client

    if not client.has_api_key:
        outcome = TradeOutcome.NO_API_KEY
        response = None
    else:
        response = fetch_apt_trades(client, query)
        outcome = TradeOutcome.SUCCESS if response.ok else TradeOutcome.API_FAILURE

    logger.info(f"{region.matched_name}({region.code}) {query.year_month} 조회 결과: {outcome.value}")

    if outcome is TradeOutcome.SUCCESS:
        return format_trade_response(response.payload, region.matched_name, query.year_month, apartment_name, limit)
    if outcome is TradeOutcome.API_FAILURE:
        logger.warning(f"API 실패로 샘플 데이터 반환: {response.error}")
        return render_fallback(region.matched_name, query.year_month, FallbackReason.API_FAILURE, apartment_name, limit)
    return render_fallback(region.matched_name, query.year_month, FallbackReason.NO_API_KEY, apartment_name, limit)


def handle_region_search(region_name: str) -> str:
    matches = search_regions(region_name)
    if not matches:
        return json.dumps({"error": f"'{region_name}'(으)로 일치하는 지역이 없습니다."}, ensure_ascii=False)
    result = {
        "total_count": len(matches),
        "preview": [{"name": m.name, "code": m.code} for m in matches[:REGION_PREVIEW_SIZE]],
    }
    if len(matches) > REGION_PREVIEW_SIZE:
        result["message"] = f"검색 결과가 {len(matches)}건입니다. 미리보기 {REGION_PREVIEW_SIZE}건만 표시합니다."
    return json.dumps(result, ensure_ascii=False)


@mcp.tool(
    name="get_apartment_trades",
    description=tool_registry.description("get_apartment_trades"),
    tags={"부동산", "실거래가", "아파트", "매매"}
)
def get_apartment_trades(
    address_or_region: Annotated[str, Field(description="주소 또는 지역명 (예: '서초구')")],
    apartment_name: Annotated[Optional[str], Field(description="아파트명 일부")] = None,
    year: Annotated[Optional[str], Field(description="거래년도 (YYYY)")] = None,
    month: Annotated[Optional[str], Field(description="거래월 (MM)")] = None,
) -> TextContent:
    text = with_context(
        None,
        "get_apartment_trades",
        lambda context: handle_apartment_trades(context, address_or_region, apartment_name, year, month),
    )
    return TextContent(type="text", text=text)


@mcp.tool(
    name="search_region_codes",
    description=tool_registry.description("search_region_codes"),
    tags={"부동산", "지역코드"}
)
def search_region_codes(
    region_name: Annotated[str, Field(description="지역명 일부")],
) -> TextContent:
    text = with_context(None, "search_region_codes", lambda context: handle_region_search(region_name))
    return TextContent(type="text", text=text)
