import json
import re
from unittest.mock import patch

import requests

from mcp.types import TextContent

from mcp_kr_apartment.tools.transaction_tools import (
    get_apartment_trades,
    handle_apartment_trades,
    handle_region_search,
    search_region_codes,
)
from mcp_kr_apartment.utils.ctx_helper import with_context
from mcp_kr_apartment.utils.fallback import FALLBACK_NOTICES, FallbackReason
from .conftest import make_response
from .mock_responses import EMPTY_ITEMS_XML, GATEWAY_ERROR_XML, MULTI_ITEM_XML, SINGLE_ITEM_XML

GET = "mcp_kr_apartment.apis.client.requests.get"
DEFAULT_CONTEXT = "mcp_kr_apartment.utils.ctx_helper.default_context"


def _record_count(text):
    return len(re.findall(r"^\d+\. ", text, flags=re.MULTILINE))


def test_no_api_key_returns_placeholders_without_calling_api(keyless_context):
    with patch(GET) as mock_get:
        text = handle_apartment_trades(keyless_context, "서초구")
    mock_get.assert_not_called()
    assert FALLBACK_NOTICES[FallbackReason.NO_API_KEY] in text
    assert "서초구" in text
    assert _record_count(text) == 2


def test_single_item_response_is_listed(keyed_context):
    with patch(GET, return_value=make_response(SINGLE_ITEM_XML)) as mock_get:
        text = handle_apartment_trades(keyed_context, "서초구", year="2025", month="06")
    assert mock_get.call_args.kwargs["params"]["LAWD_CD"] == "11650"
    assert mock_get.call_args.kwargs["params"]["DEAL_YMD"] == "202506"
    assert _record_count(text) == 1
    assert "1. 래미안" in text
    assert "거래금액: 85,000만원" in text
    assert "샘플" not in text


def test_api_failure_returns_disclosed_placeholders(keyed_context, keyless_context):
    with patch(GET, side_effect=requests.ConnectionError("boom")):
        failure_text = handle_apartment_trades(keyed_context, "서초구", year="2025", month="06")
    no_key_text = handle_apartment_trades(keyless_context, "서초구", year="2025", month="06")

    assert FALLBACK_NOTICES[FallbackReason.API_FAILURE] in failure_text
    assert FALLBACK_NOTICES[FallbackReason.NO_API_KEY] not in failure_text
    assert _record_count(failure_text) == 2
    assert failure_text != no_key_text


def test_empty_result_is_reported_not_replaced_with_placeholders(keyed_context):
    with patch(GET, return_value=make_response(EMPTY_ITEMS_XML)):
        text = handle_apartment_trades(keyed_context, "서울 강남구 역삼동", year="2025", month="01")
    assert text == "강남구 2025년 01월 아파트 매매 실거래 데이터가 없습니다."


def test_apartment_name_filter(keyed_context):
    with patch(GET, return_value=make_response(MULTI_ITEM_XML)):
        text = handle_apartment_trades(keyed_context, "서초구", apartment_name="반포", year="2025", month="06")
    assert _record_count(text) == 1
    assert "1. 반포자이" in text


def test_display_limit_comes_from_config(keyed_context):
    keyed_context.client.config.display_limit = 2
    with patch(GET, return_value=make_response(MULTI_ITEM_XML)):
        text = handle_apartment_trades(keyed_context, "서초구", year="2025", month="06")
    assert _record_count(text) == 2
    assert "※ 전체 3건 중 처음 2건만 표시합니다." in text


def test_unknown_region_returns_guidance(keyed_context):
    with patch(GET) as mock_get:
        text = handle_apartment_trades(keyed_context, "부산 해운대구")
    mock_get.assert_not_called()
    assert "찾을 수 없습니다" in text
    assert "지원 지역 예시" in text


def test_same_payload_renders_identically(keyed_context):
    with patch(GET, return_value=make_response(MULTI_ITEM_XML)):
        first = handle_apartment_trades(keyed_context, "서초구", year="2025", month="06")
        second = handle_apartment_trades(keyed_context, "서초구", year="2025", month="06")
    assert first == second


def test_with_context_renders_unexpected_errors(keyed_context):
    def broken(context):
        raise RuntimeError("unexpected state")

    assert with_context(keyed_context, "broken_tool", broken) == "Error: unexpected state"


def test_with_context_passes_context(keyed_context):
    assert with_context(keyed_context, "tool", lambda context: context is keyed_context) is True


def test_region_search():
    result = json.loads(handle_region_search("수원"))
    assert result["total_count"] == 4
    assert result["preview"][0] == {"name": "수원시 장안구", "code": "41111"}
    assert "message" not in result


def test_region_search_preview_is_bounded():
    result = json.loads(handle_region_search("구"))
    assert result["total_count"] > 10
    assert len(result["preview"]) == 10
    assert "미리보기 10건" in result["message"]


def test_region_search_no_match():
    assert "error" in json.loads(handle_region_search("해운대"))


def test_gateway_error_returns_api_failure_placeholders(keyed_context):
    with patch(GET, return_value=make_response(GATEWAY_ERROR_XML)):
        text = handle_apartment_trades(keyed_context, "서초구", year="2025", month="06")
    assert FALLBACK_NOTICES[FallbackReason.API_FAILURE] in text
    assert "데이터가 없습니다" not in text
    assert _record_count(text) == 2


def _tool_fn(tool):
    # @mcp.tool 은 FunctionTool 을 돌려준다
    return getattr(tool, "fn", tool)


def test_get_apartment_trades_tool_returns_text_content(keyless_context):
    with patch(DEFAULT_CONTEXT, keyless_context), patch(GET) as mock_get:
        result = _tool_fn(get_apartment_trades)("서초구", year="2025", month="06")
    mock_get.assert_not_called()
    assert isinstance(result, TextContent)
    assert result.type == "text"
    assert FALLBACK_NOTICES[FallbackReason.NO_API_KEY] in result.text


def test_get_apartment_trades_tool_renders_unexpected_errors(keyless_context):
    with patch(DEFAULT_CONTEXT, keyless_context), \
            patch("mcp_kr_apartment.tools.transaction_tools.match_region", side_effect=RuntimeError("boom")):
        result = _tool_fn(get_apartment_trades)("서초구")
    assert isinstance(result, TextContent)
    assert result.text == "Error: boom"


def test_search_region_codes_tool_returns_text_content():
    result = _tool_fn(search_region_codes)("분당")
    assert isinstance(result, TextContent)
    assert result.type == "text"
    assert json.loads(result.text)["total_count"] == 2
