from unittest.mock import patch

import numpy as np
import pytest
from mcp.types import TextContent

from mcp_kr_apartment.apis.client import ApiResponse
from mcp_kr_apartment.tools.analysis_tools import (
    collect_trend_frame,
    get_apartment_price_trend,
    handle_price_trend,
    summarize_by_month,
    to_num,
    trend_periods,
)
from .mock_responses import apt_item, payload_with

FETCH = "mcp_kr_apartment.tools.analysis_tools.fetch_apt_trades"


def fake_fetch(responses):
    """year_month → ApiResponse 매핑으로 fetch_apt_trades 를 대신한다"""
    def _fetch(client, query):
        return responses.get(query.year_month, ApiResponse.success(payload_with([])))
    return _fetch


def test_to_num():
    assert to_num("85,000") == 85000.0
    assert np.isnan(to_num("없음"))
    assert np.isnan(to_num(None))


def test_trend_periods_crosses_year_boundary():
    assert trend_periods("202502", 3) == ["202412", "202501", "202502"]
    assert trend_periods("202506", 1) == ["202506"]


def test_collect_and_summarize(keyed_context):
    responses = {
        "202504": ApiResponse.success(payload_with([apt_item("래미안", "100,000"), apt_item("자이", "80,000")])),
        "202505": ApiResponse.unavailable("timeout"),
        "202506": ApiResponse.success(payload_with(apt_item("래미안", "110,000"))),
    }
    with patch(FETCH, side_effect=fake_fetch(responses)):
        df, failed = collect_trend_frame(keyed_context.client, "11650", ["202504", "202505", "202506"])

    assert failed == ["202505"]
    assert len(df) == 3
    summary = summarize_by_month(df)
    assert list(summary.index) == ["202504", "202506"]
    assert summary.loc["202504", "count"] == 2
    assert summary.loc["202504", "mean"] == pytest.approx(90000.0)
    assert summary.loc["202504", "max"] == 100000.0
    assert summary.loc["202504", "min"] == 80000.0


def test_price_trend_reports_first_vs_last_delta(keyed_context):
    responses = {
        "202504": ApiResponse.success(payload_with([apt_item("래미안", "100,000"), apt_item("자이", "80,000")])),
        "202506": ApiResponse.success(payload_with(apt_item("래미안", "99,000"))),
    }
    with patch(FETCH, side_effect=fake_fetch(responses)) as mock_fetch:
        text = handle_price_trend(keyed_context, "서초구", months=3, year="2025", month="06")

    assert mock_fetch.call_count == 3
    assert "📈 서초구 아파트 매매가 추이 (2025년 04월 ~ 2025년 06월)" in text
    assert "2025년 04월: 2건 | 평균 90,000만원 | 최고 100,000만원 | 최저 80,000만원" in text
    assert "2025년 05월: 거래 없음" in text
    assert "2025년 04월 대비 2025년 06월 평균 거래금액: +9,000만원 (+10.0%)" in text


def test_price_trend_with_name_filter_and_failed_month(keyed_context):
    responses = {
        "202505": ApiResponse.unavailable("boom"),
        "202506": ApiResponse.success(payload_with([apt_item("래미안", "120,000"), apt_item("자이", "50,000")])),
        "202504": ApiResponse.success(payload_with([apt_item("래미안", "150,000")])),
    }
    with patch(FETCH, side_effect=fake_fetch(responses)):
        text = handle_price_trend(keyed_context, "서초구", months=3, apartment_name="래미안", year="2025", month="06")

    assert "검색 아파트: 래미안" in text
    assert "2025년 05월: 조회 실패" in text
    assert "평균 거래금액: -30,000만원 (-20.0%)" in text
    assert "※ API 호출 실패로 제외한 월: 2025년 05월" in text


def test_price_trend_single_month_has_no_delta(keyed_context):
    responses = {"202506": ApiResponse.success(payload_with(apt_item("래미안", "120,000")))}
    with patch(FETCH, side_effect=fake_fetch(responses)):
        text = handle_price_trend(keyed_context, "서초구", months=2, year="2025", month="06")
    assert "변화를 계산할 수 없습니다" in text


def test_price_trend_without_data(keyed_context):
    with patch(FETCH, side_effect=fake_fetch({})):
        text = handle_price_trend(keyed_context, "서초구", months=2, year="2025", month="06")
    assert text == "서초구 2025년 05월 ~ 2025년 06월 아파트 매매 거래 데이터가 없습니다."


def test_price_trend_all_failures(keyed_context):
    with patch(FETCH, return_value=ApiResponse.unavailable("down")):
        text = handle_price_trend(keyed_context, "서초구", months=2, year="2025", month="06")
    assert "모두 실패" in text


def test_price_trend_requires_api_key(keyless_context):
    with patch(FETCH) as mock_fetch:
        text = handle_price_trend(keyless_context, "서초구")
    mock_fetch.assert_not_called()
    assert "API 키" in text


def test_price_trend_clamps_months(keyed_context):
    with patch(FETCH, side_effect=fake_fetch({})) as mock_fetch:
        handle_price_trend(keyed_context, "서초구", months=40, year="2025", month="06")
    assert mock_fetch.call_count == 12


def test_price_trend_rejects_malformed_period(keyed_context):
    with patch(FETCH) as mock_fetch:
        text = handle_price_trend(keyed_context, "서초구", year="2025", month="13")
    mock_fetch.assert_not_called()
    assert "형식이 올바르지 않습니다" in text


def test_price_trend_unknown_region(keyed_context):
    assert "찾을 수 없습니다" in handle_price_trend(keyed_context, "해운대구")


@pytest.mark.parametrize("months, expected_calls", [(0, 1), (-3, 1), (None, 6)])
def test_price_trend_clamps_small_months(keyed_context, months, expected_calls):
    with patch(FETCH, side_effect=fake_fetch({})) as mock_fetch:
        handle_price_trend(keyed_context, "서초구", months=months, year="2025", month="06")
    assert mock_fetch.call_count == expected_calls


def test_get_apartment_price_trend_tool_returns_text_content(keyless_context):
    tool = getattr(get_apartment_price_trend, "fn", get_apartment_price_trend)
    with patch("mcp_kr_apartment.utils.ctx_helper.default_context", keyless_context):
        result = tool("서초구")
    assert isinstance(result, TextContent)
    assert result.type == "text"
    assert "API 키" in result.text
