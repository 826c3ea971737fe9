"""
아파트 매매가 추이 도구

월별 거래건수/평균/최고/최저 거래금액과 첫 달 대비 마지막 달 평균 거래금액 변화만 계산합니다.
"""

import logging
from typing import Annotated, List, Optional, Tuple

import numpy as np
import pandas as pd
from mcp.types import TextContent
from pydantic import Field

from mcp_kr_apartment.server import mcp, tool_registry, RealEstateContext
from mcp_kr_apartment.apis.apt_trade import TransactionQuery, build_trade_query, fetch_apt_trades
from mcp_kr_apartment.apis.client import RealEstateClient
from mcp_kr_apartment.utils.ctx_helper import with_context
from mcp_kr_apartment.utils.formatter import PRICE_UNIT, extract_items, field_value, filter_by_name, period_label
from mcp_kr_apartment.utils.region_matcher import build_no_match_message, match_region

logger = logging.getLogger(__name__)

DEFAULT_TREND_MONTHS = 6
MAX_TREND_MONTHS = 12
TREND_COLUMNS = ["year_month", "name", "amount"]


def to_num(s) -> float:
    try:
        return float(str(s).replace(",", "").strip())
    except (ValueError, TypeError):
        return np.nan


def trend_periods(end_year_month: str, months: int) -> List[str]:
    """end_year_month(YYYYMM)까지 months 개월의 YYYYMM 목록 (오래된 순)"""
    year, month = int(end_year_month[:4]), int(end_year_month[4:])
    if not 1 <= month <= 12:
        raise ValueError(f"잘못된 월: {month}")
    end = pd.Period(year=year, month=month, freq="M")
    return [(end - offset).strftime("%Y%m") for offset in reversed(range(months))]


def collect_trend_frame(
    client: RealEstateClient,
    region_code: str,
    periods: List[str],
    apartment_name: Optional[str] = None,
) -> Tuple[pd.DataFrame, List[str]]:
    """월별로 한 번씩 조회하여 DataFrame 을 만듭니다. 실패한 월은 따로 반환합니다."""
    rows = []
    failed = []
    for year_month in periods:
        response = fetch_apt_trades(client, TransactionQuery(region_code, year_month))
        if not response.ok:
            logger.warning(f"{year_month} 조회 실패: {response.error}")
            failed.append(year_month)
            continue
        items = filter_by_name(extract_items(response.payload) or [], apartment_name)
        for item in items:
            rows.append({
                "year_month": year_month,
                "name": field_value(item, "name"),
                "amount": to_num(field_value(item, "amount")),
            })
    return pd.DataFrame(rows, columns=TREND_COLUMNS), failed


def summarize_by_month(df: pd.DataFrame) -> pd.DataFrame:
    valid = df.dropna(subset=["amount"])
    if valid.empty:
        return pd.DataFrame(columns=["count", "mean", "max", "min"])
    return valid.groupby("year_month")["amount"].agg(
        count="size", mean="mean", max="max", min="min"
    ).sort_index()


def _won(value: float) -> str:
    return f"{int(round(value)):,}{PRICE_UNIT}"


def render_trend(
    region_label: str,
    periods: List[str],
    summary: pd.DataFrame,
    failed: List[str],
    apartment_name: Optional[str] = None,
) -> str:
    lines = [f"📈 {region_label} 아파트 매매가 추이 ({period_label(periods[0])} ~ {period_label(periods[-1])})"]
    if apartment_name:
        lines.append(f"검색 아파트: {apartment_name}")
    lines.append("")
    for year_month in periods:
        label = period_label(year_month)
        if year_month in failed:
            lines.append(f"{label}: 조회 실패")
        elif year_month in summary.index:
            row = summary.loc[year_month]
            lines.append(
                f"{label}: {int(row['count'])}건 | 평균 {_won(row['mean'])} | "
                f"최고 {_won(row['max'])} | 최저 {_won(row['min'])}"
            )
        else:
            lines.append(f"{label}: 거래 없음")
    lines.append("")

    if len(summary) >= 2:
        first_ym, last_ym = summary.index[0], summary.index[-1]
        first, last = summary.loc[first_ym, "mean"], summary.loc[last_ym, "mean"]
        delta = last - first
        pct = delta / first * 100 if first else 0.0
        sign = "+" if delta >= 0 else "-"
        lines.append(
            f"{period_label(first_ym)} 대비 {period_label(last_ym)} 평균 거래금액: "
            f"{sign}{_won(abs(delta))} ({pct:+.1f}%)"
        )
    else:
        lines.append("거래가 있는 달이 2개월 미만이라 변화를 계산할 수 없습니다.")

    if failed:
        lines.append(f"※ API 호출 실패로 제외한 월: {', '.join(period_label(ym) for ym in failed)}")
    return "\n".join(lines)


def handle_price_trend(
    context: RealEstateContext,
    address_or_region: str,
    months: int = DEFAULT_TREND_MONTHS,
    apartment_name: Optional[str] = None,
    year: Optional[str] = None,
    month: Optional[str] = None,
) -> str:
    region = match_region(address_or_region)
    if region is None:
        return build_no_match_message(address_or_region)

    client = context.client
    if not client.has_api_key:
        return "가격 추이 조회에는 실거래가 API 키(PUBLIC_DATA_API_KEY)가 필요합니다. 샘플 데이터로는 추이를 계산하지 않습니다."

    if months is None:
        months = DEFAULT_TREND_MONTHS
    months = max(1, min(int(months), MAX_TREND_MONTHS))
    end = build_trade_query(region.code, year, month)
    try:
        periods = trend_periods(end.year_month, months)
    except ValueError:
        return f"거래년월 형식이 올바르지 않습니다: {end.year_month} (YYYYMM)"

    df, failed = collect_trend_frame(client, region.code, periods, apartment_name)
    if len(failed) == len(periods):
        return f"{region.matched_name} 실거래가 API 호출에 모두 실패했습니다. 잠시 후 다시 시도해 주세요."

    summary = summarize_by_month(df)
    if summary.empty:
        target = f"'{apartment_name}' " if apartment_name else ""
        return (
            f"{region.matched_name} {period_label(periods[0])} ~ {period_label(periods[-1])} "
            f"{target}아파트 매매 거래 데이터가 없습니다."
        )
    return render_trend(region.matched_name, periods, summary, failed, apartment_name)


@mcp.tool(
    name="get_apartment_price_trend",
    description=tool_registry.description("get_apartment_price_trend"),
    tags={"부동산", "실거래가", "아파트", "추이", "통계"}
)
def get_apartment_price_trend(
    address_or_region: Annotated[str, Field(description="주소 또는 지역명")],
    months: Annotated[int, Field(description="조회 개월 수 (1~12)")] = DEFAULT_TREND_MONTHS,
    apartment_name: Annotated[Optional[str], Field(description="아파트명 일부")] = None,
    year: Annotated[Optional[str], Field(description="마지막 조회 년도 (YYYY)")] = None,
    month: Annotated[Optional[str], Field(description="마지막 조회 월 (MM)")] = None,
) -> TextContent:
    text = with_context(
        None,
        "get_apartment_price_trend",
        lambda context: handle_price_trend(context, address_or_region, months, apartment_name, year, month),
    )
    return TextContent(type="text", text=text)
