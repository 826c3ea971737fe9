"""
아파트 매매 실거래가 API 호출
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from mcp_kr_apartment.apis.client import ApiResponse, RealEstateClient

logger = logging.getLogger(__name__)

# 첫 페이지만 조회한다
NUM_OF_ROWS = 100
PAGE_NO = 1


@dataclass(frozen=True)
class TransactionQuery:
    region_code: str
    year_month: str

    @property
    def year(self) -> str:
        return self.year_month[:4]

    @property
    def month(self) -> str:
        return self.year_month[4:]


def build_trade_query(
    region_code: str,
    year: Optional[str] = None,
    month: Optional[str] = None,
    now: Optional[datetime] = None,
) -> TransactionQuery:
    """
    조회 조건을 만듭니다.
    Args:
        region_code (str): 법정동코드 5자리
        year (str, optional): 거래년도 4자리. 없으면 현재 년도
        month (str, optional): 거래월 2자리. 없으면 현재 월
    Returns:
        TransactionQuery: year + month 를 이어 붙인 DEAL_YMD 포함
    """
    now = now or datetime.now()
    year = year or now.strftime("%Y")
    month = month or now.strftime("%m")
    return TransactionQuery(region_code=region_code, year_month=f"{year}{month}")


def build_request_params(query: TransactionQuery) -> Dict[str, Any]:
    # serviceKey 는 RealEstateClient 가 채운다
    return {
        "LAWD_CD": query.region_code,
        "DEAL_YMD": query.year_month,
        "numOfRows": NUM_OF_ROWS,
        "pageNo": PAGE_NO,
    }


def fetch_apt_trades(client: RealEstateClient, query: TransactionQuery) -> ApiResponse:
    """아파트 매매 실거래가 첫 페이지를 조회합니다."""
    logger.info(f"아파트 매매 실거래가 조회: LAWD_CD={query.region_code}, DEAL_YMD={query.year_month}")
    return client.get(client.config.endpoint, build_request_params(query))
