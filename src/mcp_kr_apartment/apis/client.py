"""
공통 HTTP 클라이언트
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple
from urllib.parse import urljoin

import requests
import xmltodict
from xml.parsers.expat import ExpatError

from mcp_kr_apartment.config import AptTradeConfig, apt_trade_config

logger = logging.getLogger(__name__)

# 공공데이터포털 정상 응답 코드
SUCCESS_RESULT_CODES = ("00", "000", "0000")


@dataclass(frozen=True)
class ApiResponse:
    """API 호출 결과. payload 또는 실패 사유 중 하나만 가집니다."""
    payload: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    status_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, payload: Dict[str, Any]) -> "ApiResponse":
        return cls(payload=payload)

    @classmethod
    def unavailable(cls, reason: str, status_code: Optional[int] = None) -> "ApiResponse":
        return cls(error=reason, status_code=status_code)


def _result_status(payload: Dict[str, Any]) -> Tuple[str, str]:
    """
    (결과 코드, 메시지)를 반환합니다.

    서비스 키 미등록, 트래픽 초과 등 게이트웨이 오류는 HTTP 200 으로
    OpenAPI_ServiceResponse/cmmMsgHeader 안에 returnReasonCode 로 옵니다.
    """
    gateway = payload.get("OpenAPI_ServiceResponse")
    if isinstance(gateway, dict):
        header = gateway.get("cmmMsgHeader")
        header = header if isinstance(header, dict) else {}
        code = str(header.get("returnReasonCode") or "").strip()
        message = header.get("returnAuthMsg") or header.get("errMsg") or "알 수 없는 오류"
        # 코드가 없는 게이트웨이 응답도 실패로 본다
        return code or "99", message
    response = payload.get("response", payload)
    header = response.get("header") if isinstance(response, dict) else None
    if not isinstance(header, dict):
        return "", ""
    return str(header.get("resultCode") or "").strip(), header.get("resultMsg") or "알 수 없는 오류"


class RealEstateClient:
    """국토교통부 실거래가 API 클라이언트"""
    def __init__(self, config: Optional[AptTradeConfig] = None):
        self.config = config or apt_trade_config
        self.api_key = self.config.api_key
        self.base_url = self.config.base_url
        self.timeout = self.config.timeout

    @property
    def has_api_key(self) -> bool:
        return self.config.has_api_key

    def _decode(self, response: requests.Response) -> Dict[str, Any]:
        content_type = response.headers.get("Content-Type", "")
        if "application/json" in content_type:
            return response.json()
        # 기본 응답 형식은 XML
        return xmltodict.parse(response.text)

    def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> ApiResponse:
        """
        GET 요청을 한 번 수행합니다. 재시도하지 않으며 예외를 던지지 않습니다.
        실패하면 ApiResponse.unavailable 을 반환합니다.
        """
        params = dict(params or {})
        params["serviceKey"] = self.api_key
        url = urljoin(self.base_url, endpoint)
        logger.debug(f"\n=== API 요청 정보 ===")
        logger.debug(f"URL: {url}")
        logger.debug(f"Parameters: {dict(params, serviceKey='***')}")
        logger.debug("====================")
        try:
            response = requests.get(url, params=params, timeout=self.timeout)
            logger.debug(f"상태 코드: {response.status_code}")
            logger.debug(f"Content-Type: {response.headers.get('Content-Type', '없음')}")
            response.raise_for_status()
            payload = self._decode(response)
        except requests.RequestException as e:
            status_code = getattr(e.response, "status_code", None)
            logger.error(f"API 요청 실패: {str(e)}")
            return ApiResponse.unavailable(str(e), status_code)
        except (ValueError, ExpatError) as e:
            # JSON/XML 디코딩 실패
            logger.error(f"API 응답 파싱 실패: {str(e)}")
            return ApiResponse.unavailable(f"응답 파싱 실패: {e}", response.status_code)

        if not isinstance(payload, dict):
            logger.error(f"예상하지 못한 응답 형식: {type(payload).__name__}")
            return ApiResponse.unavailable("예상하지 못한 응답 형식", response.status_code)

        result_code, result_msg = _result_status(payload)
        if result_code and result_code not in SUCCESS_RESULT_CODES:
            logger.error(f"API 오류 응답: {result_code} - {result_msg}")
            return ApiResponse.unavailable(f"API 오류 {result_code}: {result_msg}", response.status_code)

        if "response" not in payload and "body" not in payload:
            logger.error(f"예상하지 못한 응답 구조: {list(payload)[:5]}")
            return ApiResponse.unavailable("예상하지 못한 응답 구조", response.status_code)

        return ApiResponse.success(payload)
