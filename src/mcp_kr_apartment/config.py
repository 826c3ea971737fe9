"""
환경변수 및 설정 관리
"""

import os
import logging
from typing import Literal, Optional, cast
from dataclasses import dataclass
from dotenv import load_dotenv

# .env 파일 로드
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://apis.data.go.kr/1613000/RTMSDataSvcAptTrade/"
DEFAULT_ENDPOINT = "getRTMSDataSvcAptTrade"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class AptTradeConfig:
    """아파트 매매 실거래가 API configuration."""
    api_key: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    endpoint: str = DEFAULT_ENDPOINT
    timeout: float = 10.0
    display_limit: int = 10
    log_format: str = DEFAULT_LOG_FORMAT

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key and self.api_key.strip())

    @classmethod
    def from_env(cls) -> "AptTradeConfig":
        # API 키가 없어도 설정은 생성한다 (샘플 데이터로 응답)
        api_key = os.getenv("PUBLIC_DATA_API_KEY")
        if not api_key:
            logger.warning("PUBLIC_DATA_API_KEY가 설정되지 않았습니다. 샘플 데이터로 응답합니다.")
        return cls(
            api_key=api_key,
            base_url=os.getenv("APT_TRADE_BASE_URL", DEFAULT_BASE_URL),
            endpoint=os.getenv("APT_TRADE_ENDPOINT", DEFAULT_ENDPOINT),
            timeout=float(os.getenv("APT_TRADE_TIMEOUT", "10")),
            display_limit=int(os.getenv("APT_TRADE_DISPLAY_LIMIT", "10")),
            log_format=os.getenv("LOG_FORMAT", DEFAULT_LOG_FORMAT),
        )


@dataclass
class MCPConfig:
    host: str = "0.0.0.0"
    port: int = 8001
    log_level: str = "INFO"
    server_name: str = "kr-apartment-price-mcp"
    transport: Literal["stdio", "sse"] = "stdio"

    @classmethod
    def from_env(cls) -> "MCPConfig":
        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8001")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            server_name=os.getenv("MCP_SERVER_NAME", "kr-apartment-price-mcp"),
            transport=cast(Literal["stdio", "sse"], os.getenv("TRANSPORT", "stdio"))
        )


# 설정 인스턴스 생성
apt_trade_config = AptTradeConfig.from_env()
mcp_config = MCPConfig.from_env()
