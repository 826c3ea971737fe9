import logging
from typing import Callable, Optional, TypeVar

from mcp_kr_apartment.server import RealEstateContext, ctx as default_context

logger = logging.getLogger(__name__)

T = TypeVar("T")


def with_context(
    ctx: Optional[RealEstateContext],
    tool_name: str,
    fn: Callable[[RealEstateContext], T],
) -> "T | str":
    """
    도구 함수를 실행합니다. 예상하지 못한 예외는 'Error: <message>' 텍스트로 바꿉니다.
    ctx 가 RealEstateContext 가 아니면 서버 기본 컨텍스트를 사용합니다.
    """
    context = ctx if isinstance(ctx, RealEstateContext) else default_context
    try:
        return fn(context)
    except Exception as e:
        logger.error(f"[{tool_name}] 도구 실행 중 오류: {e}", exc_info=True)
        return f"Error: {e}"
