"""
도구 메타데이터 레지스트리
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class ToolInfo:
    name: str
    korean_name: str
    description: str
    parameters: Dict[str, Any]
    linked_tools: List[str] = field(default_factory=list)


class ToolRegistry:
    def __init__(self) -> None:
        self._tools: Dict[str, ToolInfo] = {}

    def register_tool(
        self,
        name: str,
        korean_name: str,
        description: str,
        parameters: Dict[str, Any],
        linked_tools: Optional[List[str]] = None,
    ) -> ToolInfo:
        if name in self._tools:
            raise ValueError(f"이미 등록된 도구입니다: {name}")
        info = ToolInfo(name, korean_name, description.strip(), parameters, list(linked_tools or []))
        self._tools[name] = info
        return info

    def get_tool(self, name: str) -> ToolInfo:
        try:
            return self._tools[name]
        except KeyError:
            raise KeyError(f"등록되지 않은 도구입니다: {name}") from None

    def description(self, name: str) -> str:
        return self.get_tool(name).description

    def list_tools(self) -> List[ToolInfo]:
        return list(self._tools.values())
