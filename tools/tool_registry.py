"""
Tool Registry
=========================
Author: Jin
Date: 2026.03.02
Version: 1.0

Description:
Tool 이름 -> (스키마, 실행 객체) 정적 레지스트리입니다.
시작 시점에 한 번 구성하고 freeze() 이후에는 읽기 전용으로만 사용합니다.
Tool 실행 실패는 레지스트리 안에서 실패 메시지로 바뀌므로
하나의 Tool 실패가 같은 배치의 다른 Tool 호출을 중단시키지 않습니다.
"""
import json
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from langchain_core.tools import BaseTool

from base.exceptions import ToolInvocationError
from config.logging_config import logger
from models.answer_model import FAILURE_MESSAGE
from models.tool_model import ToolParameter, ToolResult, ToolSchema


class ToolRegistry:
    """Tool 등록/조회/실행"""

    def __init__(self):
        """Registry 초기화"""
        self._tools: Mapping[str, Tuple[ToolSchema, BaseTool]] = {}
        self._frozen = False

    # ========== 등록 ==========
    def register_tool(self, tool: BaseTool, schema: Optional[ToolSchema] = None) -> None:
        """
        Tool 등록

        Args:
            tool: LangChain Tool
            schema: Tool 스키마 (None이면 get_schema() 또는 tool.args)

        Raises:
            RuntimeError: freeze 이후 등록 시도
            ValueError: 이미 등록된 이름
        """
        if self._frozen:
            raise RuntimeError(f"ToolRegistry가 고정된 후에는 등록할 수 없습니다: {tool.name}")
        if tool.name in self._tools:
            raise ValueError(f"이미 등록된 Tool 이름입니다: {tool.name}")

        schema = schema or self._schema_for(tool)
        self._tools[tool.name] = (schema, tool)
        logger.info(f"[ToolRegistry] Tool 등록: {tool.name}")

    @staticmethod
    def _schema_for(tool: BaseTool) -> ToolSchema:
        """Tool 자체 스키마, 없으면 LangChain 인자 스키마(tool.args)로 구성"""
        get_schema = getattr(tool, "get_schema", None)
        if callable(get_schema):
            return get_schema()

        parameters = tuple(
            ToolParameter(
                name=arg_name,
                type=str(spec.get("type", "string")),
                description=spec.get("description") or spec.get("title") or arg_name
            )
            for arg_name, spec in tool.args.items()
        )
        return ToolSchema(name=tool.name, description=tool.description, parameters=parameters)

    def freeze(self) -> "ToolRegistry":
        """이후 등록을 막고 읽기 전용으로 전환"""
        self._tools = MappingProxyType(dict(self._tools))
        self._frozen = True
        logger.info(f"[ToolRegistry] 고정 완료: {list(self._tools.keys())}")
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    # ========== 조회 ==========
    def get_tool(self, name: str) -> Optional[BaseTool]:
        """Tool 조회"""
        entry = self._tools.get(name)
        return entry[1] if entry else None

    def get_all_tool_names(self) -> List[str]:
        """등록된 모든 Tool 이름 반환"""
        return list(self._tools.keys())

    def describe(self) -> List[Dict[str, Any]]:
        """
        모델 프롬프트에 넣을 Tool 목록

        Returns:
            [{name, description, parameters: [{name, type, description}]}]
        """
        return [schema.to_dict() for schema, _ in self._tools.values()]

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    # ========== 실행 ==========
    async def invoke(self, name: str, parameters: Optional[Mapping[str, Any]] = None) -> ToolResult:
        """
        Tool 실행

        Args:
            name: Tool 이름
            parameters: Tool 파라미터

        Returns:
            Tool 결과 문자열, 실패 시 실패 메시지, 등록되지 않은 이름이면 None
        """
        tool = self.get_tool(name)
        if tool is None:
            logger.warning(f"[ToolRegistry] 등록되지 않은 Tool 요청 무시: {name}")
            return None

        try:
            result = await tool.ainvoke(dict(parameters or {}))
        except Exception as e:
            error = ToolInvocationError(name, str(e))
            logger.error(f"[ToolRegistry] Tool 실행 실패 {error.to_log()} cause={type(e).__name__}: {e}")
            return FAILURE_MESSAGE

        if isinstance(result, str):
            return result
        return json.dumps(result, ensure_ascii=False, default=str)
