"""
Answer Orchestrator
=========================
Author: Jin
Date: 2026.03.02
Version: 1.0

Description:
Tool 선택 → Tool 실행 → 결과 요약의 단일 라운드 오케스트레이터입니다.

상태 전이:
    START → AWAITING_TOOL_SELECTION
          → NO_TOOLS_REQUESTED → DONE
          → TOOLS_REQUESTED → AWAITING_TOOL_RESULTS → AWAITING_FINAL_ANSWER → DONE

첫 응답이 JSON이 아니거나 비어 있는 배열이면 그 원문이 곧 최종 답변입니다.
요청된 Tool들은 동시에 실행되고, 결과는 요청 순서대로 모아 요약 프롬프트에 넣습니다.
질문 간에 유지되는 상태는 없습니다.
"""
import asyncio
import json
import re
from enum import Enum
from typing import Any, List, Optional

from pydantic import ValidationError

from base.agent.llm_base import LLMBase
from base.exceptions import PromptParseError, ProviderError
from config.logging_config import logger
from models.answer_model import FAILURE_MESSAGE
from models.tool_model import ToolCallOutcome, ToolCallRequest, outcomes_to_dicts
from prompts.prompt_formatter import PromptFormatter, PromptTemplateId
from tools.tool_registry import ToolRegistry

_CODE_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


class OrchestratorState(str, Enum):
    START = "start"
    AWAITING_TOOL_SELECTION = "awaiting_tool_selection"
    NO_TOOLS_REQUESTED = "no_tools_requested"
    TOOLS_REQUESTED = "tools_requested"
    AWAITING_TOOL_RESULTS = "awaiting_tool_results"
    AWAITING_FINAL_ANSWER = "awaiting_final_answer"
    DONE = "done"


class AnswerOrchestrator:
    """Tool 호출 기반 답변 오케스트레이터"""

    def __init__(
        self,
        llm: LLMBase,
        registry: ToolRegistry,
        formatter: Optional[PromptFormatter] = None,
        name: str = "AnswerOrchestrator"
    ):
        """
        Args:
            llm: LLM 인스턴스
            registry: 읽기 전용 Tool 레지스트리
            formatter: 프롬프트 포매터 (None이면 기본 템플릿)
            name: 로그 이름
        """
        self.llm = llm
        self.registry = registry
        self.formatter = formatter or PromptFormatter()
        self.name = name
        logger.info(f"[{self.name}] 초기화 완료 - Tools: {registry.get_all_tool_names()}")

    async def answer(self, question: str) -> str:
        """
        질문에 대한 최종 답변

        제공자 오류는 호출자에게 전파하지 않고 고정 실패 메시지로 바꿉니다.

        Args:
            question: 사용자 질문

        Returns:
            최종 답변 문자열
        """
        try:
            return await self._run(question)
        except ProviderError as e:
            logger.error(f"[{self.name}] 답변 생성 실패 {e.to_log()}: {e}")
            return FAILURE_MESSAGE

    async def _run(self, question: str) -> str:
        state = OrchestratorState.START

        selection_prompt = self.formatter.format(
            PromptTemplateId.TOOL_SELECTION,
            {
                "tools": json.dumps(self.registry.describe(), ensure_ascii=False),
                "question": question
            }
        )
        state = self._transition(state, OrchestratorState.AWAITING_TOOL_SELECTION)
        selection = await self.llm.generate_response(selection_prompt)

        try:
            requests = self.parse_tool_calls(selection)
        except PromptParseError as e:
            logger.info(f"[{self.name}] Tool 선택 응답이 JSON이 아님 - 원문을 답변으로 사용 {e.to_log()}")
            requests = []

        if not requests:
            state = self._transition(state, OrchestratorState.NO_TOOLS_REQUESTED)
            self._transition(state, OrchestratorState.DONE)
            return selection

        state = self._transition(state, OrchestratorState.TOOLS_REQUESTED)
        state = self._transition(state, OrchestratorState.AWAITING_TOOL_RESULTS)
        outcomes = await self.invoke_tools(requests)

        state = self._transition(state, OrchestratorState.AWAITING_FINAL_ANSWER)
        summary_prompt = self.formatter.format(
            PromptTemplateId.RESULT_SUMMARY,
            {
                "question": question,
                "results": json.dumps(outcomes_to_dicts(outcomes), ensure_ascii=False)
            }
        )
        final_answer = await self.llm.generate_response(summary_prompt)

        self._transition(state, OrchestratorState.DONE)
        return final_answer

    def parse_tool_calls(self, text: str) -> List[Optional[ToolCallRequest]]:
        """
        Tool 선택 응답 파싱

        Args:
            text: 모델의 첫 번째 응답 원문

        Returns:
            요청 순서의 Tool 호출 리스트 (형식이 잘못된 항목은 None).
            JSON 배열이 아니면 빈 리스트

        Raises:
            PromptParseError: JSON이 아닌 경우
        """
        candidate = text.strip()
        fenced = _CODE_FENCE.match(candidate)
        if fenced:
            candidate = fenced.group(1)

        try:
            parsed: Any = json.loads(candidate)
        except (ValueError, TypeError, RecursionError) as e:
            # 지나치게 깊은 중첩도 JSON이 아닌 응답과 같이 원문으로 처리
            raise PromptParseError(f"JSON 파싱 실패: {e}", raw_text=text) from e

        if not isinstance(parsed, list):
            return []

        requests: List[Optional[ToolCallRequest]] = []
        for item in parsed:
            try:
                requests.append(ToolCallRequest.model_validate(item))
            except ValidationError:
                logger.warning(f"[{self.name}] 잘못된 Tool 호출 항목 무시: {item!r}")
                requests.append(None)
        return requests

    async def invoke_tools(self, requests: List[Optional[ToolCallRequest]]) -> List[ToolCallOutcome]:
        """
        Tool 동시 실행 (fan-out/fan-in)

        하나의 실패가 다른 호출을 취소하지 않으며, 결과는 요청 순서를 유지합니다.

        Args:
            requests: 파싱된 Tool 호출 리스트

        Returns:
            요청 순서의 Tool 결과 리스트
        """
        async def invoke_one(request: Optional[ToolCallRequest]) -> ToolCallOutcome:
            if request is None:
                return ToolCallOutcome(name=None, result=None)
            result = await self.registry.invoke(request.name, request.parameters)
            return ToolCallOutcome(name=request.name, result=result)

        outcomes = await asyncio.gather(*(invoke_one(request) for request in requests))

        logger.info(
            f"[{self.name}] Tool 실행 완료: {len(outcomes)}개 요청, "
            f"{sum(1 for outcome in outcomes if outcome.result is not None)}개 결과"
        )
        return list(outcomes)

    def _transition(self, current: OrchestratorState, target: OrchestratorState) -> OrchestratorState:
        logger.debug(f"[{self.name}] 상태 전이: {current.value} → {target.value}")
        return target
