"""
프롬프트 포매터
=========================
Author: Jin
Date: 2026.03.02
Version: 1.0

Description:
고정된 템플릿 ID 집합을 LangChain PromptTemplate으로 렌더링합니다.
각 템플릿은 선언된 변수 집합을 가지며, 포매터 생성 시점에 템플릿의
플레이스홀더와 선언이 일치하는지 검사합니다. 렌더링은 순수 문자열 치환입니다.
"""
from enum import Enum
from typing import Dict, FrozenSet, Mapping, Optional, Tuple

from langchain_core.prompts import PromptTemplate

from base.exceptions import MissingVariableError
from config.logging_config import logger


class PromptTemplateId(str, Enum):
    DIRECT_QUESTION = "direct_question"
    CONTEXT_AUGMENTED = "context_augmented"
    TOOL_SELECTION = "tool_selection"
    RESULT_SUMMARY = "result_summary"
    RECOMMENDATION = "recommendation"


# (템플릿 본문, 선언된 변수 집합)
PROMPT_TEMPLATES: Dict[PromptTemplateId, Tuple[str, FrozenSet[str]]] = {
    PromptTemplateId.DIRECT_QUESTION: (
        "{question}",
        frozenset({"question"}),
    ),
    PromptTemplateId.CONTEXT_AUGMENTED: (
        "Answer the question based only on the following context. "
        "If the context does not contain the answer, say that you don't know "
        "and do not answer anything outside of the given context.\n\n"
        "Context:\n{context}\n\n"
        "Question: {question}",
        frozenset({"context", "question"}),
    ),
    PromptTemplateId.TOOL_SELECTION: (
        "You are a helpful assistant with access to the following tools, "
        "described in JSON:\n{tools}\n\n"
        "Decide which of these tools should be called to answer the question below. "
        "Respond with a JSON array of objects in the form "
        '[{{"name": "<tool name>", "parameters": {{"<parameter name>": "<value>"}}}}] '
        "and nothing else. If no tool is needed, answer the question directly.\n\n"
        "Question: {question}",
        frozenset({"tools", "question"}),
    ),
    PromptTemplateId.RESULT_SUMMARY: (
        "The user asked: {question}\n\n"
        "These are the results of the tools that were called, in JSON format. "
        "A null result means the tool could not be called.\n{results}\n\n"
        "Using these results, give a short final answer to the question.",
        frozenset({"question", "results"}),
    ),
    PromptTemplateId.RECOMMENDATION: (
        "Be a helpful assistant and give a recommendation for the following activity: {question}",
        frozenset({"question"}),
    ),
}


class PromptFormatter:
    """템플릿 ID 기반 프롬프트 렌더러"""

    def __init__(
        self,
        templates: Optional[Mapping[PromptTemplateId, Tuple[str, FrozenSet[str]]]] = None
    ):
        """
        템플릿 컴파일 및 선언 검사

        Args:
            templates: 템플릿 정의 (None이면 기본 템플릿)

        Raises:
            ValueError: 템플릿 플레이스홀더와 선언된 변수가 다른 경우
        """
        self._templates: Dict[PromptTemplateId, PromptTemplate] = {}

        for template_id, (text, declared) in (templates or PROMPT_TEMPLATES).items():
            template = PromptTemplate.from_template(text)
            placeholders = set(template.input_variables)
            if placeholders != set(declared):
                raise ValueError(
                    f"템플릿 '{template_id.value}' 변수 불일치: "
                    f"선언={sorted(declared)}, 실제={sorted(placeholders)}"
                )
            self._templates[template_id] = template

        logger.debug(f"[PromptFormatter] 템플릿 {len(self._templates)}개 로드")

    def format(self, template_id: PromptTemplateId, variables: Mapping[str, str]) -> str:
        """
        템플릿 렌더링

        Args:
            template_id: 템플릿 ID
            variables: 플레이스홀더 이름 -> 값

        Returns:
            렌더링된 프롬프트

        Raises:
            MissingVariableError: 선언된 변수 중 값이 없는 것이 있는 경우
        """
        template_id = PromptTemplateId(template_id)
        template = self._templates[template_id]

        missing = [name for name in template.input_variables if name not in variables]
        if missing:
            raise MissingVariableError(template_id.value, sorted(missing))

        return template.format(**{name: variables[name] for name in template.input_variables})

    def variables_of(self, template_id: PromptTemplateId) -> FrozenSet[str]:
        """템플릿의 변수 집합"""
        return frozenset(self._templates[PromptTemplateId(template_id)].input_variables)
