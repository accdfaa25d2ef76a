"""
Answer 서비스
=========================
Author: Jin
Date: 2026.03.02
Version: 1.0

Description:
답변 모드(direct, corpus, wikipedia, tools, recommendation)에 따라
질문을 알맞은 흐름으로 보내는 서비스입니다.
모든 모드는 같은 실패 정책을 따릅니다: ProviderError는 고정 실패 메시지로 바뀝니다.
"""
import json
from typing import Optional

from base.agent.llm_base import LLMBase
from base.exceptions import ProviderError
from base.rag.retriever_base import RetrieverBase
from agents.orchestrator.answer_orchestrator import AnswerOrchestrator
from config.logging_config import logger
from models.answer_model import FAILURE_MESSAGE, AnswerMode, Recommendation
from prompts.prompt_formatter import PromptFormatter, PromptTemplateId
from tools.tool_registry import ToolRegistry

NO_CONTEXT = "(no context available)"


class AnswerService:
    """모드별 답변 생성 서비스"""

    def __init__(
        self,
        llm: LLMBase,
        registry: ToolRegistry,
        retriever: Optional[RetrieverBase] = None,
        formatter: Optional[PromptFormatter] = None,
        default_mode: AnswerMode = AnswerMode.TOOLS,
        retrieval_top_k: int = 4,
        wikipedia_tool_name: str = "callWikipediaTool"
    ):
        """
        Args:
            llm: LLM 인스턴스
            registry: Tool 레지스트리
            retriever: 코퍼스 검색기 (없으면 corpus 모드는 빈 컨텍스트)
            formatter: 프롬프트 포매터
            default_mode: 요청에 모드가 없을 때 사용할 모드
            retrieval_top_k: corpus 모드 검색 개수
            wikipedia_tool_name: wikipedia 모드에서 호출할 Tool 이름
        """
        self.llm = llm
        self.registry = registry
        self.retriever = retriever
        self.formatter = formatter or PromptFormatter()
        self.default_mode = AnswerMode(default_mode)
        self.retrieval_top_k = retrieval_top_k
        self.wikipedia_tool_name = wikipedia_tool_name
        self.orchestrator = AnswerOrchestrator(llm=llm, registry=registry, formatter=self.formatter)

        logger.info(f"AnswerService 초기화 완료: {self.llm}, 기본 모드={self.default_mode.value}")

    async def answer(self, question: str, mode: Optional[AnswerMode] = None) -> str:
        """
        질문에 답변

        Args:
            question: 사용자 질문
            mode: 답변 모드 (None이면 기본 모드)

        Returns:
            답변 문자열 (실패 시 고정 실패 메시지)
        """
        mode = AnswerMode(mode) if mode is not None else self.default_mode
        logger.info(f"[AnswerService] 질문 처리 시작 (mode={mode.value}): {question[:50]}")

        if mode == AnswerMode.TOOLS:
            return await self.orchestrator.answer(question)

        handlers = {
            AnswerMode.DIRECT: self._answer_directly,
            AnswerMode.CORPUS: self._answer_from_corpus,
            AnswerMode.WIKIPEDIA: self._answer_from_wikipedia,
            AnswerMode.RECOMMENDATION: self._recommend,
        }

        try:
            return await handlers[mode](question)
        except ProviderError as e:
            logger.error(f"[AnswerService] 답변 생성 실패 mode={mode.value} {e.to_log()}: {e}")
            return FAILURE_MESSAGE

    async def _answer_directly(self, question: str) -> str:
        prompt = self.formatter.format(PromptTemplateId.DIRECT_QUESTION, {"question": question})
        return await self.llm.generate_response(prompt)

    async def _answer_from_corpus(self, question: str) -> str:
        context = NO_CONTEXT
        if self.retriever is not None:
            try:
                results = await self.retriever.retrieve(question, top_k=self.retrieval_top_k)
            except Exception as e:
                raise ProviderError(
                    f"코퍼스 검색 실패: {e}",
                    provider="openai-embeddings",
                    status_code=getattr(e, "status_code", None)
                ) from e
            if results:
                context = "\n\n".join(result.content for result in results)
        else:
            logger.warning("[AnswerService] 코퍼스가 설정되지 않았습니다 - 빈 컨텍스트로 답변")

        return await self._answer_with_context(question, context)

    async def _answer_from_wikipedia(self, question: str) -> str:
        lookup = await self.registry.invoke(self.wikipedia_tool_name, {"question": question})
        context = lookup if lookup and lookup != FAILURE_MESSAGE else NO_CONTEXT
        return await self._answer_with_context(question, context)

    async def _answer_with_context(self, question: str, context: str) -> str:
        prompt = self.formatter.format(
            PromptTemplateId.CONTEXT_AUGMENTED,
            {"context": context, "question": question}
        )
        return await self.llm.generate_response(prompt)

    async def _recommend(self, question: str) -> str:
        prompt = self.formatter.format(PromptTemplateId.RECOMMENDATION, {"question": question})
        recommendation = await self.llm.generate_structured(prompt, Recommendation)
        return json.dumps(recommendation.model_dump(exclude_none=True), ensure_ascii=False)

    async def close(self) -> None:
        """LLM 리소스 정리"""
        await self.llm.close()
