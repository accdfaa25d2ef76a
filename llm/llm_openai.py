"""
OpenAI LLM 구현체
=========================
Author: Jin
Date: 2026.03.02
Version: 4.0

Description:
LangChain ChatOpenAI를 활용한 LLM 구현체입니다.
텍스트 응답과 함께 with_structured_output 기반의 구조화 출력을 지원합니다.
재시도는 LLMBase의 정책이 담당하므로 클라이언트 자체 재시도는 끕니다.
"""
from typing import Optional, Type

from langchain_openai import ChatOpenAI

from base.agent.llm_base import LLMBase, SchemaT
from base.exceptions import ProviderError
from config.logging_config import logger


class LLMOpenAI(LLMBase):
    """OpenAI LLM 구현체"""

    def __init__(
        self,
        model_name: str = "gpt-4",
        api_key: Optional[str] = None,
        temperature: float = 0.0,
        max_tokens: int = 512,
        request_timeout: float = 30.0,
        max_retries: int = 0
    ):
        """
        LLMOpenAI 초기화

        Args:
            model_name: OpenAI 모델 이름 (gpt-4, gpt-4o-mini 등)
            api_key: OpenAI API 키
            temperature: 생성 온도 (0.0-2.0)
            max_tokens: 최대 생성 토큰 수
            request_timeout: 호출당 제한 시간(초)
            max_retries: 추가 재시도 횟수
        """
        super().__init__(
            model_name=model_name,
            provider="openai",
            temperature=temperature,
            max_tokens=max_tokens,
            request_timeout=request_timeout,
            max_retries=max_retries
        )

        self.api_key = api_key
        self.chat_model: Optional[ChatOpenAI] = None

        if self.api_key:
            self.chat_model = ChatOpenAI(
                model=model_name,
                temperature=temperature,
                max_tokens=max_tokens,
                api_key=self.api_key,
                timeout=request_timeout or None,
                max_retries=0
            )
            logger.info(f"[LLMOpenAI] ChatOpenAI 생성: {model_name} (temp={temperature})")
        else:
            logger.warning("[LLMOpenAI] OPENAI_APIKEY가 없습니다. 호출 시 ProviderError가 발생합니다.")

    def get_model(self) -> ChatOpenAI:
        """
        ChatOpenAI 모델 반환

        Returns:
            ChatOpenAI 인스턴스

        Raises:
            ProviderError: API 키가 없어 모델이 생성되지 않은 경우
        """
        if self.chat_model is None:
            raise ProviderError("OpenAI 모델이 초기화되지 않았습니다 (API 키 없음).", provider=self.provider)
        return self.chat_model

    async def _invoke(
        self,
        prompt: str,
        system_prompt: Optional[str],
        temperature: float,
        max_tokens: int
    ) -> str:
        messages = []
        if system_prompt:
            messages.append(("system", system_prompt))
        messages.append(("human", prompt))

        model = self.get_model().bind(temperature=temperature, max_tokens=max_tokens)
        response = await model.ainvoke(messages)
        return response.content if isinstance(response.content, str) else str(response.content)

    async def generate_structured(self, prompt: str, schema: Type[SchemaT]) -> SchemaT:
        """
        with_structured_output을 사용한 구조화 출력 생성

        Args:
            prompt: 입력 프롬프트
            schema: 결과 Pydantic 모델 클래스

        Returns:
            스키마 인스턴스
        """
        structured_llm = self.get_model().with_structured_output(schema)
        return await self._call_with_policy(lambda: structured_llm.ainvoke(prompt))

    async def close(self):
        """
        ChatOpenAI는 별도 정리가 필요 없음
        """
        return None

    def is_available(self) -> bool:
        """
        OpenAI API 사용 가능 여부 확인

        Returns:
            API 키가 설정되어 있고 모델이 초기화된 경우 True
        """
        return self.chat_model is not None
