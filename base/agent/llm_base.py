"""
LLM 서비스 베이스 클래스
=========================
Author: Jin
Date: 2026.03.02
Version: 3.0

Description:
모든 LLM 구현체의 기본이 되는 추상 베이스 클래스입니다.
프롬프트 한 번 = 원격 호출 한 번을 원칙으로 하며, 제한 시간과 재시도 정책을
명시적으로 적용하고 모든 실패를 ProviderError 계열로 변환합니다.
"""
import asyncio
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Optional, Type, TypeVar

from langchain_core.exceptions import OutputParserException
from langchain_core.output_parsers import PydanticOutputParser
from pydantic import BaseModel

from base.exceptions import ModelTimeoutError, ProviderError
from config.logging_config import logger

SchemaT = TypeVar("SchemaT", bound=BaseModel)


class LLMBase(ABC):
    """LLM 서비스를 위한 기본 추상 클래스"""

    def __init__(
        self,
        model_name: str,
        provider: str,
        temperature: float = 0.0,
        max_tokens: int = 512,
        request_timeout: float = 30.0,
        max_retries: int = 0
    ):
        """
        Args:
            model_name: 모델 이름
            provider: 제공자 이름 (openai, watsonx)
            temperature: 기본 생성 온도 (0 = greedy)
            max_tokens: 기본 최대 생성 토큰 수
            request_timeout: 호출당 제한 시간(초), 0이면 제한 없음
            max_retries: 실패 시 추가 재시도 횟수 (기본 0회)
        """
        self.model_name = model_name
        self.provider = provider
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.request_timeout = request_timeout
        self.max_retries = max_retries
        logger.info(
            f"LLM 초기화: {provider}/{model_name} "
            f"(temp={temperature}, timeout={request_timeout}s, retries={max_retries})"
        )

    @abstractmethod
    async def _invoke(
        self,
        prompt: str,
        system_prompt: Optional[str],
        temperature: float,
        max_tokens: int
    ) -> str:
        """
        제공자별 원격 호출 1회

        Returns:
            모델이 생성한 원문 텍스트
        """
        pass

    @abstractmethod
    async def close(self):
        """
        리소스 정리
        """
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """
        사용 가능 여부 확인

        Returns:
            LLM 사용 가능 여부
        """
        pass

    async def generate_response(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None
    ) -> str:
        """
        LLM 응답 생성

        Args:
            prompt: 입력 프롬프트
            system_prompt: 시스템 프롬프트 (선택사항)
            temperature: 생성 온도 (None이면 기본값)
            max_tokens: 최대 토큰 수 (None이면 기본값)

        Returns:
            LLM 생성 응답 텍스트

        Raises:
            ProviderError: 네트워크/인증/응답 오류
            ModelTimeoutError: 제한 시간 초과
        """
        temp = self.temperature if temperature is None else temperature
        tokens = self.max_tokens if max_tokens is None else max_tokens
        return await self._call_with_policy(
            lambda: self._invoke(prompt, system_prompt, temp, tokens)
        )

    async def generate_structured(self, prompt: str, schema: Type[SchemaT]) -> SchemaT:
        """
        구조화 출력 생성

        기본 구현은 스키마의 포맷 지시문을 프롬프트에 덧붙이고 응답 텍스트를
        파싱합니다. 네이티브 구조화 출력을 지원하는 제공자는 재정의합니다.

        Args:
            prompt: 입력 프롬프트
            schema: 결과 Pydantic 모델 클래스

        Returns:
            파싱된 스키마 인스턴스
        """
        parser = PydanticOutputParser(pydantic_object=schema)
        text = await self.generate_response(f"{prompt}\n\n{parser.get_format_instructions()}")
        try:
            return parser.parse(text)
        except OutputParserException as e:
            raise ProviderError(
                f"구조화 출력 파싱 실패: {e}", provider=self.provider
            ) from e

    async def _call_with_policy(self, call: Callable[[], Awaitable[Any]]) -> Any:
        """
        제한 시간/재시도 정책을 적용하여 원격 호출 실행

        Args:
            call: 호출마다 새 코루틴을 만드는 팩토리

        Returns:
            호출 결과
        """
        attempts = self.max_retries + 1
        last_error: Optional[ProviderError] = None

        for attempt in range(1, attempts + 1):
            try:
                return await asyncio.wait_for(call(), timeout=self.request_timeout or None)
            except asyncio.TimeoutError as e:
                last_error = ModelTimeoutError(
                    f"{self.request_timeout}초 내에 응답이 없습니다.", provider=self.provider
                )
                last_error.__cause__ = e
            except ProviderError as e:
                last_error = e
            except Exception as e:
                last_error = ProviderError(
                    f"{self.provider} 호출 실패: {e}",
                    provider=self.provider,
                    status_code=getattr(e, "status_code", None)
                )
                last_error.__cause__ = e

            logger.warning(
                f"[{self.__class__.__name__}] 호출 실패 ({attempt}/{attempts}) {last_error.to_log()}"
            )

        raise last_error

    def __repr__(self) -> str:
        """
        객체의 문자열 표현 생성

        Returns:
            클래스명, 프로바이더, 모델명을 포함한 문자열
        """
        return f"{self.__class__.__name__}[{self.provider}/{self.model_name}]"
