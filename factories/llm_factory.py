"""
LLM 팩토리 클래스
=========================
Author: Jin
Date: 2026.03.02
Version: 2.0

Description:
LLM 제공자(OpenAI, watsonx)의 객체를 생성하는 팩토리 클래스입니다.
설정 객체에서 제공자별 인증 정보와 샘플링 옵션을 읽어 구현체를 만듭니다.
"""
from typing import Any, Callable, Dict, Optional
from enum import Enum

from base.agent.llm_base import LLMBase
from base.exceptions import ConfigurationError

from llm.llm_openai import LLMOpenAI
from llm.llm_watsonx import LLMWatsonx

from config.settings import Settings, settings as default_settings
from config.logging_config import logger


class LLMProvider(str, Enum):
    OPENAI = "openai"
    WATSONX = "watsonx"


class LLMFactory:
    """LLM 인스턴스 생성 팩토리"""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or default_settings

        self._providers: Dict[str, Callable[..., LLMBase]] = {
            LLMProvider.OPENAI: self._create_openai,
            LLMProvider.WATSONX: self._create_watsonx,
        }

    def create_llm(self, provider: Optional[str] = None, **kwargs: Any) -> LLMBase:
        """
        LLM 인스턴스 생성

        Args:
            provider: LLM 제공자 (None이면 설정값 사용)
            **kwargs: 설정값 대신 사용할 생성자 인자

        Returns:
            생성된 LLM 인스턴스

        Raises:
            ConfigurationError: 알 수 없는 제공자인 경우
        """
        provider = (provider or self.settings.llm_provider).lower()

        builder = self._providers.get(provider)
        if not builder:
            available = ', '.join(p.value for p in LLMProvider)
            raise ConfigurationError(f"알 수 없는 제공자: {provider}\n가능: {available}")

        llm = builder(**kwargs)

        if not llm.is_available():
            logger.warning(f"{provider} 사용 불가")

        logger.info(f"LLM 생성: {provider}/{llm.model_name}")
        return llm

    def _common_kwargs(self) -> Dict[str, Any]:
        return {
            "temperature": self.settings.temperature,
            "max_tokens": self.settings.max_tokens,
            "request_timeout": self.settings.request_timeout,
            "max_retries": self.settings.max_retries,
        }

    def _create_openai(self, **kwargs: Any) -> LLMBase:
        options = {
            "model_name": self.settings.openai_model,
            "api_key": self.settings.openai_api_key,
            **self._common_kwargs(),
        }
        options.update(kwargs)
        return LLMOpenAI(**options)

    def _create_watsonx(self, **kwargs: Any) -> LLMBase:
        options = {
            "model_name": self.settings.watsonx_model_id,
            "api_key": self.settings.watsonx_api_key,
            "project_id": self.settings.watsonx_project_id,
            "base_url": self.settings.watsonx_url,
            **self._common_kwargs(),
        }
        options.update(kwargs)
        return LLMWatsonx(**options)
