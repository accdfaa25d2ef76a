"""
Base module - 베이스/추상 클래스와 예외 계층

이 모듈은 프로젝트 전체에서 사용되는 공통 예외를 제공합니다.
LLM, RAG 베이스 클래스는 각각 base.agent, base.rag 하위 모듈에서 가져옵니다.
"""

from .exceptions import (
    MyGPTError,
    ConfigurationError,
    ProviderError,
    ModelTimeoutError,
    ToolInvocationError,
    PromptParseError,
    MissingVariableError,
)

__all__ = [
    "MyGPTError",
    "ConfigurationError",
    "ProviderError",
    "ModelTimeoutError",
    "ToolInvocationError",
    "PromptParseError",
    "MissingVariableError",
]
