"""
LLM 제공자 구현체

- LLMOpenAI: LangChain ChatOpenAI 기반
- LLMWatsonx: watsonx.ai REST API 기반
"""

from .llm_openai import LLMOpenAI
from .llm_watsonx import LLMWatsonx

__all__ = [
    "LLMOpenAI",
    "LLMWatsonx"
]
