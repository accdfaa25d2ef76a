
from .service_factory import ServiceFactory
from .llm_factory import LLMFactory, LLMProvider

__all__ = [
    "ServiceFactory",
    "LLMFactory",
    "LLMProvider"
]
