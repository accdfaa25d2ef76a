import asyncio
from typing import Any, Callable, List, Optional, Type, Union

import pytest
from langchain_core.tools import BaseTool
from pydantic import BaseModel, Field

from base.agent.llm_base import LLMBase
from base.rag.embedding_base import EmbeddingBase
from config.settings import Settings
from models.tool_model import ToolParameter, ToolSchema
from tools.tool_registry import ToolRegistry


class StubLLM(LLMBase):
    """Scripted LLM: answers from a list (in order) or from a prompt -> text function."""

    def __init__(
        self,
        responses: Union[List[Any], Callable[[str], str], None] = None,
        delay: float = 0.0,
        **kwargs: Any
    ):
        super().__init__(model_name="stub-model", provider="stub", **kwargs)
        self.responses = responses if callable(responses) else list(responses or [])
        self.delay = delay
        self.prompts: List[str] = []
        self.closed = False

    async def _invoke(self, prompt, system_prompt, temperature, max_tokens) -> str:
        self.prompts.append(prompt)
        if self.delay:
            await asyncio.sleep(self.delay)
        if callable(self.responses):
            return self.responses(prompt)
        response = self.responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response

    async def close(self):
        self.closed = True

    def is_available(self) -> bool:
        return True


class QuestionInput(BaseModel):
    question: str = Field(description="question")


class StubTool(BaseTool):
    """Tool returning a fixed result, optionally failing or waiting on an event."""

    name: str = "stubTool"
    description: str = "Returns a fixed answer"
    args_schema: Type[BaseModel] = QuestionInput

    result: Any = "ok"
    error: Optional[str] = None
    wait_for: Any = None
    sets: Any = None
    calls: List[str] = Field(default_factory=list)

    def _run(self, question: str, run_manager=None) -> Any:
        raise NotImplementedError("async only")

    async def _arun(self, question: str, run_manager=None) -> Any:
        self.calls.append(question)
        if self.sets is not None:
            self.sets.set()
        if self.wait_for is not None:
            await self.wait_for.wait()
        if self.error:
            raise RuntimeError(self.error)
        return self.result

    def get_schema(self) -> ToolSchema:
        return ToolSchema(
            name=self.name,
            description=self.description,
            parameters=(ToolParameter(name="question", type="string", description="question"),)
        )


class KeywordEmbedder(EmbeddingBase):
    """2-dim embedder: axis 0 counts 'cat', axis 1 counts 'dog'."""

    def __init__(self):
        super().__init__(model_name="keyword", dimension=2)

    def embed_text(self, text: str) -> List[float]:
        lowered = text.lower()
        return [float(lowered.count("cat")), float(lowered.count("dog"))]

    def embed_texts(self, texts: List[str]) -> List[List[float]]:
        return [self.embed_text(text) for text in texts]


def make_registry(*tools: BaseTool) -> ToolRegistry:
    registry = ToolRegistry()
    for tool in tools:
        registry.register_tool(tool)
    return registry.freeze()


@pytest.fixture
def wikipedia_stub():
    return StubTool(name="callWikipediaTool", result="Rijksmuseum, Van Gogh Museum")


def make_settings(**overrides) -> Settings:
    values = dict(
        llm_provider="openai",
        openai_api_key="sk-test",
        watsonx_api_key=None,
        watsonx_project_id=None,
        answer_mode="tools",
        corpus_path=None,
        chunk_size=200,
        chunk_overlap=100,
        max_retries=0,
        request_timeout=30.0,
    )
    values.update(overrides)
    return Settings(**values)
