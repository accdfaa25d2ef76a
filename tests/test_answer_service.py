import json
from unittest.mock import AsyncMock

import pytest

from base.exceptions import ProviderError
from models.answer_model import FAILURE_MESSAGE, AnswerMode
from rag.common import MemoryVectorStore, Retriever
from services.answer.answer_service import NO_CONTEXT, AnswerService

from conftest import KeywordEmbedder, StubLLM, StubTool, make_registry


@pytest.mark.asyncio
async def test_direct_mode_sends_question_as_prompt(wikipedia_stub):
    llm = StubLLM(["42"])
    service = AnswerService(llm, make_registry(wikipedia_stub), default_mode=AnswerMode.DIRECT)

    assert await service.answer("What is the answer?") == "42"
    assert llm.prompts == ["What is the answer?"]


@pytest.mark.asyncio
async def test_default_mode_is_tool_orchestration(wikipedia_stub):
    llm = StubLLM(["plain answer"])
    service = AnswerService(llm, make_registry(wikipedia_stub))

    assert service.default_mode == AnswerMode.TOOLS
    assert await service.answer("hi") == "plain answer"
    assert "Decide which of these tools" in llm.prompts[0]


@pytest.mark.asyncio
async def test_wikipedia_mode_uses_lookup_as_context(wikipedia_stub):
    llm = StubLLM(["Rijksmuseum."])
    service = AnswerService(llm, make_registry(wikipedia_stub))

    answer = await service.answer("Best museum in Amsterdam?", AnswerMode.WIKIPEDIA)

    assert answer == "Rijksmuseum."
    assert wikipedia_stub.calls == ["Best museum in Amsterdam?"]
    assert "Rijksmuseum, Van Gogh Museum" in llm.prompts[0]


@pytest.mark.asyncio
async def test_wikipedia_failure_falls_back_to_empty_context():
    broken = StubTool(name="callWikipediaTool", error="timeout")
    llm = StubLLM(["I don't know."])
    service = AnswerService(llm, make_registry(broken))

    assert await service.answer("q", AnswerMode.WIKIPEDIA) == "I don't know."
    assert NO_CONTEXT in llm.prompts[0]


@pytest.mark.asyncio
async def test_corpus_mode_uses_retrieved_chunks(wikipedia_stub):
    retriever = Retriever(KeywordEmbedder(), MemoryVectorStore(dimension=2), top_k=1)
    await retriever.add_documents(["cats purr", "dogs bark"])
    llm = StubLLM(["They purr."])
    service = AnswerService(llm, make_registry(wikipedia_stub), retriever=retriever, retrieval_top_k=1)

    assert await service.answer("What do cats do?", AnswerMode.CORPUS) == "They purr."
    assert "cats purr" in llm.prompts[0]
    assert "dogs bark" not in llm.prompts[0]


@pytest.mark.asyncio
async def test_corpus_mode_without_corpus_uses_empty_context(wikipedia_stub):
    llm = StubLLM(["No idea."])
    service = AnswerService(llm, make_registry(wikipedia_stub))

    assert await service.answer("q", AnswerMode.CORPUS) == "No idea."
    assert NO_CONTEXT in llm.prompts[0]


@pytest.mark.asyncio
async def test_corpus_retrieval_failure_returns_failure_message(wikipedia_stub):
    retriever = AsyncMock()
    retriever.retrieve.side_effect = RuntimeError("embedding API down")
    llm = StubLLM([])
    service = AnswerService(llm, make_registry(wikipedia_stub), retriever=retriever)

    assert await service.answer("q", AnswerMode.CORPUS) == FAILURE_MESSAGE
    assert llm.prompts == []


@pytest.mark.asyncio
async def test_recommendation_mode_returns_json(wikipedia_stub):
    llm = StubLLM(['{"title": "Kayaking", "description": "Paddle along the canals."}'])
    service = AnswerService(llm, make_registry(wikipedia_stub))

    answer = await service.answer("something to do on water", AnswerMode.RECOMMENDATION)

    assert json.loads(answer) == {"title": "Kayaking", "description": "Paddle along the canals."}


@pytest.mark.asyncio
async def test_recommendation_with_unparseable_output_returns_failure_message(wikipedia_stub):
    llm = StubLLM(["not a recommendation"])
    service = AnswerService(llm, make_registry(wikipedia_stub))

    assert await service.answer("q", AnswerMode.RECOMMENDATION) == FAILURE_MESSAGE


@pytest.mark.asyncio
async def test_provider_error_returns_failure_message_in_every_mode(wikipedia_stub):
    for mode in AnswerMode:
        llm = StubLLM([ProviderError("down", provider="stub", status_code=500)] * 2)
        service = AnswerService(llm, make_registry(wikipedia_stub))

        assert await service.answer("q", mode) == FAILURE_MESSAGE


@pytest.mark.asyncio
async def test_close_closes_llm(wikipedia_stub):
    llm = StubLLM([])
    service = AnswerService(llm, make_registry(wikipedia_stub))

    await service.close()

    assert llm.closed
