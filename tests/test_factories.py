import pytest

from base.exceptions import ConfigurationError
from factories import LLMFactory, LLMProvider, ServiceFactory
from llm import LLMOpenAI, LLMWatsonx
from models.answer_model import AnswerMode

from conftest import StubLLM, make_settings


def test_creates_openai_llm_from_settings():
    factory = LLMFactory(make_settings(openai_model="gpt-4", max_tokens=64))

    llm = factory.create_llm()

    assert isinstance(llm, LLMOpenAI)
    assert llm.model_name == "gpt-4"
    assert llm.max_tokens == 64
    assert llm.is_available()


@pytest.mark.asyncio
async def test_creates_watsonx_llm_from_settings():
    factory = LLMFactory(make_settings(
        llm_provider="watsonx",
        watsonx_api_key="k",
        watsonx_project_id="p",
        watsonx_model_id="ibm/granite-13b-instruct-v2"
    ))

    llm = factory.create_llm(LLMProvider.WATSONX.value)

    assert isinstance(llm, LLMWatsonx)
    assert llm.project_id == "p"
    assert llm.model_name == "ibm/granite-13b-instruct-v2"
    await llm.close()


def test_unknown_provider():
    with pytest.raises(ConfigurationError):
        LLMFactory(make_settings()).create_llm("anthropic")


@pytest.mark.asyncio
async def test_service_factory_assembles_frozen_registry_without_corpus():
    factory = ServiceFactory(make_settings(answer_mode="wikipedia"))

    service = await factory.create_answer_service(llm=StubLLM([]))

    assert service.default_mode == AnswerMode.WIKIPEDIA
    assert service.retriever is None
    assert service.registry.frozen
    assert service.registry.get_all_tool_names() == ["callWikipediaTool"]
