import pytest
from pydantic import BaseModel

from base.exceptions import ModelTimeoutError, ProviderError

from conftest import StubLLM


class Answer(BaseModel):
    value: int


@pytest.mark.asyncio
async def test_timeout_raises_model_timeout_error():
    llm = StubLLM(["late"], delay=0.5, request_timeout=0.05)

    with pytest.raises(ModelTimeoutError) as exc_info:
        await llm.generate_response("q")

    assert exc_info.value.provider == "stub"


@pytest.mark.asyncio
async def test_no_retry_by_default():
    llm = StubLLM([RuntimeError("boom"), "ok"])

    with pytest.raises(ProviderError):
        await llm.generate_response("q")

    assert len(llm.prompts) == 1


@pytest.mark.asyncio
async def test_retries_are_explicit():
    llm = StubLLM([RuntimeError("boom"), "ok"], max_retries=1)

    assert await llm.generate_response("q") == "ok"
    assert len(llm.prompts) == 2


@pytest.mark.asyncio
async def test_unexpected_errors_become_provider_errors_with_status():
    class UpstreamError(Exception):
        status_code = 429

    llm = StubLLM([UpstreamError("rate limited")])

    with pytest.raises(ProviderError) as exc_info:
        await llm.generate_response("q")

    assert exc_info.value.status_code == 429
    assert "kind=ProviderError provider=stub status=429" == exc_info.value.to_log()


@pytest.mark.asyncio
async def test_generate_structured_parses_schema():
    llm = StubLLM(['{"value": 7}'])

    result = await llm.generate_structured("give me seven", Answer)

    assert result == Answer(value=7)
    assert llm.prompts[0].startswith("give me seven")


def test_repr():
    assert repr(StubLLM([])) == "StubLLM[stub/stub-model]"
