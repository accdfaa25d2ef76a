import httpx
import pytest

from tools.wikipedia.wikipedia_tool import NO_RESULT_MESSAGE, WikipediaTool

PAGES = {
    "query": {
        "pages": [
            {"index": 2, "title": "Van Gogh Museum", "extract": "Art museum in Amsterdam."},
            {"index": 1, "title": "Rijksmuseum", "extract": "Dutch national museum.\n"},
        ]
    }
}


def make_tool(payload, status=200, seen=None, **kwargs) -> WikipediaTool:
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status, json=payload)

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return WikipediaTool(client=client, **kwargs)


@pytest.mark.asyncio
async def test_pages_are_rendered_in_search_order():
    seen = []
    tool = make_tool(PAGES, seen=seen)

    result = await tool.ainvoke({"question": "museums in Amsterdam"})

    assert result == (
        "Page: Rijksmuseum\nSummary: Dutch national museum.\n\n"
        "Page: Van Gogh Museum\nSummary: Art museum in Amsterdam."
    )
    params = seen[0].url.params
    assert params["gsrsearch"] == "museums in Amsterdam"
    assert params["gsrlimit"] == "3"
    assert "User-Agent" in seen[0].headers


@pytest.mark.asyncio
async def test_result_is_truncated():
    tool = make_tool(PAGES, max_content_length=20)

    result = await tool.ainvoke({"question": "museums"})

    assert result == "Page: Rijksmuseum\nSu"


@pytest.mark.asyncio
async def test_no_pages_returns_no_result_message():
    tool = make_tool({"batchcomplete": True})

    assert await tool.ainvoke({"question": "zzzz"}) == NO_RESULT_MESSAGE


@pytest.mark.asyncio
async def test_http_error_is_raised():
    tool = make_tool({}, status=503)

    with pytest.raises(httpx.HTTPStatusError):
        await tool.ainvoke({"question": "museums"})


def test_schema():
    schema = WikipediaTool().get_schema()

    assert schema.name == "callWikipediaTool"
    assert [param.name for param in schema.parameters] == ["question"]
