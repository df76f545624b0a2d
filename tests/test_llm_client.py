import json

import httpx
import pytest

from trollbot.llm_client import (
    CompletionClient,
    CompletionRequest,
    CompletionStatusError,
    CompletionTransportError,
    MalformedResponseError,
)


def _client(handler):
    transport = httpx.MockTransport(handler)
    http = httpx.AsyncClient(base_url="https://llm.test/v1", transport=transport)
    return CompletionClient("secret", base_url="https://llm.test/v1", model="llama3-8b-8192", client=http)


def test_request_payload_shape():
    request = CompletionRequest.build("m", "be rude", "hi", max_tokens=100)
    assert request.to_payload() == {
        "model": "m",
        "messages": [
            {"role": "system", "content": "be rude"},
            {"role": "user", "content": "hi"},
        ],
        "max_tokens": 100,
    }


@pytest.mark.asyncio
async def test_complete_posts_request_and_returns_first_choice():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("Authorization")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"choices": [{"message": {"content": "get wrecked"}}, {"message": {"content": "no"}}]})

    client = _client(handler)
    result = await client.complete("be rude", "trollgod hi")

    assert result == "get wrecked"
    assert seen["url"] == "https://llm.test/v1/chat/completions"
    assert seen["auth"] == "Bearer secret"
    assert seen["body"]["model"] == "llama3-8b-8192"
    assert seen["body"]["max_tokens"] == 100
    assert seen["body"]["messages"][1] == {"role": "user", "content": "trollgod hi"}
    await client.aclose()


@pytest.mark.asyncio
async def test_non_success_status_raises_with_body():
    client = _client(lambda request: httpx.Response(429, text="rate limited"))

    with pytest.raises(CompletionStatusError) as exc_info:
        await client.complete("sys", "hi")

    assert exc_info.value.status_code == 429
    assert exc_info.value.body == "rate limited"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="not json"),
        httpx.Response(200, json={"choices": []}),
        httpx.Response(200, json={"choices": [{"message": {}}]}),
        httpx.Response(200, json={"error": "nope"}),
    ],
)
async def test_malformed_response_raises(response):
    client = _client(lambda request: response)

    with pytest.raises(MalformedResponseError):
        await client.complete("sys", "hi")


@pytest.mark.asyncio
async def test_transport_error_is_wrapped():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = _client(handler)

    with pytest.raises(CompletionTransportError):
        await client.complete("sys", "hi")
