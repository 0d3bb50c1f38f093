import asyncio

import httpx
import pytest

from commonsense.api.core.config import ClientConfig
from commonsense.api.core.results import FailureKind, Success
from commonsense.api.platforms import UnsupportedOperationError
from commonsense.client import AsyncCommonSenseClient
from commonsense.http_client import AsyncHttpxCommonSenseHTTPClient


def _mock_http(handler):
    return AsyncHttpxCommonSenseHTTPClient(client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


async def _echo_limit(request):
    limit = int(request.url.params["limit"])
    # The smaller request finishes last so responses interleave.
    await asyncio.sleep(0.01 if limit < 5 else 0)
    return httpx.Response(
        200,
        json={"statusCode": 200, "count": limit, "response": [{"id": i} for i in range(limit)]},
    )


@pytest.mark.asyncio
async def test_concurrent_calls_do_not_cross_contaminate(config):
    async with AsyncCommonSenseClient(config, http=_mock_http(_echo_limit)) as client:
        small, large = await asyncio.gather(
            client.get_list("products", {"limit": 3}),
            client.get_list("products", {"limit": 10}),
        )

    assert small.request.query["limit"] == 3
    assert large.request.query["limit"] == 10
    assert len(small.payload["response"]) == 3
    assert len(large.payload["response"]) == 10
    assert "limit=3" in small.request.url
    assert "limit=10" in large.request.url


@pytest.mark.asyncio
async def test_async_failures_and_callbacks(config):
    seen = []
    client = AsyncCommonSenseClient(config, http=_mock_http(lambda request: httpx.Response(400)))

    result = await client.get_item("products", 1, callback=lambda err, payload: seen.append((err, payload)))

    assert result.kind is FailureKind.BAD_REQUEST
    assert result.message == "Bad Request"
    assert seen == [(result, None)]
    await client.aclose()


@pytest.mark.asyncio
async def test_async_network_error(config):
    def handler(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    client = AsyncCommonSenseClient(config, http=_mock_http(handler))

    result = await client.search("products", "math")

    assert result.kind is FailureKind.NETWORK_ERROR
    await client.aclose()


@pytest.mark.asyncio
async def test_async_tree_assembly(config):
    def handler(request):
        return httpx.Response(
            200,
            json={"response": [{"id": 1, "terms": [{"id": 5, "parent_id": 0}, {"id": 6, "parent_id": 5}]}]},
        )

    client = AsyncCommonSenseClient(config, http=_mock_http(handler))

    result = await client.get_terms_list("subjects", {"tree": "terms"})

    assert result.payload["response"][0]["terms"][0]["children"][0]["id"] == 6
    await client.aclose()


@pytest.mark.asyncio
async def test_async_debug_mode_and_wrappers(config):
    def handler(request):
        raise AssertionError("debug mode must not send requests")

    client = AsyncCommonSenseClient(
        ClientConfig(credentials=config.credentials, host=config.host, platform=config.platform, debug=True),
        http=_mock_http(handler),
    )

    result = await client.wrapper("getSchoolsList")({"limit": 2})
    item = await client.content_type("blogs").item(3)

    assert result == Success(200, {"success": 1})
    assert item.request.url == "https://api.example.org/v3/education/blogs/3?limit=10&page=1"
    await client.aclose()


@pytest.mark.asyncio
async def test_async_media_rejects_search(config):
    client = AsyncCommonSenseClient(config).media()

    with pytest.raises(UnsupportedOperationError):
        await client.search("products", "math")
    await client.aclose()


@pytest.mark.asyncio
async def test_async_undecodable_body_is_a_network_error(config):
    def handler(request):
        return httpx.Response(200, headers={"Content-Encoding": "gzip"}, stream=httpx.ByteStream(b"not gzip at all"))

    client = AsyncCommonSenseClient(config, http=_mock_http(handler))

    result = await client.get_list(content_type="products")

    assert result.kind is FailureKind.NETWORK_ERROR
    await client.aclose()
