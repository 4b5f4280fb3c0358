import logging
from collections.abc import Callable

import aiohttp.web
import aiohttp.web_request
import aiohttp.web_response
import pytest
from aiohttp.test_utils import TestClient
from pytest_aiohttp.plugin import AiohttpClient

import http_decodable

logging.basicConfig(level="DEBUG")


@pytest.fixture
def raw_response() -> Callable[..., http_decodable.RawResponse]:
    def go(data: bytes | None, status: int = 200) -> http_decodable.RawResponse:
        return http_decodable.RawResponse(status=status, data=data)

    return go


@pytest.fixture
async def server(aiohttp_client: AiohttpClient) -> TestClient:
    async def user(request: aiohttp.web_request.Request) -> aiohttp.web_response.Response:
        return aiohttp.web.json_response(
            {"id": 1, "name": "Ada"},
            headers={"X-Cache-Control": request.headers.get("Cache-Control", "")},
        )

    async def empty(request: aiohttp.web_request.Request) -> aiohttp.web_response.Response:
        return aiohttp.web_response.Response(status=204)

    app = aiohttp.web.Application()
    app.router.add_get("/user", user)
    app.router.add_get("/empty", empty)
    return await aiohttp_client(app)
