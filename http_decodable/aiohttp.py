from typing import Any

import aiohttp
import multidict

from .base import Header, RawResponse, RequestDescription
from .decoding import DecodeResult, Decoder, T, decode


def aiohttp_request_options(request: RequestDescription) -> dict[str, Any]:
    """Keyword arguments for ``aiohttp.ClientSession.request``."""
    headers = multidict.CIMultiDict[str](request.headers if request.headers is not None else {})
    cache_control = request.cache_policy.cache_control
    if cache_control is not None and Header.CACHE_CONTROL not in headers:
        headers[Header.CACHE_CONTROL] = cache_control

    return {
        "method": request.method,
        "url": request.url,
        "headers": headers,
        "timeout": aiohttp.ClientTimeout(total=request.timeout),
    }


async def to_raw_response(response: aiohttp.ClientResponse) -> RawResponse:
    data = await response.read()
    return RawResponse(
        status=response.status,
        headers=multidict.CIMultiDictProxy[str](multidict.CIMultiDict[str](response.headers)),
        data=data or None,
        url=response.url,
    )


async def decode_aiohttp_response(
    target: type[T], response: aiohttp.ClientResponse, *, decoder: Decoder[T] | None = None
) -> DecodeResult[T]:
    return decode(target, await to_raw_response(response), decoder=decoder)
