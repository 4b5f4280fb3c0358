import httpx
import multidict
import yarl

from .base import Header, RawResponse, RequestDescription
from .decoding import DecodeResult, Decoder, T, decode


def to_httpx_request(request: RequestDescription, *, content: bytes | None = None) -> httpx.Request:
    headers = httpx.Headers(dict(request.headers) if request.headers is not None else None)
    cache_control = request.cache_policy.cache_control
    if cache_control is not None and Header.CACHE_CONTROL not in headers:
        headers[Header.CACHE_CONTROL] = cache_control

    return httpx.Request(
        request.method,
        str(request.url),
        headers=headers,
        content=content,
        extensions={"timeout": httpx.Timeout(request.timeout).as_dict()},
    )


def to_raw_response(response: httpx.Response) -> RawResponse:
    """Convert a read httpx response, an empty body is reported as no data."""
    return RawResponse(
        status=response.status_code,
        headers=multidict.CIMultiDictProxy[str](multidict.CIMultiDict[str](response.headers.multi_items())),
        data=response.content or None,
        url=_response_url(response),
    )


def decode_httpx_response(
    target: type[T], response: httpx.Response, *, decoder: Decoder[T] | None = None
) -> DecodeResult[T]:
    return decode(target, to_raw_response(response), decoder=decoder)


def _response_url(response: httpx.Response) -> yarl.URL | None:
    try:
        return yarl.URL(str(response.url))
    except RuntimeError:
        # httpx raises when the response was built without a request
        return None
