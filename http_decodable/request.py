from typing import Protocol, runtime_checkable

import multidict
import yarl

from .base import (
    DEFAULT_TIMEOUT,
    BoolEncoding,
    CachePolicy,
    Headers,
    InvalidURLError,
    Method,
    QueryParameters,
    RequestDescription,
    flatten_headers,
)
from .encoding import encode_query, join_with_ampersands


@runtime_checkable
class SupportsURL(Protocol):
    def as_url(self) -> yarl.URL: ...


URLConvertible = str | yarl.URL | SupportsURL


def as_url(value: URLConvertible) -> yarl.URL:
    try:
        if isinstance(value, yarl.URL):
            url = value
        elif isinstance(value, SupportsURL):
            url = value.as_url()
        else:
            url = yarl.URL(value)
    except (TypeError, ValueError) as e:
        raise InvalidURLError(value) from e

    if not isinstance(url, yarl.URL) or not url.is_absolute() or not url.host:
        raise InvalidURLError(value)
    return url


def build_request(
    url: URLConvertible,
    method: Method | str = Method.GET,
    cache_policy: CachePolicy = CachePolicy.USE_PROTOCOL_CACHE_POLICY,
    timeout: float = DEFAULT_TIMEOUT,
    headers: Headers | None = None,
) -> RequestDescription:
    return RequestDescription(
        url=as_url(url),
        method=str(Method.parse(method)),
        timeout=timeout,
        cache_policy=cache_policy,
        headers=flatten_headers(headers) if headers is not None else None,
    )


def append_query(url: yarl.URL, query_parameters: QueryParameters, bool_encoding: BoolEncoding) -> yarl.URL:
    query = encode_query(query_parameters, bool_encoding)
    if not query:
        return url
    if url.raw_query_string:
        query = join_with_ampersands((url.raw_query_string, query))

    encoded = f"{url.with_query(None).with_fragment(None)}?{query}"
    if url.raw_fragment:
        encoded = f"{encoded}#{url.raw_fragment}"
    return yarl.URL(encoded, encoded=True)


class RequestFactory:
    __slots__ = (
        "__base_url",
        "__bool_encoding",
        "__cache_policy",
        "__headers",
        "__timeout",
    )

    def __init__(
        self,
        *,
        base_url: yarl.URL | None,
        timeout: float,
        cache_policy: CachePolicy,
        headers: Headers | None,
        bool_encoding: BoolEncoding,
    ) -> None:
        self.__base_url = base_url
        self.__timeout = timeout
        self.__cache_policy = cache_policy
        self.__headers = multidict.CIMultiDictProxy[str](
            multidict.CIMultiDict[str](headers) if headers is not None else multidict.CIMultiDict[str]()
        )
        self.__bool_encoding = bool_encoding

    @property
    def base_url(self) -> yarl.URL | None:
        return self.__base_url

    @property
    def headers(self) -> multidict.CIMultiDictProxy[str]:
        return self.__headers

    def build(
        self,
        url: URLConvertible,
        method: Method | str = Method.GET,
        *,
        headers: Headers | None = None,
        query_parameters: QueryParameters | None = None,
        cache_policy: CachePolicy | None = None,
        timeout: float | None = None,
    ) -> RequestDescription:
        resolved_url = as_url(self.__resolve(url))
        if query_parameters is not None:
            resolved_url = append_query(resolved_url, query_parameters, self.__bool_encoding)

        merged_headers: Headers | None = None
        if self.__headers or headers is not None:
            updated_headers = multidict.CIMultiDict[str](self.__headers)
            if headers is not None:
                updated_headers.update(headers)
            merged_headers = updated_headers

        return build_request(
            resolved_url,
            method,
            cache_policy=cache_policy if cache_policy is not None else self.__cache_policy,
            timeout=timeout if timeout is not None else self.__timeout,
            headers=merged_headers,
        )

    def __resolve(self, url: URLConvertible) -> URLConvertible:
        if self.__base_url is None or not isinstance(url, str | yarl.URL):
            return url
        try:
            relative = url if isinstance(url, yarl.URL) else yarl.URL(url)
        except (TypeError, ValueError) as e:
            raise InvalidURLError(url) from e
        if relative.is_absolute():
            return relative
        return self.__base_url.join(relative)

    def __repr__(self) -> str:
        return f"<RequestFactory [{self.__base_url}]>"
