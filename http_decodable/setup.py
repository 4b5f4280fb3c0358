from typing import Any

import multidict
import yarl

from .base import DEFAULT_TIMEOUT, BoolEncoding, CachePolicy, Header, Headers, InvalidURLError
from .host import default_user_agent
from .request import RequestFactory, as_url

MISSING: Any = object()


def setup(
    *,
    base_url: str | yarl.URL = MISSING,
    timeout: float = DEFAULT_TIMEOUT,
    cache_policy: CachePolicy = CachePolicy.USE_PROTOCOL_CACHE_POLICY,
    headers: Headers | None = None,
    emit_user_agent: bool = True,
    bool_encoding: BoolEncoding = BoolEncoding.LITERAL,
) -> RequestFactory:
    if timeout < 0:
        raise ValueError("timeout cannot be negative")

    default_headers = multidict.CIMultiDict[str](headers) if headers is not None else multidict.CIMultiDict[str]()
    if emit_user_agent and Header.USER_AGENT not in default_headers:
        default_headers[Header.USER_AGENT] = default_user_agent()

    return RequestFactory(
        base_url=_ensure_base_url(base_url) if base_url is not MISSING else None,
        timeout=timeout,
        cache_policy=cache_policy,
        headers=default_headers,
        bool_encoding=bool_encoding,
    )


def _ensure_base_url(base_url: str | yarl.URL) -> yarl.URL:
    url = as_url(base_url)
    if url.query_string or url.fragment:
        raise InvalidURLError(base_url)
    return url
