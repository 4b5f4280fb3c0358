import re
import sys
from typing import NamedTuple

from .base import (
    DEFAULT_TIMEOUT,
    BoolEncoding,
    CachePolicy,
    DecodeError,
    Header,
    HTTPError,
    InvalidURLError,
    Method,
    NoDataToDecodeError,
    ObjectDecodeFailedError,
    RawResponse,
    RequestDescription,
)
from .decoding import DecodableResponse, DecodeResult, Decoder, StructuralDecodable, decode, decode_structural
from .encoding import QUERY_ALLOWED, encode_query, join_with_ampersands, query_escaped
from .host import HostInfo, default_user_agent, get_host_info
from .request import RequestFactory, SupportsURL, URLConvertible, as_url, build_request
from .setup import setup
from .utils import suggested_mime_type

__all__: tuple[str, ...] = (
    "BoolEncoding",
    "CachePolicy",
    "DEFAULT_TIMEOUT",
    "DecodableResponse",
    "DecodeError",
    "DecodeResult",
    "Decoder",
    "HTTPError",
    "Header",
    "HostInfo",
    "InvalidURLError",
    "Method",
    "NoDataToDecodeError",
    "ObjectDecodeFailedError",
    "QUERY_ALLOWED",
    "RawResponse",
    "RequestDescription",
    "RequestFactory",
    "StructuralDecodable",
    "SupportsURL",
    "URLConvertible",
    "as_url",
    "build_request",
    "decode",
    "decode_structural",
    "default_user_agent",
    "encode_query",
    "get_host_info",
    "join_with_ampersands",
    "query_escaped",
    "setup",
    "suggested_mime_type",
)

try:
    import aiohttp  # noqa

    from .aiohttp import aiohttp_request_options, decode_aiohttp_response
    from .aiohttp import to_raw_response as aiohttp_to_raw_response

    __all__ += (
        "aiohttp_request_options",
        "aiohttp_to_raw_response",
        "decode_aiohttp_response",
    )  # type: ignore
except ImportError:
    pass

try:
    import httpx  # noqa

    from .httpx import decode_httpx_response, to_httpx_request
    from .httpx import to_raw_response as httpx_to_raw_response

    __all__ += (
        "decode_httpx_response",
        "httpx_to_raw_response",
        "to_httpx_request",
    )  # type: ignore
except ImportError:
    pass

__version__ = "0.1.0"

version = f"{__version__}, Python {sys.version}"


class VersionInfo(NamedTuple):
    major: int
    minor: int
    micro: int
    release_level: str
    serial: int


def _parse_version(v: str) -> VersionInfo:
    version_re = r"^(?P<major>\d+)\.(?P<minor>\d+)\.(?P<micro>\d+)((?P<release_level>[a-z]+)(?P<serial>\d+)?)?$"
    match = re.match(version_re, v)
    if not match:
        raise ImportError(f"Invalid package version {v}")
    try:
        major = int(match.group("major"))
        minor = int(match.group("minor"))
        micro = int(match.group("micro"))
        levels = {"rc": "candidate", "a": "alpha", "b": "beta", None: "final"}
        release_level = levels[match.group("release_level")]
        serial = int(match.group("serial")) if match.group("serial") else 0
        return VersionInfo(major, minor, micro, release_level, serial)
    except Exception as e:
        raise ImportError(f"Invalid package version {v}") from e


version_info = _parse_version(__version__)
