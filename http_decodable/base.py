import collections.abc
import dataclasses
import enum
import re
import types
from typing import Any

import multidict
import yarl

EMPTY_HEADERS = multidict.CIMultiDictProxy[str](multidict.CIMultiDict[str]())
DEFAULT_TIMEOUT = 60.0


class Method(enum.StrEnum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"
    CONNECT = "CONNECT"

    @staticmethod
    def parse(value: "Method | str") -> "Method":
        if isinstance(value, Method):
            return value
        if not isinstance(value, str):
            raise ValueError(f"Unknown HTTP method {value!r}")
        try:
            return Method(value.upper())
        except ValueError:
            raise ValueError(f"Unknown HTTP method {value!r}") from None


class Header:
    ACCEPT = multidict.istr("Accept")
    CACHE_CONTROL = multidict.istr("Cache-Control")
    CONTENT_TYPE = multidict.istr("Content-Type")
    CONTENT_LENGTH = multidict.istr("Content-Length")
    LOCATION = multidict.istr("Location")
    USER_AGENT = multidict.istr("User-Agent")


class CachePolicy(enum.Enum):
    USE_PROTOCOL_CACHE_POLICY = enum.auto()
    RELOAD_IGNORING_LOCAL_CACHE_DATA = enum.auto()
    RELOAD_REVALIDATING_CACHE_DATA = enum.auto()
    RETURN_CACHE_DATA_ELSE_LOAD = enum.auto()
    RETURN_CACHE_DATA_DONT_LOAD = enum.auto()

    @property
    def cache_control(self) -> str | None:
        """Request directive transports send for the policy, None means no header."""
        return _CACHE_CONTROL_DIRECTIVES.get(self)


_CACHE_CONTROL_DIRECTIVES = {
    CachePolicy.RELOAD_IGNORING_LOCAL_CACHE_DATA: "no-cache",
    CachePolicy.RELOAD_REVALIDATING_CACHE_DATA: "max-age=0",
    CachePolicy.RETURN_CACHE_DATA_ELSE_LOAD: "max-stale",
    CachePolicy.RETURN_CACHE_DATA_DONT_LOAD: "only-if-cached",
}


class BoolEncoding(enum.Enum):
    LITERAL = enum.auto()
    NUMERIC = enum.auto()


Headers = (
    collections.abc.Mapping[str | multidict.istr, str] | multidict.CIMultiDictProxy[str] | multidict.CIMultiDict[str]
)
QueryParameters = collections.abc.Mapping[str, object] | collections.abc.Iterable[tuple[str, object]]

json_re = re.compile(r"^application/(?:[\w.+-]+?\+)?json", re.RegexFlag.IGNORECASE)
charset_re = re.compile(r";\s*charset=\"?([\w.:-]+)\"?", re.RegexFlag.IGNORECASE)


class HTTPError(Exception):
    """Base class of all errors raised by http_decodable"""


class InvalidURLError(HTTPError, ValueError):
    """Value cannot be resolved to an absolute URL"""

    def __init__(self, url: object) -> None:
        super().__init__(f"Invalid URL: {url!r}")
        self.url = url

    def __reduce__(self) -> tuple[Any, ...]:
        return type(self), (self.url,)


class DecodeError(HTTPError):
    """Raw response cannot be decoded"""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause
        self.__cause__ = cause

    def __reduce__(self) -> tuple[Any, ...]:
        return _restore_decode_error, (type(self), str(self), self.cause)


def _restore_decode_error(cls: type[DecodeError], message: str, cause: BaseException | None) -> DecodeError:
    error = cls.__new__(cls)
    DecodeError.__init__(error, message, cause)
    return error


class NoDataToDecodeError(DecodeError):
    """Response has no payload"""

    def __init__(self) -> None:
        super().__init__("Response has no data to decode")


class ObjectDecodeFailedError(DecodeError):
    """Payload does not match the expected shape"""

    def __init__(self, cause: BaseException | None = None, message: str = "Failed to decode object") -> None:
        super().__init__(message, cause)


@dataclasses.dataclass(frozen=True, slots=True, kw_only=True)
class RequestDescription:
    url: yarl.URL
    method: str
    timeout: float
    cache_policy: CachePolicy
    headers: collections.abc.Mapping[str, str] | None = None

    def __repr__(self) -> str:
        return f"<RequestDescription [{self.method} {self.url}]>"


@dataclasses.dataclass(frozen=True, slots=True, kw_only=True)
class RawResponse:
    status: int
    headers: multidict.CIMultiDictProxy[str] = dataclasses.field(default_factory=lambda: EMPTY_HEADERS)
    data: bytes | None = None
    url: yarl.URL | None = None

    def is_informational(self) -> bool:
        return 100 <= self.status < 200

    def is_successful(self) -> bool:
        return 200 <= self.status < 300

    def is_redirection(self) -> bool:
        return 300 <= self.status < 400

    def is_client_error(self) -> bool:
        return 400 <= self.status < 500

    def is_server_error(self) -> bool:
        return 500 <= self.status < 600

    @property
    def content_type(self) -> str | None:
        return self.headers.get(Header.CONTENT_TYPE)

    @property
    def is_json(self) -> bool:
        return bool(json_re.match(self.content_type or ""))

    @property
    def charset(self) -> str | None:
        match = charset_re.search(self.content_type or "")
        return match.group(1) if match is not None else None

    def text(self, encoding: str | None = None) -> str:
        if self.data is None:
            return ""
        return self.data.decode(encoding or self.charset or "utf-8")

    def __repr__(self) -> str:
        return f"<RawResponse [{self.status}]>"


def flatten_headers(headers: Headers) -> collections.abc.Mapping[str, str]:
    flattened: dict[str, str] = {}
    names: dict[str, str] = {}
    for name, value in multidict.CIMultiDict[str](headers).items():
        key = names.setdefault(name.lower(), str(name))
        flattened[key] = f"{flattened[key]}, {value}" if key in flattened else value
    return types.MappingProxyType(flattened)
