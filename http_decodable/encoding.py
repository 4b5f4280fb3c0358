import collections.abc
import logging
import string
import urllib.parse

from .base import BoolEncoding, QueryParameters

logger = logging.getLogger(__name__)

# "?" and "/" are left out, RFC 3986 section 3.4 allows them in a query to carry a nested URL.
GENERAL_DELIMITERS_TO_ENCODE = ":#[]@"
SUB_DELIMITERS_TO_ENCODE = "!$&'()*+,;="

URL_QUERY_ALLOWED = frozenset(string.ascii_letters + string.digits + "-._~" + "!$&'()*+,/:;=?@")
QUERY_ALLOWED = URL_QUERY_ALLOWED - frozenset(GENERAL_DELIMITERS_TO_ENCODE + SUB_DELIMITERS_TO_ENCODE)

_ALWAYS_SAFE = frozenset(string.ascii_letters + string.digits + "-._~")
_SAFE = "".join(sorted(QUERY_ALLOWED - _ALWAYS_SAFE))


def query_escaped(value: str) -> str:
    """Percent-escape a query string component.

    Every character outside of ``QUERY_ALLOWED`` is UTF-8 percent-encoded. When the
    value cannot be encoded (lone surrogates for instance) it is returned as is.
    """
    try:
        return urllib.parse.quote(value, safe=_SAFE, encoding="utf-8", errors="strict")
    except UnicodeEncodeError:
        logger.warning("Failed to percent-encode %r, using it unescaped", value, exc_info=True)
        return value


def join_with_ampersands(parts: collections.abc.Iterable[str]) -> str:
    return "&".join(parts)


def encode_query(parameters: QueryParameters, bool_encoding: BoolEncoding = BoolEncoding.LITERAL) -> str:
    pairs: list[str] = []
    for name, value in (
        parameters.items() if isinstance(parameters, collections.abc.Mapping) else parameters
    ):
        if value is None:
            continue
        if not isinstance(value, str) and isinstance(value, collections.abc.Iterable):
            values = [v for v in value if v is not None]
        else:
            values = [value]
        escaped_name = query_escaped(name)
        for v in values:
            pairs.append(f"{escaped_name}={query_escaped(_format_value(v, bool_encoding))}")
    return join_with_ampersands(pairs)


def _format_value(value: object, bool_encoding: BoolEncoding) -> str:
    if isinstance(value, bool):
        if bool_encoding is BoolEncoding.NUMERIC:
            return "1" if value else "0"
        return "true" if value else "false"
    return str(value)
