import dataclasses

import multidict
import pytest
import yarl

import http_decodable


def test_build_request() -> None:
    request = http_decodable.build_request(
        "https://api.example.com/users",
        http_decodable.Method.GET,
        http_decodable.CachePolicy.RELOAD_IGNORING_LOCAL_CACHE_DATA,
        30,
        {"Accept": "application/json"},
    )

    assert request.url == yarl.URL("https://api.example.com/users")
    assert request.method == "GET"
    assert request.timeout == 30
    assert request.cache_policy is http_decodable.CachePolicy.RELOAD_IGNORING_LOCAL_CACHE_DATA
    assert request.headers is not None
    assert dict(request.headers) == {"Accept": "application/json"}


def test_build_request_is_immutable() -> None:
    request = http_decodable.build_request("https://api.example.com", headers={"Accept": "*/*"})

    with pytest.raises(dataclasses.FrozenInstanceError):
        request.method = "POST"  # type: ignore[misc]
    with pytest.raises(TypeError):
        request.headers["Accept"] = "text/plain"  # type: ignore[index]


def test_build_request_without_headers() -> None:
    request = http_decodable.build_request("https://api.example.com")

    assert request.headers is None
    assert request.method == "GET"
    assert request.timeout == http_decodable.DEFAULT_TIMEOUT
    assert request.cache_policy is http_decodable.CachePolicy.USE_PROTOCOL_CACHE_POLICY


@pytest.mark.parametrize(
    "method, expected",
    [
        (http_decodable.Method.POST, "POST"),
        ("delete", "DELETE"),
        ("Patch", "PATCH"),
    ],
)
def test_build_request_method(method: str, expected: str) -> None:
    assert http_decodable.build_request("https://api.example.com", method).method == expected


def test_build_request_unknown_method() -> None:
    with pytest.raises(ValueError):
        http_decodable.build_request("https://api.example.com", "FETCH")


def test_build_request_flattens_headers() -> None:
    headers = multidict.CIMultiDict[str]([("Accept", "text/html"), ("X-Id", "1"), ("accept", "application/json")])

    request = http_decodable.build_request("https://api.example.com", headers=headers)

    assert request.headers is not None
    assert dict(request.headers) == {"Accept": "text/html, application/json", "X-Id": "1"}


@pytest.mark.parametrize(
    "url",
    [
        "",
        "not a url",
        "/relative/path",
        "api/users",
        "http://",
        "http://[::1",
        yarl.URL("relative"),
        42,
    ],
)
def test_invalid_url(url: object) -> None:
    with pytest.raises(http_decodable.InvalidURLError) as e:
        http_decodable.build_request(url, http_decodable.Method.GET)  # type: ignore[arg-type]

    assert e.value.url == url


def test_supports_url() -> None:
    class Endpoint:
        def as_url(self) -> yarl.URL:
            return yarl.URL("https://api.example.com/v1")

    assert http_decodable.build_request(Endpoint()).url == yarl.URL("https://api.example.com/v1")


@pytest.mark.parametrize(
    "base, relative, actual",
    (
        ("http://service.com", "hello", "http://service.com/hello"),
        ("http://service.com/", "hello", "http://service.com/hello"),
        ("http://service.com", "api/hello", "http://service.com/api/hello"),
        ("https://service.com/", "api/hello", "https://service.com/api/hello"),
        ("https://service.com:12345", "hello", "https://service.com:12345/hello"),
        ("https://service.com/api/", "hello", "https://service.com/api/hello"),
        ("https://service.com/api/", "/hello", "https://service.com/hello"),
        ("https://service.com/api/", "https://other.com/x", "https://other.com/x"),
    ),
)
def test_factory_resolves_relative_url(base: str, relative: str, actual: str) -> None:
    factory = http_decodable.setup(base_url=base, emit_user_agent=False)

    assert factory.build(relative).url == yarl.URL(actual)


def test_factory_without_base_url_requires_absolute_url() -> None:
    factory = http_decodable.setup(emit_user_agent=False)

    with pytest.raises(http_decodable.InvalidURLError):
        factory.build("users")


def test_factory_query_parameters() -> None:
    factory = http_decodable.setup(base_url="https://service.com/", emit_user_agent=False)

    request = factory.build("search?lang=en", query_parameters={"q": "a&b", "page": 2, "exact": True})

    assert request.url.raw_query_string == "lang=en&q=a%26b&page=2&exact=true"
    assert request.url.query["q"] == "a&b"
    assert request.url.path == "/search"


def test_factory_defaults() -> None:
    factory = http_decodable.setup(
        base_url="https://service.com/",
        timeout=5,
        cache_policy=http_decodable.CachePolicy.RETURN_CACHE_DATA_ELSE_LOAD,
        headers={"Accept": "application/json", "X-Client": "tests"},
        emit_user_agent=False,
    )

    request = factory.build("users")
    assert request.timeout == 5
    assert request.cache_policy is http_decodable.CachePolicy.RETURN_CACHE_DATA_ELSE_LOAD
    assert request.headers is not None
    assert dict(request.headers) == {"Accept": "application/json", "X-Client": "tests"}

    request = factory.build(
        "users",
        http_decodable.Method.POST,
        headers={"accept": "text/plain"},
        timeout=1,
        cache_policy=http_decodable.CachePolicy.USE_PROTOCOL_CACHE_POLICY,
    )
    assert request.method == "POST"
    assert request.timeout == 1
    assert request.cache_policy is http_decodable.CachePolicy.USE_PROTOCOL_CACHE_POLICY
    assert request.headers is not None
    assert {name.lower(): value for name, value in request.headers.items()} == {
        "accept": "text/plain",
        "x-client": "tests",
    }


def test_factory_without_headers() -> None:
    factory = http_decodable.setup(base_url="https://service.com/", emit_user_agent=False)

    assert factory.build("users").headers is None
