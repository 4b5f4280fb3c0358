"""Typed decoding of raw responses.

A decode target is either a :class:`DecodableResponse` implementing its own
``decode`` or any type pydantic can describe (models, dataclasses, typed dicts,
builtin containers). The latter are decoded from JSON payloads by
:func:`decode_structural`.
"""

import abc
import collections.abc
import dataclasses
import functools
import logging
import typing
from typing import Any, Generic, Self, TypeVar

import pydantic

from .base import DecodeError, NoDataToDecodeError, ObjectDecodeFailedError, RawResponse

logger = logging.getLogger(__name__)

T = TypeVar("T")


_UNSET: Any = object()


@dataclasses.dataclass(frozen=True, slots=True, eq=False)
class DecodeResult(Generic[T]):
    value: T | None = _UNSET
    error: DecodeError | None = None

    def __post_init__(self) -> None:
        if self.error is None:
            if self.value is _UNSET:
                raise ValueError("Either value or error must be provided")
            return
        if self.value is not _UNSET:
            raise ValueError("Value and error are mutually exclusive")
        object.__setattr__(self, "value", None)

    @staticmethod
    def success(value: T) -> "DecodeResult[T]":
        return DecodeResult(value=value)

    @staticmethod
    def failure(error: DecodeError) -> "DecodeResult[Any]":
        return DecodeResult(error=error)

    @property
    def is_success(self) -> bool:
        return self.error is None

    @property
    def is_failure(self) -> bool:
        return self.error is not None

    def unwrap(self) -> T:
        """Return the decoded value or raise the decode error."""
        if self.error is not None:
            raise self.error.with_traceback(None)
        return typing.cast(T, self.value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DecodeResult):
            return NotImplemented
        if self.error is None or other.error is None:
            return self.error is other.error and self.value == other.value
        return _error_key(self.error) == _error_key(other.error)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if self.error is not None:
            return f"<DecodeResult [failure {type(self.error).__name__}]>"
        return f"<DecodeResult [success {self.value!r}]>"


def _error_key(error: DecodeError) -> tuple[Any, ...]:
    cause = error.cause
    return type(error), error.args, type(cause), str(cause) if cause is not None else None


Decoder = collections.abc.Callable[[RawResponse], DecodeResult[T]]


class DecodableResponse(abc.ABC):
    """Type that knows how to build itself from a raw response.

    Implementations should return a failure with :class:`ObjectDecodeFailedError`
    when the payload does not fit.
    """

    __slots__ = ()

    @classmethod
    @abc.abstractmethod
    def decode(cls, response: RawResponse) -> DecodeResult[Self]: ...


class StructuralDecodable(DecodableResponse):
    """Decodes the class from a JSON payload using its declared shape."""

    __slots__ = ()

    @classmethod
    def decode(cls, response: RawResponse) -> DecodeResult[Self]:
        return decode_structural(cls, response)


@functools.lru_cache(maxsize=None)
def _type_adapter(target: Any) -> pydantic.TypeAdapter[Any]:
    try:
        return pydantic.TypeAdapter(target)
    except pydantic.PydanticUserError as e:
        raise TypeError(f"{target!r} does not support structural decoding") from e


def decode_structural(target: type[T] | Any, response: RawResponse) -> DecodeResult[T]:
    if response.data is None:
        logger.debug("Nothing to decode into %r: %r has no data", target, response)
        return DecodeResult.failure(NoDataToDecodeError())

    adapter = _type_adapter(target)
    try:
        value = adapter.validate_json(response.data, strict=True)
    except pydantic.ValidationError as e:
        logger.debug(
            "Failed to decode %r from %r",
            target,
            response,
            exc_info=True,
            extra={"response_status": response.status, "decode_target": repr(target)},
        )
        return DecodeResult.failure(ObjectDecodeFailedError(e))
    return DecodeResult.success(value)


def _is_decodable_response(target: Any) -> bool:
    return (
        typing.get_origin(target) is None
        and isinstance(target, type)
        and issubclass(target, DecodableResponse)
    )


def decode(
    target: type[T] | Any,
    response: RawResponse,
    *,
    decoder: Decoder[T] | None = None,
) -> DecodeResult[T]:
    """Decode a raw response into ``target``.

    An explicit ``decoder`` wins, then the target's own :meth:`DecodableResponse.decode`,
    then structural JSON decoding.
    """
    if decoder is None and not _is_decodable_response(target):
        return decode_structural(target, response)

    custom_decode = decoder if decoder is not None else target.decode
    try:
        return custom_decode(response)
    except DecodeError as e:
        logger.debug("Custom decoder of %r has failed", target, exc_info=True)
        return DecodeResult.failure(e)
