"""Codecs for optional values and lists of values."""

from __future__ import annotations

from typing import Any, Optional, Sequence

from .native import BoolCodec, DecodeError, FloatCodec, IntCodec, StringCodec
from .numbers import EncodeError
from .stream import Stream

__all__ = ["OptionalCodec", "SliceCodec"]


def _zero(codec: Any) -> Any:
    """Return the value a fresh, never written target of ``codec`` holds."""
    if isinstance(codec, IntCodec):
        return 0
    if isinstance(codec, FloatCodec):
        return 0.0
    if isinstance(codec, BoolCodec):
        return False
    if isinstance(codec, StringCodec):
        return ""
    factory = getattr(codec, "_new_instance", None)
    if callable(factory):
        return factory()
    return None


def _found(data: Any) -> str:
    """The first character of ``data`` as it would appear in JSON text."""
    if isinstance(data, dict):
        return "{"
    if isinstance(data, str):
        return '"'
    if isinstance(data, bool):
        return "t" if data else "f"
    text = str(data)
    return text[:1]


class OptionalCodec:
    """A value that may be absent, written as ``null`` when it is ``None``."""

    def __init__(self, value_codec: Any) -> None:
        self.value_codec = value_codec

    def encode(self, value: Any, stream: Stream) -> None:
        if value is None:
            stream.write_nil()
        else:
            self.value_codec.encode(value, stream)

    def is_empty(self, value: Any) -> bool:
        return value is None

    def decode(self, data: Any, current: Any = None) -> Any:
        """``null`` gives ``None``; anything else is read into ``current``
        or, when there is none, into a fresh value."""
        if data is None:
            return None
        if current is None:
            current = _zero(self.value_codec)
        return self.value_codec.decode(data, current)


class SliceCodec:
    """A list of values of one codec, written as a JSON array.

    ``type_name`` prefixes the messages of errors raised inside the list.
    """

    def __init__(self, elem_codec: Any, type_name: str = "list") -> None:
        self.elem_codec = elem_codec
        self.type_name = type_name

    def encode(self, value: Optional[Sequence[Any]], stream: Stream) -> None:
        if value is None:
            stream.write_nil()
            return
        if len(value) == 0:
            stream.write_empty_array()
            return
        try:
            stream.write_array_start()
            for index, item in enumerate(value):
                if index:
                    stream.write_more()
                self.elem_codec.encode(item, stream)
            stream.write_array_end()
        except EncodeError as exc:
            raise EncodeError(f"{self.type_name}: {exc}") from exc

    def is_empty(self, value: Optional[Sequence[Any]]) -> bool:
        return value is None or len(value) == 0

    def decode(self, data: Any, current: Optional[Sequence[Any]] = None) -> Optional[list]:
        """Read a JSON array; elements already held by ``current`` are
        decoded into, so a ``null`` element keeps its old value."""
        if data is None:
            return None
        if not isinstance(data, (list, tuple)):
            raise DecodeError(
                f"{self.type_name}: decode slice: expect [ or n, but found {_found(data)}"
            )
        existing = list(current) if current is not None else []
        result = []
        for index, item in enumerate(data):
            slot = existing[index] if index < len(existing) else _zero(self.elem_codec)
            try:
                result.append(self.elem_codec.decode(item, slot))
            except DecodeError as exc:
                raise DecodeError(f"{self.type_name}: {exc}") from None
        return result