"""Codecs for scalar values: integers, floats, booleans, strings and bytes.

Every codec writes a value to a :class:`~jsonsmith.stream.Stream` with
``encode`` and tells with ``is_empty`` whether the value counts as empty
when a field is marked to be omitted if empty.  ``decode`` takes a value
as parsed from JSON (``None``, ``bool``, ``int``, ``float``, ``str``,
``list`` or ``dict``) along with the value currently held by the target,
and returns the new value.
"""

from __future__ import annotations

import base64
import binascii
import math
import struct
from dataclasses import dataclass
from typing import Any, Optional, Union

from .stream import Stream

__all__ = [
    "DecodeError",
    "IntCodec",
    "FloatCodec",
    "BoolCodec",
    "StringCodec",
    "Base64Codec",
]

_INT_BITS = (8, 16, 32, 64)
_FLOAT_BITS = (32, 64)

BytesLike = Union[bytes, bytearray, memoryview]


class DecodeError(ValueError):
    """JSON input could not be read into the requested type."""


def _kind(data: Any) -> str:
    if data is None:
        return "null"
    if isinstance(data, bool):
        return "bool"
    if isinstance(data, (int, float)):
        return "number"
    if isinstance(data, str):
        return "string"
    if isinstance(data, (list, tuple)):
        return "array"
    if isinstance(data, dict):
        return "object"
    return type(data).__name__


@dataclass(frozen=True)
class IntCodec:
    """Integer of a fixed width, signed or unsigned."""

    bits: int = 64
    signed: bool = True

    def __post_init__(self) -> None:
        if self.bits not in _INT_BITS:
            raise ValueError(f"unsupported integer width: {self.bits}")

    @property
    def name(self) -> str:
        return f"{'int' if self.signed else 'uint'}{self.bits}"

    @property
    def bounds(self) -> tuple[int, int]:
        if self.signed:
            return -(1 << (self.bits - 1)), (1 << (self.bits - 1)) - 1
        return 0, (1 << self.bits) - 1

    def encode(self, value: int, stream: Stream) -> None:
        if self.signed:
            stream.write_int(value, self.bits)
        else:
            stream.write_uint(value, self.bits)

    def is_empty(self, value: int) -> bool:
        return value == 0

    def decode(self, data: Any, current: Optional[int] = 0) -> Optional[int]:
        """Return ``data`` as an integer; ``null`` keeps ``current``."""
        if data is None:
            return current
        if isinstance(data, bool) or not isinstance(data, int):
            raise DecodeError(f"read {self.name}: expect integer, but found {_kind(data)}")
        low, high = self.bounds
        if not low <= data <= high:
            raise DecodeError(f"read {self.name}: overflow: {data}")
        return data


def _round_float32(value: float) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        raise DecodeError(f"read float32: value out of range: {value!r}") from None


@dataclass(frozen=True)
class FloatCodec:
    """Floating point number of 32 or 64 bits.

    With ``lossy`` set, values are written with at most six fraction digits.
    """

    bits: int = 64
    lossy: bool = False

    def __post_init__(self) -> None:
        if self.bits not in _FLOAT_BITS:
            raise ValueError(f"unsupported float width: {self.bits}")

    def encode(self, value: float, stream: Stream) -> None:
        if self.bits == 32:
            if self.lossy:
                stream.write_float32_lossy(value)
            else:
                stream.write_float32(value)
        elif self.lossy:
            stream.write_float64_lossy(value)
        else:
            stream.write_float64(value)

    def is_empty(self, value: float) -> bool:
        return value == 0

    def decode(self, data: Any, current: Optional[float] = 0.0) -> Optional[float]:
        """Return ``data`` as a float; ``null`` keeps ``current``."""
        if data is None:
            return current
        if isinstance(data, bool) or not isinstance(data, (int, float)):
            raise DecodeError(f"read float{self.bits}: expect number, but found {_kind(data)}")
        try:
            value = float(data)
        except OverflowError:
            raise DecodeError(f"read float{self.bits}: value out of range") from None
        if math.isinf(value) or math.isnan(value):
            raise DecodeError(f"read float{self.bits}: value out of range")
        if self.bits == 32:
            return _round_float32(value)
        return value


class BoolCodec:
    """JSON ``true`` and ``false``."""

    def encode(self, value: bool, stream: Stream) -> None:
        stream.write_bool(bool(value))

    def is_empty(self, value: bool) -> bool:
        return not value

    def decode(self, data: Any, current: Optional[bool] = False) -> Optional[bool]:
        """Return ``data`` as a bool; ``null`` keeps ``current``."""
        if data is None:
            return current
        if not isinstance(data, bool):
            raise DecodeError(f"read bool: expect true or false, but found {_kind(data)}")
        return data


class StringCodec:
    """JSON strings."""

    def encode(self, value: str, stream: Stream) -> None:
        stream.write_string(value)

    def is_empty(self, value: str) -> bool:
        return value == ""

    def decode(self, data: Any, current: Optional[str] = "") -> str:
        """Return ``data`` as a string; ``null`` reads as the empty string."""
        if data is None:
            return ""
        if not isinstance(data, str):
            raise DecodeError(f"read string: expect string or null, but found {_kind(data)}")
        return data


_BYTE = IntCodec(8, False)


class Base64Codec:
    """Byte strings, written as standard base64 text.

    Reading also accepts an array of byte values.
    """

    def encode(self, value: Optional[BytesLike], stream: Stream) -> None:
        if value is None:
            stream.write_nil()
            return
        encoded = base64.b64encode(bytes(value)).decode("ascii")
        stream.write_raw('"' + encoded + '"')

    def is_empty(self, value: Optional[BytesLike]) -> bool:
        return value is None or len(value) == 0

    def decode(self, data: Any, current: Optional[bytes] = None) -> Optional[bytes]:
        """Return the bytes held by ``data``; ``null`` reads as ``None``."""
        if data is None:
            return None
        if isinstance(data, str):
            cleaned = data.replace("\r", "").replace("\n", "")
            try:
                return base64.b64decode(cleaned.encode("ascii"), validate=True)
            except (binascii.Error, UnicodeEncodeError) as exc:
                raise DecodeError(f"decode base64: {exc}") from None
        if isinstance(data, (list, tuple)):
            return bytes(_BYTE.decode(item, 0) for item in data)
        raise DecodeError("base64Codec: invalid input")