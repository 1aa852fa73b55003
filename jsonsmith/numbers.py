"""Formatting of integers and floating point numbers as JSON number text."""

from __future__ import annotations

import math
import struct
from decimal import ROUND_HALF_EVEN, Context, Decimal
from fractions import Fraction

__all__ = [
    "EncodeError",
    "UnsupportedValueError",
    "format_int",
    "format_float32",
    "format_float64",
    "format_float32_lossy",
    "format_float64_lossy",
]

_INT_BITS = (8, 16, 32, 64)
_LOSSY_LIMIT = 0x4FFFFFF
_LOSSY_SCALE = 1_000_000
_LOSSY_PRECISION = 6


class EncodeError(ValueError):
    """A value could not be written as JSON."""


class UnsupportedValueError(EncodeError):
    """A float that JSON cannot represent: infinity or NaN."""

    def __init__(self, value: float) -> None:
        self.value = value
        super().__init__(f"unsupported value: {_special_name(value)}")


def _special_name(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    return "+Inf" if value > 0 else "-Inf"


def format_int(value: int, bits: int = 64, signed: bool = True) -> str:
    """Return the decimal text of an integer of the given width and signedness."""
    if bits not in _INT_BITS:
        raise ValueError(f"unsupported integer width: {bits}")
    value = int(value)
    if signed:
        low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    else:
        low, high = 0, (1 << bits) - 1
    if not low <= value <= high:
        kind = "int" if signed else "uint"
        raise EncodeError(f"value {value} out of range for {kind}{bits}")
    return str(value)


def _to_float32(value: float) -> float:
    """Round a Python float to the nearest float32, raising on inf and NaN."""
    value = float(value)
    if math.isinf(value) or math.isnan(value):
        raise UnsupportedValueError(value)
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        raise UnsupportedValueError(math.copysign(math.inf, value)) from None


def _check_finite(value: float) -> float:
    value = float(value)
    if math.isinf(value) or math.isnan(value):
        raise UnsupportedValueError(value)
    return value


def _decimal_digits(number: Decimal) -> tuple[str, int]:
    """Split a positive decimal into its significant digits and point position.

    The value equals ``0.<digits> * 10 ** point``.
    """
    _, digit_tuple, exponent = number.as_tuple()
    digits = "".join(map(str, digit_tuple)).lstrip("0")
    stripped = digits.rstrip("0")
    exponent += len(digits) - len(stripped)
    return stripped, len(stripped) + exponent


def _shortest64(value: float) -> tuple[str, int]:
    return _decimal_digits(Decimal(repr(value)))


def _shortest32(value: float) -> tuple[str, int]:
    """Shortest digits that read back as the same float32, closest on ties."""
    (bits,) = struct.unpack("<I", struct.pack("<f", value))
    lower = struct.unpack("<f", struct.pack("<I", bits - 1))[0]
    exact = Fraction(value)
    upper_bits = bits + 1
    upper = struct.unpack("<f", struct.pack("<I", upper_bits))[0]
    if math.isinf(upper):
        upper_exact = exact + (exact - Fraction(lower))
    else:
        upper_exact = Fraction(upper)
    low_mid = (Fraction(lower) + exact) / 2
    high_mid = (exact + upper_exact) / 2
    inclusive = bits & 1 == 0
    source = Decimal(value)
    candidate = source
    for precision in range(1, 10):
        candidate = Context(prec=precision, rounding=ROUND_HALF_EVEN).plus(source)
        point = Fraction(candidate)
        if inclusive:
            fits = low_mid <= point <= high_mid
        else:
            fits = low_mid < point < high_mid
        if fits:
            break
    return _decimal_digits(candidate)


def _fixed(digits: str, point: int) -> str:
    if point > 0:
        whole = digits[:point].ljust(point, "0")
        fraction = digits[point:]
    else:
        whole = "0"
        fraction = "0" * -point + digits
    return f"{whole}.{fraction}" if fraction else whole


def _scientific(digits: str, point: int) -> str:
    mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
    exponent = point - 1
    sign = "-" if exponent < 0 else "+"
    text = f"{mantissa}e{sign}{abs(exponent):02d}"
    # e-09 is written as e-9; positive exponents keep their padding.
    if len(text) >= 4 and text[-4] == "e" and text[-3] == "-" and text[-2] == "0":
        text = text[:-2] + text[-1]
    return text


def _format(value: float, low: float, high: float, shortest) -> str:
    sign = "-" if math.copysign(1.0, value) < 0 else ""
    magnitude = abs(value)
    if magnitude == 0:
        return sign + "0"
    digits, point = shortest(magnitude)
    if magnitude < low or magnitude >= high:
        return sign + _scientific(digits, point)
    return sign + _fixed(digits, point)


_F32_LOW = struct.unpack("<f", struct.pack("<f", 1e-6))[0]
_F32_HIGH = struct.unpack("<f", struct.pack("<f", 1e21))[0]


def format_float32(value: float) -> str:
    """Return the shortest JSON text that reads back as the same float32."""
    return _format(_to_float32(value), _F32_LOW, _F32_HIGH, _shortest32)


def format_float64(value: float) -> str:
    """Return the shortest JSON text that reads back as the same float64."""
    return _format(_check_finite(value), 1e-6, 1e21, _shortest64)


def _lossy(value: float, exact) -> str:
    sign = ""
    if value < 0:
        sign = "-"
        value = -value
    if value > _LOSSY_LIMIT:
        return sign + exact(value)
    scaled = int(value * float(_LOSSY_SCALE) + 0.5)
    whole, fraction = divmod(scaled, _LOSSY_SCALE)
    if fraction == 0:
        return f"{sign}{whole}"
    digits = str(fraction).zfill(_LOSSY_PRECISION).rstrip("0")
    return f"{sign}{whole}.{digits}"


def format_float32_lossy(value: float) -> str:
    """Write a float32 with at most six fraction digits, rounding half up."""
    return _lossy(_to_float32(value), format_float32)


def format_float64_lossy(value: float) -> str:
    """Write a float64 with at most six fraction digits, rounding half up."""
    return _lossy(_check_finite(value), format_float64)