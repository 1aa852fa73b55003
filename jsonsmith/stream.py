"""A buffered writer with JSON-specific write methods."""

from __future__ import annotations

from typing import BinaryIO, Optional

from .escape import escape_string, escape_string_html
from .numbers import (
    format_float32,
    format_float32_lossy,
    format_float64,
    format_float64_lossy,
    format_int,
)

__all__ = ["Stream"]


class Stream:
    """Collects JSON output in a buffer, optionally passing it to a writer.

    With ``out`` set to ``None`` the result is taken with :meth:`buffer`.
    A positive ``indention_step`` pretty-prints arrays and objects.
    ``buffer_size`` is a size hint for the internal buffer.
    """

    def __init__(
        self,
        out: Optional[BinaryIO] = None,
        indention_step: int = 0,
        buffer_size: int = 512,
    ) -> None:
        if indention_step < 0:
            raise ValueError("indention_step must not be negative")
        if buffer_size < 0:
            raise ValueError("buffer_size must not be negative")
        self.out = out
        self.indention_step = indention_step
        self.buffer_size = buffer_size
        self.attachment = None
        self._buf = bytearray()
        self._indention = 0

    def reset(self, out: Optional[BinaryIO]) -> None:
        """Reuse the stream with a new writer, dropping buffered output."""
        self.out = out
        self._buf.clear()

    def buffer(self) -> bytes:
        """Return the bytes held in the buffer."""
        return bytes(self._buf)

    def buffered(self) -> int:
        """Return how many bytes are waiting in the buffer."""
        return len(self._buf)

    def write(self, data: bytes) -> int:
        """Append ``data``; with a writer attached, pass the buffer on to it.

        Returns the number of bytes taken by the writer, or ``len(data)``
        when there is no writer.
        """
        self._buf += data
        if self.out is None:
            return len(data)
        written = self.out.write(bytes(self._buf))
        if written is None:
            written = len(self._buf)
        del self._buf[:written]
        return written

    def flush(self) -> None:
        """Write all buffered bytes to the writer, if there is one."""
        if self.out is None:
            return
        self.out.write(bytes(self._buf))
        self._buf.clear()

    def _append(self, text: str) -> None:
        self._buf += text.encode("utf-8", "surrogatepass")

    def write_raw(self, s: str) -> None:
        """Append ``s`` as it is, without quoting."""
        self._append(s)

    def write_nil(self) -> None:
        self._buf += b"null"

    def write_true(self) -> None:
        self._buf += b"true"

    def write_false(self) -> None:
        self._buf += b"false"

    def write_bool(self, value: bool) -> None:
        if value:
            self.write_true()
        else:
            self.write_false()

    def _write_indention(self, delta: int) -> None:
        if self._indention == 0:
            return
        self._buf += b"\n"
        self._buf += b" " * (self._indention - delta)

    def write_object_start(self) -> None:
        self._indention += self.indention_step
        self._buf += b"{"
        self._write_indention(0)

    def write_object_field(self, field: str) -> None:
        """Write a quoted field name followed by a colon."""
        self.write_string(field)
        self._buf += b": " if self._indention > 0 else b":"

    def write_object_end(self) -> None:
        self._write_indention(self.indention_step)
        self._indention -= self.indention_step
        self._buf += b"}"

    def write_empty_object(self) -> None:
        self._buf += b"{}"

    def write_more(self) -> None:
        """Write the separator between elements."""
        self._buf += b","
        self._write_indention(0)

    def write_array_start(self) -> None:
        self._indention += self.indention_step
        self._buf += b"["
        self._write_indention(0)

    def write_empty_array(self) -> None:
        self._buf += b"[]"

    def write_array_end(self) -> None:
        self._write_indention(self.indention_step)
        self._indention -= self.indention_step
        self._buf += b"]"

    def write_int(self, value: int, bits: int = 64) -> None:
        self._append(format_int(value, bits, True))

    def write_uint(self, value: int, bits: int = 64) -> None:
        self._append(format_int(value, bits, False))

    def write_float32(self, value: float) -> None:
        self._append(format_float32(value))

    def write_float64(self, value: float) -> None:
        self._append(format_float64(value))

    def write_float32_lossy(self, value: float) -> None:
        self._append(format_float32_lossy(value))

    def write_float64_lossy(self, value: float) -> None:
        self._append(format_float64_lossy(value))

    def write_string(self, s: str) -> None:
        """Write ``s`` as a quoted JSON string without HTML escaping."""
        self._append(escape_string(s))

    def write_string_with_html_escaped(self, s: str) -> None:
        """Write ``s`` as a quoted JSON string with HTML characters escaped."""
        self._append(escape_string_html(s))