import io
import math

import pytest

from jsonsmith.numbers import EncodeError, UnsupportedValueError
from jsonsmith.stream import Stream


class RecordingWriter:
    def __init__(self):
        self.chunks = []

    def write(self, data):
        self.chunks.append(bytes(data))
        return len(data)


def test_write_raw_should_grow_buffer():
    stream = Stream(None, 0, 1)
    stream.write_raw("1")
    assert stream.buffer() == b"1"
    assert stream.buffered() == 1
    stream.write_raw("2")
    assert stream.buffer() == b"12"
    assert stream.buffered() == 2
    stream.write_raw("345")
    assert stream.buffer() == b"12345"


def test_write_bytes_should_grow_buffer():
    stream = Stream(None, 0, 1)
    assert stream.write(b"12") == 2
    assert stream.buffer() == b"12"
    assert stream.buffered() == 2
    stream.write(b"34567")
    assert stream.buffer() == b"1234567"
    assert stream.buffered() == 7


def test_write_raw_string():
    stream = Stream(None, 0, 1)
    stream.write_raw("123")
    assert stream.buffer() == b"123"


def test_write_string_should_grow_buffer():
    stream = Stream(None, 0, 0)
    stream.write_string("123")
    assert stream.buffer() == b'"123"'


def test_write_indention_array():
    stream = Stream(None, 2, 1)
    stream.write_array_start()
    for index, value in enumerate([1, 2, 3]):
        if index:
            stream.write_more()
        stream.write_int(value)
    stream.write_array_end()
    assert stream.buffer() == b"[\n  1,\n  2,\n  3\n]"


def test_write_array_to_writer():
    buf = io.BytesIO()
    stream = Stream(buf, 2, 4096)
    stream.write_array_start()
    stream.write_int(1)
    stream.write_more()
    stream.write_int(2)
    stream.write_array_end()
    stream.flush()
    assert buf.getvalue().decode() == "[\n  1,\n  2\n]"


def test_write_compact_array():
    stream = Stream()
    stream.write_array_start()
    stream.write_int(1)
    stream.write_more()
    stream.write_int(2)
    stream.write_array_end()
    assert stream.buffer() == b"[1,2]"


def test_flush_empties_buffer_each_time():
    writer = RecordingWriter()
    stream = Stream(writer, 0, 512)
    stream.write_array_start()
    for _ in range(1000):
        stream.write_int(0)
        stream.write_more()
        stream.flush()
        assert stream.buffered() == 0
    stream.write_int(0)
    stream.write_array_end()
    stream.flush()
    output = b"".join(writer.chunks)
    assert output == b"[" + b"0," * 1000 + b"0]"
    assert max(len(chunk) for chunk in writer.chunks) <= 3


def test_write_true_false():
    buf = io.BytesIO()
    stream = Stream(buf, 0, 4096)
    stream.write_true()
    stream.write_false()
    stream.write_bool(False)
    stream.flush()
    assert buf.getvalue().decode() == "truefalsefalse"


def test_write_bool_buffered_then_flushed():
    buf = io.BytesIO()
    stream = Stream(buf, 0, 4096)
    stream.write_bool(True)
    assert stream.buffered() == 4
    stream.flush()
    assert stream.buffered() == 0
    assert buf.getvalue().decode() == "true"


def test_write_null():
    buf = io.BytesIO()
    stream = Stream(buf, 0, 4096)
    stream.write_nil()
    stream.flush()
    assert buf.getvalue().decode() == "null"


def test_write_object_with_indention():
    buf = io.BytesIO()
    stream = Stream(buf, 2, 4096)
    stream.write_object_start()
    stream.write_object_field("hello")
    stream.write_int(1)
    stream.write_more()
    stream.write_object_field("world")
    stream.write_int(2)
    stream.write_object_end()
    stream.flush()
    assert buf.getvalue().decode() == '{\n  "hello": 1,\n  "world": 2\n}'


def test_write_compact_object():
    stream = Stream()
    stream.write_object_start()
    stream.write_object_field("a")
    stream.write_string("stream")
    stream.write_more()
    stream.write_object_field("c")
    stream.write_string("d")
    stream.write_object_end()
    assert stream.buffer() == b'{"a":"stream","c":"d"}'


def test_empty_containers():
    stream = Stream(None, 2)
    stream.write_empty_object()
    stream.write_empty_array()
    assert stream.buffer() == b"{}[]"


def test_write_to_writer_passes_everything_on():
    writer = RecordingWriter()
    stream = Stream(writer)
    stream.write_raw("ab")
    assert stream.write(b"cd") == 4
    assert writer.chunks == [b"abcd"]
    assert stream.buffered() == 0


def test_flush_without_writer_keeps_buffer():
    stream = Stream()
    stream.write_nil()
    stream.flush()
    assert stream.buffer() == b"null"


def test_reset_drops_buffer():
    stream = Stream()
    stream.write_raw("abc")
    buf = io.BytesIO()
    stream.reset(buf)
    assert stream.buffered() == 0
    stream.write_uint(123)
    stream.flush()
    assert buf.getvalue() == b"123"


def test_write_ints():
    stream = Stream()
    stream.write_int(-32000, 16)
    stream.write_more()
    stream.write_uint(12345, 32)
    assert stream.buffer() == b"-32000,12345"


def test_write_int_out_of_range():
    stream = Stream()
    with pytest.raises(EncodeError):
        stream.write_int(128, 8)
    with pytest.raises(EncodeError):
        stream.write_uint(-1)


def test_write_floats():
    stream = Stream()
    stream.write_float64(12.3)
    stream.write_more()
    stream.write_float64_lossy(0.1234567)
    stream.write_more()
    stream.write_float32_lossy(0.1234567)
    assert stream.buffer() == b"12.3,0.123457,0.123457"


@pytest.mark.parametrize("value", [math.inf, -math.inf, math.nan])
def test_write_unsupported_float(value):
    stream = Stream()
    with pytest.raises(UnsupportedValueError):
        stream.write_float64(value)
    with pytest.raises(UnsupportedValueError):
        stream.write_float32(value)


def test_write_string_with_html_escaped():
    stream = Stream()
    stream.write_string_with_html_escaped("<b>")
    stream.write_string("<b>")
    output = stream.buffer().decode()
    assert output.endswith('"<b>"')
    assert "<" not in output[: -len('"<b>"')]


def test_write_unicode_string_is_utf8():
    stream = Stream()
    stream.write_string("caf\u00e9")
    assert stream.buffer().decode("utf-8") == '"caf\u00e9"'


def test_negative_indention_rejected():
    with pytest.raises(ValueError):
        Stream(None, -1)