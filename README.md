# jsonsmith

Building blocks for writing JSON with exact, predictable output:

- a buffered output `Stream` with JSON-specific write methods and optional
  pretty-printing;
- number formatting for integers of a fixed width and for float32 and
  float64 values, shortest round-trip or rounded to six decimals;
- string escaping, plain or safe for embedding in HTML;
- typed codecs that write values to a stream and check values read from
  already-parsed JSON.

The package needs no third-party libraries. To run the tests:

```
pip install "jsonsmith[test]"
pytest
```

## Writing JSON with a stream

`jsonsmith.stream.Stream(out, indention_step, buffer_size)` collects output
in a buffer. With `out` set to `None`, take the result with `buffer()`.
With a binary file-like object, `flush()` writes the buffered bytes to it.

```python
import io
from jsonsmith.stream import Stream

out = io.BytesIO()
stream = Stream(out, 2, 4096)
stream.write_array_start()
stream.write_int(1, 64)
stream.write_more()
stream.write_int(2, 64)
stream.write_array_end()
stream.flush()
# out.getvalue() == b"[\n  1,\n  2\n]"
```

The stream has methods for `null`, booleans, object and array delimiters,
field names, the `,` separator, integers (`write_int`, `write_uint`, with a
bit width of 8, 16, 32 or 64), floats (`write_float32`, `write_float64` and
their `_lossy` forms), strings and raw text. `buffered()` tells how many
bytes are waiting. `reset(out)` drops them and attaches a new writer.

## Number formatting

`jsonsmith.numbers` offers the formatting on its own:

- `format_int(value, bits, signed)` returns the decimal text. It raises
  `EncodeError` when the value does not fit the width.
- `format_float32` and `format_float64` return the shortest text that
  reads back as the same value. They switch to exponent form below 1e-6 and
  at 1e21 and above, e.g. `format_float64(1e-7) == "1e-7"` and
  `format_float64(1e21) == "1e+21"`.
- `format_float32_lossy` and `format_float64_lossy` keep at most six
  fraction digits, rounding half up: `format_float64_lossy(0.1234567) ==
  "0.123457"`.

Infinity and NaN raise `UnsupportedValueError`, a subclass of `EncodeError`.

## String escaping

`jsonsmith.escape.escape_string(s)` quotes `s` and escapes control
characters, `"` and `\`. `escape_string_html(s)` also escapes `<`, `>`,
`&`, U+2028 and U+2029, and replaces lone surrogates with `\ufffd`.
On a stream these are `write_string` and `write_string_with_html_escaped`.

## Codecs

Every codec has `encode(value, stream)`, `is_empty(value)` and
`decode(data, current)`. `decode` takes a value as parsed from JSON, for
instance by `json.loads`, together with the value the target holds now. It
returns the new value or raises `jsonsmith.native.DecodeError`.

- `jsonsmith.native`: `IntCodec(bits, signed)`, `FloatCodec(bits, lossy)`,
  `BoolCodec`, `StringCodec` and `Base64Codec`. For numbers and booleans,
  `null` keeps the current value. `StringCodec` reads `null` as `""`.
  `Base64Codec` writes bytes as standard base64 text and reads base64
  strings, ignoring `\r` and `\n`, or arrays of byte values.
- `jsonsmith.containers`: `OptionalCodec(value_codec)` maps `None` to
  `null`. `SliceCodec(elem_codec, type_name)` writes lists as arrays. When it
  reads, it decodes each element into the element already held at that
  position, so a `null` element keeps its old value.

```python
import json
from jsonsmith.containers import SliceCodec
from jsonsmith.native import Base64Codec, IntCodec
from jsonsmith.stream import Stream

stream = Stream(None, 0, 64)
SliceCodec(IntCodec(32, True), "[]int32").encode([1, 2, 3], stream)
# stream.buffer() == b"[1,2,3]"

Base64Codec().decode(json.loads('"AQID"'), None)   # b"\x01\x02\x03"
IntCodec(8, False).decode(300, 0)                   # raises DecodeError
```

## What the package does not do

jsonsmith does not parse JSON text; decoding works on values that are
already parsed. It has no codecs for structs, dataclasses or mappings. It
has no single call that picks a codec from a Python type and marshals or
unmarshals a whole document. Compose the codecs above yourself.