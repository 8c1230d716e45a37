# bdecode.py
#
# Zero-copy bencode decoder.
# - Works on bytes, bytearray or memoryview, never on str
# - Returns one of four value kinds:
#     Integer       signed 64-bit integer
#     Bytes         read-only memoryview into the input buffer
#     List          tuple of values, in input order
#     Dictionary    dict[memoryview, value], lookup by key only
#
# Byte strings and dictionary keys are views, not copies: the input buffer
# must outlive the decoded tree and must not be mutated while the tree is in
# use. Call to_python() on any value to get an owned copy instead.
#
# Usage:
#     from bdecode import parse, decode
#     values = parse(b"i1e4:spam")
#     meta = decode(b"d3:cow3:mooe")
#     meta[b"cow"] == b"moo"

import logging
import re
from dataclasses import dataclass
from typing import Union

from bdecode_errors import (
    BencodeError,
    DepthLimitExceeded,
    InvalidBytesLengthError,
    InvalidIntegerError,
    StructuralError,
    UnterminatedError,
)

# Each nesting level costs two Python frames (dispatch + composite rule),
# so this stays well inside the interpreter's default recursion limit.
DEFAULT_MAX_DEPTH = 256

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
UINT64_MAX = (1 << 64) - 1

_INTEGER = re.compile(rb"i([+-]?[0-9]+)e")
_LENGTH = re.compile(rb"([0-9]+):")

_logger = logging.getLogger("bdecode")


@dataclass(frozen=True, eq=False)
class Cursor:
    """Immutable position in a read-only input buffer."""

    buffer: memoryview
    pos: int = 0

    @classmethod
    def of(cls, data) -> "Cursor":
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError("bdecode expects bytes, bytearray or memoryview")
        view = memoryview(data)
        if view.ndim != 1 or view.format != "B":
            view = view.cast("B")
        return cls(view.toreadonly())

    @property
    def at_end(self) -> bool:
        return self.pos >= len(self.buffer)

    @property
    def remaining(self) -> memoryview:
        return self.buffer[self.pos:]

    def peek(self) -> bytes:
        """Next byte as a single-byte bytes object, b"" at end of input."""
        return self.buffer[self.pos:self.pos + 1].tobytes()

    def advance(self, n: int) -> "Cursor":
        return Cursor(self.buffer, self.pos + n)

    def __repr__(self) -> str:
        return f"Cursor(pos={self.pos}, size={len(self.buffer)})"


# ---------- values ----------

@dataclass(frozen=True, eq=False)
class Bytes:
    value: memoryview

    def __len__(self) -> int:
        return len(self.value)

    def __bytes__(self) -> bytes:
        return self.value.tobytes()

    def __eq__(self, other):
        if isinstance(other, Bytes):
            return self.value == other.value
        if isinstance(other, (bytes, bytearray, memoryview)):
            return self.value == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.value)

    def __repr__(self) -> str:
        return f"Bytes({bytes(self.value)!r})"

    def tobytes(self) -> bytes:
        return self.value.tobytes()

    def to_python(self) -> bytes:
        return self.value.tobytes()


@dataclass(frozen=True)
class Integer:
    value: int

    def __int__(self) -> int:
        return self.value

    def to_python(self) -> int:
        return self.value


@dataclass(frozen=True)
class List:
    items: tuple

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index):
        return self.items[index]

    def __iter__(self):
        return iter(self.items)

    def to_python(self) -> list:
        return [item.to_python() for item in self.items]


@dataclass(frozen=True)
class Dictionary:
    """
    Key -> value mapping of a bencoded dictionary.

    Only lookup is offered; the order keys had in the input is not kept.
    Keys can be given as bytes or as str (UTF-8 encoded for the lookup).
    """

    entries: dict

    def __getitem__(self, key) -> "Value":
        return self.entries[_lookup_key(key)]

    def __contains__(self, key) -> bool:
        return _lookup_key(key) in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def get(self, key, default=None):
        return self.entries.get(_lookup_key(key), default)

    def to_python(self) -> dict:
        return {key.tobytes(): value.to_python() for key, value in self.entries.items()}


Value = Union[Bytes, Integer, List, Dictionary]


def _lookup_key(key) -> bytes:
    # memoryview keys hash and compare like the bytes they view
    if isinstance(key, str):
        return key.encode("utf-8")
    if isinstance(key, Bytes):
        return key.value
    if isinstance(key, bytes):
        return key
    return bytes(key)


# ---------- integer: i<digits>e ----------

def decode_integer(cursor: Cursor) -> tuple[Cursor, Integer]:
    match = _INTEGER.match(cursor.buffer, cursor.pos)
    if match is None:
        raise StructuralError("Expected integer 'i<digits>e'", cursor.pos)

    literal = cursor.buffer[match.start(1):match.end(1)].tobytes()
    negative = literal[:1] == b"-"
    digits = literal[1:] if literal[:1] in (b"-", b"+") else literal

    if literal[:1] == b"+":
        raise InvalidIntegerError(literal, cursor.pos, "leading '+' is not allowed")
    if negative and digits[:1] == b"0":
        raise InvalidIntegerError(literal, cursor.pos, "negative zero or leading zero")
    if len(digits) > 1 and digits[:1] == b"0":
        raise InvalidIntegerError(literal, cursor.pos, "leading zeros are not allowed")
    # INT64_MIN has 19 digits too; longer literals are out of range
    if len(digits) > 19:
        raise InvalidIntegerError(literal, cursor.pos, "out of 64-bit range")

    value = int(literal)
    if not INT64_MIN <= value <= INT64_MAX:
        raise InvalidIntegerError(literal, cursor.pos, "out of 64-bit range")

    return cursor.advance(match.end() - match.start()), Integer(value)


# ---------- bytestring: <len>:<data> ----------

def decode_byte_string(cursor: Cursor) -> tuple[Cursor, Bytes]:
    match = _LENGTH.match(cursor.buffer, cursor.pos)
    if match is None:
        raise StructuralError("Expected byte string '<length>:'", cursor.pos)

    len_bytes = cursor.buffer[match.start(1):match.end(1)].tobytes()
    # 2**64 - 1 has 20 digits; leading zeros are accepted in lengths
    significant = len_bytes.lstrip(b"0")
    if len(significant) > 20:
        raise InvalidBytesLengthError(None, cursor.pos, "length exceeds 64-bit range")
    length = int(significant or b"0")
    if length > UINT64_MAX:
        raise InvalidBytesLengthError(length, cursor.pos, "length exceeds 64-bit range")
    if length == 0:
        raise InvalidBytesLengthError(0, cursor.pos, "zero-length byte strings are not allowed")

    start = match.end()
    end = start + length
    if end > len(cursor.buffer):
        raise InvalidBytesLengthError(
            length,
            cursor.pos,
            f"declared {length} bytes, only {len(cursor.buffer) - start} available",
        )

    return Cursor(cursor.buffer, end), Bytes(cursor.buffer[start:end])


# ---------- list: l<value>...e ----------

def decode_list(cursor: Cursor, depth: int = 0, *,
                max_depth: int = DEFAULT_MAX_DEPTH) -> tuple[Cursor, List]:
    if cursor.peek() != b"l":
        raise StructuralError("Expected list 'l'", cursor.pos)
    start = cursor.pos
    _enter(depth, max_depth, start)
    cursor = cursor.advance(1)  # skip 'l'

    items = []
    while True:
        if cursor.at_end:
            raise UnterminatedError("list", start)
        if cursor.peek() == b"e":
            break
        cursor, item = decode_value(cursor, depth + 1, max_depth=max_depth)
        items.append(item)

    return cursor.advance(1), List(tuple(items))


# ---------- dict: d<key><value>...e ----------

def decode_dictionary(cursor: Cursor, depth: int = 0, *,
                      max_depth: int = DEFAULT_MAX_DEPTH) -> tuple[Cursor, Dictionary]:
    """
    Decode a dictionary.

    Keys are always read with the byte-string rule. Key order in the input
    is not checked, and when a key repeats the later value replaces the
    earlier one.
    """
    if cursor.peek() != b"d":
        raise StructuralError("Expected dictionary 'd'", cursor.pos)
    start = cursor.pos
    _enter(depth, max_depth, start)
    cursor = cursor.advance(1)  # skip 'd'

    entries = {}
    while True:
        if cursor.at_end:
            raise UnterminatedError("dictionary", start)
        if cursor.peek() == b"e":
            break

        cursor, key = decode_byte_string(cursor)
        if cursor.at_end:
            raise UnterminatedError("dictionary", start)
        cursor, value = decode_value(cursor, depth + 1, max_depth=max_depth)
        entries[key.value] = value

    return cursor.advance(1), Dictionary(entries)


def _enter(depth: int, max_depth: int, position: int) -> None:
    if depth + 1 > max_depth:
        raise DepthLimitExceeded(max_depth, position)


# ---------- core dispatch ----------

def decode_value(cursor: Cursor, depth: int = 0, *,
                 max_depth: int = DEFAULT_MAX_DEPTH) -> tuple[Cursor, Value]:
    """Pick a rule from the next byte and decode exactly one value."""
    c = cursor.peek()
    if c == b"i":
        return decode_integer(cursor)
    elif c == b"l":
        return decode_list(cursor, depth, max_depth=max_depth)
    elif c == b"d":
        return decode_dictionary(cursor, depth, max_depth=max_depth)
    elif b"0" <= c <= b"9":
        return decode_byte_string(cursor)
    elif not c:
        raise StructuralError("Unexpected end of data while parsing value", cursor.pos)
    else:
        raise StructuralError(f"Invalid bencode prefix byte {c!r}", cursor.pos)


def _decode_root(cursor: Cursor, max_depth: int) -> tuple[Cursor, Value]:
    try:
        return decode_value(cursor, max_depth=max_depth)
    except RecursionError as e:
        raise DepthLimitExceeded(max_depth, cursor.pos) from e


def _check_max_depth(max_depth: int) -> None:
    if max_depth < 0:
        raise ValueError(f"max_depth must be >= 0, got {max_depth}")


def parse(data, *, max_depth: int = DEFAULT_MAX_DEPTH) -> list[Value]:
    """
    Decode every top-level value in `data`, in order.

    The whole buffer must be consumed: a malformed or partial value anywhere,
    including after valid ones, fails the call and nothing is returned.
    An empty buffer gives an empty list.

    Raises a BencodeError subclass on malformed input, TypeError if `data`
    is not a bytes-like buffer.
    """
    _check_max_depth(max_depth)
    cursor = Cursor.of(data)

    values = []
    try:
        while not cursor.at_end:
            try:
                cursor, value = _decode_root(cursor, max_depth)
            except StructuralError as e:
                if values and e.position == cursor.pos:
                    raise StructuralError(
                        f"Trailing data after {len(values)} value(s): {e.message}", e.position
                    ) from e
                raise
            values.append(value)
    except BencodeError as e:
        _logger.debug(f"Decode failed: {e}")
        raise

    _logger.debug(f"Decoded {len(values)} value(s) from {len(cursor.buffer)} bytes")
    return values


def decode(data, *, max_depth: int = DEFAULT_MAX_DEPTH) -> Value:
    """Decode a buffer holding exactly one value, ensure no extra trailing data."""
    _check_max_depth(max_depth)
    cursor = Cursor.of(data)

    try:
        cursor, value = _decode_root(cursor, max_depth)
        if not cursor.at_end:
            raise StructuralError(
                f"Extra data after valid bencode: {len(cursor.buffer) - cursor.pos} bytes",
                cursor.pos,
            )
    except BencodeError as e:
        _logger.debug(f"Decode failed: {e}")
        raise

    return value
