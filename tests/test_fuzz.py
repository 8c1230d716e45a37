"""Property tests: arbitrary input never escapes as anything but BencodeError."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from bdecode import INT64_MAX, INT64_MIN, parse
from bdecode_errors import BencodeError
from tests.utils import bencode

bencodable = st.recursive(
    st.integers(min_value=INT64_MIN, max_value=INT64_MAX) | st.binary(min_size=1, max_size=16),
    lambda children: (
        st.lists(children, max_size=4)
        | st.dictionaries(st.binary(min_size=1, max_size=8), children, max_size=4)
    ),
    max_leaves=20,
)

# bytes that steer the decoder into every rule
grammar_bytes = st.lists(
    st.sampled_from([b"i", b"l", b"d", b"e", b":", b"-", b"+", b"0", b"1", b"9", b"x"]),
    max_size=64,
).map(b"".join)


def parse_or_error(data: bytes):
    try:
        return parse(data)
    except BencodeError:
        return None


@pytest.mark.ut
@given(st.binary(max_size=256))
def test_random_bytes(data):
    result = parse_or_error(data)
    assert result is None or isinstance(result, list)


@pytest.mark.ut
@given(grammar_bytes)
def test_grammar_shaped_noise(data):
    result = parse_or_error(data)
    assert result is None or isinstance(result, list)


@pytest.mark.ut
@given(bencodable, st.data())
def test_truncated_input(obj, data):
    encoded = bencode(obj)
    cut = data.draw(st.integers(min_value=0, max_value=len(encoded) - 1))
    result = parse_or_error(encoded[:cut])
    assert result is None or isinstance(result, list)


@pytest.mark.ut
@given(st.lists(bencodable, max_size=5))
def test_concatenated_roots_decode_in_order(objs):
    values = parse(b"".join(bencode(o) for o in objs))
    assert [v.to_python() for v in values] == objs
