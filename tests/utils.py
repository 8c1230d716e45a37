def bencode(obj) -> bytes:
    """
    Encode Python objects into bencode format, for building test inputs.

    Supports: int, bytes, str, list, dict
    """
    if isinstance(obj, int):
        # Integer: i<number>e
        return b"i" + str(obj).encode('ascii') + b"e"

    elif isinstance(obj, str):
        return bencode(obj.encode('utf-8'))

    elif isinstance(obj, bytes):
        # Bytestring: <length>:<data>
        return str(len(obj)).encode('ascii') + b":" + obj

    elif isinstance(obj, list):
        # List: l<items>e
        return b"l" + b"".join(bencode(item) for item in obj) + b"e"

    elif isinstance(obj, dict):
        # Dictionary: d<key><value>...e, keys sorted
        result = b"d"
        for key in sorted(obj.keys()):
            result += bencode(key)
            result += bencode(obj[key])
        result += b"e"
        return result

    else:
        raise TypeError(f"Cannot bencode object of type {type(obj)}")


def scrambled_pieces(count: int) -> bytes:
    """`count` fake SHA-1 digests, not valid UTF-8."""
    return bytes((i * 37 + 0x80) % 256 for i in range(count * 20))
