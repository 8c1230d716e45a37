# bdecode_errors.py
#
# Errors raised by the bdecode rules.
#
#     BencodeError
#       StructuralError          no value kind matches (also EOF, trailing data)
#       InvalidIntegerError      i...e matched but content is not canonical
#       InvalidBytesLengthError  zero length, or longer than what is left
#       UnterminatedError        list / dict never reaches its 'e'
#       DepthLimitExceeded       nesting deeper than max_depth


class BencodeError(Exception):
    """Generic bencode parsing error."""

    # False: the input simply isn't this kind of value.
    # True: the envelope matched but the content is invalid.
    fatal = True

    def __init__(self, message: str, position: int):
        super().__init__(f"{message} (at byte {position})")
        self.message = message
        self.position = position


class StructuralError(BencodeError):
    fatal = False


class InvalidIntegerError(BencodeError):
    def __init__(self, literal: bytes, position: int, reason: str):
        super().__init__(f"Invalid integer {literal!r}: {reason}", position)
        self.literal = literal


class InvalidBytesLengthError(BencodeError):
    def __init__(self, length: int | None, position: int, reason: str):
        super().__init__(f"Invalid byte string length: {reason}", position)
        self.length = length


class UnterminatedError(BencodeError):
    def __init__(self, kind: str, position: int):
        super().__init__(f"Unexpected end of data inside {kind}", position)
        self.kind = kind


class DepthLimitExceeded(BencodeError):
    def __init__(self, max_depth: int, position: int):
        super().__init__(f"Nesting deeper than {max_depth} levels", position)
        self.max_depth = max_depth
