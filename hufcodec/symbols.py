"""Symbols that can occur in a Huffman tree.

A symbol is either a literal byte value (an `int` in the range 0-255)
or one of the `Sentinel` members. For serialization every symbol maps
to a numeric code: the byte value itself for literal bytes and the
enum value for sentinels.

"""

import typing as t
from enum import Enum


class Sentinel(Enum):
    """Symbols that are not literal bytes."""
    # Marks the logical end of the encoded payload. This is to ensure we
    # stop decoding instead of interpreting the padding of the last byte.
    PSEUDO_EOF = 256
    # Marks internal nodes of the Huffman tree. Never encoded.
    NOT_A_CHAR = 257

    def __repr__(self):
        return f"{self.__class__.__name__}.{self.name}"


PSEUDO_EOF = Sentinel.PSEUDO_EOF
NOT_A_CHAR = Sentinel.NOT_A_CHAR

Symbol = t.Union[int, Sentinel]


def is_byte(symbol: Symbol) -> bool:
    # `bool` is an `int` subclass but never a valid symbol.
    return (
        isinstance(symbol, int)
        and not isinstance(symbol, bool)
        and 0 <= symbol <= 255
    )


def to_code(symbol: Symbol) -> int:
    if isinstance(symbol, Sentinel):
        return symbol.value
    if not is_byte(symbol):
        raise ValueError(f"Not a symbol: {symbol!r}")
    return symbol


def from_code(code: int) -> Symbol:
    if 0 <= code <= 255:
        return code
    # Raises `ValueError` for unknown codes.
    return Sentinel(code)
