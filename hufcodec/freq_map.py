"""Frequency map and its serialization as a container header.

The header format is as follows:

    - 2 bytes: the number of symbols in the frequency map.
    - X bytes: where X=6*value_of_previous_field. These bytes store the
      frequency map using the schema given by
      `FREQ_MAP_ENTRY_SCHEMA`, one entry per symbol in ascending order
      of symbol code.

All fields are little-endian.

"""

import itertools
import logging
import struct
import typing as t
from collections import Counter

from hufcodec.errors import InvalidInput
from hufcodec.symbols import NOT_A_CHAR, Sentinel, Symbol, from_code, is_byte, to_code


logger = logging.getLogger(__name__)

# Encoding schemas using the `struct` module.
FREQ_MAP_SIZE_SCHEMA = "<H"
# - 2 bytes to contain the symbol code
# - 4 bytes to contain the count
FREQ_MAP_ENTRY_SCHEMA = "HI"

# Largest count that fits in the `I` field of an entry.
MAX_COUNT = 2**32 - 1


class FrequencyMap:
    """Maps a symbol to the number of times it occurs."""

    def __init__(self, counts: t.Optional[t.Mapping[Symbol, int]] = None) -> None:
        self._counts: Counter = Counter()
        if counts is not None:
            for symbol, count in counts.items():
                self.put(symbol, count)

    def contains_key(self, symbol: Symbol) -> bool:
        return symbol in self._counts

    def get(self, symbol: Symbol) -> int:
        if not self.contains_key(symbol):
            raise KeyError(symbol)
        return self._counts[symbol]

    def put(self, symbol: Symbol, count: int) -> None:
        if not is_byte(symbol) and symbol is not Sentinel.PSEUDO_EOF:
            raise InvalidInput(f"Symbol can't be counted: {symbol!r}")
        if not isinstance(count, int) or isinstance(count, bool):
            raise InvalidInput(f"Count of {symbol!r} has to be an integer, got {count!r}.")
        if not 1 <= count <= MAX_COUNT:
            raise InvalidInput(
                f"Count of {symbol!r} has to be in the range 1-{MAX_COUNT}, got {count}."
            )
        self._counts[symbol] = count

    def keys(self) -> list[Symbol]:
        return list(self._counts)

    def update(self, data: t.Iterable[int]) -> None:
        """Counts every byte in `data`."""
        # Uses underlying C implementation of:
        # `_collections._count_elements()`
        counts = Counter(data)
        for symbol, count in counts.items():
            self.put(symbol, self._counts.get(symbol, 0) + count)

    def items(self) -> t.Iterator[tuple[Symbol, int]]:
        return iter(self._counts.items())

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._counts

    def __len__(self) -> int:
        return len(self._counts)

    def __iter__(self) -> t.Iterator[Symbol]:
        return iter(self._counts)

    def __eq__(self, other):
        if not isinstance(other, FrequencyMap):
            return NotImplemented
        return self._counts == other._counts

    def __repr__(self):
        return f"FrequencyMap({dict(self._counts)!r})"


def encode_freq_map(freq_map: FrequencyMap) -> bytearray:
    num_symbols = len(freq_map)
    entries = sorted((to_code(s), c) for s, c in freq_map.items())

    try:
        ans = bytearray(struct.pack(FREQ_MAP_SIZE_SCHEMA, num_symbols))
        ans.extend(
            struct.pack(
                "<" + num_symbols * FREQ_MAP_ENTRY_SCHEMA,
                *itertools.chain.from_iterable(entries),
            )
        )
    except struct.error as e:
        raise InvalidInput(f"Frequency map doesn't fit in a header: {freq_map}") from e
    logger.debug("Encoded frequency map of %d symbols in %d bytes.", num_symbols, len(ans))
    return ans


def decode_freq_map(f_in: t.BinaryIO) -> FrequencyMap:
    """Reads a frequency map written by `encode_freq_map()` from `f_in`.

    Reads exactly the number of bytes taken up by the header, leaving
    the stream positioned at the start of the payload.

    """
    size_encoding = f_in.read(struct.calcsize(FREQ_MAP_SIZE_SCHEMA))
    try:
        (num_symbols,) = struct.unpack(FREQ_MAP_SIZE_SCHEMA, size_encoding)
    except struct.error as e:
        raise InvalidInput("Truncated frequency map header.") from e

    schema = "<" + num_symbols * FREQ_MAP_ENTRY_SCHEMA
    try:
        decoding = struct.unpack(schema, f_in.read(struct.calcsize(schema)))
    except struct.error as e:
        raise InvalidInput(
            f"Truncated frequency map header, expected {num_symbols} symbols."
        ) from e

    freq_map = FrequencyMap()
    for i in range(0, len(decoding), 2):
        code, count = decoding[i], decoding[i+1]
        try:
            symbol = from_code(code)
        except ValueError as e:
            raise InvalidInput(f"Unknown symbol code in header: {code}") from e
        if symbol is NOT_A_CHAR or freq_map.contains_key(symbol):
            raise InvalidInput(f"Invalid symbol code in header: {code}")
        freq_map.put(symbol, count)

    # Without it the padding of the payload would be decoded as well.
    if not freq_map.contains_key(Sentinel.PSEUDO_EOF):
        raise InvalidInput("Frequency map header has no PSEUDO_EOF.")

    return freq_map
