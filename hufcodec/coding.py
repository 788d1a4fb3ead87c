"""Huffman encoding and decoding of byte sequences.

`encode()` turns bytes into a string of "0" and "1" characters using the
code table given by `get_huffman_code()`, and `decode()` turns bits back
into bytes by walking the Huffman tree given by `get_huffman_tree()`.

To make sure the encoding doesn't depend on byte boundaries we make use
of a `PSEUDO_EOF`. It is encoded after the last byte and once it is read
during decoding, we stop decoding further. That way the padding of the
last byte is never interpreted.

The tree construction is deterministic, because `decode()` has to
rebuild exactly the same tree as was used by `encode()` from nothing but
the frequency map. Leaves are created in ascending order of symbol code
and ties in frequency are broken by creation order, see `TreeNode`.

"""

import heapq
import itertools
import logging
import typing as t
from enum import Enum

from hufcodec.errors import InvalidInput, SymbolNotFound
from hufcodec.freq_map import FrequencyMap
from hufcodec.symbols import NOT_A_CHAR, PSEUDO_EOF, Symbol, to_code

if t.TYPE_CHECKING:
    from hufcodec.bitstream import BitSink, BitSource


logger = logging.getLogger(__name__)


class Direction(Enum):
    """Code values for directions (left or right) in Huffman tree."""
    LEFT = 0
    RIGHT = 1


class TreeNode:
    def __init__(
        self,
        symbol: Symbol = NOT_A_CHAR,
        freq: int = 0,
        left: t.Optional["TreeNode"] = None,
        right: t.Optional["TreeNode"] = None,
        order: int = 0,
    ) -> None:
        self.symbol = symbol
        self.freq = freq
        self.left = left
        self.right = right
        # Creation order of the node, breaks ties between equal `freq`s.
        self.order = order

    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def __lt__(self, other):
        return (self.freq, self.order) < (other.freq, other.order)

    def __str__(self):
        return self.__repr__()

    def __repr__(self):
        return (
            "TreeNode("
                f"symbol={self.symbol!r}, freq={self.freq},"
                f" left={self.left}, right={self.right}"
            ")"
        )


def get_freq_map(data: bytes) -> FrequencyMap:
    """Counts the bytes in `data` and adds a single `PSEUDO_EOF`."""
    freq_map = FrequencyMap()
    freq_map.update(data)
    freq_map.put(PSEUDO_EOF, 1)
    return freq_map


def get_huffman_tree(freq_map: FrequencyMap) -> TreeNode:
    """Constructs a Huffman tree.

    Repeatedly merges the two nodes with the lowest frequency, where the
    first one popped becomes the left child (bit 0) of the new node.

    Raises:
        InvalidInput: If `freq_map` is empty or contains `NOT_A_CHAR`.

    """
    if not len(freq_map):
        raise InvalidInput("Can't build a Huffman tree from an empty frequency map.")
    if freq_map.contains_key(NOT_A_CHAR):
        raise InvalidInput("NOT_A_CHAR can't be part of a frequency map.")

    order = itertools.count()
    heap = [
        TreeNode(symbol=symbol, freq=freq_map.get(symbol), order=next(order))
        for symbol in sorted(freq_map.keys(), key=to_code)
    ]

    heapq.heapify(heap)
    while len(heap) > 1:
        least_freq1, least_freq2 = heapq.heappop(heap), heapq.heappop(heap)
        heapq.heappush(
            heap,
            TreeNode(
                freq=least_freq1.freq + least_freq2.freq,
                left=least_freq1,
                right=least_freq2,
                order=next(order),
            ),
        )

    # Return root node.
    return heap[0]


def get_huffman_code(root: TreeNode) -> dict[Symbol, str]:
    """Constructs Huffman code given a Huffman tree.

    Returns:
        Maps a symbol (which corresponds to a leaf node in the Huffman
        tree) to its corresponding code, where the code is represented
        as a string of zeros "0" and ones "1".

    """
    # A tree with a single leaf would otherwise assign the empty code.
    if root.is_leaf():
        if root.symbol is NOT_A_CHAR:
            return {}
        return {root.symbol: str(Direction.LEFT.value)}

    def helper(root: TreeNode) -> None:
        nonlocal ans, codeword

        # Reached a leaf node.
        if root.is_leaf():
            if root.symbol is not NOT_A_CHAR:
                ans[root.symbol] = "".join(codeword)
            return

        if root.left is not None:
            codeword.append(str(Direction.LEFT.value))
            helper(root.left)
            codeword.pop()

        if root.right is not None:
            codeword.append(str(Direction.RIGHT.value))
            helper(root.right)
            codeword.pop()

    ans: dict[Symbol, str] = {}
    codeword: list[str] = []
    helper(root)
    return ans


def encode(
    data: bytes,
    huffman_code: dict[Symbol, str],
    sink: t.Optional["BitSink"] = None,
) -> tuple[str, int]:
    """Encodes the given bytes according to the Huffman code.

    Args:
        data: The bytes to encode.
        huffman_code: The code table, see `get_huffman_code()`.
        sink: If given, the encoding is written to it bit by bit.

    Returns:
        The encoding as a string of "0" and "1" characters, terminated
        by the code of `PSEUDO_EOF`, and the number of bits in it.

    Raises:
        SymbolNotFound: If a byte in `data` or `PSEUDO_EOF` has no code.
            Nothing is written to `sink` in that case.

    """
    try:
        encoding = "".join(
            itertools.chain(
                # `map()` with a built-in function beats a for-loop.
                map(huffman_code.__getitem__, data),
                (huffman_code[PSEUDO_EOF],),
            )
        )
    except KeyError as e:
        raise SymbolNotFound(f"No code for symbol: {e.args[0]!r}") from e

    size = len(encoding)
    logger.debug("Encoded %d bytes into %d bits.", len(data), size)

    if sink is not None:
        sink.write_bits(encoding)

    return encoding, size


def decode(
    source: "BitSource",
    root: TreeNode,
    f_out: t.Optional[t.BinaryIO] = None,
) -> bytes:
    """Decodes the bits of `source` by walking the Huffman tree.

    Decoding stops at the first `PSEUDO_EOF`, so any padding after it is
    ignored. If `source` runs out of bits before that, the bytes decoded
    so far are returned without raising an error.

    """
    decoded = bytearray()
    node = root
    while (bit := source.read_bit()) is not None:
        # A root without children encodes one symbol per bit.
        if not root.is_leaf():
            node = node.right if bit == Direction.RIGHT.value else node.left

        if node.is_leaf():
            if node.symbol is PSEUDO_EOF:
                break
            decoded.append(node.symbol)
            node = root
    else:
        logger.debug("Ran out of bits before PSEUDO_EOF, stopped decoding.")

    if f_out is not None:
        f_out.write(decoded)

    return bytes(decoded)
