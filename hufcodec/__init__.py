"""Huffman compression of byte sequences and files."""

import logging

from hufcodec.archive import (
    compress_file,
    compress_stream,
    compressed_name,
    decompress_file,
    decompress_stream,
    uncompressed_name,
)
from hufcodec.bitstream import BitSink, BitSource
from hufcodec.coding import (
    TreeNode,
    decode,
    encode,
    get_freq_map,
    get_huffman_code,
    get_huffman_tree,
)
from hufcodec.errors import HuffmanError, InvalidInput, IOUnavailable, SymbolNotFound
from hufcodec.freq_map import FrequencyMap
from hufcodec.symbols import NOT_A_CHAR, PSEUDO_EOF, Sentinel, Symbol


logging.getLogger(__name__).addHandler(logging.NullHandler())


__all__ = [
    "BitSink",
    "BitSource",
    "FrequencyMap",
    "HuffmanError",
    "IOUnavailable",
    "InvalidInput",
    "NOT_A_CHAR",
    "PSEUDO_EOF",
    "Sentinel",
    "Symbol",
    "SymbolNotFound",
    "TreeNode",
    "compress_file",
    "compress_stream",
    "compressed_name",
    "decode",
    "decompress_file",
    "decompress_stream",
    "encode",
    "get_freq_map",
    "get_huffman_code",
    "get_huffman_tree",
    "uncompressed_name",
]
