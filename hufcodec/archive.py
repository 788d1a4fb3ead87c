"""Compression and decompression of whole streams and files.

A compressed container is laid out as follows:

    - The frequency map header, see `hufcodec.freq_map`.
    - The Huffman code of every input byte, in input order, followed by
      the code of `PSEUDO_EOF`.
    - 0-7 zero bits to fill up the last byte.

Compressing `name.ext` creates `name.ext.huf`, decompressing that
container creates `name_unc.ext`.

"""

import io
import logging
import os
import typing as t

from hufcodec.bitstream import BitSink, BitSource
from hufcodec.coding import decode, encode, get_freq_map, get_huffman_code, get_huffman_tree
from hufcodec.errors import IOUnavailable


logger = logging.getLogger(__name__)

COMPRESSED_SUFFIX = ".huf"
UNCOMPRESSED_MARKER = "_unc"


def compressed_name(filename: str) -> str:
    return filename + COMPRESSED_SUFFIX


def uncompressed_name(filename: str) -> str:
    """Gets the output name for decompressing `filename`.

    For example, "example.txt.huf" becomes "example_unc.txt".

    """
    if not filename.endswith(COMPRESSED_SUFFIX):
        raise ValueError(f"Compressed file has to end with {COMPRESSED_SUFFIX!r}: {filename}")

    stem, ext = os.path.splitext(filename[:-len(COMPRESSED_SUFFIX)])
    return stem + UNCOMPRESSED_MARKER + ext


def compress_stream(f_in: t.BinaryIO, f_out: t.BinaryIO) -> str:
    """Compresses all of `f_in` into a container written to `f_out`.

    Returns:
        The encoded payload as a string of "0" and "1" characters.

    """
    data = f_in.read()
    freq_map = get_freq_map(data)
    huffman_code = get_huffman_code(get_huffman_tree(freq_map))

    with BitSink(f_out) as sink:
        sink.write_freq_map(freq_map)
        encoding, size = encode(data, huffman_code, sink=sink)

    logger.debug(
        "Compressed %d bytes into %d bits using %d symbols.",
        len(data), size, len(freq_map),
    )
    return encoding


def decompress_stream(f_in: t.BinaryIO, f_out: t.Optional[t.BinaryIO] = None) -> bytes:
    """Decompresses the container in `f_in` and writes the bytes to `f_out`.

    Returns:
        The decompressed bytes.

    """
    source = BitSource(f_in)
    freq_map = source.read_freq_map()
    # Same construction as during compression and thus the same codes.
    huffman_tree = get_huffman_tree(freq_map)

    decoded = decode(source, huffman_tree, f_out=f_out)
    logger.debug("Decompressed %d bytes.", len(decoded))
    return decoded


def compress_file(filename: str) -> str:
    """Compresses `filename` into `compressed_name(filename)`.

    The container is only created once the compression succeeded.

    Raises:
        IOUnavailable: If either file can't be opened.

    """
    container = io.BytesIO()
    try:
        with open(filename, mode="rb") as f_in:
            encoding = compress_stream(f_in, container)
        with open(compressed_name(filename), mode="wb") as f_out:
            f_out.write(container.getvalue())
    except OSError as e:
        raise IOUnavailable(e.errno, f"Can't compress {filename}: {e.strerror}") from e

    return encoding


def decompress_file(filename: str) -> bytes:
    """Decompresses `filename` into `uncompressed_name(filename)`.

    The output file is only created once the container is decoded, so a
    malformed container leaves nothing behind.

    Raises:
        IOUnavailable: If either file can't be opened.
        InvalidInput: If the container has a malformed header.

    """
    out_filename = uncompressed_name(filename)
    try:
        with open(filename, mode="rb") as f_in:
            decoded = decompress_stream(f_in)
        with open(out_filename, mode="wb") as f_out:
            f_out.write(decoded)
    except OSError as e:
        raise IOUnavailable(e.errno, f"Can't decompress {filename}: {e.strerror}") from e

    return decoded
