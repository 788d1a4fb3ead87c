"""Bit-level reading and writing on top of binary streams.

A container starts with a frequency map header (see `freq_map`) which is
followed by bits packed into bytes, most significant bit first. The last
byte is padded with zeros.

"""

import logging
import typing as t

from bitarray import bitarray

from hufcodec.freq_map import FrequencyMap, decode_freq_map, encode_freq_map


logger = logging.getLogger(__name__)

# Order in which bits are packed into a byte.
BIT_ENDIAN = "big"


class BitSink:
    """Collects bits and writes them to a binary stream.

    Bits are kept in memory until `flush()` is called, at which point
    they are written as whole bytes. Use as a context manager to make
    sure the bits are flushed::

        with open("file_path", mode="wb") as f_out, BitSink(f_out) as sink:
            sink.write_freq_map(freq_map)
            sink.write_bit(1)

    """

    def __init__(self, f_out: t.BinaryIO) -> None:
        self.f_out = f_out
        self._bits = bitarray(endian=BIT_ENDIAN)
        # Number of bits already written to `f_out`, including padding.
        self._num_flushed = 0

    def write_freq_map(self, freq_map: FrequencyMap) -> None:
        if self._bits or self._num_flushed:
            raise ValueError("The frequency map has to be written before any bit.")
        self.f_out.write(encode_freq_map(freq_map))

    def write_bit(self, bit: int) -> None:
        if bit not in (0, 1):
            raise ValueError(f"A bit is either 0 or 1, got: {bit!r}")
        self._bits.append(bit)

    def write_bits(self, bits: str) -> None:
        """Writes a string of "0" and "1" characters, in order."""
        # Raises `ValueError` for any other character.
        self._bits.extend(bits)

    def flush(self) -> None:
        if not self._bits:
            return
        # `tobytes()` pads the last byte with zeros.
        encoding = self._bits.tobytes()
        self.f_out.write(encoding)
        logger.debug("Flushed %d bits as %d bytes.", len(self._bits), len(encoding))
        self._num_flushed += 8 * len(encoding)
        self._bits = bitarray(endian=BIT_ENDIAN)

    def __enter__(self) -> "BitSink":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        # Don't write a partial payload when encoding failed.
        if exc_type is None:
            self.flush()


class BitSource:
    """Reads bits from a binary stream, one at a time.

    The stream is read entirely on the first call to `read_bit()`. Any
    header has to be read before that using `read_freq_map()`.

    """

    def __init__(self, f_in: t.BinaryIO) -> None:
        self.f_in = f_in
        self._bits: t.Optional[bitarray] = None
        self._pos = 0

    def read_freq_map(self) -> FrequencyMap:
        if self._bits is not None:
            raise ValueError("The frequency map has to be read before any bit.")
        return decode_freq_map(self.f_in)

    def read_bit(self) -> t.Optional[int]:
        """Returns the next bit, or `None` once all bits are read."""
        if self._bits is None:
            self._bits = bitarray(endian=BIT_ENDIAN)
            self._bits.frombytes(self.f_in.read())
            logger.debug("Read %d bits.", len(self._bits))

        if self._pos >= len(self._bits):
            return None

        bit = self._bits[self._pos]
        self._pos += 1
        return bit

    def __iter__(self) -> t.Iterator[int]:
        while (bit := self.read_bit()) is not None:
            yield bit
