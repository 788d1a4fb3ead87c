class HuffmanError(Exception):
    """Base class for all errors raised by `hufcodec`."""


class InvalidInput(HuffmanError, ValueError):
    """A frequency map or header that no Huffman tree can be built from."""


class SymbolNotFound(HuffmanError, LookupError):
    """The code table has no entry for a symbol that has to be encoded."""


class IOUnavailable(HuffmanError, OSError):
    """The backing file of a container could not be opened."""
