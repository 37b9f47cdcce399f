class HuffmanError(ValueError):
    """Base class for every failure raised by the compression core."""


class InvalidInput(HuffmanError):
    """Caller-supplied data cannot be used.

    Raised for a missing code table where the payload needs one, code
    strings with digits other than ``0``/``1``, tables that are not
    prefix-free and padding values that do not fit the payload.
    """


class CorruptData(HuffmanError):
    """Encoded or framed bytes do not match the expected format.

    Raised for a wrong magic tag, declared lengths that exceed the available
    bytes, truncated code tables and bit sequences with no path in the
    decode trie.
    """
