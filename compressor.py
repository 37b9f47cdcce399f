from typing import Dict, NamedTuple, Optional, Tuple

from bitops import BitReader, BitWriter
from errors import InvalidInput
from frame import build_frame, extract_frame
from huffman import DecodeTrie, build_tree, count_frequencies, generate_codes


class CompressionResult(NamedTuple):
    """Output of :func:`encode`.

    :ivar payload: Packed code bits, zero-padded to a whole byte.
    :type payload: bytes
    :ivar codes: Mapping from symbol to the code used in ``payload``.
    :type codes: Dict[str, str]
    :ivar padding_bits: Number of filler bits at the end of ``payload`` (0-7).
    :type padding_bits: int
    """

    payload: bytes
    codes: Dict[str, str]
    padding_bits: int


def encode(text: Optional[str]) -> CompressionResult:
    """Compress ``text`` with a Huffman code derived from its own statistics.

    :param text: Text to compress. ``None`` and ``""`` give an empty result.
    :type text: str | None
    :returns: Payload, code table and padding.
    :rtype: CompressionResult
    """
    if not text:
        return CompressionResult(b"", {}, 0)

    frequencies = count_frequencies(text)
    codes = generate_codes(build_tree(frequencies))
    payload, padding = pack_symbols(text, codes)
    return CompressionResult(payload, codes, padding)


def pack_symbols(text: str, codes: Dict[str, str]) -> Tuple[bytes, int]:
    """Concatenate the code of every symbol of ``text`` into packed bytes.

    :param text: Symbols to pack, in order.
    :type text: str
    :param codes: Mapping from symbol to code.
    :type codes: Dict[str, str]
    :returns: Tuple ``(payload, padding_bits)``.
    :rtype: Tuple[bytes, int]
    :raises InvalidInput: If a symbol of ``text`` has no code.
    """
    output = BitWriter()
    for symbol in text:
        try:
            code = codes[symbol]
        except KeyError:
            raise InvalidInput(f"No code for symbol {symbol!r}") from None
        output.write_code(code)
    padding = output.padding_bits
    return output.flush(), padding


def decode(payload: bytes, codes: Dict[str, str], padding: int) -> str:
    """Decode a payload produced by :func:`encode`.

    :param payload: Packed code bits.
    :type payload: bytes
    :param codes: Code table used to produce ``payload``.
    :type codes: Dict[str, str]
    :param padding: Number of filler bits at the end of ``payload`` (0-7).
    :type padding: int
    :returns: Decoded text.
    :rtype: str
    :raises InvalidInput: If the table is missing or malformed, or
        ``padding`` does not fit the payload.
    :raises CorruptData: If the bits do not follow any code of the table.
    """
    if not payload:
        return ""
    if not codes:
        raise InvalidInput("Codes must be provided for decoding")

    trie = DecodeTrie(codes)
    reader = BitReader(payload, padding)
    return trie.walk(reader)


def compress(text: Optional[str]) -> bytes:
    """Encode ``text`` and wrap the result in a self-describing frame.

    :param text: Text to compress.
    :type text: str | None
    :returns: Frame bytes, see :mod:`frame`.
    :rtype: bytes
    """
    result = encode(text)
    return build_frame(result.payload, result.codes, result.padding_bits)


def decompress(data: bytes) -> str:
    """Decode a frame produced by :func:`compress`.

    :param data: Frame bytes.
    :type data: bytes
    :returns: Original text.
    :rtype: str
    :raises CorruptData: If the frame or its bits are damaged.
    :raises InvalidInput: If the embedded table or padding is unusable.
    """
    codes, padding, payload = extract_frame(data)
    return decode(payload, codes, padding)
