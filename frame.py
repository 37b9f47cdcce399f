"""Self-describing container for a Huffman payload and its code table.

Frame layout (little-endian):

- Magic: ``HUF1`` (4 bytes)
- Codes length: int32
- Padding: uint8 (0-7)
- Codes blob (``codes length`` bytes):
- - Entry count: int32
- - For each entry:
- - - Symbol: uint32 (Unicode code point)
- - - Code length: 7-bit encoded unsigned integer
- - - Code: ASCII ``0``/``1`` digits
- Payload: all remaining bytes

An empty byte string is the frame of an empty message.
"""
import struct
from typing import Dict, Tuple

from errors import CorruptData, InvalidInput

MAGIC = b"HUF1"  #: Format tag, bump on any change of the code table schema
HEADER = struct.Struct("<4siB")  #: magic, codes length, padding
_INT32 = struct.Struct("<i")
_SYMBOL = struct.Struct("<I")
_MAX_CODEPOINT = 0x10FFFF
_MAX_VARINT_BYTES = 5


def build_frame(payload: bytes, codes: Dict[str, str], padding: int) -> bytes:
    """Prepend the frame header and serialized code table to ``payload``.

    :param payload: Packed Huffman bits.
    :type payload: bytes
    :param codes: Mapping from symbol to code used to produce ``payload``.
    :type codes: Dict[str, str]
    :param padding: Number of filler bits at the end of ``payload`` (0-7).
    :type padding: int
    :returns: Frame bytes.
    :rtype: bytes
    :raises InvalidInput: If ``padding`` does not fit the header or the
        table holds something other than single characters and digit strings.
    """
    if codes is None:
        raise InvalidInput("Codes must be provided to build a frame")
    if not 0 <= padding <= 7:
        raise InvalidInput(f"Padding must be in range 0..7, got {padding}")
    blob = serialize_codes(codes)
    return HEADER.pack(MAGIC, len(blob), padding) + blob + bytes(payload)


def extract_frame(data: bytes) -> Tuple[Dict[str, str], int, bytes]:
    """Split a frame produced by :func:`build_frame` into its parts.

    :param data: Frame bytes.
    :type data: bytes
    :returns: Tuple ``(codes, padding, payload)``.
    :rtype: Tuple[Dict[str, str], int, bytes]
    :raises CorruptData: If the magic tag is wrong or any declared length
        does not match the available bytes.
    """
    if not data:
        return {}, 0, b""
    if len(data) < HEADER.size:
        raise CorruptData("Data is too short to contain a Huffman header")

    magic, codes_len, padding = HEADER.unpack_from(data, 0)
    if magic != MAGIC:
        raise CorruptData("Data does not contain expected Huffman header")

    remaining = len(data) - HEADER.size
    if codes_len < 0 or codes_len > remaining:
        raise CorruptData(f"Invalid codes length in frame: {codes_len}")

    start = HEADER.size
    blob = data[start:start + codes_len]
    if len(blob) != codes_len:
        raise CorruptData("Unexpected end of data while reading codes")

    codes = deserialize_codes(blob)
    return codes, padding, bytes(data[start + codes_len:])


def serialize_codes(codes: Dict[str, str]) -> bytes:
    """Serialize a code table into the codes blob of a frame.

    :param codes: Mapping from symbol to code.
    :type codes: Dict[str, str]
    :returns: Codes blob.
    :rtype: bytes
    :raises InvalidInput: On a symbol that is not a single character or a
        code that is not a digit string.
    """
    out = bytearray(_INT32.pack(len(codes)))
    for symbol, code in codes.items():
        if not isinstance(symbol, str) or len(symbol) != 1:
            raise InvalidInput(f"Symbol must be a single character: {symbol!r}")
        if not isinstance(code, str) or code.strip("01"):
            raise InvalidInput(f"Code for {symbol!r} must be a '0'/'1' string")
        out += _SYMBOL.pack(ord(symbol))
        out += _encode_varint(len(code))
        out += code.encode("ascii")
    return bytes(out)


def deserialize_codes(blob: bytes) -> Dict[str, str]:
    """Read a code table written by :func:`serialize_codes`.

    Code digits are not validated here; the decoder rejects malformed codes.

    :param blob: Codes blob.
    :type blob: bytes
    :returns: Mapping from symbol to code.
    :rtype: Dict[str, str]
    :raises CorruptData: If the blob is truncated, carries trailing bytes or
        holds an impossible symbol.
    """
    if len(blob) < _INT32.size:
        raise CorruptData("Unexpected end of data while reading codes count")
    (count,) = _INT32.unpack_from(blob, 0)
    if count < 0:
        raise CorruptData(f"Invalid codes count: {count}")

    pos = _INT32.size
    codes: Dict[str, str] = {}
    for _ in range(count):
        if pos + _SYMBOL.size > len(blob):
            raise CorruptData("Unexpected end of data while reading a symbol")
        (codepoint,) = _SYMBOL.unpack_from(blob, pos)
        pos += _SYMBOL.size
        if codepoint > _MAX_CODEPOINT:
            raise CorruptData(f"Invalid symbol code point: {codepoint:#x}")
        length, pos = _decode_varint(blob, pos)
        code = blob[pos:pos + length]
        if len(code) != length:
            raise CorruptData("Unexpected end of data while reading a code")
        pos += length
        codes[chr(codepoint)] = code.decode("latin-1")

    if pos != len(blob):
        raise CorruptData(f"{len(blob) - pos} unexpected bytes after the code table")
    return codes


def _encode_varint(value: int) -> bytes:
    """Encode a code length as a 7-bit variable-length integer.

    :param value: Non-negative length.
    :type value: int
    :returns: Low-order groups first, high bit set on all but the last byte.
    :rtype: bytes
    """
    out = bytearray()
    while value >= 0x80:
        out.append((value & 0x7F) | 0x80)
        value >>= 7
    out.append(value)
    return bytes(out)


def _decode_varint(blob: bytes, pos: int) -> Tuple[int, int]:
    """Read a length written by :func:`_encode_varint`.

    :param blob: Codes blob.
    :type blob: bytes
    :param pos: Offset of the first length byte.
    :type pos: int
    :returns: Tuple ``(value, next_pos)``.
    :rtype: Tuple[int, int]
    :raises CorruptData: If the blob ends early or the prefix exceeds
        five bytes.
    """
    value = 0
    for i in range(_MAX_VARINT_BYTES):
        if pos >= len(blob):
            raise CorruptData("Unexpected end of data while reading a code length")
        byte = blob[pos]
        pos += 1
        value |= (byte & 0x7F) << (7 * i)
        if not byte & 0x80:
            return value, pos
    raise CorruptData("Code length prefix is too long")
