from errors import InvalidInput


class BitWriter:
    """Bit-packing writer.

    Accumulates individual bits into bytes, most significant bit first,
    and buffers them until flushed.

    :ivar buffer: Internal byte buffer holding fully written bytes.
    :type buffer: bytearray
    :ivar bit_buffer: 8-bit scratch register for accumulating pending bits.
    :type bit_buffer: int
    :ivar bit_count: Number of valid bits currently stored in ``bit_buffer`` (0-7).
    :type bit_count: int
    :ivar total_bits: Number of meaningful bits written so far.
    :type total_bits: int
    """

    def __init__(self):
        """Initialize an empty bit writer.

        :returns: None
        :rtype: None
        """
        self.buffer = bytearray()
        self.bit_buffer = 0
        self.bit_count = 0
        self.total_bits = 0

    def write_bits(self, value: int, nbits: int):
        """Write the lowest ``nbits`` of ``value`` to the buffer, MSB first.

        :param value: Integer whose bits will be written.
        :type value: int
        :param nbits: Number of bits from ``value`` to write.
        :type nbits: int
        :returns: None
        :rtype: None
        """
        for i in range(nbits - 1, -1, -1):
            self.bit_buffer = (self.bit_buffer << 1) | ((value >> i) & 1)
            self.bit_count += 1
            if self.bit_count == 8:
                self.buffer.append(self.bit_buffer)
                self.bit_buffer = 0
                self.bit_count = 0
        self.total_bits += nbits

    def write_code(self, code: str):
        """Write a Huffman code given as a string of ``0``/``1`` digits.

        The first digit of the code is written first.

        :param code: Digit string such as ``"0110"``.
        :type code: str
        :returns: None
        :rtype: None
        :raises InvalidInput: If ``code`` contains anything but ``0``/``1``.
        """
        if code.strip("01"):
            raise InvalidInput(f"Code must consist of '0' and '1' only: {code!r}")
        if code:
            self.write_bits(int(code, 2), len(code))

    @property
    def padding_bits(self) -> int:
        """Number of zero bits :meth:`flush` appends to finish the last byte.

        :returns: Value in range ``0..7``.
        :rtype: int
        """
        return (8 - self.total_bits % 8) % 8

    def flush(self) -> bytes:
        """Flush remaining bits (if any) and return the full byte buffer.

        Any partial byte in ``bit_buffer`` is padded with zeros to complete the
        byte before being appended. ``total_bits`` is left untouched so
        :attr:`padding_bits` still describes the returned buffer.

        :returns: The accumulated bytes written so far.
        :rtype: bytes
        """
        if self.bit_count > 0:
            self.bit_buffer <<= (8 - self.bit_count)
            self.buffer.append(self.bit_buffer)
            self.bit_buffer = 0
            self.bit_count = 0
        return bytes(self.buffer)


class BitReader:
    """Bit reader over a padded byte buffer.

    Only the first ``len(data) * 8 - padding_bits`` bits are readable; the
    padding at the end of the last byte is never returned.

    :ivar data: Input data to read bits from.
    :type data: bytes
    :ivar pos: Current position in ``data`` (byte index).
    :type pos: int
    :ivar bit_buffer: Scratch register holding the current source byte.
    :type bit_buffer: int
    :ivar bit_count: Number of unread bits remaining in ``bit_buffer`` (0-8).
    :type bit_count: int
    :ivar remaining: Number of meaningful bits not read yet.
    :type remaining: int
    """

    def __init__(self, data: bytes, padding_bits: int = 0):
        """Create a bit reader for the given input ``data``.

        :param data: Source data to read from.
        :type data: bytes
        :param padding_bits: Filler bits at the end of ``data`` (0-7).
        :type padding_bits: int
        :returns: None
        :rtype: None
        :raises InvalidInput: If ``padding_bits`` is out of range or exceeds
            the number of available bits.
        """
        if not 0 <= padding_bits <= 7:
            raise InvalidInput(f"Padding must be in range 0..7, got {padding_bits}")
        total = len(data) * 8 - padding_bits
        if total < 0:
            raise InvalidInput(
                f"Padding {padding_bits} exceeds the {len(data) * 8} available bits"
            )
        self.data = data
        self.pos = 0
        self.bit_buffer = 0
        self.bit_count = 0
        self.remaining = total

    def read_bits(self, nbits: int) -> int:
        """Read ``nbits`` bits from the stream and return them as an integer.

        Bits are returned MSB-first in the integer.

        :param nbits: Number of bits to read.
        :type nbits: int
        :returns: The integer value composed of the next ``nbits`` bits.
        :rtype: int
        :raises EOFError: If fewer than ``nbits`` meaningful bits are left.
        """
        if nbits > self.remaining:
            raise EOFError("Unexpected end of data")
        result = 0
        for _ in range(nbits):
            if self.bit_count == 0:
                self.bit_buffer = self.data[self.pos]
                self.pos += 1
                self.bit_count = 8
            result = (result << 1) | ((self.bit_buffer >> (self.bit_count - 1)) & 1)
            self.bit_count -= 1
        self.remaining -= nbits
        return result

    def __iter__(self):
        """Yield the remaining meaningful bits one by one."""
        while self.remaining:
            yield self.read_bits(1)
