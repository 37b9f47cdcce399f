import pytest

from bitops import BitWriter, BitReader
from errors import InvalidInput


def test_bitwriter_write_bits_and_flush_basic():
    bw = BitWriter()
    bw.write_bits(0b1010, 4)
    bw.write_bits(0b11110000, 8)
    assert bw.total_bits == 12
    assert bw.padding_bits == 4
    out = bw.flush()
    assert isinstance(out, (bytes, bytearray))
    assert len(out) == 2
    assert out[0] == 0b10101111
    assert out[1] == 0b00000000


def test_bitwriter_write_code_msb_first():
    bw = BitWriter()
    bw.write_code("1")
    bw.write_code("011")
    assert bw.padding_bits == 4
    assert bw.flush() == bytes([0b10110000])


def test_bitwriter_write_code_rejects_bad_digits():
    bw = BitWriter()
    with pytest.raises(InvalidInput):
        bw.write_code("012")


def test_bitwriter_full_byte_has_no_padding():
    bw = BitWriter()
    bw.write_code("10101010")
    assert bw.padding_bits == 0
    assert bw.flush() == bytes([0xAA])


def test_write_zero_bits_is_noop_and_flush_padding():
    bw = BitWriter()
    bw.write_bits(0xAA, 8)
    bw.write_bits(0, 0)
    out = bw.flush()
    assert out == bytes([0xAA])


def test_bitreader_read_bits():
    data = bytes([0b11001010, 0xFF])
    br = BitReader(data)
    assert br.read_bits(3) == 0b110
    assert br.read_bits(5) == 0b01010
    assert br.read_bits(8) == 0xFF
    assert br.remaining == 0


def test_bitreader_skips_padding():
    br = BitReader(bytes([0b10100000]), padding_bits=5)
    assert list(br) == [1, 0, 1]


def test_bitreader_eoferror_on_insufficient_bits():
    br = BitReader(b"\xF0", padding_bits=4)
    with pytest.raises(EOFError):
        _ = br.read_bits(5)


@pytest.mark.parametrize("padding", [-1, 8, 9])
def test_bitreader_rejects_out_of_range_padding(padding):
    with pytest.raises(InvalidInput):
        BitReader(b"\x00\x00", padding_bits=padding)


def test_bitreader_rejects_padding_larger_than_data():
    with pytest.raises(InvalidInput):
        BitReader(b"", padding_bits=1)
