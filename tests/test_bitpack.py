import io

import pytest

from bitpack import BitReader, BitWriter


def test_write_bits_msb_first_and_zero_padding():
    bw = BitWriter()
    bw.write_bits(1, 1)
    bw.write_bits(3, 0b010)
    bw.close()
    assert bw.getvalue() == bytes([0b10100000])
    assert bw.bits_written == 4


def test_write_bits_keeps_only_low_bits():
    bw = BitWriter()
    bw.write_bits(4, 0xFF3)
    bw.write_bits(4, 0)
    bw.close()
    assert bw.getvalue() == b"\x30"


def test_write_code_longer_than_32_bits():
    code = "1" * 33 + "0" * 7
    bw = BitWriter()
    bw.write_code(code)
    bw.close()
    assert bw.getvalue() == b"\xff\xff\xff\xff\x80"


def test_read_bits_across_bytes():
    br = BitReader(b"\xfa\xce\x82\x01")
    assert br.read_bits(4) == 0xF
    assert br.read_bits(8) == 0xAC
    assert br.read_bits(20) == 0xE8201
    assert br.bits_read == 32


def test_read_bits_returns_none_when_exhausted():
    br = BitReader(b"\x00")
    assert br.read_bits(8) == 0  # a zero value is data, not exhaustion
    assert br.read_bits(1) is None


def test_read_bits_none_when_not_enough_left():
    br = BitReader(b"\xab")
    assert br.read_bits(9) is None


def test_reset_rewinds_file_source():
    f = io.BytesIO(b"\x12\x34")
    br = BitReader(f)
    assert br.read_bits(16) == 0x1234
    br.reset()
    assert br.bits_read == 0
    assert br.read_bits(8) == 0x12


@pytest.mark.parametrize("n", [0, 33])
def test_width_out_of_range(n):
    with pytest.raises(ValueError):
        BitWriter().write_bits(n, 0)
    with pytest.raises(ValueError):
        BitReader(b"\x00" * 8).read_bits(n)


def test_writer_flushes_to_file_on_exit():
    f = io.BytesIO()
    with BitWriter(f) as bw:
        bw.write_bits(12, 0xABC)
    assert f.getvalue() == b"\xab\xc0"
    assert bw.closed


def test_getvalue_needs_memory_writer(tmp_path):
    with open(tmp_path / "out.bin", "wb") as f:
        bw = BitWriter(f)
        with pytest.raises(TypeError):
            bw.getvalue()
        bw.close()
