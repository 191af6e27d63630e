import pytest
from vigenere.algo import words
from vigenere.errors import InvalidConfiguration


def test_read_word_little_endian():
    buf = bytes([0x01, 0x02, 0x03, 0x04])
    assert words.read_word(buf, 0, 1) == 0x01
    assert words.read_word(buf, 0, 2) == 0x0201
    assert words.read_word(buf, 2, 2) == 0x0403
    assert words.read_word(buf, 0, 4) == 0x04030201


def test_read_word_out_of_range():
    with pytest.raises(IndexError):
        words.read_word(b"\x01", 0, 2)
    with pytest.raises(IndexError):
        words.read_word(b"\x01\x02", -1, 1)


def test_write_word_wraps_value():
    buf = bytearray(4)
    words.write_word(buf, 0, -1, 2)
    words.write_word(buf, 2, 0x1_0005, 2)
    assert bytes(buf) == b"\xff\xff\x05\x00"


def test_write_word_out_of_range():
    with pytest.raises(IndexError):
        words.write_word(bytearray(3), 2, 1, 2)


def test_unpack_pack():
    arr = words.unpack(b"\x01\x00\xff\xff", 2)
    assert arr.tolist() == [1, 0xFFFF]
    assert words.pack(arr, 2) == b"\x01\x00\xff\xff"


def test_unpack_partial_word():
    with pytest.raises(ValueError):
        words.unpack(b"\x01\x02\x03", 2)


def test_unpack_does_not_alias_input():
    src = bytearray(b"\x01\x02")
    arr = words.unpack(src, 1)
    src[0] = 9
    assert arr.tolist() == [1, 2]


def test_align():
    assert words.align(b"abc", 4, 0x20) == (b"abc ", 1)
    assert words.align(b"abcd", 4) == (b"abcd", 0)
    assert words.align(b"", 2) == (b"", 0)


@pytest.mark.parametrize("ws", [0, 3, 8])
def test_bad_word_size(ws):
    with pytest.raises(InvalidConfiguration):
        words.word_range(ws)
