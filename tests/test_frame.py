import pytest
from vigenere.algo import frame
from vigenere.errors import InvalidKey, MalformedCiphertext

ZERO_IV = b"\x00\x00\x00\x00"


def test_known_vector():
    out = frame.seal(b"\x41\x42\x43", b"\x01\x02", ZERO_IV)
    assert out == b"\x00\x00\x00\x00\x42\x44\x44"
    assert frame.unseal(out, b"\x01\x02", iv_length=4) == b"\x41\x42\x43"


def test_marker_and_padding_for_wide_words():
    iv = bytes(range(8))
    out = frame.seal(b"ABC", b"key", iv, word_size=2)
    assert out[0] == 1
    assert out[1:9] == iv
    assert len(out) == 1 + 8 + 4
    assert frame.unseal(out, b"key", 8, word_size=2) == b"ABC"


def test_padding_filler_is_space():
    out = frame.seal(b"A", b"\x00\x00\x00\x00", bytes(8), word_size=4)
    assert out[0] == 3
    assert out[9:] == b"A   "


def test_no_marker_for_byte_words():
    out = frame.seal(b"abc", b"k", b"\x01" * 8)
    assert len(out) == 8 + 3


@pytest.mark.parametrize("ws", [1, 2, 4])
def test_empty_plaintext(ws):
    out = frame.seal(b"", b"k", b"\x07" * 16, word_size=ws)
    assert len(out) == 16 + (1 if ws > 1 else 0)
    assert frame.unseal(out, b"k", 16, word_size=ws) == b""


def test_widened_frame():
    iv = b"\x05" * 8
    out = frame.seal(b"hello", b"key", iv, widen=True)
    assert len(out) == 8 + 4 * 5
    assert frame.unseal(out, b"key", 8, widen=True) == b"hello"


def test_wrong_key_is_not_an_error():
    out = frame.seal(b"attack at dawn", b"a", b"\x00" * 8)
    assert frame.unseal(out, b"b", 8) != b"attack at dawn"


def test_too_short():
    with pytest.raises(MalformedCiphertext):
        frame.unseal(b"\x00" * 7, b"k", 8)
    with pytest.raises(MalformedCiphertext):
        frame.unseal(b"\x00" * 8, b"k", 8, word_size=2)


def test_bad_pad_count():
    with pytest.raises(MalformedCiphertext):
        frame.parse(b"\x05" + bytes(8) + b"ab", 8, True, word_size=2, body_word=2)
    with pytest.raises(MalformedCiphertext):
        frame.parse(b"\x01" + bytes(8), 8, True, word_size=2, body_word=2)


def test_partial_body_word():
    with pytest.raises(MalformedCiphertext):
        frame.unseal(bytes(8) + b"abc", b"k", 8, widen=True)
    with pytest.raises(MalformedCiphertext):
        frame.unseal(b"\x00" + bytes(8) + b"abc", b"k", 8, word_size=2)


def test_build_parse():
    payload = frame.build(b"IVIV", b"body", pad_count=2)
    fr = frame.parse(payload, 4, True, word_size=4, body_word=4)
    assert fr == frame.Frame(2, b"IVIV", b"body")


def test_empty_key():
    with pytest.raises(InvalidKey):
        frame.seal(b"abc", b"", ZERO_IV)
    with pytest.raises(InvalidKey):
        frame.unseal(ZERO_IV + b"abc", b"", 4)
